from __future__ import annotations

import logging

from volfee.application.dto.hook import AfterSwapInput, AfterSwapOutput
from volfee.application.ports.pool_state_port import PoolStatePort
from volfee.application.ports.swap_record_port import SwapRecordPort
from volfee.application.ports.tick_history_port import TickHistoryPort
from volfee.application.use_cases.hook_common import block_or_none, require_pool_manager
from volfee.domain.entities.hook import FEE_LOOKBACK, LookbackWindow
from volfee.domain.services.fee_schedule import MAX_LP_FEE, compute_dynamic_fee
from volfee.domain.services.pool_id import pool_id_for
from volfee.domain.services.price_impact import price_impact


logger = logging.getLogger(__name__)


class AfterSwapUseCase:
    def __init__(
        self,
        *,
        tick_history_port: TickHistoryPort,
        swap_record_port: SwapRecordPort,
        pool_state_port: PoolStatePort,
        pool_manager_address: str,
        lookback: LookbackWindow = FEE_LOOKBACK,
        max_fee: int = MAX_LP_FEE,
    ):
        self._tick_history_port = tick_history_port
        self._swap_record_port = swap_record_port
        self._pool_state_port = pool_state_port
        self._pool_manager_address = pool_manager_address
        self._lookback = lookback
        self._max_fee = max_fee

    def execute(self, command: AfterSwapInput) -> AfterSwapOutput:
        require_pool_manager(
            sender=command.sender,
            pool_manager_address=self._pool_manager_address,
        )

        pool_id = pool_id_for(command.key)
        tick = self._pool_state_port.get_current_tick(pool_id=pool_id)

        # Tick for this block is not stored yet; the host-reported one stands in for it.
        current_tick = self._read_tick(
            pool_id,
            self._lookback.recent_block(command.block_number),
            block_number=command.block_number,
            tick=tick,
        )
        previous_tick = self._read_tick(
            pool_id,
            self._lookback.prior_block(command.block_number),
            block_number=command.block_number,
            tick=tick,
        )
        fee = compute_dynamic_fee(
            nominal_fee=command.key.fee,
            current_tick=current_tick,
            previous_tick=previous_tick,
            max_fee=self._max_fee,
        )
        self._swap_record_port.record_swap(
            pool_id=pool_id,
            block_number=command.block_number,
            tick=tick,
            fee=fee,
        )

        impact = price_impact(current_tick, previous_tick)
        logger.info(
            "after_swap: recorded pool=%s block=%s tick=%s previous_tick=%s impact=%s fee=%s",
            pool_id,
            command.block_number,
            tick,
            previous_tick,
            impact,
            fee,
        )
        return AfterSwapOutput(
            pool_id=pool_id,
            block_number=command.block_number,
            tick=tick,
            fee=fee,
            price_impact=impact,
        )

    def _read_tick(self, pool_id: str, read_block: int, *, block_number: int, tick: int) -> int | None:
        if read_block == block_number:
            return tick
        if block_or_none(read_block) is None:
            return None
        return self._tick_history_port.get_tick(pool_id=pool_id, block_number=read_block)
