from __future__ import annotations

import logging

from volfee.application.dto.hook import BeforeSwapInput, BeforeSwapOutput
from volfee.application.ports.tick_history_port import TickHistoryPort
from volfee.application.use_cases.hook_common import block_or_none, require_pool_manager
from volfee.domain.entities.hook import SLIPPAGE_LOOKBACK, LookbackWindow
from volfee.domain.exceptions import SlippageExceededError
from volfee.domain.services.pool_id import pool_id_for
from volfee.domain.services.price_impact import price_impact


logger = logging.getLogger(__name__)


class BeforeSwapUseCase:
    def __init__(
        self,
        *,
        tick_history_port: TickHistoryPort,
        pool_manager_address: str,
        lookback: LookbackWindow = SLIPPAGE_LOOKBACK,
    ):
        self._tick_history_port = tick_history_port
        self._pool_manager_address = pool_manager_address
        self._lookback = lookback

    def execute(self, command: BeforeSwapInput) -> BeforeSwapOutput:
        require_pool_manager(
            sender=command.sender,
            pool_manager_address=self._pool_manager_address,
        )

        pool_id = pool_id_for(command.key)
        recent_tick = self._read_tick(pool_id, self._lookback.recent_block(command.block_number))
        prior_tick = self._read_tick(pool_id, self._lookback.prior_block(command.block_number))
        impact = price_impact(recent_tick, prior_tick)

        if impact > command.params.max_slippage:
            logger.info(
                "before_swap: slippage_exceeded pool=%s block=%s impact=%s max_slippage=%s",
                pool_id,
                command.block_number,
                impact,
                command.params.max_slippage,
            )
            raise SlippageExceededError(
                price_impact=impact,
                max_slippage=command.params.max_slippage,
            )

        return BeforeSwapOutput(
            pool_id=pool_id,
            block_number=command.block_number,
            price_impact=impact,
        )

    def _read_tick(self, pool_id: str, block_number: int) -> int | None:
        if block_or_none(block_number) is None:
            return None
        return self._tick_history_port.get_tick(pool_id=pool_id, block_number=block_number)
