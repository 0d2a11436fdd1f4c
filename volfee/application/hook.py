from __future__ import annotations

from volfee.application.dto.fee import GetFeeInput, GetFeeOutput
from volfee.application.dto.hook import (
    AfterSwapInput,
    AfterSwapOutput,
    BeforeSwapInput,
    BeforeSwapOutput,
    InitializePoolInput,
    InitializePoolOutput,
)
from volfee.application.ports.fee_schedule_port import FeeSchedulePort
from volfee.application.ports.pool_state_port import PoolStatePort
from volfee.application.ports.swap_record_port import SwapRecordPort
from volfee.application.ports.tick_history_port import TickHistoryPort
from volfee.application.use_cases.after_swap import AfterSwapUseCase
from volfee.application.use_cases.before_swap import BeforeSwapUseCase
from volfee.application.use_cases.get_fee import GetFeeUseCase
from volfee.application.use_cases.hook_common import require_pool_manager
from volfee.application.use_cases.initialize_pool import InitializePoolUseCase
from volfee.domain.entities.hook import FEE_LOOKBACK, SLIPPAGE_LOOKBACK, HookPermissions, LookbackWindow
from volfee.domain.services.fee_schedule import MAX_LP_FEE


class VolatilityFeeHook:
    """Hook entry points the pool manager calls around swap execution.

    ``before_initialize``, ``before_swap`` and ``after_swap`` only accept the
    configured pool manager as sender. ``get_fee`` is open to any caller.
    """

    def __init__(
        self,
        *,
        pool_manager_address: str,
        tick_history_port: TickHistoryPort,
        fee_schedule_port: FeeSchedulePort,
        swap_record_port: SwapRecordPort,
        pool_state_port: PoolStatePort,
        slippage_lookback: LookbackWindow = SLIPPAGE_LOOKBACK,
        fee_lookback: LookbackWindow = FEE_LOOKBACK,
        max_fee: int = MAX_LP_FEE,
        fee_carry_forward: bool = False,
    ):
        self._pool_manager_address = pool_manager_address
        self._initialize_pool = InitializePoolUseCase(pool_manager_address=pool_manager_address)
        self._before_swap = BeforeSwapUseCase(
            tick_history_port=tick_history_port,
            pool_manager_address=pool_manager_address,
            lookback=slippage_lookback,
        )
        self._after_swap = AfterSwapUseCase(
            tick_history_port=tick_history_port,
            swap_record_port=swap_record_port,
            pool_state_port=pool_state_port,
            pool_manager_address=pool_manager_address,
            lookback=fee_lookback,
            max_fee=max_fee,
        )
        self._get_fee = GetFeeUseCase(
            fee_schedule_port=fee_schedule_port,
            carry_forward=fee_carry_forward,
        )

    def authorize(self, sender: str) -> None:
        require_pool_manager(sender=sender, pool_manager_address=self._pool_manager_address)

    @staticmethod
    def get_hook_permissions() -> HookPermissions:
        return HookPermissions(
            before_initialize=True,
            before_swap=True,
            after_swap=True,
        )

    def before_initialize(self, command: InitializePoolInput) -> InitializePoolOutput:
        return self._initialize_pool.execute(command)

    def before_swap(self, command: BeforeSwapInput) -> BeforeSwapOutput:
        return self._before_swap.execute(command)

    def after_swap(self, command: AfterSwapInput) -> AfterSwapOutput:
        return self._after_swap.execute(command)

    def get_fee(self, command: GetFeeInput) -> GetFeeOutput:
        return self._get_fee.execute(command)
