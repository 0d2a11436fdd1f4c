from __future__ import annotations

from volfee.domain.services.price_impact import price_impact


DYNAMIC_FEE_FLAG = 0x800000
MAX_LP_FEE = 1_000_000


def is_dynamic_fee(fee: int) -> bool:
    return bool(fee & DYNAMIC_FEE_FLAG)


def base_fee(fee: int) -> int:
    return fee & ~DYNAMIC_FEE_FLAG


def compute_dynamic_fee(
    *,
    nominal_fee: int,
    current_tick: int | None,
    previous_tick: int | None,
    max_fee: int = MAX_LP_FEE,
) -> int:
    fee = base_fee(nominal_fee)
    if previous_tick is not None:
        fee += price_impact(current_tick, previous_tick) // 100
    return min(fee, max_fee)
