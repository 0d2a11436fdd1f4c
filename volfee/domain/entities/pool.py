from __future__ import annotations

from dataclasses import dataclass


ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class PoolKey:
    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str = ZERO_ADDRESS


@dataclass(frozen=True)
class SwapParams:
    zero_for_one: bool
    amount_specified: int
    max_slippage: int
    sqrt_price_limit_x96: int = 0
