from __future__ import annotations

from dataclasses import dataclass

from volfee.domain.entities.pool import PoolKey, SwapParams


@dataclass(frozen=True)
class InitializePoolInput:
    sender: str
    key: PoolKey
    sqrt_price_x96: int = 0


@dataclass(frozen=True)
class InitializePoolOutput:
    pool_id: str
    base_fee: int


@dataclass(frozen=True)
class BeforeSwapInput:
    sender: str
    block_number: int
    key: PoolKey
    params: SwapParams


@dataclass(frozen=True)
class BeforeSwapOutput:
    pool_id: str
    block_number: int
    price_impact: int


@dataclass(frozen=True)
class AfterSwapInput:
    sender: str
    block_number: int
    key: PoolKey
    params: SwapParams


@dataclass(frozen=True)
class AfterSwapOutput:
    pool_id: str
    block_number: int
    tick: int
    fee: int
    price_impact: int
