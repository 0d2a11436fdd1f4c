from __future__ import annotations

from dataclasses import dataclass

from volfee.domain.entities.history import TickObservation
from volfee.domain.entities.pool import PoolKey, SwapParams


@dataclass(frozen=True)
class GetFeeInput:
    block_number: int
    key: PoolKey
    params: SwapParams | None = None


@dataclass(frozen=True)
class GetFeeOutput:
    pool_id: str
    block_number: int
    fee: int
    source_block_number: int | None


@dataclass(frozen=True)
class ListTickHistoryInput:
    pool_id: str
    from_block: int | None = None
    to_block: int | None = None


@dataclass(frozen=True)
class ListTickHistoryOutput:
    pool_id: str
    observations: list[TickObservation]
