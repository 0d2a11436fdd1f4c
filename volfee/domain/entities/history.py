from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TickObservation:
    pool_id: str
    block_number: int
    tick: int


@dataclass(frozen=True)
class FeeRecord:
    pool_id: str
    block_number: int
    fee: int
