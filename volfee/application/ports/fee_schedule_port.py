from __future__ import annotations

from typing import Protocol

from volfee.domain.entities.history import FeeRecord


class FeeSchedulePort(Protocol):
    def get_fee(self, *, pool_id: str, block_number: int) -> int | None:
        ...

    def get_latest_fee(self, *, pool_id: str, block_number: int) -> FeeRecord | None:
        ...

    def record_fee(self, *, pool_id: str, block_number: int, fee: int) -> None:
        ...
