from __future__ import annotations

from typing import Protocol

from volfee.domain.entities.history import TickObservation


class TickHistoryPort(Protocol):
    def get_tick(self, *, pool_id: str, block_number: int) -> int | None:
        ...

    def record_tick(self, *, pool_id: str, block_number: int, tick: int) -> None:
        ...

    def list_ticks(
        self,
        *,
        pool_id: str,
        from_block: int | None = None,
        to_block: int | None = None,
    ) -> list[TickObservation]:
        ...
