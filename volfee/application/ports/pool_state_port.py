from __future__ import annotations

from typing import Protocol


class PoolStatePort(Protocol):
    def get_current_tick(self, *, pool_id: str) -> int:
        ...
