from __future__ import annotations

from volfee.application.ports.pool_state_port import PoolStatePort
from volfee.domain.exceptions import PoolStateUnavailableError


class InMemoryPoolStateReader(PoolStatePort):
    """Pool ticks pushed by the host right after it executes a swap."""

    def __init__(self, ticks: dict[str, int] | None = None):
        self._ticks: dict[str, int] = dict(ticks or {})

    def set_current_tick(self, *, pool_id: str, tick: int) -> None:
        self._ticks[pool_id] = tick

    def get_current_tick(self, *, pool_id: str) -> int:
        if pool_id not in self._ticks:
            raise PoolStateUnavailableError(f"No tick reported for pool {pool_id}.")
        return self._ticks[pool_id]
