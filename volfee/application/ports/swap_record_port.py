from __future__ import annotations

from typing import Protocol


class SwapRecordPort(Protocol):
    def record_swap(self, *, pool_id: str, block_number: int, tick: int, fee: int) -> None:
        """Store the block's tick and fee together; neither is kept if either write fails."""
        ...
