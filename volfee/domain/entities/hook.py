from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HookPermissions:
    before_initialize: bool = False
    after_initialize: bool = False
    before_add_liquidity: bool = False
    after_add_liquidity: bool = False
    before_remove_liquidity: bool = False
    after_remove_liquidity: bool = False
    before_swap: bool = False
    after_swap: bool = False
    before_donate: bool = False
    after_donate: bool = False
    before_swap_return_delta: bool = False
    after_swap_return_delta: bool = False
    after_add_liquidity_return_delta: bool = False
    after_remove_liquidity_return_delta: bool = False


@dataclass(frozen=True)
class LookbackWindow:
    """Block offsets, relative to the block being processed, of two ticks to compare.

    ``recent_offset`` selects the observation treated as current and
    ``prior_offset`` the one it is measured against.
    """

    recent_offset: int
    prior_offset: int

    def __post_init__(self) -> None:
        if self.recent_offset < 0 or self.prior_offset < 0:
            raise ValueError("Lookback offsets must be non-negative.")
        if self.prior_offset <= self.recent_offset:
            raise ValueError("prior_offset must be greater than recent_offset.")

    def recent_block(self, block_number: int) -> int:
        return block_number - self.recent_offset

    def prior_block(self, block_number: int) -> int:
        return block_number - self.prior_offset


SLIPPAGE_LOOKBACK = LookbackWindow(recent_offset=1, prior_offset=2)
FEE_LOOKBACK = LookbackWindow(recent_offset=0, prior_offset=1)
