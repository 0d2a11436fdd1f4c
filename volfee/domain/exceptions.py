from __future__ import annotations


class DomainError(Exception):
    """Base for fee engine domain errors."""


class InvalidFeeConfigurationError(DomainError):
    """Pool was not configured to use a dynamic fee."""


class UnauthorizedCallerError(DomainError):
    """Restricted hook entry point invoked by someone other than the pool manager."""


class PoolStateUnavailableError(DomainError):
    """The host could not report the pool's current tick."""


class SlippageExceededError(DomainError):
    """Recent price impact is above the tolerance declared for the swap."""

    def __init__(self, *, price_impact: int, max_slippage: int):
        self.price_impact = price_impact
        self.max_slippage = max_slippage
        super().__init__(
            f"Price impact {price_impact}% exceeds max slippage {max_slippage}%."
        )


class HistoryQueryInputError(DomainError):
    """Invalid parameters for a tick history query."""


class InvalidPoolKeyError(DomainError):
    """Pool key fields cannot be encoded into a pool identifier."""
