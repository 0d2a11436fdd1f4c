from __future__ import annotations

from volfee.domain.exceptions import UnauthorizedCallerError


def normalize_address(address: str) -> str:
    return address.strip().lower()


def require_pool_manager(*, sender: str, pool_manager_address: str) -> None:
    if not sender or normalize_address(sender) != normalize_address(pool_manager_address):
        raise UnauthorizedCallerError(f"Caller {sender or '<empty>'} is not the pool manager.")


def block_or_none(block_number: int) -> int | None:
    return block_number if block_number >= 0 else None
