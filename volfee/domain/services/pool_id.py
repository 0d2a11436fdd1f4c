from __future__ import annotations

from eth_abi import encode
from eth_abi.exceptions import EncodingError
from web3 import Web3

from volfee.domain.entities.pool import PoolKey
from volfee.domain.exceptions import InvalidPoolKeyError


POOL_KEY_ABI_TYPES = ["address", "address", "uint24", "int24", "address"]


def _checksum(address: str, field_name: str) -> str:
    try:
        return Web3.to_checksum_address(address)
    except (TypeError, ValueError) as exc:
        raise InvalidPoolKeyError(f"{field_name} is not a valid address: {address!r}") from exc


def pool_id_for(key: PoolKey) -> str:
    """keccak256 of the ABI-encoded pool key, as the pool manager derives it."""
    try:
        encoded = encode(
            POOL_KEY_ABI_TYPES,
            [
                _checksum(key.currency0, "currency0"),
                _checksum(key.currency1, "currency1"),
                key.fee,
                key.tick_spacing,
                _checksum(key.hooks, "hooks"),
            ],
        )
    except EncodingError as exc:
        raise InvalidPoolKeyError(str(exc)) from exc
    return Web3.to_hex(Web3.keccak(encoded))
