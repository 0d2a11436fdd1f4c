from __future__ import annotations

from dataclasses import dataclass
import logging
import time

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
import httpx
from web3 import Web3

from volfee.application.ports.pool_state_port import PoolStatePort
from volfee.domain.exceptions import PoolStateUnavailableError


logger = logging.getLogger(__name__)


GET_SLOT0_SELECTOR = Web3.keccak(text="getSlot0(bytes32)")[:4]
SLOT0_ABI_TYPES = ["uint160", "int24", "uint24", "uint24"]


@dataclass(frozen=True)
class StateViewRpcClientSettings:
    rpc_url: str
    state_view_address: str
    timeout_seconds: float
    max_retries: int
    block_tag: str = "latest"


@dataclass(frozen=True)
class Slot0:
    sqrt_price_x96: int
    tick: int
    protocol_fee: int
    lp_fee: int


class StateViewRpcClient(PoolStatePort):
    """Reads pool slot0 from the host's StateView contract over JSON-RPC."""

    def __init__(self, settings: StateViewRpcClientSettings, transport: httpx.BaseTransport | None = None):
        self._settings = settings
        self._transport = transport
        self._request_id = 0

    def get_current_tick(self, *, pool_id: str) -> int:
        return self.get_slot0(pool_id=pool_id).tick

    def get_slot0(self, *, pool_id: str) -> Slot0:
        call_data = GET_SLOT0_SELECTOR + encode(["bytes32"], [Web3.to_bytes(hexstr=pool_id)])
        result = self._post_rpc(
            method="eth_call",
            params=[
                {
                    "to": self._settings.state_view_address,
                    "data": Web3.to_hex(call_data),
                },
                self._settings.block_tag,
            ],
        )
        try:
            sqrt_price_x96, tick, protocol_fee, lp_fee = decode(
                SLOT0_ABI_TYPES,
                Web3.to_bytes(hexstr=result),
            )
        except (DecodingError, ValueError) as exc:
            raise PoolStateUnavailableError(f"Could not decode slot0 for pool {pool_id}: {exc}") from exc

        if sqrt_price_x96 == 0:
            raise PoolStateUnavailableError(f"Pool {pool_id} is not initialized.")

        logger.debug("state_view_client: slot0 pool=%s tick=%s lp_fee=%s", pool_id, tick, lp_fee)
        return Slot0(
            sqrt_price_x96=sqrt_price_x96,
            tick=tick,
            protocol_fee=protocol_fee,
            lp_fee=lp_fee,
        )

    def _post_rpc(self, *, method: str, params: list) -> str:
        attempts = max(1, self._settings.max_retries)
        delay = 0.25
        last_exc: Exception | None = None

        for attempt in range(1, attempts + 1):
            self._request_id += 1
            try:
                with httpx.Client(
                    timeout=self._settings.timeout_seconds,
                    transport=self._transport,
                ) as client:
                    response = client.post(
                        self._settings.rpc_url,
                        json={
                            "jsonrpc": "2.0",
                            "id": self._request_id,
                            "method": method,
                            "params": params,
                        },
                    )
                    response.raise_for_status()
                    payload = response.json()

                error = payload.get("error")
                if error:
                    raise RuntimeError(str(error.get("message", error)))
                result = payload.get("result")
                if not isinstance(result, str):
                    raise RuntimeError(f"Unexpected {method} result: {result!r}")
                return result
            except (httpx.HTTPError, RuntimeError, ValueError) as exc:
                last_exc = exc
                if attempt == attempts:
                    break
                logger.warning(
                    "state_view_client: rpc_retry method=%s attempt=%s/%s error=%s",
                    method,
                    attempt,
                    attempts,
                    exc,
                )
                time.sleep(delay)
                delay *= 2

        raise PoolStateUnavailableError(f"RPC request failed after retries: {last_exc}") from last_exc
