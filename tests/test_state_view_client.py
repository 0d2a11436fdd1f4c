from __future__ import annotations

import json

import httpx
import pytest
from eth_abi import encode
from web3 import Web3

from volfee.domain.exceptions import PoolStateUnavailableError
from volfee.infrastructure.clients.state_view_client import (
    GET_SLOT0_SELECTOR,
    StateViewRpcClient,
    StateViewRpcClientSettings,
)


POOL_ID = "0x" + "ab" * 32
STATE_VIEW = "0x7ffe42c4a5deea5b0fec41c94c136cf115597227"


def _slot0_result(*, sqrt_price_x96: int, tick: int, lp_fee: int = 3000) -> str:
    return Web3.to_hex(encode(["uint160", "int24", "uint24", "uint24"], [sqrt_price_x96, tick, 0, lp_fee]))


def _make_client(handler, *, max_retries: int = 1) -> StateViewRpcClient:
    return StateViewRpcClient(
        StateViewRpcClientSettings(
            rpc_url="https://rpc.example.org",
            state_view_address=STATE_VIEW,
            timeout_seconds=5,
            max_retries=max_retries,
        ),
        transport=httpx.MockTransport(handler),
    )


def test_get_current_tick_decodes_signed_tick():
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append(body)
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": body["id"], "result": _slot0_result(sqrt_price_x96=2**96, tick=-887)},
        )

    client = _make_client(handler)

    assert client.get_current_tick(pool_id=POOL_ID) == -887
    call = seen[0]["params"][0]
    assert seen[0]["method"] == "eth_call"
    assert call["to"] == STATE_VIEW
    assert call["data"] == Web3.to_hex(GET_SLOT0_SELECTOR) + "ab" * 32


def test_uninitialized_pool_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": body["id"], "result": _slot0_result(sqrt_price_x96=0, tick=0)},
        )

    with pytest.raises(PoolStateUnavailableError):
        _make_client(handler).get_current_tick(pool_id=POOL_ID)


def test_rpc_error_is_retried_then_surfaced():
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        body = json.loads(request.content)
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32000, "message": "boom"}},
        )

    with pytest.raises(PoolStateUnavailableError, match="boom"):
        _make_client(handler, max_retries=2).get_current_tick(pool_id=POOL_ID)
    assert calls["count"] == 2


def test_http_failure_is_surfaced_as_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    with pytest.raises(PoolStateUnavailableError):
        _make_client(handler).get_current_tick(pool_id=POOL_ID)
