from __future__ import annotations

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from volfee.api import deps
from volfee.application.hook import VolatilityFeeHook
from volfee.main import app


POOL_MANAGER = "0x000000000004444c5dc75cb358380d2e3de08a90"
KEY = {
    "currency0": "0x0000000000000000000000000000000000000001",
    "currency1": "0x0000000000000000000000000000000000000002",
    "fee": 0x800000 | 3000,
    "tick_spacing": 60,
}


def _clear_cached_wiring():
    deps._get_tick_history_port.cache_clear()
    deps._get_fee_schedule_port.cache_clear()
    deps._get_swap_record_port.cache_clear()
    deps._get_in_memory_pool_state_reader.cache_clear()
    deps._get_pool_state_port.cache_clear()
    deps.get_volatility_fee_hook.cache_clear()


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("POOL_MANAGER_ADDRESS", POOL_MANAGER)
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("POOL_STATE_SOURCE", "memory")
    _clear_cached_wiring()

    yield monkeypatch

    _clear_cached_wiring()


def test_memory_configuration_builds_hook(env):
    hook = deps.get_volatility_fee_hook()

    assert isinstance(hook, VolatilityFeeHook)
    assert deps.get_pool_state_reader() is not None


def test_unknown_storage_backend_is_rejected(env):
    env.setenv("STORAGE_BACKEND", "postgres")

    with pytest.raises(HTTPException) as exc_info:
        deps.get_volatility_fee_hook()

    assert exc_info.value.status_code == 500
    assert "STORAGE_BACKEND" in exc_info.value.detail


def test_unknown_pool_state_source_is_rejected(env):
    env.setenv("POOL_STATE_SOURCE", "rcp")

    with pytest.raises(HTTPException) as exc_info:
        deps.get_pool_state_reader()

    assert exc_info.value.status_code == 500
    assert "POOL_STATE_SOURCE" in exc_info.value.detail


def test_fee_quote_fails_loudly_on_unknown_storage_backend(env):
    env.setenv("STORAGE_BACKEND", "sqlite")
    client = TestClient(app)

    response = client.post("/v1/fees/quote", json={"block_number": 100, "key": KEY})

    assert response.status_code == 500
    assert "STORAGE_BACKEND" in response.json()["detail"]
