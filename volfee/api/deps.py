from __future__ import annotations

from functools import lru_cache

from fastapi import Header, HTTPException

from volfee.application.hook import VolatilityFeeHook
from volfee.application.ports.fee_schedule_port import FeeSchedulePort
from volfee.application.ports.pool_state_port import PoolStatePort
from volfee.application.ports.swap_record_port import SwapRecordPort
from volfee.application.ports.tick_history_port import TickHistoryPort
from volfee.application.use_cases.list_tick_history import ListTickHistoryUseCase
from volfee.domain.entities.hook import LookbackWindow
from volfee.infrastructure.clients.state_view_client import (
    StateViewRpcClient,
    StateViewRpcClientSettings,
)
from volfee.infrastructure.db.engine import create_schema, get_engine
from volfee.infrastructure.db.repositories.fee_schedule_repository import SqlFeeScheduleRepository
from volfee.infrastructure.db.repositories.swap_history_repository import SqlSwapHistoryRepository
from volfee.infrastructure.db.repositories.tick_history_repository import SqlTickHistoryRepository
from volfee.infrastructure.memory.history_store import (
    InMemoryFeeScheduleRepository,
    InMemorySwapHistoryRepository,
    InMemoryTickHistoryRepository,
)
from volfee.infrastructure.memory.pool_state import InMemoryPoolStateReader
from volfee.shared.config import get_settings


STORAGE_BACKENDS = ("memory", "sql")
POOL_STATE_SOURCES = ("memory", "rpc")


def _get_storage_backend() -> str:
    backend = get_settings().storage_backend
    if backend not in STORAGE_BACKENDS:
        raise HTTPException(
            status_code=500,
            detail=f"Unsupported STORAGE_BACKEND {backend!r}; expected one of {', '.join(STORAGE_BACKENDS)}.",
        )
    return backend


def _get_pool_state_source() -> str:
    source = get_settings().pool_state_source
    if source not in POOL_STATE_SOURCES:
        raise HTTPException(
            status_code=500,
            detail=f"Unsupported POOL_STATE_SOURCE {source!r}; expected one of {', '.join(POOL_STATE_SOURCES)}.",
        )
    return source


def _get_db_engine():
    settings = get_settings()
    if not settings.database_dsn:
        raise HTTPException(status_code=500, detail="DATABASE_DSN is required.")
    engine = get_engine(settings.database_dsn)
    create_schema(engine)
    return engine


@lru_cache(maxsize=1)
def _get_tick_history_port() -> TickHistoryPort:
    if _get_storage_backend() == "sql":
        return SqlTickHistoryRepository(_get_db_engine())
    return InMemoryTickHistoryRepository()


@lru_cache(maxsize=1)
def _get_fee_schedule_port() -> FeeSchedulePort:
    if _get_storage_backend() == "sql":
        return SqlFeeScheduleRepository(_get_db_engine())
    return InMemoryFeeScheduleRepository()


@lru_cache(maxsize=1)
def _get_swap_record_port() -> SwapRecordPort:
    if _get_storage_backend() == "sql":
        return SqlSwapHistoryRepository(_get_db_engine())
    return InMemorySwapHistoryRepository(
        tick_history=_get_tick_history_port(),
        fee_schedule=_get_fee_schedule_port(),
    )


@lru_cache(maxsize=1)
def _get_in_memory_pool_state_reader() -> InMemoryPoolStateReader:
    return InMemoryPoolStateReader()


@lru_cache(maxsize=1)
def _get_pool_state_port() -> PoolStatePort:
    settings = get_settings()
    if _get_pool_state_source() == "rpc":
        if not settings.rpc_url or not settings.state_view_address:
            raise HTTPException(
                status_code=500,
                detail="RPC_URL and STATE_VIEW_ADDRESS are required.",
            )
        return StateViewRpcClient(
            StateViewRpcClientSettings(
                rpc_url=settings.rpc_url,
                state_view_address=settings.state_view_address,
                timeout_seconds=settings.rpc_timeout_seconds,
                max_retries=settings.rpc_max_retries,
            )
        )
    return _get_in_memory_pool_state_reader()


def get_default_hooks_address() -> str:
    return get_settings().hook_address


def get_pool_state_reader() -> InMemoryPoolStateReader | None:
    if _get_pool_state_source() == "rpc":
        return None
    return _get_in_memory_pool_state_reader()


@lru_cache(maxsize=1)
def get_volatility_fee_hook() -> VolatilityFeeHook:
    settings = get_settings()
    if not settings.pool_manager_address:
        raise HTTPException(status_code=500, detail="POOL_MANAGER_ADDRESS is required.")
    try:
        slippage_lookback = LookbackWindow(
            recent_offset=settings.slippage_recent_offset,
            prior_offset=settings.slippage_prior_offset,
        )
        fee_lookback = LookbackWindow(recent_offset=0, prior_offset=settings.fee_prior_offset)
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return VolatilityFeeHook(
        pool_manager_address=settings.pool_manager_address,
        tick_history_port=_get_tick_history_port(),
        fee_schedule_port=_get_fee_schedule_port(),
        swap_record_port=_get_swap_record_port(),
        pool_state_port=_get_pool_state_port(),
        slippage_lookback=slippage_lookback,
        fee_lookback=fee_lookback,
        fee_carry_forward=settings.fee_carry_forward,
    )


def get_list_tick_history_use_case() -> ListTickHistoryUseCase:
    return ListTickHistoryUseCase(tick_history_port=_get_tick_history_port())


def get_caller_address(x_caller_address: str = Header(...)) -> str:
    caller = x_caller_address.strip()
    if not caller:
        raise HTTPException(status_code=401, detail="Missing caller address.")
    return caller
