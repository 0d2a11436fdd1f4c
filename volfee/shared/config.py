from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from volfee.domain.entities.pool import ZERO_ADDRESS


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: str = "false") -> bool:
    value = (_env(name, default) or "").strip().lower()
    return value in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    pool_manager_address: str
    hook_address: str
    storage_backend: str
    database_dsn: str
    pool_state_source: str
    rpc_url: str
    state_view_address: str
    rpc_timeout_seconds: float
    rpc_max_retries: int
    slippage_recent_offset: int
    slippage_prior_offset: int
    fee_prior_offset: int
    fee_carry_forward: bool
    log_level: str


def get_settings() -> Settings:
    return Settings(
        pool_manager_address=_env("POOL_MANAGER_ADDRESS", ""),
        hook_address=_env("HOOK_ADDRESS", ZERO_ADDRESS),
        storage_backend=_env("STORAGE_BACKEND", "memory").strip().lower(),
        database_dsn=_env("DATABASE_DSN", ""),
        pool_state_source=_env("POOL_STATE_SOURCE", "memory").strip().lower(),
        rpc_url=_env("RPC_URL", ""),
        state_view_address=_env("STATE_VIEW_ADDRESS", ""),
        rpc_timeout_seconds=float(_env("RPC_TIMEOUT_SECONDS", "10")),
        rpc_max_retries=int(_env("RPC_MAX_RETRIES", "3")),
        slippage_recent_offset=int(_env("SLIPPAGE_RECENT_OFFSET", "1")),
        slippage_prior_offset=int(_env("SLIPPAGE_PRIOR_OFFSET", "2")),
        fee_prior_offset=int(_env("FEE_PRIOR_OFFSET", "1")),
        fee_carry_forward=_bool("FEE_CARRY_FORWARD"),
        log_level=_env("LOG_LEVEL", "INFO").strip().upper(),
    )
