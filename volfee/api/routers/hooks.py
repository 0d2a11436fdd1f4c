from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from volfee.api.deps import (
    get_caller_address,
    get_default_hooks_address,
    get_pool_state_reader,
    get_volatility_fee_hook,
)
from volfee.api.schemas.hook import (
    AfterSwapRequest,
    AfterSwapResponse,
    BeforeSwapRequest,
    BeforeSwapResponse,
    HookPermissionsResponse,
    InitializePoolRequest,
    InitializePoolResponse,
)
from volfee.application.dto.hook import AfterSwapInput, BeforeSwapInput, InitializePoolInput
from volfee.application.hook import VolatilityFeeHook
from volfee.domain.exceptions import (
    InvalidFeeConfigurationError,
    InvalidPoolKeyError,
    PoolStateUnavailableError,
    SlippageExceededError,
    UnauthorizedCallerError,
)
from volfee.domain.services.pool_id import pool_id_for
from volfee.infrastructure.memory.pool_state import InMemoryPoolStateReader

router = APIRouter()


@router.get("/v1/hooks/permissions", response_model=HookPermissionsResponse)
def get_hook_permissions():
    return HookPermissionsResponse(**asdict(VolatilityFeeHook.get_hook_permissions()))


@router.post("/v1/hooks/before-initialize", response_model=InitializePoolResponse)
def before_initialize(
    req: InitializePoolRequest,
    caller: str = Depends(get_caller_address),
    default_hooks: str = Depends(get_default_hooks_address),
    hook: VolatilityFeeHook = Depends(get_volatility_fee_hook),
):
    try:
        result = hook.before_initialize(
            InitializePoolInput(
                sender=caller,
                key=req.key.to_entity(default_hooks=default_hooks),
                sqrt_price_x96=req.sqrt_price_x96,
            )
        )
    except UnauthorizedCallerError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except (InvalidFeeConfigurationError, InvalidPoolKeyError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return InitializePoolResponse(pool_id=result.pool_id, base_fee=result.base_fee)


@router.post("/v1/hooks/before-swap", response_model=BeforeSwapResponse)
def before_swap(
    req: BeforeSwapRequest,
    caller: str = Depends(get_caller_address),
    default_hooks: str = Depends(get_default_hooks_address),
    hook: VolatilityFeeHook = Depends(get_volatility_fee_hook),
):
    try:
        result = hook.before_swap(
            BeforeSwapInput(
                sender=caller,
                block_number=req.block_number,
                key=req.key.to_entity(default_hooks=default_hooks),
                params=req.params.to_entity(),
            )
        )
    except UnauthorizedCallerError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except SlippageExceededError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except InvalidPoolKeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return BeforeSwapResponse(
        pool_id=result.pool_id,
        block_number=result.block_number,
        price_impact=result.price_impact,
    )


@router.post("/v1/hooks/after-swap", response_model=AfterSwapResponse)
def after_swap(
    req: AfterSwapRequest,
    caller: str = Depends(get_caller_address),
    default_hooks: str = Depends(get_default_hooks_address),
    hook: VolatilityFeeHook = Depends(get_volatility_fee_hook),
    state_reader: InMemoryPoolStateReader | None = Depends(get_pool_state_reader),
):
    try:
        key = req.key.to_entity(default_hooks=default_hooks)
        command = AfterSwapInput(
            sender=caller,
            block_number=req.block_number,
            key=key,
            params=req.params.to_entity(),
        )
        if req.tick is not None:
            if state_reader is None:
                raise HTTPException(
                    status_code=400,
                    detail="tick is only accepted when pool state is reported by the caller.",
                )
            hook.authorize(caller)
            state_reader.set_current_tick(pool_id=pool_id_for(key), tick=req.tick)
        result = hook.after_swap(command)
    except UnauthorizedCallerError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except InvalidPoolKeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PoolStateUnavailableError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return AfterSwapResponse(
        pool_id=result.pool_id,
        block_number=result.block_number,
        tick=result.tick,
        fee=result.fee,
        price_impact=result.price_impact,
    )
