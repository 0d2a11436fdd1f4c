from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from volfee.api.deps import (
    get_default_hooks_address,
    get_list_tick_history_use_case,
    get_volatility_fee_hook,
)
from volfee.api.schemas.fee import (
    FeeQuoteRequest,
    FeeQuoteResponse,
    TickHistoryResponse,
    TickObservationResponse,
)
from volfee.application.dto.fee import GetFeeInput, ListTickHistoryInput
from volfee.application.hook import VolatilityFeeHook
from volfee.application.use_cases.list_tick_history import ListTickHistoryUseCase
from volfee.domain.exceptions import HistoryQueryInputError, InvalidPoolKeyError

router = APIRouter()


@router.post("/v1/fees/quote", response_model=FeeQuoteResponse)
def quote_fee(
    req: FeeQuoteRequest,
    default_hooks: str = Depends(get_default_hooks_address),
    hook: VolatilityFeeHook = Depends(get_volatility_fee_hook),
):
    try:
        result = hook.get_fee(
            GetFeeInput(
                block_number=req.block_number,
                key=req.key.to_entity(default_hooks=default_hooks),
                params=req.params.to_entity() if req.params is not None else None,
            )
        )
    except InvalidPoolKeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return FeeQuoteResponse(
        pool_id=result.pool_id,
        block_number=result.block_number,
        fee=result.fee,
        source_block_number=result.source_block_number,
    )


@router.get("/v1/pools/{pool_id}/ticks", response_model=TickHistoryResponse)
def list_tick_history(
    pool_id: str,
    from_block: int | None = None,
    to_block: int | None = None,
    use_case: ListTickHistoryUseCase = Depends(get_list_tick_history_use_case),
):
    try:
        result = use_case.execute(
            ListTickHistoryInput(pool_id=pool_id, from_block=from_block, to_block=to_block)
        )
    except HistoryQueryInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return TickHistoryResponse(
        pool_id=result.pool_id,
        observations=[
            TickObservationResponse(block_number=row.block_number, tick=row.tick)
            for row in result.observations
        ],
    )
