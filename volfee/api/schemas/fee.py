from __future__ import annotations

from pydantic import BaseModel, Field

from volfee.api.schemas.hook import PoolKeyRequest, SwapParamsRequest


class FeeQuoteRequest(BaseModel):
    block_number: int = Field(..., ge=0)
    key: PoolKeyRequest
    params: SwapParamsRequest | None = None


class FeeQuoteResponse(BaseModel):
    pool_id: str
    block_number: int
    fee: int = Field(..., description="0 means no fee was computed for this block.")
    source_block_number: int | None


class TickObservationResponse(BaseModel):
    block_number: int
    tick: int


class TickHistoryResponse(BaseModel):
    pool_id: str
    observations: list[TickObservationResponse]
