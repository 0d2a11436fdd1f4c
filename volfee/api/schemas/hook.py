from __future__ import annotations

from pydantic import BaseModel, Field

from volfee.domain.entities.pool import PoolKey, SwapParams


class PoolKeyRequest(BaseModel):
    currency0: str
    currency1: str
    fee: int = Field(..., ge=0, description="Nominal fee, dynamic fee flag included.")
    tick_spacing: int
    hooks: str | None = Field(None, description="Hook address; defaults to this engine.")

    def to_entity(self, *, default_hooks: str) -> PoolKey:
        return PoolKey(
            currency0=self.currency0,
            currency1=self.currency1,
            fee=self.fee,
            tick_spacing=self.tick_spacing,
            hooks=self.hooks or default_hooks,
        )


class SwapParamsRequest(BaseModel):
    zero_for_one: bool
    amount_specified: int
    max_slippage: int = Field(..., ge=0, description="Max tolerated price impact, in percent.")
    sqrt_price_limit_x96: int = 0

    def to_entity(self) -> SwapParams:
        return SwapParams(
            zero_for_one=self.zero_for_one,
            amount_specified=self.amount_specified,
            max_slippage=self.max_slippage,
            sqrt_price_limit_x96=self.sqrt_price_limit_x96,
        )


class HookPermissionsResponse(BaseModel):
    before_initialize: bool
    after_initialize: bool
    before_add_liquidity: bool
    after_add_liquidity: bool
    before_remove_liquidity: bool
    after_remove_liquidity: bool
    before_swap: bool
    after_swap: bool
    before_donate: bool
    after_donate: bool
    before_swap_return_delta: bool
    after_swap_return_delta: bool
    after_add_liquidity_return_delta: bool
    after_remove_liquidity_return_delta: bool


class InitializePoolRequest(BaseModel):
    key: PoolKeyRequest
    sqrt_price_x96: int = 0


class InitializePoolResponse(BaseModel):
    pool_id: str
    base_fee: int


class BeforeSwapRequest(BaseModel):
    block_number: int = Field(..., ge=0)
    key: PoolKeyRequest
    params: SwapParamsRequest


class BeforeSwapResponse(BaseModel):
    pool_id: str
    block_number: int
    price_impact: int


class AfterSwapRequest(BaseModel):
    block_number: int = Field(..., ge=0)
    key: PoolKeyRequest
    params: SwapParamsRequest
    tick: int | None = Field(None, description="Post-swap tick reported by the pool manager.")


class AfterSwapResponse(BaseModel):
    pool_id: str
    block_number: int
    tick: int
    fee: int
    price_impact: int
