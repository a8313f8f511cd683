"""Pydantic models for the quote service's request bodies."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from swapcore.constants import DEFAULT_SLIPPAGE
from swapcore.models.types import U64, normalize_coin_type, normalize_object_id
from swapcore.routing.slippage import parse_slippage


class _SwapRequest(BaseModel):
    coin_in: str = Field(alias="coinIn", min_length=1, description="Coin type to sell")
    coin_out: str = Field(alias="coinOut", min_length=1, description="Coin type to buy")
    slippage: Decimal = Field(
        default=DEFAULT_SLIPPAGE,
        description="Slippage tolerance in percent (0.5 = 0.5%)",
    )

    model_config = {"populate_by_name": True}

    @field_validator("slippage", mode="before")
    @classmethod
    def _parse_slippage(cls, value: Any) -> Decimal:
        # Floats go through their repr so 0.1 stays 0.1
        return parse_slippage(value)


class QuoteRequest(_SwapRequest):
    """Exact-input quote: sell amount_in of coin_in."""

    amount_in: U64 = Field(alias="amountIn")


class ExactOutputQuoteRequest(_SwapRequest):
    """Exact-output quote: buy amount_out of coin_out."""

    amount_out: U64 = Field(alias="amountOut")


class InvalidateRequest(BaseModel):
    reason: str = Field(default="api", max_length=64)


class TrackPoolRequest(BaseModel):
    """Register a pool created on chain so quotes can find it."""

    pool_id: str = Field(alias="poolId")
    coin_type_a: str = Field(alias="coinTypeA")
    coin_type_b: str = Field(alias="coinTypeB")

    model_config = {"populate_by_name": True}

    @field_validator("pool_id")
    @classmethod
    def _normalize_pool_id(cls, value: str) -> str:
        return normalize_object_id(value)

    @field_validator("coin_type_a", "coin_type_b")
    @classmethod
    def _normalize_coin_type(cls, value: str) -> str:
        return normalize_coin_type(value)
