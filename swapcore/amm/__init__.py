"""AMM (Automated Market Maker) pricing."""

from swapcore.amm.base import AMM, SwapResult
from swapcore.amm.constant_product import (
    ConstantProductAMM,
    compute_input_amount,
    compute_liquidity_to_burn,
    compute_lp_tokens_to_mint,
    compute_output_amount,
    compute_price_impact,
    constant_product_amm,
    quote_proportional_amount,
)
from swapcore.amm.errors import (
    AMMError,
    DepositTooSmallError,
    EmptyPoolError,
    InsufficientLiquidityBurnedError,
    InsufficientReserveError,
    InvalidAmountError,
    InvalidFeeError,
)

__all__ = [
    # Base classes
    "AMM",
    "SwapResult",
    # Constant product
    "ConstantProductAMM",
    "constant_product_amm",
    "compute_input_amount",
    "compute_liquidity_to_burn",
    "compute_lp_tokens_to_mint",
    "compute_output_amount",
    "compute_price_impact",
    "quote_proportional_amount",
    # Errors
    "AMMError",
    "DepositTooSmallError",
    "EmptyPoolError",
    "InsufficientLiquidityBurnedError",
    "InsufficientReserveError",
    "InvalidAmountError",
    "InvalidFeeError",
]
