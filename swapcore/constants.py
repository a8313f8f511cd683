"""Protocol constants mirrored from the simple_dex Move module.

The pricing formulas must round exactly like the deployed contract, so the
fee defaults and the locked liquidity amount live here rather than in
configuration.
"""

from decimal import Decimal

# Default swap fee: 30 / 10000 = 0.30%
DEFAULT_FEE_NUMERATOR = 30
DEFAULT_FEE_DENOMINATOR = 10_000

# LP tokens permanently locked by the first deposit
MINIMUM_LIQUIDITY = 1000

# Slippage is applied in basis points of the quoted output
SLIPPAGE_SCALE = 10_000
DEFAULT_SLIPPAGE = Decimal("0.5")

# Move module that defines Pool<A, B> and LPToken<A, B>
DEX_MODULE = "simple_dex"
POOL_STRUCT = "Pool"
LP_TOKEN_STRUCT = "LPToken"

# Largest value a Move u64 transaction argument can hold
U64_MAX = 2**64 - 1

# Price impact percentages are rounded to six places on the wire
PRICE_IMPACT_QUANTUM = Decimal("0.000001")
