"""Shared coin types and ids for tests.

Coin types are given in their normalized (64-hex address) form unless the
name says SHORT.

Usage:
    from tests.helpers import IOTA, USDC
"""

# =============================================================================
# Deployment
# =============================================================================

PACKAGE_ID = "0xd84fe8b6622ff910dc5e097c06de5ac31055c169453435d162ff999c8fb65202"
OWNER = "0x" + "0e" * 32

# =============================================================================
# Coins
# =============================================================================

IOTA_SHORT = "0x2::iota::IOTA"
IOTA = "0x" + "0" * 63 + "2::iota::IOTA"
USDC = "0x" + "a1" * 32 + "::usdc::USDC"
WETH = "0x" + "b2" * 32 + "::weth::WETH"
DOGE = "0x" + "c3" * 32 + "::doge::DOGE"

# =============================================================================
# Pools
# =============================================================================

POOL_IOTA_USDC = "0x" + "11" * 32
POOL_USDC_WETH = "0x" + "22" * 32
POOL_EMPTY = "0x" + "33" * 32

# Reference pool: 2000 units each side at 9 decimals, 0.30% fee
REFERENCE_RESERVE = 2_000_000_000
REFERENCE_INPUT = 100_000_000
REFERENCE_OUTPUT = 94_965_947
