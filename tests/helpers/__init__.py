"""Test helpers module for shared test utilities.

- constants: Coin types, pool ids and reference amounts
- factories: Pool snapshots and raw ledger objects
- fakes: In-memory ledger client and a manual clock
"""

from tests.helpers.constants import (
    DOGE,
    IOTA,
    IOTA_SHORT,
    OWNER,
    PACKAGE_ID,
    POOL_EMPTY,
    POOL_IOTA_USDC,
    POOL_USDC_WETH,
    REFERENCE_INPUT,
    REFERENCE_OUTPUT,
    REFERENCE_RESERVE,
    USDC,
    WETH,
)
from tests.helpers.factories import make_lp_token_object, make_pool, make_pool_object
from tests.helpers.fakes import FakeClock, FakeLedgerClient

__all__ = [
    # Constants
    "DOGE",
    "IOTA",
    "IOTA_SHORT",
    "OWNER",
    "PACKAGE_ID",
    "POOL_EMPTY",
    "POOL_IOTA_USDC",
    "POOL_USDC_WETH",
    "REFERENCE_INPUT",
    "REFERENCE_OUTPUT",
    "REFERENCE_RESERVE",
    "USDC",
    "WETH",
    # Factories
    "make_lp_token_object",
    "make_pool",
    "make_pool_object",
    # Fakes
    "FakeClock",
    "FakeLedgerClient",
]
