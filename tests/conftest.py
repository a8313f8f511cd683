"""Pytest configuration and fixtures."""

import pytest

from swapcore.config import RegistryConfig
from swapcore.pools.directory import PoolDirectory
from swapcore.pools.registry import PoolRegistry
from swapcore.routing.router import Router
from tests.helpers import (
    IOTA,
    PACKAGE_ID,
    POOL_EMPTY,
    POOL_IOTA_USDC,
    REFERENCE_RESERVE,
    USDC,
    WETH,
    FakeClock,
    FakeLedgerClient,
    make_pool_object,
)


@pytest.fixture
def ledger() -> FakeLedgerClient:
    """Ledger holding the reference IOTA/USDC pool and an empty USDC/WETH pool."""
    return FakeLedgerClient(
        objects={
            POOL_IOTA_USDC: make_pool_object(
                POOL_IOTA_USDC, IOTA, USDC, REFERENCE_RESERVE, REFERENCE_RESERVE
            ),
            POOL_EMPTY: make_pool_object(POOL_EMPTY, USDC, WETH, 0, 0, lp_supply=0),
        }
    )


@pytest.fixture
def directory() -> PoolDirectory:
    directory = PoolDirectory()
    directory.add(POOL_IOTA_USDC, IOTA, USDC, "testnet")
    directory.add(POOL_EMPTY, USDC, WETH, "testnet")
    return directory


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(
    ledger: FakeLedgerClient, directory: PoolDirectory, clock: FakeClock
) -> PoolRegistry:
    """Registry for testnet with a 10s TTL and a manual clock."""
    return PoolRegistry(
        clients={"testnet": ledger},
        directory=directory,
        config=RegistryConfig(cache_ttl=10.0, fetch_timeout=1.0),
        package_ids={"testnet": PACKAGE_ID},
        clock=clock,
    )


@pytest.fixture
def swap_router(registry: PoolRegistry) -> Router:
    return Router(registry)
