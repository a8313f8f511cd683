"""Tests for PoolDirectory, PoolCache and InvalidationSignal."""

import pytest

from swapcore.config import DEFAULT_NETWORKS, NetworkConfig
from swapcore.pools.cache import PoolCache
from swapcore.pools.directory import PoolDirectory, pair_key
from swapcore.pools.events import InvalidationSignal
from tests.helpers import (
    IOTA,
    IOTA_SHORT,
    POOL_IOTA_USDC,
    POOL_USDC_WETH,
    USDC,
    WETH,
    make_pool,
)


class TestPairKey:
    """pair_key() is order-insensitive and normalizes addresses."""

    def test_order_insensitive(self):
        assert pair_key(IOTA, USDC) == pair_key(USDC, IOTA)

    def test_short_and_long_forms_equal(self):
        assert pair_key(IOTA_SHORT, USDC) == pair_key(USDC, IOTA)

    def test_same_coin_raises(self):
        with pytest.raises(ValueError, match="two different coins"):
            pair_key(IOTA, IOTA_SHORT)

    def test_malformed_coin_raises(self):
        with pytest.raises(ValueError):
            pair_key("not-a-coin", USDC)


class TestPoolDirectory:
    """Pool ids by pair and network."""

    def test_add_and_lookup_either_order(self):
        directory = PoolDirectory()
        directory.add("0x11", IOTA, USDC, "testnet")
        assert directory.lookup(USDC, IOTA_SHORT, "testnet") == "0x" + "0" * 62 + "11"
        assert directory.lookup(IOTA, USDC, "mainnet") is None
        assert len(directory) == 1

    def test_add_replaces(self):
        directory = PoolDirectory()
        directory.add(POOL_IOTA_USDC, IOTA, USDC, "testnet")
        directory.add(POOL_USDC_WETH, USDC, IOTA, "testnet")
        assert directory.lookup(IOTA, USDC, "testnet") == POOL_USDC_WETH
        assert len(directory) == 1

    def test_remove(self):
        directory = PoolDirectory()
        directory.add(POOL_IOTA_USDC, IOTA, USDC, "testnet")
        directory.add(POOL_IOTA_USDC, IOTA, USDC, "devnet")
        removed = directory.remove(POOL_IOTA_USDC)
        assert sorted(network for _, network in removed) == ["devnet", "testnet"]
        assert len(directory) == 0
        assert directory.remove(POOL_IOTA_USDC) == []

    def test_remove_on_one_network(self):
        directory = PoolDirectory()
        directory.add(POOL_IOTA_USDC, IOTA, USDC, "testnet")
        directory.add(POOL_IOTA_USDC, IOTA, USDC, "devnet")
        assert directory.remove(POOL_IOTA_USDC, "devnet") == [(pair_key(IOTA, USDC), "devnet")]
        assert directory.lookup(IOTA, USDC, "testnet") == POOL_IOTA_USDC

    def test_from_networks(self):
        networks = {
            "testnet": NetworkConfig(
                name="testnet",
                rpc_url="http://localhost",
                known_pools={(IOTA, USDC): POOL_IOTA_USDC, (USDC, WETH): POOL_USDC_WETH},
            ),
            "devnet": DEFAULT_NETWORKS["devnet"],
        }
        directory = PoolDirectory.from_networks(networks)
        assert len(directory) == 2
        assert directory.lookup(WETH, USDC, "testnet") == POOL_USDC_WETH


class TestPoolCache:
    """Entries older than the TTL read as absent."""

    KEY = (pair_key(IOTA, USDC), "testnet")

    def test_fresh_entry(self):
        cache = PoolCache(ttl=10)
        pool = make_pool()
        cache.put(self.KEY, pool, now=100.0)
        assert cache.get(self.KEY, now=109.9) is pool

    def test_stale_entry_evicted(self):
        cache = PoolCache(ttl=10)
        cache.put(self.KEY, make_pool(), now=100.0)
        assert cache.get(self.KEY, now=110.0) is None
        assert len(cache) == 0

    def test_discard_and_clear(self):
        cache = PoolCache(ttl=10)
        cache.put(self.KEY, make_pool(), now=0.0)
        cache.discard(self.KEY)
        cache.discard(self.KEY)
        assert len(cache) == 0

        cache.put(self.KEY, make_pool(), now=0.0)
        cache.clear()
        assert cache.get(self.KEY, now=0.0) is None


class TestInvalidationSignal:
    """Synchronous broadcast."""

    def test_send_reaches_handlers(self):
        signal = InvalidationSignal()
        received: list[str] = []
        signal.connect(received.append)
        signal.connect(lambda reason: received.append(reason.upper()))

        signal.send("swap")

        assert received == ["swap", "SWAP"]
        assert signal.handler_count == 2

    def test_default_reason(self):
        signal = InvalidationSignal()
        received: list[str] = []
        signal.connect(received.append)
        signal.send()
        assert received == ["liquidity_changed"]

    def test_disconnect(self):
        signal = InvalidationSignal()
        received: list[str] = []
        disconnect = signal.connect(received.append)

        disconnect()
        disconnect()
        signal.send("swap")

        assert received == []
        assert signal.handler_count == 0

    def test_handler_may_disconnect_during_send(self):
        signal = InvalidationSignal()
        calls: list[str] = []
        disconnect = None

        def once(reason: str) -> None:
            calls.append(reason)
            disconnect()

        disconnect = signal.connect(once)
        signal.send("a")
        signal.send("b")
        assert calls == ["a"]
