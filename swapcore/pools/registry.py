"""Pool registry: resolves coin pairs to live pool snapshots.

PoolRegistry is the only component that talks to the ledger while quoting.
It keeps a short-lived cache of decoded pools, merges concurrent lookups for
the same pair into a single fetch, and drops everything when the
application signals that reserves changed.

Outcomes of find_pool():
- Pool: a decoded snapshot with the on-chain (A, B) order
- None: no pool exists for the pair ("add liquidity first")
- LedgerNetworkError: the node could not be read; the caller may retry
"""

from __future__ import annotations

import asyncio
import itertools
import time
from collections.abc import Callable, Iterable, Mapping

import structlog

from swapcore.config import DEFAULT_REGISTRY_CONFIG, RegistryConfig, Settings
from swapcore.ledger.client import LedgerClient
from swapcore.ledger.errors import LedgerTimeoutError, PoolDecodeError
from swapcore.ledger.schema import decode_pool
from swapcore.models.pool import Pool
from swapcore.models.types import normalize_coin_type, short_coin
from swapcore.pools.cache import PoolCache, PoolKey
from swapcore.pools.directory import PoolDirectory, pair_key
from swapcore.pools.events import InvalidationSignal

logger = structlog.get_logger()


class PoolRegistry:
    """Cached, coalescing pool lookup.

    One registry is built at application startup and shared; tests build a
    fresh one each.

    Args:
        clients: Ledger client per network name
        directory: Pool ids per pair. If None, an empty directory is used.
        config: Cache TTL and fetch timeout
        package_ids: simple_dex package per network; decoded pools must
            belong to it. Networks missing here are not checked.
        clock: Monotonic time source (injectable for TTL tests)
    """

    def __init__(
        self,
        clients: Mapping[str, LedgerClient],
        directory: PoolDirectory | None = None,
        config: RegistryConfig = DEFAULT_REGISTRY_CONFIG,
        package_ids: Mapping[str, str] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clients = dict(clients)
        self.directory = directory if directory is not None else PoolDirectory()
        self.config = config
        self._package_ids = dict(package_ids or {})
        self._clock = clock
        self._cache = PoolCache(ttl=config.cache_ttl)
        self._inflight: dict[PoolKey, asyncio.Task[Pool | None]] = {}
        # Bumped on invalidation; fetches started under an older generation
        # do not write to the cache.
        self._generation = 0

    @classmethod
    def from_settings(
        cls, settings: Settings, clients: Mapping[str, LedgerClient]
    ) -> PoolRegistry:
        return cls(
            clients=clients,
            directory=PoolDirectory.from_networks(settings.networks),
            config=settings.registry,
            package_ids={
                name: network.package_id
                for name, network in settings.networks.items()
                if network.is_deployed
            },
        )

    @property
    def networks(self) -> list[str]:
        return sorted(self._clients)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def find_pool(self, coin_a: str, coin_b: str, network: str) -> Pool | None:
        """Find the pool for a coin pair, in either order.

        Args:
            coin_a: One coin type of the pair
            coin_b: The other coin type
            network: Network name

        Returns:
            The pool snapshot, or None if no pool exists for the pair

        Raises:
            ValueError: If a coin type is malformed or both coins are the same
            LedgerNetworkError: If the ledger could not be read
        """
        key: PoolKey = (pair_key(coin_a, coin_b), network)

        cached = self._cache.get(key, self._clock())
        if cached is not None:
            logger.debug("pool_cache_hit", pool=cached.pool_id[-8:], network=network)
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch(key, coin_a, coin_b, self._generation))
            self._inflight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            logger.debug(
                "pool_lookup_coalesced",
                pair=(short_coin(coin_a), short_coin(coin_b)),
                network=network,
            )

        # A cancelled caller must not cancel the fetch other callers share.
        return await asyncio.shield(task)

    async def find_all_pools(self, coin_types: Iterable[str], network: str) -> list[Pool]:
        """Look up every pair of the given coins and return the pools that exist.

        Duplicates (including short and long forms of one coin) are ignored.

        Raises:
            ValueError: If a coin type is malformed
            LedgerNetworkError: If any lookup could not read the ledger
        """
        unique = list(dict.fromkeys(normalize_coin_type(coin) for coin in coin_types))
        pairs = list(itertools.combinations(unique, 2))
        results = await asyncio.gather(*(self.find_pool(a, b, network) for a, b in pairs))
        return [pool for pool in results if pool is not None]

    def track_pool(self, pool_id: str, coin_a: str, coin_b: str, network: str) -> None:
        """Record a newly created pool so later lookups can fetch it."""
        self.directory.add(pool_id, coin_a, coin_b, network)
        self._cache.discard((pair_key(coin_a, coin_b), network))
        logger.info(
            "pool_tracked",
            pool=pool_id[-8:],
            pair=(short_coin(coin_a), short_coin(coin_b)),
            network=network,
        )

    def untrack_pool(self, pool_id: str, network: str | None = None) -> bool:
        """Forget a pool id and its cached snapshot. Returns True if it was known."""
        removed = self.directory.remove(pool_id, network)
        for key in removed:
            self._cache.discard(key)
        if removed:
            logger.info("pool_untracked", pool=pool_id[-8:], network=network)
        return bool(removed)

    def invalidate(self, reason: str = "manual") -> None:
        """Drop all cached snapshots and detach in-flight fetches.

        Callers already waiting on a fetch still get its result, but that
        result is not cached and new callers start a fresh fetch.
        """
        dropped = len(self._cache)
        self._cache.clear()
        self._inflight.clear()
        self._generation += 1
        logger.info("pool_cache_cleared", reason=reason, dropped=dropped)

    def subscribe(self, signal: InvalidationSignal) -> Callable[[], None]:
        """Clear this registry whenever the signal fires. Returns the disconnect callable."""
        return signal.connect(self.invalidate)

    def _forget(self, key: PoolKey, task: asyncio.Task[Pool | None]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the exception retrieved; the waiters that are still listening get it.
        if not task.cancelled():
            task.exception()

    async def _fetch(
        self, key: PoolKey, coin_a: str, coin_b: str, generation: int
    ) -> Pool | None:
        pair, network = key
        client = self._clients.get(network)
        if client is None:
            logger.warning("unsupported_network", network=network, supported=self.networks)
            return None

        pool_id = self.directory.lookup(coin_a, coin_b, network)
        if pool_id is None:
            logger.info(
                "pool_not_found",
                pair=(short_coin(coin_a), short_coin(coin_b)),
                network=network,
            )
            return None

        try:
            data = await asyncio.wait_for(
                client.get_object(pool_id), timeout=self.config.fetch_timeout
            )
        except TimeoutError as e:
            logger.warning(
                "pool_fetch_timeout",
                pool=pool_id[-8:],
                network=network,
                timeout=self.config.fetch_timeout,
            )
            raise LedgerTimeoutError(
                f"Fetching pool {pool_id} timed out after {self.config.fetch_timeout}s"
            ) from e

        if data is None:
            logger.info("pool_object_missing", pool=pool_id[-8:], network=network)
            return None

        pool = decode_pool(data, package_id=self._package_ids.get(network))
        if pool.pair_key != pair:
            raise PoolDecodeError(
                f"Pool {pool_id} holds {pool.coin_type_a}/{pool.coin_type_b}, "
                f"not the requested pair"
            )

        if generation == self._generation:
            self._cache.put(key, pool, self._clock())
        else:
            logger.debug("pool_fetch_outdated", pool=pool_id[-8:], network=network)

        logger.debug(
            "pool_fetched",
            pool=pool.pool_id[-8:],
            network=network,
            reserve_a=pool.reserve_a,
            reserve_b=pool.reserve_b,
        )
        return pool
