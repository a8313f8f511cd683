"""Where pool ids come from.

The ledger has no index from coin pair to pool object, so the registry
needs the pool id up front: either configured as a known pool or recorded
when the application sees a create_pool transaction.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from swapcore.config import NetworkConfig
from swapcore.models.types import normalize_coin_type, normalize_object_id, short_coin
from swapcore.pools.cache import PoolKey

logger = structlog.get_logger()


def pair_key(coin_a: str, coin_b: str) -> frozenset[str]:
    """Order-insensitive key for a coin pair.

    Raises:
        ValueError: If a coin type is malformed or both coins are the same
    """
    coin_a_norm = normalize_coin_type(coin_a)
    coin_b_norm = normalize_coin_type(coin_b)
    if coin_a_norm == coin_b_norm:
        raise ValueError(f"A pool pair needs two different coins, got {coin_a} twice")
    return frozenset([coin_a_norm, coin_b_norm])


class PoolDirectory:
    """Pool ids by unordered coin pair and network."""

    def __init__(self) -> None:
        self._pool_ids: dict[PoolKey, str] = {}

    @classmethod
    def from_networks(cls, networks: Mapping[str, NetworkConfig]) -> PoolDirectory:
        """Seed a directory with each network's known pools."""
        directory = cls()
        for name, network in networks.items():
            for (coin_a, coin_b), pool_id in network.known_pools.items():
                directory.add(pool_id, coin_a, coin_b, name)
        return directory

    def __len__(self) -> int:
        return len(self._pool_ids)

    def add(self, pool_id: str, coin_a: str, coin_b: str, network: str) -> None:
        """Record the pool for a pair, replacing any previous one."""
        key = (pair_key(coin_a, coin_b), network)
        pool_id_norm = normalize_object_id(pool_id)
        previous = self._pool_ids.get(key)
        if previous is not None and previous != pool_id_norm:
            logger.info(
                "pool_id_replaced",
                network=network,
                pair=(short_coin(coin_a), short_coin(coin_b)),
                old=previous[-8:],
                new=pool_id_norm[-8:],
            )
        self._pool_ids[key] = pool_id_norm

    def lookup(self, coin_a: str, coin_b: str, network: str) -> str | None:
        return self._pool_ids.get((pair_key(coin_a, coin_b), network))

    def remove(self, pool_id: str, network: str | None = None) -> list[PoolKey]:
        """Forget a pool id, on one network or on all of them.

        Returns:
            The (pair, network) keys that pointed at the pool
        """
        pool_id_norm = normalize_object_id(pool_id)
        stale = [
            key
            for key, value in self._pool_ids.items()
            if value == pool_id_norm and (network is None or key[1] == network)
        ]
        for key in stale:
            del self._pool_ids[key]
        return stale
