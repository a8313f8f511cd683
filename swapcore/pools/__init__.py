"""Pool discovery: registry, cache, directory and invalidation."""

from swapcore.pools.cache import CacheEntry, PoolCache
from swapcore.pools.directory import PoolDirectory, pair_key
from swapcore.pools.events import InvalidationSignal
from swapcore.pools.lp_positions import LPPosition, LPPositionIndex, find_lp_positions
from swapcore.pools.registry import PoolRegistry

__all__ = [
    "CacheEntry",
    "InvalidationSignal",
    "LPPosition",
    "LPPositionIndex",
    "PoolCache",
    "PoolDirectory",
    "PoolRegistry",
    "find_lp_positions",
    "pair_key",
]
