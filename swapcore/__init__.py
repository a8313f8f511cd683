"""Constant-product swap pricing, pool discovery and routing for simple_dex."""

from swapcore.pools.registry import PoolRegistry
from swapcore.routing.router import Router

__version__ = "0.1.0"
__all__ = ["PoolRegistry", "Router", "__version__"]
