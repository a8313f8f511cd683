"""Swap routing: direct-pool quotes with slippage bounds."""

from swapcore.routing.router import Router
from swapcore.routing.slippage import (
    InvalidSlippageError,
    maximum_sent,
    minimum_received,
    slippage_bps,
    slippage_multiplier,
)
from swapcore.routing.types import RouteResult, RouteStatus

__all__ = [
    "InvalidSlippageError",
    "RouteResult",
    "RouteStatus",
    "Router",
    "maximum_sent",
    "minimum_received",
    "slippage_bps",
    "slippage_multiplier",
]
