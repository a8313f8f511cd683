"""Types for routing results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from swapcore.models.pool import Pool
from swapcore.models.quote import Quote


class RouteStatus(str, Enum):
    """Outcome of a routing request.

    NO_ROUTE and NO_LIQUIDITY are normal outcomes ("create the pool" and
    "add liquidity first"), not failures of the router.
    """

    FOUND = "found"
    NO_ROUTE = "no_route"
    NO_LIQUIDITY = "no_liquidity"
    INVALID_REQUEST = "invalid_request"


@dataclass
class RouteResult:
    """Result of routing a swap request."""

    status: RouteStatus
    coin_in: str
    coin_out: str
    quote: Quote | None = None
    pool: Pool | None = None  # Set when a pool was found, even without liquidity
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.status is RouteStatus.FOUND
