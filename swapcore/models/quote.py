"""Quote returned to callers that build swap transactions."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from swapcore.constants import PRICE_IMPACT_QUANTUM
from swapcore.models.pool import Pool


@dataclass(frozen=True)
class Quote:
    """Priced swap through a route of pools.

    For exact-input quotes ``amount_in`` is what the caller asked to sell
    and ``minimum_received`` is the slippage floor to pass as
    ``min_amount_out``. For exact-output quotes ``amount_out`` is the
    requested amount and ``maximum_sent`` bounds the input instead.

    Route is currently at most one pool long.
    """

    coin_in: str
    coin_out: str
    amount_in: int
    amount_out: int
    minimum_received: int
    price_impact: Decimal
    route: tuple[Pool, ...]
    is_a_to_b: bool
    slippage_bps: int
    maximum_sent: int | None = None

    @property
    def pool(self) -> Pool | None:
        return self.route[0] if self.route else None

    @property
    def path(self) -> list[str]:
        return [self.coin_in, self.coin_out]

    def to_wire(self) -> dict[str, object]:
        """Render for JSON consumers.

        Integers become decimal strings. Price impact is a fixed-point
        percentage string, never exponent notation.
        """
        wire: dict[str, object] = {
            "coinIn": self.coin_in,
            "coinOut": self.coin_out,
            "amountIn": str(self.amount_in),
            "amountOut": str(self.amount_out),
            "minimumReceived": str(self.minimum_received),
            "priceImpact": format(self.price_impact.quantize(PRICE_IMPACT_QUANTUM), "f"),
            "route": [pool.pool_id for pool in self.route],
            "path": self.path,
            "isAToB": self.is_a_to_b,
            "slippageBps": self.slippage_bps,
        }
        if self.maximum_sent is not None:
            wire["maximumSent"] = str(self.maximum_sent)
        return wire
