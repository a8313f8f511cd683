"""Slippage bounds in integer arithmetic.

The tolerance is a percentage (0.5 means 0.5%). It is converted once into
basis points and every bound is computed on ints, so the amount passed to
the chain is reproducible to the unit:

    minimum_received = amount_out * floor((100 - s) * 100) // 10000

The floor is deliberate: it matches how the transaction builder sizes
min_amount_out, while required inputs elsewhere round up.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, InvalidOperation

from swapcore.constants import SLIPPAGE_SCALE
from swapcore.math.integer import ceil_div, mul_div

MAX_SLIPPAGE = Decimal(100)


class InvalidSlippageError(ValueError):
    """Slippage tolerance must be a percentage in [0, 100]."""


def parse_slippage(value: Decimal | str | int | float) -> Decimal:
    """Parse a slippage percentage without binary float drift.

    Floats are converted through their shortest repr, so 0.1 becomes
    Decimal("0.1") rather than 0.1000000000000000055...

    Raises:
        InvalidSlippageError: If the value is not a number in [0, 100]
    """
    if isinstance(value, bool):
        raise InvalidSlippageError("Slippage must be a number, got bool")
    try:
        slippage = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidSlippageError(f"Slippage must be a number, got {value!r}") from e
    if not slippage.is_finite() or slippage < 0 or slippage > MAX_SLIPPAGE:
        raise InvalidSlippageError(f"Slippage must be between 0 and 100, got {value}")
    return slippage


def slippage_multiplier(slippage: Decimal | str | int | float) -> int:
    """floor((100 - s) * 100): the share of the output kept, in basis points."""
    s = parse_slippage(slippage)
    return int(((MAX_SLIPPAGE - s) * 100).to_integral_value(rounding=ROUND_FLOOR))


def slippage_bps(slippage: Decimal | str | int | float) -> int:
    """Tolerance in basis points, consistent with slippage_multiplier()."""
    return SLIPPAGE_SCALE - slippage_multiplier(slippage)


def minimum_received(amount_out: int, slippage: Decimal | str | int | float) -> int:
    """Lowest acceptable output for a quoted amount_out, rounded down."""
    return mul_div(amount_out, slippage_multiplier(slippage), SLIPPAGE_SCALE)


def maximum_sent(amount_in: int, slippage: Decimal | str | int | float) -> int:
    """Highest acceptable input for a quoted amount_in, rounded up."""
    return ceil_div(amount_in * (SLIPPAGE_SCALE + slippage_bps(slippage)), SLIPPAGE_SCALE)
