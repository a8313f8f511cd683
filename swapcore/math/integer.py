"""Exact integer helpers shared by the pricing formulas.

Everything here works on Python ints, so results are exact for any
magnitude. No float ever enters these functions: the square root feeds LP
minting and a rounding error there would shift value between depositors.
"""

from __future__ import annotations

from swapcore.safe_int import S


def integer_sqrt(value: int) -> int:
    """Floor of the square root of a non-negative integer.

    Newton's method starting from a guess of 1. The iteration
    x1 = (n // x0 + x0) // 2 never drops below floor(sqrt(n)), so once it
    stops moving down it either repeats (x0 == x1) or oscillates between
    the floor and the floor + 1 (x0 == x1 - 1). In the oscillating case
    the larger of the two is kept only if its square still fits.

    Args:
        value: Integer to take the root of

    Returns:
        r such that r * r <= value < (r + 1) * (r + 1)

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"Square root of a negative number is not supported: {value}")
    if value < 2:
        return value

    x0 = 1
    while True:
        x1 = (value // x0 + x0) // 2
        if x0 == x1:
            return x0
        if x0 == x1 - 1:
            return x1 if x1 * x1 <= value else x0
        x0 = x1


def mul_div(a: int, b: int, denominator: int) -> int:
    """Compute a * b // denominator with the product kept exact.

    Raises:
        DivisionByZero: If denominator is zero
    """
    return ((S(a) * S(b)) // S(denominator)).value


def ceil_div(numerator: int, denominator: int) -> int:
    """Division rounded towards positive infinity.

    Raises:
        DivisionByZero: If denominator is zero
    """
    return S(numerator).ceiling_div(denominator).value
