"""Pricing errors.

These are input errors: the pricing functions raise them immediately and
never catch them. They mirror the aborts of the simple_dex Move module.
"""


class AMMError(ValueError):
    """Base error for constant-product pricing."""


class InvalidAmountError(AMMError):
    """Amount must be positive."""


class InvalidFeeError(AMMError):
    """Fee must satisfy 0 <= numerator < denominator."""


class EmptyPoolError(AMMError):
    """A reserve needed by the formula is zero."""


class InsufficientReserveError(AMMError):
    """Requested output would drain the pool."""


class DepositTooSmallError(AMMError):
    """First deposit does not cover the locked minimum liquidity."""


class InsufficientLiquidityBurnedError(AMMError):
    """LP amount to burn is zero or exceeds the total supply."""
