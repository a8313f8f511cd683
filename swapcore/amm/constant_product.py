"""Constant-product (x * y = k) pricing for simple_dex pools.

These formulas mirror the Move module so that client-side estimates match
what the chain will execute, down to the rounding of each division:

- The fee is taken from the input first and truncated:
  amount_in_with_fee = amount_in * (fee_denominator - fee_numerator) // fee_denominator
- Outputs are floored, required inputs are floored and then bumped by one,
  so rounding never lets the pool receive less than it gives up.

All amounts are Python ints. Decimal is only used for the price impact
percentage, which is for display and never goes into a transaction.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from swapcore.amm.base import AMM, SwapResult
from swapcore.amm.errors import (
    DepositTooSmallError,
    EmptyPoolError,
    InsufficientLiquidityBurnedError,
    InsufficientReserveError,
    InvalidAmountError,
    InvalidFeeError,
)
from swapcore.constants import (
    DEFAULT_FEE_DENOMINATOR,
    DEFAULT_FEE_NUMERATOR,
    MINIMUM_LIQUIDITY,
)
from swapcore.math.integer import integer_sqrt
from swapcore.models.pool import Pool
from swapcore.safe_int import S

logger = structlog.get_logger()


def _check_fee(fee_numerator: int, fee_denominator: int) -> None:
    if fee_denominator <= 0 or not 0 <= fee_numerator < fee_denominator:
        raise InvalidFeeError(f"Invalid fee {fee_numerator}/{fee_denominator}")


def _check_reserves(reserve_in: int, reserve_out: int) -> None:
    if reserve_in < 0 or reserve_out < 0:
        raise InvalidAmountError(f"Reserves cannot be negative: {reserve_in}, {reserve_out}")
    if reserve_in == 0 or reserve_out == 0:
        raise EmptyPoolError(f"Pool has no liquidity: reserves {reserve_in}/{reserve_out}")


def compute_output_amount(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = DEFAULT_FEE_NUMERATOR,
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR,
) -> int:
    """Output of an exact-input swap.

    Formula:
        in_fee = amount_in * (fd - fn) // fd
        amount_out = in_fee * reserve_out // (reserve_in + in_fee)

    Args:
        amount_in: Input coin amount
        reserve_in: Pool reserve of the input coin
        reserve_out: Pool reserve of the output coin
        fee_numerator: Fee numerator (default 30)
        fee_denominator: Fee denominator (default 10000)

    Returns:
        Output coin amount, floored

    Raises:
        InvalidAmountError: If amount_in is not positive
        EmptyPoolError: If either reserve is zero
        InvalidFeeError: If the fee rate is not in [0, 1)
    """
    if amount_in <= 0:
        raise InvalidAmountError(f"Input amount must be positive: {amount_in}")
    _check_reserves(reserve_in, reserve_out)
    _check_fee(fee_numerator, fee_denominator)

    amount_in_with_fee = (S(amount_in) * S(fee_denominator - fee_numerator)) // S(fee_denominator)
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) + amount_in_with_fee
    return (numerator // denominator).value


def compute_input_amount(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int = DEFAULT_FEE_NUMERATOR,
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR,
) -> int:
    """Input required for an exact-output swap.

    Formula: reserve_in * amount_out * fd // ((reserve_out - amount_out) * (fd - fn)) + 1

    The trailing +1 always rounds up, even when the division is exact.

    Raises:
        InvalidAmountError: If amount_out is not positive
        EmptyPoolError: If either reserve is zero
        InsufficientReserveError: If amount_out >= reserve_out
        InvalidFeeError: If the fee rate is not in [0, 1)
    """
    if amount_out <= 0:
        raise InvalidAmountError(f"Output amount must be positive: {amount_out}")
    _check_reserves(reserve_in, reserve_out)
    _check_fee(fee_numerator, fee_denominator)
    if amount_out >= reserve_out:
        raise InsufficientReserveError(
            f"Output {amount_out} would drain reserve {reserve_out}"
        )

    numerator = S(reserve_in) * S(amount_out) * S(fee_denominator)
    denominator = (S(reserve_out) - S(amount_out)) * S(fee_denominator - fee_numerator)
    return ((numerator // denominator) + S(1)).value


def compute_price_impact(
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
) -> Decimal:
    """Price impact of a swap as a percentage.

    Compares amount_out against the no-slippage quote at the current spot
    price, exact_quote = amount_in * reserve_out // reserve_in.

    Returns:
        (exact_quote - amount_out) / exact_quote * 100. Zero for a
        zero-size trade or when the exact quote rounds to zero.

    Raises:
        EmptyPoolError: If reserve_in is zero
        InvalidAmountError: If an amount is negative
    """
    if amount_in < 0 or amount_out < 0:
        raise InvalidAmountError(f"Amounts cannot be negative: {amount_in}, {amount_out}")
    if reserve_in == 0:
        raise EmptyPoolError("Price impact is undefined for an empty pool")
    if amount_in == 0:
        return Decimal(0)

    exact_quote = (S(amount_in) * S(reserve_out)) // S(reserve_in)
    if not exact_quote:
        return Decimal(0)
    return Decimal(exact_quote.value - amount_out) * 100 / Decimal(exact_quote.value)


def compute_lp_tokens_to_mint(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> int:
    """LP tokens minted for a deposit.

    First deposit (total_supply == 0): sqrt(amount_a * amount_b) minus
    MINIMUM_LIQUIDITY, which stays locked in the pool forever.
    Later deposits: the smaller of the two proportional shares, so an
    unbalanced deposit is credited for its weaker side only.

    Raises:
        InvalidAmountError: If a deposit amount is not positive
        DepositTooSmallError: If a first deposit mints nothing
        EmptyPoolError: If the pool has supply but an empty reserve
    """
    if amount_a <= 0 or amount_b <= 0:
        raise InvalidAmountError(f"Deposit amounts must be positive: {amount_a}, {amount_b}")

    if total_supply == 0:
        minted = integer_sqrt(amount_a * amount_b) - MINIMUM_LIQUIDITY
        if minted <= 0:
            raise DepositTooSmallError(
                f"First deposit mints {minted}, must exceed minimum liquidity {MINIMUM_LIQUIDITY}"
            )
        return minted

    _check_reserves(reserve_a, reserve_b)
    lp_from_a = (S(amount_a) * S(total_supply)) // S(reserve_a)
    lp_from_b = (S(amount_b) * S(total_supply)) // S(reserve_b)
    return lp_from_a.min(lp_from_b).value


def compute_liquidity_to_burn(
    lp_amount: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> tuple[int, int]:
    """Coins returned for burning LP tokens, as (amount_a, amount_b), floored.

    Raises:
        InsufficientLiquidityBurnedError: If lp_amount is not positive or
            exceeds the total supply
        EmptyPoolError: If the pool has no LP supply
    """
    if total_supply == 0:
        raise EmptyPoolError("Pool has no LP supply to burn")
    if lp_amount <= 0 or lp_amount > total_supply:
        raise InsufficientLiquidityBurnedError(
            f"LP amount {lp_amount} must be in (0, {total_supply}]"
        )
    amount_a = (S(lp_amount) * S(reserve_a)) // S(total_supply)
    amount_b = (S(lp_amount) * S(reserve_b)) // S(total_supply)
    return amount_a.value, amount_b.value


def quote_proportional_amount(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of coin B that matches amount_a at the current pool ratio.

    Raises:
        InvalidAmountError: If amount_a is not positive
        EmptyPoolError: If either reserve is zero
    """
    if amount_a <= 0:
        raise InvalidAmountError(f"Deposit amount must be positive: {amount_a}")
    _check_reserves(reserve_a, reserve_b)
    return ((S(amount_a) * S(reserve_b)) // S(reserve_a)).value


class ConstantProductAMM(AMM):
    """Pool-level wrapper around the constant-product formulas.

    Reads the reserve order and fee rate from the pool snapshot so callers
    only deal with coin types.
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_numerator: int = DEFAULT_FEE_NUMERATOR,
        fee_denominator: int = DEFAULT_FEE_DENOMINATOR,
    ) -> int:
        return compute_output_amount(
            amount_in, reserve_in, reserve_out, fee_numerator, fee_denominator
        )

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee_numerator: int = DEFAULT_FEE_NUMERATOR,
        fee_denominator: int = DEFAULT_FEE_DENOMINATOR,
    ) -> int:
        return compute_input_amount(
            amount_out, reserve_in, reserve_out, fee_numerator, fee_denominator
        )

    def simulate_swap(self, pool: Pool, coin_in: str, amount_in: int) -> SwapResult:
        """Simulate a swap through a pool (exact input)."""
        reserve_in, reserve_out = pool.get_reserves(coin_in)
        amount_out = compute_output_amount(
            amount_in, reserve_in, reserve_out, pool.fee_numerator, pool.fee_denominator
        )
        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            pool_id=pool.pool_id,
            coin_in=coin_in,
            coin_out=pool.get_coin_out(coin_in),
            is_a_to_b=pool.is_a_to_b(coin_in),
        )

    def simulate_swap_exact_output(self, pool: Pool, coin_in: str, amount_out: int) -> SwapResult:
        """Simulate a swap that must deliver at least amount_out.

        The required input is rounded up, so forward-simulating it can yield
        slightly more than requested. The forward-simulated output is
        reported.
        """
        reserve_in, reserve_out = pool.get_reserves(coin_in)
        amount_in = compute_input_amount(
            amount_out, reserve_in, reserve_out, pool.fee_numerator, pool.fee_denominator
        )
        actual_output = compute_output_amount(
            amount_in, reserve_in, reserve_out, pool.fee_numerator, pool.fee_denominator
        )
        if actual_output < amount_out:
            # Input fee truncation can cost one unit; nudge until the output is met.
            logger.debug(
                "exact_output_rounding_adjusted",
                pool=pool.pool_id[-8:],
                amount_out=amount_out,
                actual_output=actual_output,
            )
            while actual_output < amount_out:
                amount_in += 1
                actual_output = compute_output_amount(
                    amount_in, reserve_in, reserve_out, pool.fee_numerator, pool.fee_denominator
                )
        return SwapResult(
            amount_in=amount_in,
            amount_out=actual_output,
            pool_id=pool.pool_id,
            coin_in=coin_in,
            coin_out=pool.get_coin_out(coin_in),
            is_a_to_b=pool.is_a_to_b(coin_in),
        )


# Module-level instance for convenience
constant_product_amm = ConstantProductAMM()
