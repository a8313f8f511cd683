"""Swap routing and quoting.

The router resolves a direct pool for the requested pair through the
PoolRegistry and prices the swap with the constant-product AMM.

Supports:
- Exact-input quotes (sell a fixed amount, bounded by minimum received)
- Exact-output quotes (buy a fixed amount, bounded by maximum sent)

Only direct pools are used. When no pool exists for the pair the router
reports NO_ROUTE; it never tries a path through an intermediate coin.
Ledger errors raised by the registry propagate unchanged.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from swapcore.amm.constant_product import (
    ConstantProductAMM,
    compute_price_impact,
    constant_product_amm,
)
from swapcore.amm.errors import InsufficientReserveError
from swapcore.constants import DEFAULT_SLIPPAGE
from swapcore.models.pool import Pool
from swapcore.models.quote import Quote
from swapcore.models.types import short_coin
from swapcore.pools.directory import pair_key
from swapcore.pools.registry import PoolRegistry
from swapcore.routing.slippage import (
    InvalidSlippageError,
    maximum_sent,
    minimum_received,
    slippage_bps,
)
from swapcore.routing.types import RouteResult, RouteStatus
from swapcore.safe_int import S, U64Overflow

logger = structlog.get_logger()

SlippageInput = Decimal | str | int | float


class Router:
    """Routes swap requests through direct pools.

    Args:
        registry: Pool registry used for lookups
        amm: AMM implementation for swap simulation.
             Defaults to the constant-product singleton.
    """

    def __init__(
        self,
        registry: PoolRegistry,
        amm: ConstantProductAMM | None = None,
    ) -> None:
        self.registry = registry
        self.amm = amm if amm is not None else constant_product_amm

    @staticmethod
    def _error_result(
        status: RouteStatus,
        coin_in: str,
        coin_out: str,
        error: str,
        pool: Pool | None = None,
    ) -> RouteResult:
        return RouteResult(status=status, coin_in=coin_in, coin_out=coin_out, pool=pool, error=error)

    def _validate(
        self, coin_in: str, coin_out: str, amount: int, slippage: SlippageInput
    ) -> str | None:
        """Return an error message for a malformed request, None if it is valid."""
        if isinstance(amount, bool) or not isinstance(amount, int):
            return f"Amount must be an integer, got {type(amount).__name__}"
        if amount <= 0:
            return "Amount must be positive"
        if not S(amount).is_u64():
            return f"Amount {amount} does not fit a u64"
        try:
            pair_key(coin_in, coin_out)
            slippage_bps(slippage)
        except (ValueError, InvalidSlippageError) as e:
            return str(e)
        return None

    @staticmethod
    def _check_u64(quote: Quote) -> str | None:
        """Return an error message if a quoted amount cannot be a transaction argument."""
        amounts = {
            "amount_in": quote.amount_in,
            "amount_out": quote.amount_out,
            "minimum_received": quote.minimum_received,
            "maximum_sent": quote.maximum_sent,
        }
        for name, value in amounts.items():
            if value is None:
                continue
            try:
                S(value).to_u64()
            except U64Overflow as e:
                logger.info("quote_exceeds_u64", field=name, value=value)
                return f"Quoted {name} cannot be sent in a transaction: {e}"
        return None

    async def _find_liquid_pool(
        self, coin_in: str, coin_out: str, network: str
    ) -> Pool | RouteResult:
        pool = await self.registry.find_pool(coin_in, coin_out, network)
        if pool is None:
            logger.info(
                "route_not_found",
                coin_in=short_coin(coin_in),
                coin_out=short_coin(coin_out),
                network=network,
            )
            return self._error_result(
                RouteStatus.NO_ROUTE,
                coin_in,
                coin_out,
                f"No liquidity pool found for {coin_in} -> {coin_out}",
            )
        if pool.is_empty:
            logger.info("route_pool_empty", pool=pool.pool_id[-8:], network=network)
            return self._error_result(
                RouteStatus.NO_LIQUIDITY,
                coin_in,
                coin_out,
                f"Pool {pool.pool_id} has no liquidity",
                pool=pool,
            )
        return pool

    async def find_best_route(
        self,
        coin_in: str,
        coin_out: str,
        amount_in: int,
        network: str,
        slippage: SlippageInput = DEFAULT_SLIPPAGE,
    ) -> RouteResult:
        """Quote selling exactly amount_in of coin_in for coin_out.

        Args:
            coin_in: Coin type to sell
            coin_out: Coin type to buy
            amount_in: Amount of coin_in, in its smallest unit
            network: Network name
            slippage: Tolerance in percent (0.5 = 0.5%)

        Returns:
            RouteResult with a Quote when status is FOUND

        Raises:
            LedgerNetworkError: If the pool could not be read from the ledger
        """
        error = self._validate(coin_in, coin_out, amount_in, slippage)
        if error is not None:
            return self._error_result(RouteStatus.INVALID_REQUEST, coin_in, coin_out, error)

        found = await self._find_liquid_pool(coin_in, coin_out, network)
        if isinstance(found, RouteResult):
            return found
        pool = found

        swap = self.amm.simulate_swap(pool, coin_in, amount_in)
        if swap.amount_out == 0:
            return self._error_result(
                RouteStatus.INVALID_REQUEST,
                coin_in,
                coin_out,
                f"Input {amount_in} is too small to produce any output",
                pool=pool,
            )

        reserve_in, reserve_out = pool.get_reserves(coin_in)
        quote = Quote(
            coin_in=coin_in,
            coin_out=coin_out,
            amount_in=amount_in,
            amount_out=swap.amount_out,
            minimum_received=minimum_received(swap.amount_out, slippage),
            price_impact=compute_price_impact(amount_in, swap.amount_out, reserve_in, reserve_out),
            route=(pool,),
            is_a_to_b=swap.is_a_to_b,
            slippage_bps=slippage_bps(slippage),
        )
        error = self._check_u64(quote)
        if error is not None:
            return self._error_result(
                RouteStatus.INVALID_REQUEST, coin_in, coin_out, error, pool=pool
            )

        logger.debug(
            "route_found",
            pool=pool.pool_id[-8:],
            a_to_b=quote.is_a_to_b,
            amount_in=amount_in,
            amount_out=quote.amount_out,
            price_impact=str(quote.price_impact),
        )
        return RouteResult(
            status=RouteStatus.FOUND, coin_in=coin_in, coin_out=coin_out, quote=quote, pool=pool
        )

    async def quote_exact_output(
        self,
        coin_in: str,
        coin_out: str,
        amount_out: int,
        network: str,
        slippage: SlippageInput = DEFAULT_SLIPPAGE,
    ) -> RouteResult:
        """Quote buying exactly amount_out of coin_out.

        The quote's amount_in is the rounded-up input the pool requires and
        maximum_sent adds the slippage tolerance on top of it.
        A quote whose input would not fit a u64 transaction argument is
        reported as INVALID_REQUEST.

        Raises:
            LedgerNetworkError: If the pool could not be read from the ledger
        """
        error = self._validate(coin_in, coin_out, amount_out, slippage)
        if error is not None:
            return self._error_result(RouteStatus.INVALID_REQUEST, coin_in, coin_out, error)

        found = await self._find_liquid_pool(coin_in, coin_out, network)
        if isinstance(found, RouteResult):
            return found
        pool = found

        try:
            swap = self.amm.simulate_swap_exact_output(pool, coin_in, amount_out)
        except InsufficientReserveError as e:
            logger.info(
                "route_insufficient_liquidity",
                pool=pool.pool_id[-8:],
                amount_out=amount_out,
            )
            return self._error_result(
                RouteStatus.NO_LIQUIDITY, coin_in, coin_out, str(e), pool=pool
            )

        reserve_in, reserve_out = pool.get_reserves(coin_in)
        quote = Quote(
            coin_in=coin_in,
            coin_out=coin_out,
            amount_in=swap.amount_in,
            amount_out=swap.amount_out,
            minimum_received=amount_out,
            price_impact=compute_price_impact(
                swap.amount_in, swap.amount_out, reserve_in, reserve_out
            ),
            route=(pool,),
            is_a_to_b=swap.is_a_to_b,
            slippage_bps=slippage_bps(slippage),
            maximum_sent=maximum_sent(swap.amount_in, slippage),
        )
        error = self._check_u64(quote)
        if error is not None:
            return self._error_result(
                RouteStatus.INVALID_REQUEST, coin_in, coin_out, error, pool=pool
            )
        return RouteResult(
            status=RouteStatus.FOUND, coin_in=coin_in, coin_out=coin_out, quote=quote, pool=pool
        )
