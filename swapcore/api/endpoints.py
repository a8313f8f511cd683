"""API endpoints for the swap quote service."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from swapcore.ledger.errors import LedgerNetworkError
from swapcore.models.requests import (
    ExactOutputQuoteRequest,
    InvalidateRequest,
    QuoteRequest,
    TrackPoolRequest,
)
from swapcore.models.types import normalize_object_id
from swapcore.pools.events import InvalidationSignal
from swapcore.pools.registry import PoolRegistry
from swapcore.routing.router import Router
from swapcore.routing.types import RouteResult, RouteStatus

logger = structlog.get_logger()

router = APIRouter()

STATUS_CODES = {
    RouteStatus.NO_ROUTE: 404,
    RouteStatus.NO_LIQUIDITY: 409,
    RouteStatus.INVALID_REQUEST: 400,
}


def get_router(request: Request) -> Router:
    """Dependency provider for the swap router.

    The router is built by the application lifespan. Override this in tests:
        app.dependency_overrides[get_router] = lambda: Router(registry)
    """
    return request.app.state.router


def get_registry(request: Request) -> PoolRegistry:
    """Dependency provider for the pool registry."""
    return request.app.state.registry


def get_signal(request: Request) -> InvalidationSignal:
    """Dependency provider for the cache invalidation signal."""
    return request.app.state.signal


def _check_network(network: str, registry: PoolRegistry) -> None:
    if network not in registry.networks:
        logger.warning("unsupported_network", network=network, supported=registry.networks)
        raise HTTPException(status_code=404, detail=f"Unsupported network: {network}")


def _respond(result: RouteResult) -> dict[str, Any]:
    if result.quote is None:
        status_code = STATUS_CODES.get(result.status, 500)
        raise HTTPException(status_code=status_code, detail=result.error)
    return {"status": result.status.value, "quote": result.quote.to_wire()}


@router.get("/health")
async def health(registry: PoolRegistry = Depends(get_registry)) -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "networks": registry.networks, "cachedPools": registry.cache_size}


@router.post("/{network}/quote")
async def quote(
    network: str,
    body: QuoteRequest,
    swap_router: Router = Depends(get_router),
) -> dict[str, Any]:
    """Quote selling an exact amount.

    Error Handling:
        - Invalid request schema: 422 (pydantic)
        - Unsupported network or no pool for the pair: 404
        - Pool without liquidity: 409
        - Rejected amount, pair or slippage: 400
        - Ledger unreachable: 503
    """
    _check_network(network, swap_router.registry)
    logger.info(
        "quote_requested",
        network=network,
        coin_in=body.coin_in,
        coin_out=body.coin_out,
        amount_in=body.amount_in,
    )
    try:
        result = await swap_router.find_best_route(
            body.coin_in, body.coin_out, int(body.amount_in), network, body.slippage
        )
    except LedgerNetworkError as e:
        logger.warning("quote_ledger_unavailable", network=network, error=str(e))
        raise HTTPException(status_code=503, detail="Ledger node unavailable") from e
    except Exception as e:
        logger.exception("quote_error", network=network)
        raise HTTPException(status_code=500, detail="Internal error") from e
    return _respond(result)


@router.post("/{network}/quote/exact-output")
async def quote_exact_output(
    network: str,
    body: ExactOutputQuoteRequest,
    swap_router: Router = Depends(get_router),
) -> dict[str, Any]:
    """Quote buying an exact amount. Same error mapping as /quote."""
    _check_network(network, swap_router.registry)
    logger.info(
        "exact_output_quote_requested",
        network=network,
        coin_in=body.coin_in,
        coin_out=body.coin_out,
        amount_out=body.amount_out,
    )
    try:
        result = await swap_router.quote_exact_output(
            body.coin_in, body.coin_out, int(body.amount_out), network, body.slippage
        )
    except LedgerNetworkError as e:
        logger.warning("quote_ledger_unavailable", network=network, error=str(e))
        raise HTTPException(status_code=503, detail="Ledger node unavailable") from e
    except Exception as e:
        logger.exception("quote_error", network=network)
        raise HTTPException(status_code=500, detail="Internal error") from e
    return _respond(result)


@router.post("/{network}/pools")
async def track_pool(
    network: str,
    body: TrackPoolRequest,
    registry: PoolRegistry = Depends(get_registry),
) -> dict[str, object]:
    """Record a pool created on chain so quotes for its pair can find it.

    Error Handling:
        - Malformed pool id or coin type: 422 (pydantic)
        - Unsupported network: 404
        - Same coin on both sides: 400
    """
    _check_network(network, registry)
    try:
        registry.track_pool(body.pool_id, body.coin_type_a, body.coin_type_b, network)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"status": "ok", "poolId": body.pool_id}


@router.delete("/{network}/pools/{pool_id}")
async def untrack_pool(
    network: str,
    pool_id: str,
    registry: PoolRegistry = Depends(get_registry),
) -> dict[str, object]:
    """Forget a pool, for example after it was removed or replaced."""
    _check_network(network, registry)
    try:
        pool_id = normalize_object_id(pool_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if not registry.untrack_pool(pool_id, network):
        raise HTTPException(status_code=404, detail=f"Pool not tracked: {pool_id}")
    return {"status": "ok", "poolId": pool_id}


@router.post("/cache/invalidate")
async def invalidate_cache(
    body: InvalidateRequest | None = None,
    signal: InvalidationSignal = Depends(get_signal),
) -> dict[str, object]:
    """Drop cached pool snapshots after a liquidity-changing transaction."""
    reason = body.reason if body is not None else "api"
    signal.send(reason=reason)
    return {"status": "ok", "handlers": signal.handler_count}
