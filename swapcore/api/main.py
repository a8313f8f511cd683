"""FastAPI application for the swap quote service.

The lifespan builds one ledger client per configured network, the shared
PoolRegistry, the invalidation signal and the Router, and closes the
clients on shutdown.

Note: Rate limiting is intentionally not implemented at the application level.
It should be handled at the infrastructure layer (reverse proxy / load balancer).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from swapcore import __version__
from swapcore.api.endpoints import router
from swapcore.config import load_settings
from swapcore.ledger.client import IotaRpcClient
from swapcore.logging import configure_logging
from swapcore.pools.events import InvalidationSignal
from swapcore.pools.registry import PoolRegistry
from swapcore.routing.router import Router

logger = structlog.get_logger()

# Maximum request body size (64 KB); quote requests are tiny
MAX_REQUEST_SIZE = 64 * 1024


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = load_settings()
    configure_logging(logging.DEBUG if settings.debug else logging.INFO)

    clients = {
        name: IotaRpcClient(network.rpc_url, timeout=settings.registry.fetch_timeout)
        for name, network in settings.networks.items()
    }
    registry = PoolRegistry.from_settings(settings, clients)
    signal = InvalidationSignal()
    registry.subscribe(signal)

    app.state.registry = registry
    app.state.signal = signal
    app.state.router = Router(registry)
    logger.info(
        "quote_service_started",
        networks=registry.networks,
        known_pools=len(registry.directory),
        cache_ttl=settings.registry.cache_ttl,
    )
    try:
        yield
    finally:
        for client in clients.values():
            await client.aclose()
        logger.info("quote_service_stopped")


app = FastAPI(
    title="swapcore",
    description="Constant-product swap quotes for simple_dex pools",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


def run() -> None:
    """Run the quote service.

    Configuration via environment variables:
    - SWAPCORE_HOST: Host to bind to (default: 0.0.0.0)
    - SWAPCORE_PORT: Port to bind to (default: 8000)
    - SWAPCORE_DEBUG: Enable debug logging and reload mode (default: false)
    """
    settings = load_settings()
    uvicorn.run(
        "swapcore.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
