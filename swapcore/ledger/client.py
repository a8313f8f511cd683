"""JSON-RPC client for an IOTA ledger node.

Only the two reads the pool registry needs are implemented. Every transport
or protocol failure is converted into a LedgerNetworkError subclass here, so
nothing above this module sees raw httpx exceptions.
"""

from __future__ import annotations

import itertools
from typing import Any, Protocol

import httpx
import structlog

from swapcore.ledger.errors import (
    LedgerNetworkError,
    LedgerTimeoutError,
    MalformedResponseError,
)

logger = structlog.get_logger()

# getObject error codes that mean "no such object" rather than a failure
MISSING_OBJECT_CODES = frozenset({"notExists", "deleted"})

OBJECT_OPTIONS = {"showContent": True, "showType": True}


class LedgerClient(Protocol):
    """Read access to ledger objects."""

    async def get_object(self, object_id: str) -> dict[str, Any] | None:
        """Return the object's ``data`` member, or None if it does not exist."""
        ...

    async def get_owned_objects(self, owner: str, struct_type: str) -> list[dict[str, Any]]:
        """Return the ``data`` member of every object of struct_type owned by owner."""
        ...


class IotaRpcClient:
    """LedgerClient backed by a node's JSON-RPC endpoint.

    Args:
        rpc_url: Full node JSON-RPC URL
        timeout: Per-request timeout in seconds
        http_client: Optional pre-built client (tests pass one with a MockTransport).
            A client passed in is not closed by aclose().
        page_size: Page size for paginated queries
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
        page_size: int = 50,
    ) -> None:
        self.rpc_url = rpc_url
        self.page_size = page_size
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._ids = itertools.count(1)

    async def __aenter__(self) -> IotaRpcClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request and return its ``result``.

        Raises:
            LedgerTimeoutError: If the request timed out
            LedgerNetworkError: On transport failures or HTTP errors
            MalformedResponseError: On RPC errors or a body that is not a JSON-RPC response
        """
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            response = await self._http.post(self.rpc_url, json=payload)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("ledger_rpc_timeout", method=method, url=self.rpc_url)
            raise LedgerTimeoutError(f"{method} timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("ledger_rpc_failed", method=method, url=self.rpc_url, error=str(e))
            raise LedgerNetworkError(f"{method} failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{method} returned non-JSON body") from e

        if not isinstance(body, dict):
            raise MalformedResponseError(f"{method} returned {type(body).__name__}, not an object")
        if "error" in body:
            error = body["error"]
            logger.warning("ledger_rpc_error", method=method, error=error)
            raise MalformedResponseError(f"{method} returned RPC error: {error}")
        if "result" not in body:
            raise MalformedResponseError(f"{method} response has no result")
        return body["result"]

    async def get_object(self, object_id: str) -> dict[str, Any] | None:
        result = await self._call("iota_getObject", [object_id, OBJECT_OPTIONS])
        if not isinstance(result, dict):
            raise MalformedResponseError(f"iota_getObject returned {result!r}")

        error = result.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else None
            if code in MISSING_OBJECT_CODES:
                logger.debug("ledger_object_missing", object_id=object_id[-8:], code=code)
                return None
            raise MalformedResponseError(f"iota_getObject error for {object_id}: {error}")

        data = result.get("data")
        if not isinstance(data, dict):
            raise MalformedResponseError(f"iota_getObject result for {object_id} has no data")
        return data

    async def get_owned_objects(self, owner: str, struct_type: str) -> list[dict[str, Any]]:
        query = {"filter": {"StructType": struct_type}, "options": OBJECT_OPTIONS}
        objects: list[dict[str, Any]] = []
        cursor: str | None = None

        while True:
            page = await self._call(
                "iotax_getOwnedObjects", [owner, query, cursor, self.page_size]
            )
            if not isinstance(page, dict) or not isinstance(page.get("data"), list):
                raise MalformedResponseError("iotax_getOwnedObjects returned no data list")

            for entry in page["data"]:
                data = entry.get("data") if isinstance(entry, dict) else None
                if isinstance(data, dict):
                    objects.append(data)

            if not page.get("hasNextPage"):
                break
            cursor = page.get("nextCursor")
            if cursor is None:
                raise MalformedResponseError("iotax_getOwnedObjects hasNextPage without cursor")

        logger.debug("ledger_owned_objects", owner=owner[-8:], count=len(objects))
        return objects
