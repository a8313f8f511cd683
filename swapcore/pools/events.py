"""Process-wide cache invalidation signal.

The application sends this after any transaction that changes pool
reserves (swap, add or remove liquidity, pool creation), and every
subscribed registry drops its snapshots.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

logger = structlog.get_logger()

InvalidationHandler = Callable[[str], None]


class InvalidationSignal:
    """Synchronous broadcast to connected handlers."""

    def __init__(self) -> None:
        self._handlers: list[InvalidationHandler] = []

    def connect(self, handler: InvalidationHandler) -> Callable[[], None]:
        """Register a handler.

        Returns:
            A callable that disconnects the handler
        """
        self._handlers.append(handler)

        def disconnect() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return disconnect

    def send(self, reason: str = "liquidity_changed") -> None:
        logger.info("pool_cache_invalidation", reason=reason, handlers=len(self._handlers))
        for handler in list(self._handlers):
            handler(reason)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)
