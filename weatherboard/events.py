"""
UI event source.

Front ends emit named events ("load", "search", "locate", "select", "back");
the controller subscribes handlers to them. Handler errors are logged and
never reach the emitter.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], Awaitable[None]]


class EventSource:
    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def subscribe(self, event_type: str, handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Handler registered for event: %s", event_type)

    def unsubscribe(self, event_type: str, handler: Handler) -> None:
        try:
            self._handlers.get(event_type, []).remove(handler)
        except ValueError:
            logger.warning("Handler not found for event: %s", event_type)

    async def emit(self, event_type: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Await every handler for `event_type` in registration order."""
        data = data or {}
        for handler in list(self._handlers.get(event_type, [])):
            try:
                await handler(data)
            except Exception:
                logger.exception("Handler for event %s failed", event_type)
