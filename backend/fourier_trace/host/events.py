"""Minimal synchronous event bus; subscribing returns the matching disposer."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]
Disposer = Callable[[], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> Disposer:
        """Subscribe ``handler``; call the returned disposer to unsubscribe."""
        self._handlers[event].append(handler)

        def dispose() -> None:
            handlers = self._handlers.get(event, [])
            if handler in handlers:
                handlers.remove(handler)

        return dispose

    def emit(self, event: str, payload: Any = None) -> None:
        handlers = list(self._handlers.get(event, ()))
        logger.debug("emit %s → %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler(payload)

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))
