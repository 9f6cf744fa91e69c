"""Errors raised by the emitter."""

from __future__ import annotations

from typing import Any, Callable


class HandlerNotFoundError(LookupError):
    """Raised by ``Emitter.off`` when the handler is not registered for the type."""

    def __init__(self, event_type: str, handler: Callable[..., Any]) -> None:
        self.event_type = event_type
        self.handler = handler
        name = getattr(handler, "__qualname__", repr(handler))
        super().__init__(f"Handler {name} is not registered for event '{event_type}'")
