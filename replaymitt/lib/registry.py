"""Shared handler registries, one per channel."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Registry:
    """Handlers and last-emitted values for a single channel.

    Handler lists and the replay cache are kept in separate maps, so no event
    type can ever shadow a cache slot.
    """

    def __init__(self) -> None:
        self.handlers: dict[str, list[Callable[..., Any]]] = {}
        self.cache: dict[str, Any] = {}

    def __contains__(self, event_type: str) -> bool:
        return event_type in self.handlers

    def __repr__(self) -> str:
        return f"Registry(types={list(self.handlers)}, cached={list(self.cache)})"

    def handlers_for(self, event_type: str) -> list[Callable[..., Any]]:
        """Return the live handler list for a type, or an empty list.

        Reading never inserts the type.
        """
        return self.handlers.get(event_type, [])

    def add(self, event_type: str, handler: Callable[..., Any]) -> None:
        """Append a handler, creating the list on first use."""
        if event_type not in self.handlers:
            self.handlers[event_type] = []
        self.handlers[event_type].append(handler)

    def has_cached(self, event_type: str) -> bool:
        return event_type in self.cache

    def cached(self, event_type: str, default: Any = None) -> Any:
        return self.cache.get(event_type, default)

    def remember(self, event_type: str, event: Any) -> None:
        """Overwrite the last value seen for a type."""
        self.cache[event_type] = event

    def clear(self) -> None:
        """Drop every handler and cached value."""
        self.handlers.clear()
        self.cache.clear()


class ChannelStore:
    """Maps channel ids to registries.

    The same channel id always yields the identical Registry, so emitters built
    on one store and one channel see each other's handlers and cache.
    """

    def __init__(self) -> None:
        self._registries: dict[str, Registry] = {}

    def __contains__(self, channel: str) -> bool:
        return channel in self._registries

    def get(self, channel: str) -> Registry:
        """Look up the registry for a channel, creating it lazily."""
        registry = self._registries.get(channel)
        if registry is None:
            logger.debug(f"Creating registry for channel << {channel} >>")
            registry = Registry()
            self._registries[channel] = registry
        return registry

    def channels(self) -> list[str]:
        return list(self._registries)


# Process-wide store used when an emitter is built without one
default_store = ChannelStore()
