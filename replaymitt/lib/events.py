"""Synchronous event emitter with a last-value replay cache.

Handlers are called in registration order, type handlers first and wildcard
handlers after. Every emission is remembered per type so that handlers
registered later can be brought up to date immediately.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any, Callable

from replaymitt.constants import DEFAULT_CHANNEL, WILDCARD
from replaymitt.lib.errors import HandlerNotFoundError
from replaymitt.lib.registry import ChannelStore, Registry, default_store

if TYPE_CHECKING:
    from replaymitt.lib.preference_manager import PreferenceManager

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]
WildcardHandler = Callable[[str, Any], None]


class MissingHandlerPolicy(enum.Enum):
    """What ``Emitter.off`` does when the handler is not registered."""

    IGNORE = "ignore"
    RAISE = "raise"
    # Legacy behaviour: the last handler of the type is removed instead
    REMOVE_LAST = "remove_last"


class Emitter:
    """Handle onto the shared registry of one channel.

    Two emitters constructed with the same channel (and store) are backed by
    the same Registry: handlers registered through one are triggered by
    emissions through the other.
    """

    def __init__(
        self,
        channel: str = DEFAULT_CHANNEL,
        *,
        store: ChannelStore | None = None,
        read_cache: bool = True,
        isolate_errors: bool = False,
        missing_handler: MissingHandlerPolicy = MissingHandlerPolicy.IGNORE,
    ) -> None:
        """Bind to the registry of ``channel``.

        Args:
            channel: Channel id selecting the shared registry.
            store: Store holding the channel registries. Defaults to the
                process-wide store.
            read_cache: Default for ``on(..., read_cache=None)``.
            isolate_errors: Log and skip handlers that raise instead of letting
                the exception abort the emission.
            missing_handler: Behaviour of ``off`` for an unregistered handler.
        """
        self._store = store if store is not None else default_store
        self._channel = channel
        self._registry = self._store.get(channel)
        self.read_cache = read_cache
        self.isolate_errors = isolate_errors
        self.missing_handler = missing_handler

    @classmethod
    def from_preferences(
        cls,
        preferences: PreferenceManager,
        channel: str | None = None,
        store: ChannelStore | None = None,
    ) -> Emitter:
        """Build an emitter whose options are read from a PreferenceManager."""
        return cls(
            channel if channel is not None else DEFAULT_CHANNEL,
            store=store,
            **preferences.emitter_options(),
        )

    @property
    def all(self) -> Registry:
        """The shared registry, for introspection or bulk manipulation."""
        return self._registry

    @property
    def channel(self) -> str:
        return self._channel

    def on(
        self, event_type: str, handler: Handler | WildcardHandler, read_cache: bool | None = None
    ) -> None:
        """Register a handler for an event type, or ``"*"`` for every event.

        If a value was already emitted for the type, the handler is called with
        it right away (unless ``read_cache`` is false).
        """
        self._registry.add(event_type, handler)
        logger.debug(f"Registered handler for << {event_type} >> on channel {self._channel}")

        if read_cache is None:
            read_cache = self.read_cache
        if read_cache and self._registry.has_cached(event_type):
            last_value = self._registry.cached(event_type)
            if event_type == WILDCARD:
                handler(WILDCARD, last_value)
            else:
                handler(last_value)

    def off(self, event_type: str, handler: Handler | WildcardHandler) -> None:
        """Remove one registration of a handler. The replay cache is untouched."""
        handlers = self._registry.handlers_for(event_type)
        for index, registered in enumerate(handlers):
            if registered is handler:
                del handlers[index]
                logger.debug(f"Removed handler for << {event_type} >> on channel {self._channel}")
                return

        if self.missing_handler is MissingHandlerPolicy.RAISE:
            raise HandlerNotFoundError(event_type, handler)
        if self.missing_handler is MissingHandlerPolicy.REMOVE_LAST and handlers:
            logger.debug(f"Handler not found for << {event_type} >>, removing last handler")
            handlers.pop()
            return
        logger.debug(f"Handler not found for << {event_type} >>, nothing removed")

    def emit(self, event_type: str, event: Any = None) -> None:
        """Invoke all handlers for the type, then all wildcard handlers.

        Note: emitting ``"*"`` only reaches handlers registered under ``"*"``.
        """
        logger.debug(f"Emitting << {event_type} >> on channel {self._channel}")

        # "*" handlers always take (type, event), so they only run in the wildcard pass
        if event_type != WILDCARD:
            for handler in list(self._registry.handlers_for(event_type)):
                self._call(event_type, handler, event)
        for handler in list(self._registry.handlers_for(WILDCARD)):
            self._call(event_type, handler, event_type, event)

        self._registry.remember(event_type, event)

    def _call(self, event_type: str, handler: Callable[..., Any], *args: Any) -> None:
        if not self.isolate_errors:
            handler(*args)
            return
        try:
            handler(*args)
        except Exception:
            logger.exception(f"Handler for << {event_type} >> raised, continuing dispatch")

    def handlers(self, event_type: str) -> list[Callable[..., Any]]:
        """Return a copy of the handlers registered for a type."""
        return list(self._registry.handlers_for(event_type))

    def last(self, event_type: str, default: Any = None) -> Any:
        """Return the most recent value emitted for a type."""
        return self._registry.cached(event_type, default)


def mitt(channel: str = DEFAULT_CHANNEL, **options: Any) -> Emitter:
    """Create an emitter bound to ``channel``. Options are passed to Emitter."""
    return Emitter(channel, **options)
