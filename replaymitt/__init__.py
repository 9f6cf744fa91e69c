from replaymitt.lib.errors import HandlerNotFoundError
from replaymitt.lib.events import Emitter, MissingHandlerPolicy, mitt
from replaymitt.lib.registry import ChannelStore, Registry
from replaymitt.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    Emitter.__name__,
    ChannelStore.__name__,
    Registry.__name__,
    MissingHandlerPolicy.__name__,
    HandlerNotFoundError.__name__,
    mitt.__name__,
]
