import os
import sys

# Channel used by every emitter created without an explicit channel id
DEFAULT_CHANNEL = "___DEFAULT_CHANNEL___"

# Handlers registered under this type receive every emission as (type, event)
WILDCARD = "*"


def get_data_directory():
    """
    Returns the writable data directory for replaymitt settings and logs.
    Windows: %APPDATA%/replaymitt
    Linux/Mac: ~/.replaymitt
    """
    if sys.platform == "win32":
        path = os.path.join(os.environ.get("APPDATA", os.path.expanduser("~")), "replaymitt")
    else:
        path = os.path.expanduser("~/.replaymitt")

    if not os.path.exists(path):
        os.makedirs(path)

    return path
