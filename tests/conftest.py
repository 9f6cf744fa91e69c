"""Pytest fixtures for replaymitt tests."""

import pytest

from replaymitt.lib.events import Emitter
from replaymitt.lib.registry import ChannelStore


@pytest.fixture
def store():
    """A private channel store so tests never share registries."""
    return ChannelStore()


@pytest.fixture
def emitter(store):
    """An emitter on a private store with default options."""
    return Emitter("test", store=store)


@pytest.fixture
def temp_config_file(tmp_path):
    """Path of a not-yet-existing ini file."""
    return str(tmp_path / "config.ini")
