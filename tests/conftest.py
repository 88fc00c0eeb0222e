"""
Pytest configuration and fixtures for eventchannel tests
"""
import pytest

from eventchannel import create_channel, disable_logging, get_registry


@pytest.fixture(autouse=True)
def clean_registry():
    """Unregister every protected event after each test"""
    yield

    registry = get_registry()
    for record in registry.list():
        registry.unregister(record.key)
    disable_logging()


@pytest.fixture
def channel():
    """A fresh channel for each test"""
    return create_channel()
