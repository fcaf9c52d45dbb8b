"""Pytest configuration and fixtures."""

import pytest

from phpext_mcp.catalog import EXTENSION_DATABASE
from phpext_mcp.config import settings


@pytest.fixture
def curl():
    """The cURL record from the built-in catalog."""
    return EXTENSION_DATABASE["curl"]


@pytest.fixture(autouse=True)
def _restore_settings():
    """Restore runtime settings changed by `config set` or tests.

    The settings object is a module-level singleton shared by the server
    tools, so changes would otherwise leak between tests.
    """
    saved = settings.model_dump()

    yield

    for key, value in saved.items():
        setattr(settings, key, value)
