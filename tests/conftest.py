"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest

from bootform.config import FormSettings, get_settings
from bootform.csrf import StaticTokenProvider
from bootform.builder import FormBuilder


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Ensure each test sees freshly loaded settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return FormSettings()


@pytest.fixture
def builder(settings):
    """Builder with a fixed CSRF token."""
    return FormBuilder(StaticTokenProvider("test-token"), settings=settings)


@pytest.fixture
def mock_request_factory():
    """Factory fixture that returns mock requests with a session dict."""
    def _make(session=None):
        request = MagicMock()
        request.session = session if session is not None else {}
        request.state = MagicMock(spec=[])
        return request
    return _make
