"""CSRF token providers backed by the request session."""

from __future__ import annotations

import hmac
import logging
import secrets
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from bootform.config import FormSettings, get_settings

if TYPE_CHECKING:
    from litestar import Request

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenProvider(Protocol):
    def token(self) -> str: ...


class SessionTokenProvider:
    """Reads the CSRF token from the session, creating one if needed."""

    def __init__(self, session: MutableMapping[str, Any], settings: FormSettings | None = None):
        self.session = session
        self.settings = settings or get_settings()

    @classmethod
    def from_request(cls, request: Request, settings: FormSettings | None = None) -> SessionTokenProvider:
        return cls(request.session, settings)

    def token(self) -> str:
        key = self.settings.csrf_session_key
        if key not in self.session:
            logger.debug("Seeding CSRF token in session under %s", key)
            self.session[key] = secrets.token_urlsafe(32)
        return self.session[key]


class StaticTokenProvider:
    """Always returns the same token. Useful in tests and sessionless rendering."""

    def __init__(self, value: str):
        self.value = value

    def token(self) -> str:
        return self.value


def verify_token(submitted: str | None, provider: TokenProvider) -> bool:
    """Constant-time comparison of a submitted token against the provider's token."""
    expected = provider.token()
    if not submitted or not expected:
        return False
    return hmac.compare_digest(str(submitted), str(expected))
