"""Carry submitted input and errors across a redirect.

A POST handler that fails validation flashes the submitted values and the
errors, then redirects back. The next request pulls them and the form builder
repopulates fields from them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from bootform.config import FormSettings, get_settings

if TYPE_CHECKING:
    from litestar import Request


def flash_input(
    request: "Request",
    values: Mapping[str, Any],
    errors: Mapping[str, str | list[str]] | None = None,
    settings: FormSettings | None = None,
) -> None:
    """Store submitted values (minus token and method fields) and errors in the session."""
    settings = settings or get_settings()
    skipped = {settings.csrf_field_name, settings.method_field_name}

    request.session[settings.old_input_session_key] = {
        k: v for k, v in values.items() if k not in skipped and isinstance(v, (str, list))
    }
    if errors:
        request.session[settings.errors_session_key] = {
            k: [v] if isinstance(v, str) else list(v) for k, v in errors.items()
        }


def pull_old_input(request: "Request", settings: FormSettings | None = None) -> dict[str, Any]:
    """Get and clear the flashed input."""
    settings = settings or get_settings()
    return request.session.pop(settings.old_input_session_key, None) or {}


def pull_errors(request: "Request", settings: FormSettings | None = None) -> dict[str, list[str]]:
    """Get and clear the flashed errors."""
    settings = settings or get_settings()
    return request.session.pop(settings.errors_session_key, None) or {}
