"""Jinja integration for Litestar apps.

    template_config = create_template_config([Path("templates")])

    {% set f = form_builder(request) %}
    {{ f.open_form("post", "/contact") }}
      {{ f.form_group(f.email("email"), "Email") }}
      {{ f.submit("Send") }}
    {{ f.close_form() }}
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.template import TemplateConfig

from bootform.builder import FormBuilder

if TYPE_CHECKING:
    from litestar import Request

# Attribute on request.state holding the per-request builder
STATE_ATTRIBUTE = "bootform_builder"


def form_builder(request: Request) -> FormBuilder:
    """Return the builder for this request, creating it on first use."""
    builder = getattr(request.state, STATE_ATTRIBUTE, None)
    if not isinstance(builder, FormBuilder):
        builder = FormBuilder.for_request(request)
        setattr(request.state, STATE_ATTRIBUTE, builder)
    return builder


def configure_template_engine(engine: JinjaTemplateEngine) -> None:
    engine.engine.globals.update({"form_builder": form_builder})


def create_template_config(
    directories: list[Path], engine_callback: Callable[[JinjaTemplateEngine], None] | None = None
) -> TemplateConfig:
    """Create a Jinja template config with the form globals registered."""

    def configure_engine(engine: JinjaTemplateEngine) -> None:
        configure_template_engine(engine)
        if engine_callback is not None:
            engine_callback(engine)

    return TemplateConfig(
        directory=directories,
        engine=JinjaTemplateEngine,
        engine_callback=configure_engine,
    )
