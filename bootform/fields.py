"""Stateless field builders.

Each builder takes the state of the open form explicitly (or None when no form
is open) and returns one element ready for further chaining.
"""

from __future__ import annotations

from typing import Any

from bootform.config import FormSettings, get_settings
from bootform.elements import File, Input, Select, TextArea
from bootform.helpers import field_name_to_id
from bootform.state import FormState


def resolve_field_value(state: FormState | None, name: str | None, default: Any = None) -> Any:
    """Ask the bound state, if any, passing the explicit value as its default."""
    if state is None or not name:
        return default
    return state.get_field_value(name, default)


def build_input(
    state: FormState | None,
    type_: str | None = None,
    name: str | None = None,
    value: Any = None,
    settings: FormSettings | None = None,
) -> Input:
    value = resolve_field_value(state, name, value)
    element = Input(state, settings or get_settings())

    return (
        element
        .type_if(type_, type_)
        .name_if(name, name)
        .id_if(name, field_name_to_id(name))
        .value_if(value is not None, value)
    )


def build_file(state: FormState | None, name: str | None = None, settings: FormSettings | None = None) -> File:
    element = File(state, settings or get_settings())

    return element.name_if(name, name).id_if(name, field_name_to_id(name))


def build_textarea(
    state: FormState | None,
    name: str | None = None,
    value: Any = None,
    settings: FormSettings | None = None,
) -> TextArea:
    value = resolve_field_value(state, name, value)
    element = TextArea(state, settings or get_settings())

    return (
        element
        .name_if(name, name)
        .id_if(name, field_name_to_id(name))
        .value_if(value is not None, value)
    )


def build_select(
    state: FormState | None,
    name: str | None = None,
    options: Any = (),
    value: Any = None,
    settings: FormSettings | None = None,
) -> Select:
    value = resolve_field_value(state, name, value)
    element = Select(state, settings or get_settings())

    return (
        element
        .name_if(name, name)
        .id_if(name, field_name_to_id(name))
        .options(options)
        .value_if(value is not None, value)
    )


def build_hidden(
    state: FormState | None,
    name: str | None = None,
    value: Any = None,
    settings: FormSettings | None = None,
) -> Input:
    value = resolve_field_value(state, name, value)
    element = Input(state, settings or get_settings())

    return element.type("hidden").name_if(name, name).value_if(value is not None, value)
