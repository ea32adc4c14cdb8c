"""Per-form value and error resolution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from bootform.helpers import data_get, field_name_to_dot


@runtime_checkable
class FormState(Protocol):
    """What field builders need from the data bound to an open form.

    Field builders pass the value given by the caller as *default*, so a state
    decides whether submitted input or the bound model overrides it.
    """

    def get_field_value(self, name: str, default: Any = None) -> Any: ...

    def has_errors(self, name: str) -> bool: ...

    def get_errors(self, name: str) -> list[str]: ...


class DefaultFormState:
    """Resolves field values from old input, then the explicit value, then the bound model.

    The model may be a mapping of submitted values, a pydantic model, or any
    object exposing the field names as attributes. Bracketed names such as
    ``user[email]`` are looked up as nested paths.
    """

    def __init__(
        self,
        model: Any = None,
        old_input: Mapping[str, Any] | None = None,
        errors: Mapping[str, str | list[str]] | None = None,
    ):
        self.model = model
        self.old_input = dict(old_input or {})
        self.errors = dict(errors or {})

    def set_model(self, model: Any) -> DefaultFormState:
        self.model = model
        return self

    def get_field_value(self, name: str, default: Any = None) -> Any:
        if not name:
            return default

        path = field_name_to_dot(name)

        if self.old_input:
            value = data_get(self.old_input, path)
            if value is not None:
                return value

        if default is not None:
            return default

        return data_get(self.model, path)

    def get_errors(self, name: str) -> list[str]:
        if not name:
            return []
        messages = self.errors.get(field_name_to_dot(name), self.errors.get(name))
        if messages is None:
            return []
        if isinstance(messages, str):
            return [messages]
        return list(messages)

    def has_errors(self, name: str) -> bool:
        return bool(self.get_errors(name))

    def __repr__(self) -> str:
        return f"DefaultFormState(model={self.model!r}, errors={self.errors!r})"


def errors_from_validation(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic validation errors by dotted field location."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field_name = ".".join(str(part) for part in err["loc"]) if err["loc"] else "__form__"
        errors.setdefault(field_name, []).append(err["msg"])
    return errors
