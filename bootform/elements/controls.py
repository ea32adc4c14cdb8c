"""Form controls that pick up Bootstrap classes and validation state."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from bootform.config import FormSettings, get_settings
from bootform.elements.base import BaseElement, format_value

if TYPE_CHECKING:
    from bootform.state import FormState

# Input types that are not styled as text-like controls
UNSTYLED_INPUT_TYPES = frozenset({"hidden", "checkbox", "radio", "submit", "reset", "button", "image"})

# Unstyled types that still display a validation state
VALIDATED_UNSTYLED_TYPES = frozenset({"checkbox", "radio"})


class Control(BaseElement):
    """An element bound to the open form's state."""

    def __init__(self, state: FormState | None = None, settings: FormSettings | None = None):
        super().__init__(state)
        self.settings = settings or get_settings()

    def _control_classes(self) -> list[str]:
        return [self.settings.control_class]

    def _shows_validation(self) -> bool:
        return True

    def _has_errors(self) -> bool:
        name = self.get_attribute("name")
        return bool(self.state is not None and name and self.state.has_errors(name))

    def _prepare(self) -> BaseElement:
        return self.add_class(*self._control_classes()).add_class_if(
            self._shows_validation() and self._has_errors(), self.settings.invalid_class
        )


class Input(Control):
    tag = "input"
    void = True

    def _control_classes(self) -> list[str]:
        if self.get_attribute("type") in UNSTYLED_INPUT_TYPES:
            return []
        return super()._control_classes()

    def _shows_validation(self) -> bool:
        input_type = self.get_attribute("type")
        return input_type not in UNSTYLED_INPUT_TYPES or input_type in VALIDATED_UNSTYLED_TYPES

    def placeholder(self, text: str | None) -> Input:
        return self.attribute("placeholder", text)

    def required(self, required: bool = True) -> Input:
        return self.attribute("required", required)


class File(Input):
    def __init__(self, state: FormState | None = None, settings: FormSettings | None = None):
        super().__init__(state, settings)
        self._attributes["type"] = "file"

    def _control_classes(self) -> list[str]:
        return [self.settings.file_control_class]

    def accept(self, types: str | None) -> File:
        return self.attribute("accept", types)


class TextArea(Control):
    tag = "textarea"

    def value(self, value: Any) -> TextArea:
        return self.text(None if value is None else format_value(value))

    def rows(self, rows: int | None) -> TextArea:
        return self.attribute("rows", rows)


class Option(BaseElement):
    tag = "option"

    def selected(self, selected: bool = True) -> Option:
        return self.attribute("selected", selected)


def normalize_options(options: Any) -> list[tuple[Any, Any]]:
    """Accept a mapping, (value, label) pairs, or plain values."""
    if options is None:
        return []
    if isinstance(options, Mapping):
        return list(options.items())
    pairs = []
    for item in options:
        if isinstance(item, (tuple, list)) and len(item) == 2:
            pairs.append((item[0], item[1]))
        else:
            pairs.append((item, item))
    return pairs


class Select(Control):
    tag = "select"

    def __init__(self, state: FormState | None = None, settings: FormSettings | None = None):
        super().__init__(state, settings)
        self._options: tuple[tuple[Any, Any], ...] = ()
        self._selected: tuple[str, ...] = ()

    def options(self, options: Any) -> Select:
        clone = self._clone()
        clone._options = tuple(normalize_options(options))
        return clone

    def value(self, value: Any) -> Select:
        clone = self._clone()
        if value is None:
            clone._selected = ()
        elif isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
            clone._selected = tuple(format_value(v) for v in value)
        else:
            clone._selected = (format_value(value),)
        return clone

    def multiple(self, multiple: bool = True) -> Select:
        return self.attribute("multiple", multiple)

    def _prepare(self) -> BaseElement:
        element = super()._prepare()
        return element.add_children(
            Option().value(value).text(label).selected(format_value(value) in self._selected)
            for value, label in self._options
        )


class Button(BaseElement):
    tag = "button"

    def __init__(self, state: FormState | None = None):
        super().__init__(state)
        self._attributes["type"] = "submit"
