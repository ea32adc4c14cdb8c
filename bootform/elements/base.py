"""Immutable HTML element with chainable attribute setters.

Every mutator returns an updated copy, so a partially configured element can be
shared and specialised without side effects:

    base = Input().name("email")
    base.type("email")   # new element
    base.type("text")    # another one, base is untouched
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from markupsafe import Markup, escape

if TYPE_CHECKING:
    from bootform.state import FormState


def format_value(value: Any) -> str:
    """Render a field value as text. Booleans become "1" and "0"."""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class BaseElement:
    tag: str = "div"
    void: bool = False

    def __init__(self, state: FormState | None = None):
        self.state = state
        self._attributes: dict[str, Any] = {}
        self._children: tuple[Any, ...] = ()

    def _clone(self):
        clone = copy.copy(self)
        clone._attributes = dict(self._attributes)
        return clone

    # -- Attributes --

    def attribute(self, name: str, value: Any = "") -> BaseElement:
        """Set an attribute. True renders a bare attribute, None or False removes it."""
        if value is None or value is False:
            return self.forget_attribute(name)
        clone = self._clone()
        clone._attributes[name] = value
        return clone

    def attribute_if(self, condition: Any, name: str, value: Any = "") -> BaseElement:
        return self.attribute(name, value) if condition else self

    def attributes(self, attributes: dict[str, Any]) -> BaseElement:
        element = self
        for name, value in attributes.items():
            element = element.attribute(name, value)
        return element

    def forget_attribute(self, name: str) -> BaseElement:
        if name not in self._attributes:
            return self
        clone = self._clone()
        del clone._attributes[name]
        return clone

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    # -- Classes --

    @property
    def classes(self) -> list[str]:
        return str(self._attributes.get("class", "")).split()

    def add_class(self, *classes: str) -> BaseElement:
        current = self.classes
        for entry in classes:
            for cls in (entry or "").split():
                if cls not in current:
                    current.append(cls)
        if not current:
            return self
        clone = self._clone()
        clone._attributes["class"] = " ".join(current)
        return clone

    def add_class_if(self, condition: Any, *classes: str) -> BaseElement:
        return self.add_class(*classes) if condition else self

    # -- Shortcuts --

    def id(self, value: str | None) -> BaseElement:
        return self.attribute("id", value)

    def id_if(self, condition: Any, value: str | None) -> BaseElement:
        return self.id(value) if condition else self

    def name(self, value: str | None) -> BaseElement:
        return self.attribute("name", value)

    def name_if(self, condition: Any, value: str | None) -> BaseElement:
        return self.name(value) if condition else self

    def type(self, value: str | None) -> BaseElement:
        return self.attribute("type", value)

    def type_if(self, condition: Any, value: str | None) -> BaseElement:
        return self.type(value) if condition else self

    def value(self, value: Any) -> BaseElement:
        if value is None:
            return self.forget_attribute("value")
        return self.attribute("value", format_value(value))

    def value_if(self, condition: Any, value: Any) -> BaseElement:
        return self.value(value) if condition else self

    # -- Children --

    def add_child(self, child: Any) -> BaseElement:
        if child is None:
            return self
        clone = self._clone()
        clone._children = self._children + (child,)
        return clone

    def add_children(self, children: Iterable[Any]) -> BaseElement:
        element = self
        for child in children:
            element = element.add_child(child)
        return element

    def text(self, text: Any) -> BaseElement:
        """Replace the children with a single escaped text node."""
        clone = self._clone()
        clone._children = () if text is None else (str(text),)
        return clone

    @property
    def children(self) -> tuple[Any, ...]:
        return self._children

    # -- Rendering --

    def _prepare(self) -> BaseElement:
        """Hook for subclasses to derive render-time attributes and children."""
        return self

    def _render_attributes(self) -> str:
        parts = []
        for name, value in self._attributes.items():
            if value is True:
                parts.append(name)
            else:
                parts.append(f'{name}="{escape(str(value))}"')
        return " " + " ".join(parts) if parts else ""

    def _render_children(self) -> str:
        return "".join(str(escape(child)) for child in self._children)

    def open(self) -> Markup:
        """Render the opening tag followed by the children."""
        element = self._prepare()
        html = f"<{element.tag}{element._render_attributes()}>"
        if not element.void:
            html += element._render_children()
        return Markup(html)

    def close(self) -> Markup:
        return Markup("" if self.void else f"</{self.tag}>")

    def render(self) -> Markup:
        return Markup(str(self.open()) + str(self.close()))

    def __html__(self) -> str:
        return str(self.render())

    def __str__(self) -> str:
        return str(self.render())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"
