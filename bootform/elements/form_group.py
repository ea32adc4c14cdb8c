"""Label + control + feedback + help text wrapper."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bootform.config import FormSettings, get_settings
from bootform.elements.base import BaseElement

if TYPE_CHECKING:
    from bootform.state import FormState


class Label(BaseElement):
    tag = "label"

    def for_(self, control_id: str | None) -> Label:
        return self.attribute("for", control_id)


class HelpText(BaseElement):
    tag = "small"


class FormGroup(BaseElement):
    """Renders as:

        <div class="form-group">
          <label for="email">Email</label>
          <input ... class="form-control is-invalid">
          <div class="invalid-feedback">The email is required</div>
          <small class="form-text text-muted">We never share it</small>
        </div>
    """

    tag = "div"

    def __init__(
        self,
        state: FormState | None,
        control: BaseElement,
        label: str | None = None,
        settings: FormSettings | None = None,
    ):
        super().__init__(state)
        self.settings = settings or get_settings()
        self.control = control
        self.label = label
        self._help_text: str | None = None

    def help_text(self, text: str | None) -> FormGroup:
        clone = self._clone()
        clone._help_text = text
        return clone

    def _errors(self) -> list[str]:
        name = self.control.get_attribute("name")
        if self.state is None or not name:
            return []
        return self.state.get_errors(name)

    def _prepare(self) -> BaseElement:
        element = self.add_class(self.settings.group_class)

        if self.label is not None:
            element = element.add_child(Label().for_(self.control.get_attribute("id")).text(self.label))

        element = element.add_child(self.control)

        for message in self._errors():
            element = element.add_child(BaseElement().add_class(self.settings.feedback_class).text(message))

        if self._help_text:
            element = element.add_child(HelpText().add_class(self.settings.help_class).text(self._help_text))

        return element
