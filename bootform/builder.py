"""Form open/close and field helpers bound to the currently open form."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from bootform import fields
from bootform.config import FormSettings, get_settings
from bootform.csrf import SessionTokenProvider, TokenProvider
from bootform.elements import BaseElement, Button, File, Form, FormGroup, Input, Select, TextArea
from bootform.exceptions import FormAlreadyOpenError, FormNotOpenError
from bootform.helpers import field_name_to_id
from bootform.session import pull_errors, pull_old_input
from bootform.state import DefaultFormState, FormState

if TYPE_CHECKING:
    from litestar import Request

logger = logging.getLogger(__name__)

StateFactory = Callable[..., FormState]


@dataclass
class FormContext:
    """The form currently open on a builder."""

    form: Form
    state: FormState
    method: str


class FormBuilder:
    """Builds Bootstrap form markup for one request.

    Usage:
        builder = FormBuilder.for_request(request)

        builder.open_form("put", "/users/1", model=user)
        builder.form_group(builder.email("email"), "Email", "We never share it")
        builder.submit("Save")
        builder.close_form()

    Only one form may be open at a time. Fields built while a form is open
    are populated from its state.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        state_factory: StateFactory = DefaultFormState,
        settings: FormSettings | None = None,
    ):
        self.token_provider = token_provider
        self.state_factory = state_factory
        self.settings = settings or get_settings()
        self._context: FormContext | None = None

    @classmethod
    def for_request(cls, request: Request, settings: FormSettings | None = None) -> FormBuilder:
        """Builder whose token comes from the session and whose state repopulates flashed input."""
        settings = settings or get_settings()

        # Pulled from the session once, then shared by every form opened on this request
        flashed: dict[str, dict] = {}

        def state_factory(model: Any = None, old_input=None, errors=None) -> FormState:
            if not flashed:
                flashed["input"] = pull_old_input(request, settings)
                flashed["errors"] = pull_errors(request, settings)
            return DefaultFormState(
                model,
                old_input if old_input is not None else flashed["input"],
                errors if errors is not None else flashed["errors"],
            )

        return cls(SessionTokenProvider.from_request(request, settings), state_factory, settings)

    # -- Form open/close --

    @property
    def context(self) -> FormContext | None:
        return self._context

    @property
    def form_state(self) -> FormState | None:
        return self._context.state if self._context is not None else None

    @property
    def is_open(self) -> bool:
        return self._context is not None

    def open_form(
        self,
        method: str,
        action: str,
        *,
        model: Any = None,
        inline: bool = False,
        files: bool = False,
        old_input: Mapping[str, Any] | None = None,
        errors: Mapping[str, str | list[str]] | None = None,
    ) -> Markup:
        """Open a form and return its opening tag with the hidden method and token fields.

        Raises FormAlreadyOpenError when the previous form has not been closed.
        """
        if self._context is not None:
            raise FormAlreadyOpenError()

        state = self.state_factory(model=model, old_input=old_input, errors=errors)
        form = Form()

        # Browsers only send GET and POST, the real method rides in a hidden field
        method = method.upper()

        if method in self.settings.spoofed_methods:
            form = form.add_child(fields.build_hidden(None, self.settings.method_field_name, method, self.settings))
            method = "POST"

        if method != "GET":
            form = form.add_child(self._token())

        form = (
            form.method(method)
            .action(action)
            .add_class_if(inline, self.settings.inline_class)
        )
        if files:
            form = form.accept_files()

        self._context = FormContext(form=form, state=state, method=method)
        logger.debug("Opened %s form targeting %s", method, action)

        return form.open()

    def close_form(self) -> Markup:
        """Close the open form. Raises FormNotOpenError when no form is open."""
        if self._context is None:
            raise FormNotOpenError()

        out = self._context.form.close()
        self._context = None
        logger.debug("Closed form")

        return out

    # -- Field helpers --

    def form_group(self, control: BaseElement, label: str | None = None, help_text: str | None = None) -> FormGroup:
        element = FormGroup(self.form_state, control, label, self.settings)

        return element.help_text(help_text)

    def input(self, type_: str | None = None, name: str | None = None, value: Any = None) -> Input:
        return fields.build_input(self.form_state, type_, name, value, self.settings)

    def text(self, name: str | None = None, value: Any = None) -> Input:
        return self.input("text", name, value)

    def email(self, name: str | None = None, value: Any = None) -> Input:
        return self.input("email", name, value)

    def password(self, name: str | None = None) -> Input:
        # Never repopulated
        return Input(self.form_state, self.settings).type("password").name_if(name, name).id_if(
            name, field_name_to_id(name)
        )

    def file(self, name: str | None = None) -> File:
        return fields.build_file(self.form_state, name, self.settings)

    def textarea(self, name: str | None = None, value: Any = None) -> TextArea:
        return fields.build_textarea(self.form_state, name, value, self.settings)

    def select(self, name: str | None = None, options: Any = (), value: Any = None) -> Select:
        return fields.build_select(self.form_state, name, options, value, self.settings)

    def hidden(self, name: str | None = None, value: Any = None) -> Input:
        return fields.build_hidden(self.form_state, name, value, self.settings)

    def token(self) -> Input:
        """CSRF token hidden field."""
        return self._token()

    def submit(self, text: str) -> Button:
        return Button().add_class(self.settings.submit_class).text(text)

    def _token(self) -> Input:
        # Never repopulated from submitted input
        return fields.build_hidden(None, self.settings.csrf_field_name, self.token_provider.token(), self.settings)
