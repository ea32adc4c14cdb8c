"""Tests for FormBuilder open/close and its field helpers."""

import pytest
from markupsafe import Markup

from bootform.builder import FormBuilder
from bootform.config import FormSettings
from bootform.csrf import StaticTokenProvider
from bootform.exceptions import FormAlreadyOpenError, FormError, FormNotOpenError
from bootform.state import DefaultFormState

TOKEN_FIELD = '<input type="hidden" name="_token" value="test-token">'


class TestOpenForm:
    @pytest.mark.parametrize("method", ["put", "PATCH", "Delete"])
    def test_spoofed_methods_post_with_hidden_method(self, builder, method):
        html = str(builder.open_form(method, "/things/1"))
        assert html.startswith('<form method="POST" action="/things/1">')
        assert f'<input type="hidden" name="_method" value="{method.upper()}">' in html
        assert TOKEN_FIELD in html

    def test_get_has_no_token(self, builder):
        html = str(builder.open_form("get", "/search"))
        assert html == '<form method="GET" action="/search">'
        assert "_token" not in html

    def test_post_has_token_and_no_method_field(self, builder):
        html = str(builder.open_form("post", "/things"))
        assert html == '<form method="POST" action="/things">' + TOKEN_FIELD
        assert "_method" not in html

    def test_other_methods_have_token(self, builder):
        html = str(builder.open_form("options", "/things"))
        assert 'method="OPTIONS"' in html
        assert TOKEN_FIELD in html

    def test_inline_class(self, builder):
        html = str(builder.open_form("get", "/search", inline=True))
        assert 'class="form-inline"' in html

    def test_files_sets_enctype(self, builder):
        html = str(builder.open_form("post", "/upload", files=True))
        assert 'enctype="multipart/form-data"' in html

    def test_returns_markup(self, builder):
        assert isinstance(builder.open_form("get", "/"), Markup)

    def test_context_is_exposed(self, builder):
        builder.open_form("put", "/things/1", model={"name": "x"})
        assert builder.is_open
        assert builder.context.method == "POST"
        assert builder.form_state.get_field_value("name") == "x"

    def test_second_open_fails_and_keeps_first(self, builder):
        builder.open_form("post", "/first", model={"name": "first"})
        context = builder.context

        with pytest.raises(FormAlreadyOpenError):
            builder.open_form("post", "/second", model={"name": "second"})

        assert builder.context is context
        assert builder.text("name").get_attribute("value") == "first"

    def test_already_open_is_runtime_error(self, builder):
        builder.open_form("get", "/")
        with pytest.raises(RuntimeError, match="before closing the previous one"):
            builder.open_form("get", "/")

    def test_custom_settings(self):
        settings = FormSettings(method_field_name="__method", csrf_field_name="csrf", inline_class="row")
        builder = FormBuilder(StaticTokenProvider("t"), settings=settings)
        html = str(builder.open_form("delete", "/x", inline=True))
        assert 'name="__method" value="DELETE"' in html
        assert 'name="csrf" value="t"' in html
        assert 'class="row"' in html


class TestCloseForm:
    def test_returns_closing_tag(self, builder):
        builder.open_form("get", "/")
        assert builder.close_form() == Markup("</form>")

    def test_clears_state(self, builder):
        builder.open_form("post", "/", model={"name": "x"})
        builder.close_form()
        assert builder.context is None
        assert builder.form_state is None
        assert not builder.is_open
        assert builder.text("name").get_attribute("value") is None

    def test_reopen_after_close(self, builder):
        builder.open_form("post", "/first")
        builder.close_form()
        html = str(builder.open_form("get", "/second"))
        assert 'action="/second"' in html

    def test_close_without_open_fails(self, builder):
        with pytest.raises(FormNotOpenError):
            builder.close_form()

    def test_double_close_fails(self, builder):
        builder.open_form("get", "/")
        builder.close_form()
        with pytest.raises(FormError):
            builder.close_form()


class TestFieldHelpers:
    def test_text_resolves_from_bound_map(self, builder):
        builder.open_form("post", "/", model={"name": "x"})
        assert builder.text("name").get_attribute("value") == "x"
        assert builder.text("name", "y").get_attribute("value") == "y"

    def test_email(self, builder):
        element = builder.email("email", "a@b.c")
        assert element.get_attribute("type") == "email"
        assert element.get_attribute("id") == "email"

    def test_generic_input(self, builder):
        assert builder.input("number", "age", 3).get_attribute("type") == "number"

    def test_password_is_never_repopulated(self, builder):
        builder.open_form("post", "/", old_input={"password": "secret"})
        element = builder.password("password")
        assert element.get_attribute("type") == "password"
        assert element.get_attribute("id") == "password"
        assert not element.has_attribute("value")

    def test_old_input_wins_over_model(self, builder):
        builder.open_form("post", "/", model={"name": "model"}, old_input={"name": "typed"})
        assert builder.text("name").get_attribute("value") == "typed"

    def test_textarea_and_select(self, builder):
        builder.open_form("post", "/", model={"bio": "hi", "role": "admin"})
        assert "hi</textarea>" in str(builder.textarea("bio"))
        assert '<option value="admin" selected>' in str(builder.select("role", ["admin", "user"]))

    def test_file(self, builder):
        assert builder.file("avatar").get_attribute("type") == "file"

    def test_hidden(self, builder):
        assert str(builder.hidden("ref", "1")) == '<input type="hidden" name="ref" value="1">'

    def test_token(self, builder):
        assert str(builder.token()) == TOKEN_FIELD

    def test_submit(self, builder):
        assert str(builder.submit("Save")) == '<button type="submit" class="btn btn-primary">Save</button>'

    def test_form_group_uses_open_state_errors(self, builder):
        builder.open_form("post", "/", errors={"email": "required"})
        html = str(builder.form_group(builder.email("email"), "Email", "Help"))
        assert '<label for="email">Email</label>' in html
        assert "is-invalid" in html
        assert '<div class="invalid-feedback">required</div>' in html
        assert '<small class="form-text text-muted">Help</small>' in html

    def test_fields_work_without_open_form(self, builder):
        assert builder.text("name", "x").get_attribute("value") == "x"


class TestBooleanValues:
    def test_bool_model_values_render_as_digits(self, builder):
        builder.open_form("post", "/", model={"active": False, "flag": True})
        assert str(builder.hidden("active")) == '<input type="hidden" name="active" value="0">'
        assert str(builder.hidden("flag")) == '<input type="hidden" name="flag" value="1">'
        assert builder.text("flag").get_attribute("value") == "1"


class TestCustomStateFactory:
    def test_factory_receives_open_arguments(self, settings):
        calls = []

        def factory(model=None, old_input=None, errors=None):
            calls.append((model, old_input, errors))
            return DefaultFormState(model, old_input, errors)

        builder = FormBuilder(StaticTokenProvider("t"), factory, settings)
        builder.open_form("get", "/", model={"a": 1}, errors={"a": "bad"})

        assert calls == [({"a": 1}, None, {"a": "bad"})]


class TestForRequest:
    def test_token_seeded_in_session(self, mock_request_factory, settings):
        request = mock_request_factory()
        builder = FormBuilder.for_request(request, settings)

        html = str(builder.open_form("post", "/"))

        token = request.session[settings.csrf_session_key]
        assert f'name="_token" value="{token}"' in html

    def test_existing_session_token_reused(self, mock_request_factory, settings):
        request = mock_request_factory({settings.csrf_session_key: "abc"})
        builder = FormBuilder.for_request(request, settings)
        assert builder.token().get_attribute("value") == "abc"

    def test_flashed_input_and_errors_repopulate(self, mock_request_factory, settings):
        request = mock_request_factory({
            settings.old_input_session_key: {"email": "typed@example.com"},
            settings.errors_session_key: {"email": ["taken"]},
        })
        builder = FormBuilder.for_request(request, settings)

        builder.open_form("post", "/", model={"email": "stored@example.com"})

        assert builder.email("email").get_attribute("value") == "typed@example.com"
        assert builder.form_state.get_errors("email") == ["taken"]
        assert settings.old_input_session_key not in request.session
        assert settings.errors_session_key not in request.session

    def test_explicit_old_input_overrides_flashed(self, mock_request_factory, settings):
        request = mock_request_factory({settings.old_input_session_key: {"name": "flashed"}})
        builder = FormBuilder.for_request(request, settings)

        builder.open_form("post", "/", old_input={"name": "explicit"})

        assert builder.text("name").get_attribute("value") == "explicit"

    def test_flashed_input_beats_explicit_value(self, mock_request_factory, settings):
        request = mock_request_factory({settings.old_input_session_key: {"name": "typed"}})
        builder = FormBuilder.for_request(request, settings)

        builder.open_form("put", "/users/1")

        assert builder.text("name", "stored").get_attribute("value") == "typed"

    def test_flashed_values_shared_by_every_form(self, mock_request_factory, settings):
        request = mock_request_factory({
            settings.old_input_session_key: {"name": "typed"},
            settings.errors_session_key: {"name": ["too short"]},
        })
        builder = FormBuilder.for_request(request, settings)

        builder.open_form("get", "/search")
        builder.close_form()
        builder.open_form("post", "/profile")

        assert builder.text("name").get_attribute("value") == "typed"
        assert builder.form_state.get_errors("name") == ["too short"]

    def test_hidden_method_and_token_ignore_old_input(self, mock_request_factory, settings):
        request = mock_request_factory({settings.csrf_session_key: "fresh"})
        builder = FormBuilder.for_request(request, settings)

        html = str(builder.open_form("patch", "/x", old_input={"_method": "DELETE", "_token": "stale"}))

        assert '<input type="hidden" name="_method" value="PATCH">' in html
        assert '<input type="hidden" name="_token" value="fresh">' in html
        assert builder.token().get_attribute("value") == "fresh"
