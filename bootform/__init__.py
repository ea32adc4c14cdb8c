"""bootform - Bootstrap form markup bound to session and model state."""

from bootform.builder import FormBuilder, FormContext
from bootform.csrf import SessionTokenProvider, StaticTokenProvider, TokenProvider
from bootform.exceptions import FormAlreadyOpenError, FormError, FormNotOpenError
from bootform.helpers import field_name_to_dot, field_name_to_id
from bootform.state import DefaultFormState, FormState

__all__ = [
    "DefaultFormState",
    "FormAlreadyOpenError",
    "FormBuilder",
    "FormContext",
    "FormError",
    "FormNotOpenError",
    "FormState",
    "SessionTokenProvider",
    "StaticTokenProvider",
    "TokenProvider",
    "field_name_to_dot",
    "field_name_to_id",
]
