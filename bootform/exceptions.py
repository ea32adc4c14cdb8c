"""Errors raised by the form builder itself.

Failures from collaborators (token providers, bound models) are not wrapped.
"""


class FormError(RuntimeError):
    """Base class for form builder errors."""


class FormAlreadyOpenError(FormError):
    def __init__(self):
        super().__init__("You cannot open another form before closing the previous one")


class FormNotOpenError(FormError):
    def __init__(self):
        super().__init__("There is no open form to close")
