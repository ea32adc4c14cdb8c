from __future__ import annotations

from bootform.elements.base import BaseElement


class Form(BaseElement):
    tag = "form"

    def method(self, method: str | None) -> Form:
        return self.attribute("method", method)

    def action(self, action: str | None) -> Form:
        return self.attribute("action", action)

    def accept_files(self) -> Form:
        return self.attribute("enctype", "multipart/form-data")
