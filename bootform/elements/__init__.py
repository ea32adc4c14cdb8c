from bootform.elements.base import BaseElement
from bootform.elements.controls import Button, File, Input, Option, Select, TextArea
from bootform.elements.form import Form
from bootform.elements.form_group import FormGroup, Label

__all__ = ["BaseElement", "Button", "File", "Form", "FormGroup", "Input", "Label", "Option", "Select", "TextArea"]
