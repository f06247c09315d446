"""Bloc formulaire de contact (exporté sans action : pas de script côté export)."""
from typing import List, Literal, Optional

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing
from .base import BaseBlock, CardStyle

FormFieldType = Literal["text", "email", "tel", "number", "textarea", "select", "checkbox"]


class FormField(StudioModel):
    id: str
    type: FormFieldType = "text"
    label: str = ""
    placeholder: str = ""
    required: bool = False
    options: Optional[List[str]] = None


class FormStyle(CardStyle):
    background_color: str = "#f9fafb"
    padding: Spacing = Field(default_factory=lambda: spacing(32, 32, 32, 32))
    label_color: str = "#111827"
    label_size: Number = 14
    input_background_color: str = "#ffffff"
    input_border_color: str = "#d1d5db"
    input_text_color: str = "#111827"
    input_border_radius: Number = 6
    button_background_color: str = "#3b82f6"
    button_text_color: str = "#ffffff"
    button_border_radius: Number = 6
    spacing: Number = 20


class FormBlock(BaseBlock):
    type: Literal["form"] = "form"
    title: str = ""
    description: str = ""
    fields: List[FormField] = Field(default_factory=list)
    submit_button_text: str = "Submit"
    submit_action: Literal["none", "email", "webhook"] = "none"
    success_message: str = ""
    style: FormStyle = Field(default_factory=FormStyle)
