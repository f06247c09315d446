"""Bloc inscription newsletter."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import BaseBlock, BoxStyle

TextAlign = Literal["left", "center", "right"]


class NewsletterStyle(BoxStyle):
    layout: Literal["inline", "stacked"] = "inline"
    padding: Spacing = Field(default_factory=lambda: spacing(32, 32, 32, 32))
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))
    background_color: str = "#f9fafb"
    border_radius: Number = 12
    heading_color: str = "#1f2937"
    heading_size: Number = 28
    heading_weight: Number = 700
    heading_align: TextAlign = "center"
    description_color: str = "#6b7280"
    description_size: Number = 16
    description_align: TextAlign = "center"
    input_background_color: str = "#ffffff"
    input_text_color: str = "#1f2937"
    input_border_color: str = "#d1d5db"
    input_border_width: Number = 1
    input_border_radius: Number = 8
    input_padding: Number = 12
    button_background_color: str = "#3b82f6"
    button_text_color: str = "#ffffff"
    button_border_radius: Number = 8
    button_padding: Number = 12
    button_font_size: Number = 16
    button_font_weight: Number = 600
    gap: Number = 16


class NewsletterBlock(BaseBlock):
    type: Literal["newsletter"] = "newsletter"
    heading: str = ""
    description: str = ""
    input_placeholder: str = "Enter your email"
    button_text: str = "Subscribe"
    success_message: str = ""
    show_privacy_checkbox: bool = False
    privacy_text: str = ""
    style: NewsletterStyle = Field(default_factory=NewsletterStyle)
