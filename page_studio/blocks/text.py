"""Bloc texte — HTML inline restreint."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import DEFAULT_FONT, BaseBlock, BoxStyle


class TextStyle(BoxStyle):
    font_family: str = DEFAULT_FONT
    font_size: Number = 16
    font_weight: Number = 400
    font_style: Literal["normal", "italic"] = "normal"
    color: str = "#000000"
    background_color: str = "transparent"
    text_align: Literal["left", "center", "right", "justify"] = "left"
    padding: Spacing = Field(default_factory=lambda: spacing(8, 8, 8, 8))
    margin: Spacing = Field(default_factory=Spacing)


class TextBlock(BaseBlock):
    type: Literal["text"] = "text"
    content: str = ""
    style: TextStyle = Field(default_factory=TextStyle)
