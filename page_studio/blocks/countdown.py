"""Bloc compte à rebours — date cible ISO 8601."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import DEFAULT_FONT, BaseBlock, BoxStyle


class CountdownStyle(BoxStyle):
    font_size: Number = 32
    font_weight: Number = 700
    font_family: str = DEFAULT_FONT
    color: str = "#000000"
    label_color: str = "#666666"
    background_color: str = "transparent"
    padding: Spacing = Field(default_factory=lambda: spacing(16, 16, 16, 16))


class CountdownBlock(BaseBlock):
    type: Literal["countdown"] = "countdown"
    target_date: str = ""
    label: str = ""
    display_format: Literal["dhms", "hms", "ms"] = "dhms"
    style: CountdownStyle = Field(default_factory=CountdownStyle)
