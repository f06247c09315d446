"""Bloc bouton (lien stylé)."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import DEFAULT_FONT, BaseBlock, BoxStyle, LinkTarget


class ButtonStyle(BoxStyle):
    background_color: str = "#3b82f6"
    color: str = "#ffffff"
    font_size: Number = 16
    font_weight: Number = 600
    font_family: str = DEFAULT_FONT
    border_radius: Number = 6
    layout: Literal["inline", "center", "full-width"] = "inline"
    padding: Spacing = Field(default_factory=lambda: spacing(12, 24, 12, 24))


class ButtonBlock(BaseBlock):
    type: Literal["button"] = "button"
    text: str = ""
    href: str = "#"
    target: LinkTarget = "_self"
    style: ButtonStyle = Field(default_factory=ButtonStyle)
