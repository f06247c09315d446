"""Bloc citation."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import BaseBlock, CardStyle


class QuoteStyle(CardStyle):
    background_color: str = "#f9fafb"
    font_family: str = "Georgia, serif"
    padding: Spacing = Field(default_factory=lambda: spacing(32, 32, 32, 32))
    quote_color: str = "#111827"
    quote_size: Number = 20
    author_color: str = "#6b7280"
    author_size: Number = 14
    border_left_width: Number = 4
    border_left_color: str = "#3b82f6"
    font_style: Literal["normal", "italic"] = "italic"
    quote_mark_color: str = "#3b82f6"
    show_quote_marks: bool = True


class QuoteBlock(BaseBlock):
    type: Literal["quote"] = "quote"
    quote: str = ""
    author: str = ""
    author_title: str = ""
    style: QuoteStyle = Field(default_factory=QuoteStyle)
