"""Bloc FAQ — questions/réponses (exporté en <details>)."""
from typing import List, Literal

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing
from .base import DEFAULT_FONT, BaseBlock, BoxStyle


class FAQItem(StudioModel):
    id: str
    question: str = ""
    answer: str = ""


class FAQStyle(BoxStyle):
    font_size: Number = 16
    font_weight: Number = 400
    font_family: str = DEFAULT_FONT
    question_color: str = "#000000"
    answer_color: str = "#666666"
    background_color: str = "transparent"
    padding: Spacing = Field(default_factory=lambda: spacing(16, 16, 16, 16))


class FAQBlock(BaseBlock):
    type: Literal["faq"] = "faq"
    items: List[FAQItem] = Field(default_factory=list)
    style: FAQStyle = Field(default_factory=FAQStyle)
