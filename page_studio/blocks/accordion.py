"""Bloc accordéon — l'élément ouvert par défaut fait partie du contenu."""
from typing import List, Literal

from pydantic import Field

from ..core.style import Number, StudioModel
from .base import BaseBlock, CardStyle


class AccordionItem(StudioModel):
    id: str
    title: str = ""
    content: str = ""


class AccordionStyle(CardStyle):
    item_background_color: str = "#ffffff"
    item_border_color: str = "#e5e7eb"
    title_color: str = "#111827"
    title_size: Number = 16
    content_color: str = "#6b7280"
    content_size: Number = 14
    spacing: Number = 12
    expanded_item_background_color: str = "#f9fafb"


class AccordionBlock(BaseBlock):
    type: Literal["accordion"] = "accordion"
    items: List[AccordionItem] = Field(default_factory=list)
    allow_multiple_expanded: bool = False
    # -1 : tout replié
    default_expanded_index: int = 0
    style: AccordionStyle = Field(default_factory=AccordionStyle)
