"""Bloc icône (nom d'icône de la bibliothèque du thème)."""
from typing import Literal, Optional

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import Alignment, BaseBlock, BlockStyle, LinkTarget


class IconStyle(BlockStyle):
    size: Number = 48
    color: str = "#3b82f6"
    alignment: Alignment = "center"
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))


class IconBlock(BaseBlock):
    type: Literal["icon"] = "icon"
    icon_name: str = "Heart"
    href: Optional[str] = None
    target: LinkTarget = "_self"
    style: IconStyle = Field(default_factory=IconStyle)
