"""
Blocs de base — BaseBlock discriminé par `type` + styles partagés.
"""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing

Alignment = Literal["left", "center", "right"]
LinkTarget = Literal["_blank", "_self"]
DEFAULT_FONT = "Arial, sans-serif"


class BlockStyle(StudioModel):
    """Style minimal : marge externe seulement (space, divider, icon, social)."""
    margin: Spacing = Field(default_factory=lambda: spacing(0, 0, 16, 0))


class BoxStyle(BlockStyle):
    """Style de bloc avec padding + marge."""
    padding: Spacing = Field(default_factory=Spacing)


class CardStyle(BoxStyle):
    """Carte : fond, coins arrondis, police, alignement."""
    background_color: str = "#ffffff"
    border_radius: Number = 8
    font_family: str = DEFAULT_FONT
    alignment: Alignment = "left"
    padding: Spacing = Field(default_factory=lambda: spacing(24, 24, 24, 24))
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))


class BaseBlock(StudioModel):
    """Bloc de base (classe parente de toutes les variantes)."""
    id: str
    type: str
