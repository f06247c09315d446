"""Bloc embed générique — carte, formulaire, agenda ou hôte personnalisé."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing
from .base import BaseBlock, BoxStyle
from .divider import BorderLineStyle

EmbedType = Literal["map", "form", "calendar", "custom"]


class EmbedBorder(StudioModel):
    width: Number = 1
    color: str = "#e5e7eb"
    style: BorderLineStyle = "solid"


class EmbedStyle(BoxStyle):
    width: str = "100%"
    height: str = "450px"
    aspect_ratio: Literal["16:9", "4:3", "1:1", "21:9", "custom"] = "16:9"
    padding: Spacing = Field(default_factory=lambda: spacing(16, 16, 16, 16))
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))
    background_color: str = "#ffffff"
    border_radius: Number = 8
    border: EmbedBorder = Field(default_factory=EmbedBorder)


class EmbedBlock(BaseBlock):
    type: Literal["embed"] = "embed"
    embed_url: str = ""
    embed_type: EmbedType = "map"
    title: str = ""
    allow_full_screen: bool = True
    style: EmbedStyle = Field(default_factory=EmbedStyle)
