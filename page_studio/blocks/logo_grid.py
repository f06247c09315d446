"""Bloc grille de logos (clients, partenaires)."""
from typing import List, Literal, Optional

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing
from .base import Alignment, BaseBlock, BoxStyle, LinkTarget


class LogoItem(StudioModel):
    id: str
    image_url: str = ""
    alt: str = ""
    link: Optional[str] = None
    target: LinkTarget = "_blank"


class LogoGridStyle(BoxStyle):
    columns: int = Field(default=3, ge=1, le=12)
    gap: Number = 24
    logo_size: Number = 60
    padding: Spacing = Field(default_factory=lambda: spacing(32, 24, 32, 24))
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))
    background_color: str = "#ffffff"
    logo_background_color: str = "#f9fafb"
    border_radius: Number = 8
    alignment: Alignment = "center"
    grayscale: bool = True
    grayscale_hover: bool = True
    opacity: float = Field(default=0.7, ge=0, le=1)
    hover_opacity: float = Field(default=1.0, ge=0, le=1)


class LogoGridBlock(BaseBlock):
    type: Literal["logo-grid"] = "logo-grid"
    logos: List[LogoItem] = Field(default_factory=list)
    style: LogoGridStyle = Field(default_factory=LogoGridStyle)
