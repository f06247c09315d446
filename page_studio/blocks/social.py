"""Bloc réseaux sociaux — liste de liens par plateforme."""
from typing import List, Literal

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing
from .base import Alignment, BaseBlock, BlockStyle

SocialPlatform = Literal[
    "facebook", "twitter", "instagram", "linkedin", "youtube",
    "tiktok", "github", "pinterest", "whatsapp", "email",
]

# Couleurs de marque utilisées quand useBrandColors est actif
BRAND_COLORS = {
    "facebook": "#1877f2",
    "twitter": "#1da1f2",
    "instagram": "#e4405f",
    "linkedin": "#0a66c2",
    "youtube": "#ff0000",
    "tiktok": "#000000",
    "github": "#181717",
    "pinterest": "#bd081c",
    "whatsapp": "#25d366",
    "email": "#6b7280",
}


class SocialLink(StudioModel):
    platform: SocialPlatform
    url: str = ""


class SocialStyle(BlockStyle):
    size: Number = 32
    layout: Literal["horizontal", "vertical"] = "horizontal"
    alignment: Alignment = "center"
    spacing: Number = 16
    use_brand_colors: bool = True
    color: str = "#374151"
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))


class SocialBlock(BaseBlock):
    type: Literal["social"] = "social"
    links: List[SocialLink] = Field(default_factory=list)
    style: SocialStyle = Field(default_factory=SocialStyle)
