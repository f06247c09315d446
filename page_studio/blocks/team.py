"""Bloc membre d'équipe."""
from typing import List, Literal

from pydantic import Field

from ..core.style import Number
from .base import Alignment, BaseBlock, CardStyle
from .social import SocialLink


class TeamStyle(CardStyle):
    border_radius: Number = 12
    alignment: Alignment = "center"
    image_size: Number = 120
    image_border_radius: Number = 60
    name_color: str = "#111827"
    name_size: Number = 24
    role_color: str = "#6b7280"
    role_size: Number = 16
    bio_color: str = "#9ca3af"
    bio_size: Number = 14
    card_background_color: str = "#f9fafb"
    card_border_color: str = "#e5e7eb"
    card_border_width: Number = 1


class TeamBlock(BaseBlock):
    type: Literal["team"] = "team"
    name: str = ""
    role: str = ""
    bio: str = ""
    image_url: str = ""
    social_links: List[SocialLink] = Field(default_factory=list)
    style: TeamStyle = Field(default_factory=TeamStyle)
