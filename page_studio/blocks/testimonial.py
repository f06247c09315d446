"""Bloc témoignage — citation client + auteur + note."""
from typing import Literal, Optional

from pydantic import Field

from ..core.style import Number
from .base import BaseBlock, CardStyle


class TestimonialStyle(CardStyle):
    background_color: str = "#f9fafb"
    text_color: str = "#1f2937"
    author_color: str = "#111827"
    role_color: str = "#6b7280"
    font_size: Number = 16
    show_rating: bool = True
    rating_color: str = "#fbbf24"
    border_width: Number = 1
    border_color: str = "#e5e7eb"


class TestimonialBlock(BaseBlock):
    type: Literal["testimonial"] = "testimonial"
    quote: str = ""
    author_name: str = ""
    author_role: str = ""
    author_image: Optional[str] = None
    rating: int = Field(default=5, ge=0, le=5)
    style: TestimonialStyle = Field(default_factory=TestimonialStyle)
