"""Bloc tarif — une offre, ses avantages et un bouton."""
from typing import List, Literal

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import Alignment, BaseBlock, CardStyle


class PricingStyle(CardStyle):
    border_radius: Number = 12
    alignment: Alignment = "center"
    padding: Spacing = Field(default_factory=lambda: spacing(32, 24, 32, 24))
    plan_name_color: str = "#111827"
    plan_name_size: Number = 24
    price_color: str = "#111827"
    price_size: Number = 48
    period_color: str = "#6b7280"
    period_size: Number = 16
    features_color: str = "#374151"
    features_size: Number = 14
    highlight_color: str = "#3b82f6"
    border_width: Number = 1
    border_color: str = "#e5e7eb"


class PricingBlock(BaseBlock):
    type: Literal["pricing"] = "pricing"
    plan_name: str = ""
    price: str = ""
    currency: str = "$"
    period: str = ""
    features: List[str] = Field(default_factory=list)
    button_text: str = ""
    button_link: str = "#"
    highlighted: bool = False
    style: PricingStyle = Field(default_factory=PricingStyle)
