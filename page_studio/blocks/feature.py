"""Bloc fonctionnalité — icône + titre + description."""
from typing import Literal

from pydantic import Field

from ..core.style import Number
from .base import BaseBlock, CardStyle


class FeatureStyle(CardStyle):
    icon_color: str = "#3b82f6"
    icon_size: Number = 48
    title_color: str = "#111827"
    title_size: Number = 20
    title_weight: Number = 600
    description_color: str = "#6b7280"
    description_size: Number = 14
    border_width: Number = 1
    border_color: str = "#e5e7eb"
    show_icon: bool = True


class FeatureBlock(BaseBlock):
    type: Literal["feature"] = "feature"
    icon_name: str = "Zap"
    title: str = ""
    description: str = ""
    style: FeatureStyle = Field(default_factory=FeatureStyle)
