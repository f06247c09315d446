"""Bloc statistiques — valeurs chiffrées avec barre de progression optionnelle."""
from typing import List, Literal

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing
from .base import Alignment, BaseBlock, CardStyle


class StatItem(StudioModel):
    id: str
    label: str = ""
    value: Number = 0
    max_value: Number = 100
    prefix: str = ""
    suffix: str = ""
    show_progress_bar: bool = False


class StatsStyle(CardStyle):
    border_radius: Number = 12
    alignment: Alignment = "center"
    padding: Spacing = Field(default_factory=lambda: spacing(32, 32, 32, 32))
    label_color: str = "#6b7280"
    label_size: Number = 14
    value_color: str = "#111827"
    value_size: Number = 36
    progress_bar_color: str = "#3b82f6"
    progress_bar_background_color: str = "#e5e7eb"
    progress_bar_height: Number = 8
    layout: Literal["horizontal", "vertical"] = "horizontal"
    item_spacing: Number = 24


class StatsBlock(BaseBlock):
    type: Literal["stats"] = "stats"
    items: List[StatItem] = Field(default_factory=list)
    style: StatsStyle = Field(default_factory=StatsStyle)
