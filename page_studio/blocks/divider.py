"""Bloc séparateur horizontal."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing, spacing
from .base import BaseBlock, BlockStyle

BorderLineStyle = Literal["solid", "dashed", "dotted"]


class DividerStyle(BlockStyle):
    width: str = "100%"
    height: Number = 1
    color: str = "#e5e7eb"
    style: BorderLineStyle = "solid"
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))


class DividerBlock(BaseBlock):
    type: Literal["divider"] = "divider"
    style: DividerStyle = Field(default_factory=DividerStyle)
