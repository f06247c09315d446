"""Bloc espace vertical."""
from typing import Literal

from pydantic import Field

from ..core.style import Number, Spacing
from .base import BaseBlock, BlockStyle


class SpaceStyle(BlockStyle):
    background_color: str = "transparent"
    margin: Spacing = Field(default_factory=Spacing)


class SpaceBlock(BaseBlock):
    type: Literal["space"] = "space"
    height: Number = 40
    style: SpaceStyle = Field(default_factory=SpaceStyle)
