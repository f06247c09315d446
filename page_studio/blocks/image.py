"""Bloc image."""
from typing import Literal, Optional

from pydantic import Field

from ..core.style import Number
from .base import BaseBlock, BoxStyle

ObjectFit = Literal["cover", "contain", "fill", "none", "scale-down"]


class ImageStyle(BoxStyle):
    border_radius: Number = 0
    object_fit: ObjectFit = "cover"
    width: str = "100%"
    height: str = "auto"


class ImageBlock(BaseBlock):
    type: Literal["image"] = "image"
    src: str = ""
    alt: Optional[str] = None
    style: ImageStyle = Field(default_factory=ImageStyle)
