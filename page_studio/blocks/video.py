"""Bloc vidéo — YouTube, Vimeo, Instagram, TikTok ou fichier direct."""
from typing import Literal

from pydantic import Field

from .base import BaseBlock, BoxStyle

VideoSource = Literal["youtube", "vimeo", "instagram", "tiktok", "direct"]
VideoAspectRatio = Literal["16:9", "1:1", "4:3", "9:16", "auto"]


class VideoStyle(BoxStyle):
    aspect_ratio: VideoAspectRatio = "16:9"


class VideoBlock(BaseBlock):
    type: Literal["video"] = "video"
    url: str = ""
    source: VideoSource = "youtube"
    style: VideoStyle = Field(default_factory=VideoStyle)
