"""
Bloc galerie — liste d'images.

La position du carrousel est un état d'affichage : seule la liste des images,
les options de lecture et le style sont persistés.
"""
from typing import List, Literal, Optional

from pydantic import Field

from ..core.style import Number, Spacing, StudioModel, spacing
from .base import DEFAULT_FONT, BaseBlock, BoxStyle
from .image import ObjectFit


class GalleryImage(StudioModel):
    id: str
    url: str = ""
    alt: str = ""
    caption: Optional[str] = None


class GalleryStyle(BoxStyle):
    aspect_ratio: Literal["16:9", "4:3", "1:1", "21:9"] = "16:9"
    border_radius: Number = 8
    margin: Spacing = Field(default_factory=lambda: spacing(16, 0, 16, 0))
    image_object_fit: ObjectFit = "cover"
    show_thumbnails: bool = False
    thumbnail_size: Number = 80
    show_captions: bool = True
    caption_color: str = "#ffffff"
    caption_size: Number = 14
    caption_background_color: str = "#111827"
    nav_button_color: str = "#ffffff"
    nav_button_background_color: str = "#374151"
    dot_color: str = "#d1d5db"
    dot_active_color: str = "#ffffff"
    font_family: str = DEFAULT_FONT


class GalleryBlock(BaseBlock):
    type: Literal["gallery"] = "gallery"
    images: List[GalleryImage] = Field(default_factory=list)
    auto_play: bool = False
    auto_play_interval: int = 3000
    show_nav_buttons: bool = True
    show_dots: bool = True
    loop: bool = True
    style: GalleryStyle = Field(default_factory=GalleryStyle)
