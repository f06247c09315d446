"""
Blocs — exports publics + BlockUnion discriminé par `type`.

Les factories (page_studio.blocks.factories) ne sont pas importées ici :
elles dépendent de core.schemas, qui dépend lui-même de BlockUnion.
"""
from typing import Annotated, Dict, Type, Union

from pydantic import Field

from .base import BaseBlock, BlockStyle, BoxStyle, CardStyle
from .text import TextBlock, TextStyle
from .image import ImageBlock, ImageStyle
from .video import VideoBlock, VideoStyle
from .button import ButtonBlock, ButtonStyle
from .countdown import CountdownBlock, CountdownStyle
from .faq import FAQBlock, FAQItem, FAQStyle
from .space import SpaceBlock, SpaceStyle
from .divider import DividerBlock, DividerStyle
from .icon import IconBlock, IconStyle
from .social import BRAND_COLORS, SocialBlock, SocialLink, SocialStyle
from .testimonial import TestimonialBlock, TestimonialStyle
from .feature import FeatureBlock, FeatureStyle
from .pricing import PricingBlock, PricingStyle
from .form import FormBlock, FormField, FormStyle
from .accordion import AccordionBlock, AccordionItem, AccordionStyle
from .quote import QuoteBlock, QuoteStyle
from .stats import StatItem, StatsBlock, StatsStyle
from .team import TeamBlock, TeamStyle
from .gallery import GalleryBlock, GalleryImage, GalleryStyle
from .logo_grid import LogoGridBlock, LogoGridStyle, LogoItem
from .embed import EmbedBlock, EmbedBorder, EmbedStyle
from .newsletter import NewsletterBlock, NewsletterStyle

# Union fermée : ajouter une variante = l'ajouter ici ET dans renderer.html
BlockUnion = Annotated[
    Union[
        TextBlock,
        ImageBlock,
        VideoBlock,
        ButtonBlock,
        CountdownBlock,
        FAQBlock,
        SpaceBlock,
        DividerBlock,
        IconBlock,
        SocialBlock,
        TestimonialBlock,
        FeatureBlock,
        PricingBlock,
        FormBlock,
        AccordionBlock,
        QuoteBlock,
        StatsBlock,
        TeamBlock,
        GalleryBlock,
        LogoGridBlock,
        EmbedBlock,
        NewsletterBlock,
    ],
    Field(discriminator="type"),
]

BLOCK_REGISTRY: Dict[str, Type[BaseBlock]] = {
    "text": TextBlock,
    "image": ImageBlock,
    "video": VideoBlock,
    "button": ButtonBlock,
    "countdown": CountdownBlock,
    "faq": FAQBlock,
    "space": SpaceBlock,
    "divider": DividerBlock,
    "icon": IconBlock,
    "social": SocialBlock,
    "testimonial": TestimonialBlock,
    "feature": FeatureBlock,
    "pricing": PricingBlock,
    "form": FormBlock,
    "accordion": AccordionBlock,
    "quote": QuoteBlock,
    "stats": StatsBlock,
    "team": TeamBlock,
    "gallery": GalleryBlock,
    "logo-grid": LogoGridBlock,
    "embed": EmbedBlock,
    "newsletter": NewsletterBlock,
}

BLOCK_TYPES = tuple(BLOCK_REGISTRY)

__all__ = [
    # Base
    "BaseBlock", "BlockStyle", "BoxStyle", "CardStyle",
    # Contenu
    "TextBlock", "TextStyle",
    "ImageBlock", "ImageStyle",
    "VideoBlock", "VideoStyle",
    "ButtonBlock", "ButtonStyle",
    "CountdownBlock", "CountdownStyle",
    "FAQBlock", "FAQItem", "FAQStyle",
    "SpaceBlock", "SpaceStyle",
    "DividerBlock", "DividerStyle",
    "IconBlock", "IconStyle",
    "SocialBlock", "SocialLink", "SocialStyle", "BRAND_COLORS",
    # Marketing
    "TestimonialBlock", "TestimonialStyle",
    "FeatureBlock", "FeatureStyle",
    "PricingBlock", "PricingStyle",
    "FormBlock", "FormField", "FormStyle",
    "AccordionBlock", "AccordionItem", "AccordionStyle",
    "QuoteBlock", "QuoteStyle",
    "StatsBlock", "StatItem", "StatsStyle",
    "TeamBlock", "TeamStyle",
    "GalleryBlock", "GalleryImage", "GalleryStyle",
    "LogoGridBlock", "LogoItem", "LogoGridStyle",
    "EmbedBlock", "EmbedBorder", "EmbedStyle",
    "NewsletterBlock", "NewsletterStyle",
    # Union
    "BlockUnion", "BLOCK_REGISTRY", "BLOCK_TYPES",
]
