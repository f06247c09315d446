"""
Schéma produit e-commerce → Page native.

Mapping déterministe :
  hero         → section hero (média + titre + sous-titre + bouton #order)
  variants     → section « Choose Your Package »
  reviews      → section témoignages
  faq          → section FAQ (un bloc faq natif)
  upsell_page  → section CTA sur fond couleur primaire

Les couleurs/polices du `theme` étranger deviennent le style natif ; elles sont
stockées brutes et sanitizées au rendu comme toute autre valeur.
"""
import html
import logging
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..blocks import (
    ButtonBlock, ButtonStyle, FAQBlock, FAQItem, FAQStyle, ImageBlock, ImageStyle,
    TestimonialBlock, TestimonialStyle, TextBlock, TextStyle, VideoBlock, VideoStyle,
)
from ..config import get_settings
from ..core.ids import IdGenerator, default_ids
from ..core.sanitize import detect_video_source
from ..core.schemas import FlexProps, Page, Section, SectionStyle, Spacing, spacing

log = logging.getLogger(__name__)

DEFAULT_PAGE_NAME = "Imported Product Page"


# ── Schéma étranger ──────────────────────────────────────────────────────────

class _Foreign(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_empty(cls, data):
        """null ou "" → valeur par défaut du champ."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None and v != ""}
        return data


class ProductHero(_Foreign):
    headline: str = ""
    subheadline: str = ""
    cta_text: str = "Order Now"
    media_type: Literal["image", "video"] = "image"
    media_url: str = ""


class ProductVariant(_Foreign):
    id: Optional[str] = None
    label: str = ""
    price: float = 0


class ProductReview(_Foreign):
    author: str = ""
    text: str = ""


class ProductFAQ(_Foreign):
    q: str = ""
    a: str = ""


class UpsellPage(_Foreign):
    headline: str = ""
    subheadline: str = ""
    image_url: str = ""
    cta_yes: str = "Yes, add it"
    cta_no: str = "No thanks"


class ProductTheme(_Foreign):
    primary: str = "#3b82f6"
    bg: str = "#ffffff"
    text: str = "#000000"
    light_bg: str = "#f9fafb"
    font_heading: str = "Arial, sans-serif"
    font_body: str = "Arial, sans-serif"
    radius: Optional[str] = None


class ProductSchema(_Foreign):
    hero: Optional[ProductHero] = None
    variants: List[ProductVariant] = Field(default_factory=list)
    products: Optional[dict] = None
    upsell_page: Optional[UpsellPage] = None
    reviews: List[ProductReview] = Field(default_factory=list)
    faq: List[ProductFAQ] = Field(default_factory=list)
    theme: ProductTheme = Field(default_factory=ProductTheme)


# ── Helpers de construction ──────────────────────────────────────────────────

def format_price(price: float, currency: str) -> str:
    return f"{currency} {price:.2f}"


def _section(ids: IdGenerator, background: str, blocks: list, centered: bool = False,
             top: int = 64) -> Section:
    align = "center" if centered else "stretch"
    justify = "center" if centered else "flex-start"
    return Section(
        id=ids.new("section"),
        style=SectionStyle(
            background_color=background,
            padding=spacing(top, 16, top, 16),
            margin=Spacing(),
            flex=FlexProps(direction="column", align_items=align, justify_content=justify, wrap="nowrap"),
        ),
        blocks=blocks,
    )


def _text(ids: IdGenerator, content: str, font: str, size: int, color: str, weight: int = 400,
          font_style: str = "normal", background: str = "transparent",
          padding: Optional[Spacing] = None, margin: Optional[Spacing] = None) -> TextBlock:
    return TextBlock(
        id=ids.new("block"),
        content=content,
        style=TextStyle(
            font_family=font,
            font_size=size,
            font_weight=weight,
            font_style=font_style,
            color=color,
            background_color=background,
            text_align="center",
            padding=padding or spacing(0, 16, 16, 16),
            margin=margin or Spacing(),
        ),
    )


def _heading(ids: IdGenerator, content: str, theme: ProductTheme, margin_bottom: int = 24) -> TextBlock:
    return _text(ids, html.escape(content), theme.font_heading, 36, theme.text, weight=700,
                 padding=spacing(0, 16, 32, 16), margin=spacing(0, 0, margin_bottom, 0))


# ── Sections ─────────────────────────────────────────────────────────────────

def _hero_media(hero: ProductHero, ids: IdGenerator):
    if hero.media_type == "video":
        source = detect_video_source(hero.media_url) or "youtube"
        return VideoBlock(
            id=ids.new("block"),
            url=hero.media_url,
            source=source,
            style=VideoStyle(aspect_ratio="16:9", margin=spacing(0, 0, 32, 0)),
        )
    return ImageBlock(
        id=ids.new("block"),
        src=hero.media_url,
        alt=hero.headline,
        style=ImageStyle(border_radius=8, object_fit="cover", width="100%", height="auto",
                         margin=spacing(0, 0, 32, 0)),
    )


def hero_section(hero: ProductHero, theme: ProductTheme, ids: IdGenerator) -> Section:
    blocks = [
        _hero_media(hero, ids),
        _text(ids, html.escape(hero.headline), theme.font_heading, 48, theme.text, weight=800),
        _text(ids, html.escape(hero.subheadline), theme.font_body, 20, theme.text,
              padding=spacing(0, 16, 24, 16)),
        ButtonBlock(
            id=ids.new("block"),
            text=hero.cta_text,
            href="#order",
            target="_self",
            style=ButtonStyle(
                background_color=theme.primary,
                color="#ffffff",
                font_size=18,
                font_weight=600,
                font_family=theme.font_body,
                border_radius=8,
                layout="center",
                padding=spacing(16, 32, 16, 32),
                margin=Spacing(),
            ),
        ),
    ]
    return _section(ids, theme.bg, blocks, centered=True, top=80)


def variants_section(variants: List[ProductVariant], theme: ProductTheme, ids: IdGenerator,
                     currency: str) -> Section:
    blocks = [_heading(ids, "Choose Your Package", theme)]
    for variant in variants:
        content = f"<strong>{html.escape(variant.label)}</strong><br>{html.escape(format_price(variant.price, currency))}"
        blocks.append(_text(ids, content, theme.font_body, 18, theme.text, background=theme.light_bg,
                            padding=spacing(16, 24, 16, 24), margin=spacing(0, 8, 16, 8)))
    return _section(ids, theme.bg, blocks)


def reviews_section(reviews: List[ProductReview], theme: ProductTheme, ids: IdGenerator) -> Section:
    blocks = [_heading(ids, "What Our Customers Say", theme, margin_bottom=48)]
    for review in reviews:
        blocks.append(TestimonialBlock(
            id=ids.new("block"),
            quote=review.text,
            author_name=review.author,
            author_role="",
            rating=5,
            style=TestimonialStyle(
                background_color=theme.bg,
                text_color=theme.text,
                author_color=theme.text,
                font_family=theme.font_body,
                alignment="center",
                border_color=theme.light_bg,
            ),
        ))
    return _section(ids, theme.light_bg, blocks)


def faq_section(faq: List[ProductFAQ], theme: ProductTheme, ids: IdGenerator) -> Section:
    faq_block = FAQBlock(
        id=ids.new("block"),
        items=[FAQItem(id=ids.new("item"), question=item.q, answer=item.a) for item in faq],
        style=FAQStyle(
            font_size=16,
            font_weight=400,
            font_family=theme.font_body,
            question_color=theme.text,
            answer_color=theme.text,
            background_color="transparent",
            padding=Spacing(),
            margin=Spacing(),
        ),
    )
    return _section(ids, theme.bg, [_heading(ids, "Frequently Asked Questions", theme), faq_block])


def upsell_section(upsell: UpsellPage, theme: ProductTheme, ids: IdGenerator) -> Section:
    blocks = [
        _text(ids, html.escape(upsell.headline), theme.font_heading, 36, "#ffffff", weight=700),
        _text(ids, html.escape(upsell.subheadline), theme.font_body, 18, "#ffffff",
              padding=spacing(0, 16, 24, 16)),
    ]
    if upsell.image_url:
        blocks.append(ImageBlock(
            id=ids.new("block"),
            src=upsell.image_url,
            alt=upsell.headline,
            style=ImageStyle(border_radius=8, width="400px", height="auto", margin=spacing(0, 0, 24, 0)),
        ))
    blocks += [
        ButtonBlock(
            id=ids.new("block"),
            text=upsell.cta_yes,
            href="#add-upsell",
            style=ButtonStyle(
                background_color="#ffffff",
                color=theme.primary,
                font_size=18,
                font_family=theme.font_body,
                border_radius=8,
                layout="center",
                padding=spacing(16, 32, 16, 32),
            ),
        ),
        _text(ids, html.escape(upsell.cta_no), theme.font_body, 14, "#ffffff",
              padding=spacing(8, 16, 0, 16)),
    ]
    return _section(ids, theme.primary, blocks, centered=True)


# ── Point d'entrée ───────────────────────────────────────────────────────────

def convert_product_schema(data: dict, page_name: Optional[str] = None,
                           ids: Optional[IdGenerator] = None, currency: Optional[str] = None,
                           now: Optional[datetime] = None) -> Page:
    """
    Convertit un schéma produit en Page native.
    Lève pydantic.ValidationError si les champs connus ont un type invalide.
    """
    product = ProductSchema.model_validate(data)
    gen = ids or default_ids()
    theme = product.theme
    currency = currency or get_settings().currency

    sections = []
    if product.hero:
        sections.append(hero_section(product.hero, theme, gen))
    if product.variants:
        sections.append(variants_section(product.variants, theme, gen, currency))
    if product.reviews:
        sections.append(reviews_section(product.reviews, theme, gen))
    if product.faq:
        sections.append(faq_section(product.faq, theme, gen))
    if product.upsell_page:
        sections.append(upsell_section(product.upsell_page, theme, gen))

    stamp = (now or datetime.now(timezone.utc)).isoformat()
    log.info("Schéma produit converti : %d sections", len(sections))
    return Page(
        id=gen.new("page"),
        name=page_name or DEFAULT_PAGE_NAME,
        sections=sections,
        created_at=stamp,
        updated_at=stamp,
    )
