"""
Factories — seule voie de création des sections et blocs.

Chaque factory pose un ID neuf (via le générateur injectable) et un style
entièrement renseigné. Les valeurs de contenu par défaut vivent ici.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from ..core.ids import IdGenerator, default_ids
from ..core.schemas import FlexProps, Page, Section, SectionStyle, spacing
from . import (
    AccordionBlock, AccordionItem, BaseBlock, ButtonBlock, CountdownBlock, DividerBlock,
    EmbedBlock, FAQBlock, FAQItem, FeatureBlock, FormBlock, FormField, GalleryBlock,
    GalleryImage, IconBlock, ImageBlock, LogoGridBlock, LogoItem, NewsletterBlock,
    PricingBlock, QuoteBlock, SocialBlock, SocialLink, SpaceBlock, StatItem, StatsBlock,
    TeamBlock, TestimonialBlock, TextBlock, VideoBlock,
)

SAMPLE_ANSWER = "This is a sample answer. Edit to add your own content."


def _ids(ids: Optional[IdGenerator]) -> IdGenerator:
    return ids or default_ids()


# ── Blocs ────────────────────────────────────────────────────────────────────

def create_default_text_block(ids: Optional[IdGenerator] = None) -> TextBlock:
    return TextBlock(id=_ids(ids).new("block"), content="Enter your text here")


def create_default_image_block(ids: Optional[IdGenerator] = None) -> ImageBlock:
    return ImageBlock(
        id=_ids(ids).new("block"),
        src="https://placehold.co/600x400/e2e8f0/64748b?text=Add+Your+Image",
        alt="Placeholder image",
    )


def create_default_video_block(ids: Optional[IdGenerator] = None) -> VideoBlock:
    return VideoBlock(id=_ids(ids).new("block"), url="", source="youtube")


def create_default_button_block(ids: Optional[IdGenerator] = None) -> ButtonBlock:
    return ButtonBlock(id=_ids(ids).new("block"), text="Click me", href="#", target="_self")


def create_default_countdown_block(ids: Optional[IdGenerator] = None,
                                   now: Optional[datetime] = None) -> CountdownBlock:
    """Cible par défaut : dans 7 jours."""
    target = (now or datetime.now(timezone.utc)) + timedelta(days=7)
    return CountdownBlock(
        id=_ids(ids).new("block"),
        target_date=target.isoformat(),
        label="Time remaining",
        display_format="dhms",
    )


def create_default_faq_block(ids: Optional[IdGenerator] = None) -> FAQBlock:
    gen = _ids(ids)
    return FAQBlock(
        id=gen.new("block"),
        items=[
            FAQItem(id=gen.new("item"), question="What is this product?", answer=SAMPLE_ANSWER),
            FAQItem(id=gen.new("item"), question="How does it work?", answer=SAMPLE_ANSWER),
        ],
    )


def create_default_space_block(ids: Optional[IdGenerator] = None) -> SpaceBlock:
    return SpaceBlock(id=_ids(ids).new("block"), height=40)


def create_default_divider_block(ids: Optional[IdGenerator] = None) -> DividerBlock:
    return DividerBlock(id=_ids(ids).new("block"))


def create_default_icon_block(ids: Optional[IdGenerator] = None) -> IconBlock:
    return IconBlock(id=_ids(ids).new("block"), icon_name="Heart")


def create_default_social_block(ids: Optional[IdGenerator] = None) -> SocialBlock:
    return SocialBlock(
        id=_ids(ids).new("block"),
        links=[
            SocialLink(platform="facebook", url="https://facebook.com"),
            SocialLink(platform="twitter", url="https://twitter.com"),
            SocialLink(platform="instagram", url="https://instagram.com"),
        ],
    )


def create_default_testimonial_block(ids: Optional[IdGenerator] = None) -> TestimonialBlock:
    return TestimonialBlock(
        id=_ids(ids).new("block"),
        quote="This product completely transformed my business! The results were beyond my expectations.",
        author_name="Jane Doe",
        author_role="CEO, Company Inc.",
        rating=5,
    )


def create_default_feature_block(ids: Optional[IdGenerator] = None) -> FeatureBlock:
    return FeatureBlock(
        id=_ids(ids).new("block"),
        icon_name="Zap",
        title="Amazing Feature",
        description="This feature will help you achieve your goals faster and more efficiently than ever before.",
    )


def create_default_pricing_block(ids: Optional[IdGenerator] = None) -> PricingBlock:
    return PricingBlock(
        id=_ids(ids).new("block"),
        plan_name="Pro Plan",
        price="29",
        currency="$",
        period="/ month",
        features=[
            "Unlimited projects",
            "Priority support",
            "Advanced analytics",
            "Custom domain",
            "Team collaboration",
        ],
        button_text="Get Started",
        button_link="#",
    )


def create_default_form_block(ids: Optional[IdGenerator] = None) -> FormBlock:
    gen = _ids(ids)
    return FormBlock(
        id=gen.new("block"),
        title="Get in Touch",
        description="Fill out the form below and we'll get back to you soon.",
        fields=[
            FormField(id=gen.new("item"), type="text", label="Name",
                      placeholder="Enter your name", required=True),
            FormField(id=gen.new("item"), type="email", label="Email",
                      placeholder="your@email.com", required=True),
            FormField(id=gen.new("item"), type="textarea", label="Message",
                      placeholder="Tell us more...", required=False),
        ],
        submit_button_text="Submit",
        success_message="Thank you! Your message has been sent.",
    )


def create_default_accordion_block(ids: Optional[IdGenerator] = None) -> AccordionBlock:
    gen = _ids(ids)
    items = [
        ("What is your refund policy?",
         "We offer a 30-day money-back guarantee for all purchases."),
        ("How long does shipping take?",
         "Standard shipping typically takes 5-7 business days."),
        ("Do you offer customer support?",
         "Yes! Our customer support team is available 24/7 via email and live chat."),
    ]
    return AccordionBlock(
        id=gen.new("block"),
        items=[AccordionItem(id=gen.new("item"), title=t, content=c) for t, c in items],
        default_expanded_index=0,
    )


def create_default_quote_block(ids: Optional[IdGenerator] = None) -> QuoteBlock:
    return QuoteBlock(
        id=_ids(ids).new("block"),
        quote="Success is not final, failure is not fatal: it is the courage to continue that counts.",
        author="Winston Churchill",
        author_title="Former Prime Minister of the United Kingdom",
    )


def create_default_stats_block(ids: Optional[IdGenerator] = None) -> StatsBlock:
    gen = _ids(ids)
    return StatsBlock(
        id=gen.new("block"),
        items=[
            StatItem(id=gen.new("item"), label="Projects Completed", value=250,
                     max_value=300, suffix="+", show_progress_bar=True),
            StatItem(id=gen.new("item"), label="Client Satisfaction", value=98,
                     max_value=100, suffix="%", show_progress_bar=True),
            StatItem(id=gen.new("item"), label="Years Experience", value=15,
                     max_value=15, suffix="+", show_progress_bar=False),
        ],
    )


def create_default_team_block(ids: Optional[IdGenerator] = None) -> TeamBlock:
    return TeamBlock(
        id=_ids(ids).new("block"),
        name="Jane Doe",
        role="CEO & Founder",
        bio="Passionate about building innovative solutions and leading teams to success.",
        image_url="https://placehold.co/400x400/e2e8f0/64748b?text=Photo",
        social_links=[
            SocialLink(platform="twitter", url="https://twitter.com"),
            SocialLink(platform="linkedin", url="https://linkedin.com"),
        ],
    )


def create_default_gallery_block(ids: Optional[IdGenerator] = None) -> GalleryBlock:
    gen = _ids(ids)
    images = [
        ("Mountain landscape", "Beautiful mountain landscape"),
        ("Forest path", "Peaceful forest path"),
        ("Ocean waves", "Ocean waves at sunset"),
    ]
    return GalleryBlock(
        id=gen.new("block"),
        images=[
            GalleryImage(
                id=gen.new("item"),
                url=f"https://placehold.co/800x600/e2e8f0/64748b?text=Image+{i}",
                alt=alt,
                caption=caption,
            )
            for i, (alt, caption) in enumerate(images, start=1)
        ],
    )


def create_default_logo_grid_block(ids: Optional[IdGenerator] = None) -> LogoGridBlock:
    gen = _ids(ids)
    return LogoGridBlock(
        id=gen.new("block"),
        logos=[
            LogoItem(
                id=gen.new("item"),
                image_url=f"https://placehold.co/200x100/e2e8f0/64748b?text=Logo+{i}",
                alt=f"Company Logo {i}",
                link="https://example.com",
                target="_blank",
            )
            for i in range(1, 7)
        ],
    )


def create_default_embed_block(ids: Optional[IdGenerator] = None) -> EmbedBlock:
    return EmbedBlock(id=_ids(ids).new("block"), embed_url="", embed_type="map")


def create_default_newsletter_block(ids: Optional[IdGenerator] = None) -> NewsletterBlock:
    return NewsletterBlock(
        id=_ids(ids).new("block"),
        heading="Subscribe to Our Newsletter",
        description="Get the latest updates and exclusive offers delivered to your inbox",
        input_placeholder="Enter your email",
        button_text="Subscribe",
        success_message="Thanks for subscribing!",
        privacy_text="I agree to receive marketing emails and accept the privacy policy",
    )


BLOCK_FACTORIES: Dict[str, Callable[..., BaseBlock]] = {
    "text": create_default_text_block,
    "image": create_default_image_block,
    "video": create_default_video_block,
    "button": create_default_button_block,
    "countdown": create_default_countdown_block,
    "faq": create_default_faq_block,
    "space": create_default_space_block,
    "divider": create_default_divider_block,
    "icon": create_default_icon_block,
    "social": create_default_social_block,
    "testimonial": create_default_testimonial_block,
    "feature": create_default_feature_block,
    "pricing": create_default_pricing_block,
    "form": create_default_form_block,
    "accordion": create_default_accordion_block,
    "quote": create_default_quote_block,
    "stats": create_default_stats_block,
    "team": create_default_team_block,
    "gallery": create_default_gallery_block,
    "logo-grid": create_default_logo_grid_block,
    "embed": create_default_embed_block,
    "newsletter": create_default_newsletter_block,
}


def create_block(block_type: str, ids: Optional[IdGenerator] = None) -> BaseBlock:
    """Bloc par défaut du type demandé. ValueError si le type est inconnu."""
    factory = BLOCK_FACTORIES.get(block_type)
    if factory is None:
        raise ValueError(f"Type de bloc inconnu : {block_type}")
    return factory(ids)


# ── Sections / page ──────────────────────────────────────────────────────────

def create_section(ids: Optional[IdGenerator] = None, with_text: bool = False) -> Section:
    """Section flex en colonne, style par défaut. `with_text` : ajoute un bloc texte."""
    gen = _ids(ids)
    section = Section(id=gen.new("section"), layout="flex", style=SectionStyle())
    if with_text:
        section.blocks.append(create_default_text_block(gen))
    return section


def _column_section(columns: int, ids: Optional[IdGenerator]) -> Section:
    gen = _ids(ids)
    style = SectionStyle(
        flex=FlexProps(direction="row", align_items="stretch", justify_content="flex-start", wrap="wrap"),
        column_gap=24,
        row_gap=24,
        padding=spacing(32, 16, 32, 16),
    )
    return Section(
        id=gen.new("section"),
        layout="grid",
        columns=columns,
        style=style,
        blocks=[create_default_text_block(gen) for _ in range(columns)],
    )


def create_two_column_section(ids: Optional[IdGenerator] = None) -> Section:
    return _column_section(2, ids)


def create_three_column_section(ids: Optional[IdGenerator] = None) -> Section:
    return _column_section(3, ids)


def create_page(name: str = "Untitled Page", ids: Optional[IdGenerator] = None,
                now: Optional[datetime] = None) -> Page:
    """Page neuve : une section par défaut contenant un bloc texte."""
    gen = _ids(ids)
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return Page(
        id=gen.new("page"),
        name=name,
        sections=[create_section(gen, with_text=True)],
        created_at=stamp,
        updated_at=stamp,
    )
