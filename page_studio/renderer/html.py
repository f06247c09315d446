"""
Renderer HTML — génère le document exporté (autonome, sans script) ou l'aperçu éditable.

Discipline commune à chaque sous-renderer :
  1. chaque chaîne passe par core.sanitize selon sa classe (URL, couleur, police, HTML, texte)
  2. le style du bloc est traduit en CSS inline (renderer.css)
  3. contenu requis absent ou refusé → placeholder déterministe, jamais d'exception
"""
import logging
import re
from datetime import datetime, timezone
from typing import Callable, Dict, NamedTuple, Optional, Sequence, Type

from ..blocks import (
    BLOCK_REGISTRY, BRAND_COLORS, AccordionBlock, BaseBlock, ButtonBlock, CountdownBlock,
    DividerBlock, EmbedBlock, FAQBlock, FeatureBlock, FormBlock, GalleryBlock, IconBlock,
    ImageBlock, LogoGridBlock, NewsletterBlock, PricingBlock, QuoteBlock, SocialBlock,
    SpaceBlock, StatsBlock, TeamBlock, TestimonialBlock, TextBlock, VideoBlock,
)
from ..config import get_settings
from ..core.sanitize import (
    IFRAME_ALLOW, IFRAME_REFERRER_POLICY, IFRAME_SANDBOX, VIDEO_SOURCES, escape_attr,
    format_number, get_safe_embed_url, get_safe_iframe_url, sanitize_attr, sanitize_color,
    sanitize_font_family, sanitize_html, sanitize_image_url, sanitize_number, sanitize_text,
    sanitize_url,
)
from ..core.schemas import Page, Section
from .css import (
    CSS_RESET, FONT_STYLES, OBJECT_FITS, TEXT_ALIGNS, border, box, build_csp,
    color, font, keyword, length, num, px, section_declarations, spacing_to_css, style_attr,
)

log = logging.getLogger(__name__)


class RenderContext(NamedTuple):
    """Paramètres de rendu : horloge (countdown), hôtes embed en plus, mode aperçu."""
    now: Optional[datetime] = None
    extra_hosts: Sequence[str] = ()
    preview: bool = False


PLACEHOLDER_CSS = [("background", "#f3f4f6"), ("padding", "2rem"), ("text-align", "center"), ("color", "#6b7280")]

VIDEO_ASPECT_RATIOS = {"16:9": "56.25%", "1:1": "100%", "4:3": "75%", "9:16": "177.78%", "auto": "56.25%"}
EMBED_ASPECT_RATIOS = {"16:9": "56.25%", "4:3": "75%", "1:1": "100%", "21:9": "42.86%"}
GALLERY_ASPECT_RATIOS = {"16:9": "16 / 9", "4:3": "4 / 3", "1:1": "1 / 1", "21:9": "21 / 9"}
ALIGN_TO_JUSTIFY = {"left": "flex-start", "center": "center", "right": "flex-end"}

# Icônes exportées en glyphes Unicode (pas de police d'icônes ni de script côté export)
ICON_GLYPHS = {
    "heart": "♥", "star": "★", "check": "✓", "zap": "⚡", "mail": "✉", "phone": "☎",
    "clock": "◷", "sun": "☀", "cloud": "☁", "music": "♪", "flag": "⚑", "gift": "🎁",
    "shield": "🛡", "rocket": "🚀", "globe": "🌐", "lock": "🔒", "user": "👤", "home": "⌂",
    "arrowright": "→", "arrowleft": "←", "play": "▶", "camera": "📷", "truck": "🚚",
}
DEFAULT_GLYPH = "●"

_COMMENT_SAFE_RE = re.compile(r"[^a-z0-9_-]")


def placeholder(message: str, wrapper: Optional[list] = None) -> str:
    """Bloc de remplacement déterministe (contenu requis absent ou refusé)."""
    inner = f"<div{style_attr(PLACEHOLDER_CSS)}>{sanitize_text(message)}</div>"
    return f"<div{style_attr(wrapper or [])}>{inner}</div>"


def glyph(icon_name: str) -> str:
    key = (icon_name or "").replace("-", "").replace("_", "").lower()
    return ICON_GLYPHS.get(key, DEFAULT_GLYPH)


def _target_attrs(target: str) -> str:
    if target == "_blank":
        return ' target="_blank" rel="noopener noreferrer"'
    return ' target="_self"'


# ── Blocs de contenu ─────────────────────────────────────────────────────────

def render_text_block(b: TextBlock, ctx: RenderContext) -> str:
    s = b.style
    css = [
        *font(s),
        keyword("font-style", s.font_style, FONT_STYLES, "normal"),
        color("color", s.color),
        color("background-color", s.background_color),
        keyword("text-align", s.text_align, TEXT_ALIGNS, "left"),
        *box(s),
    ]
    return f"<div{style_attr(css)}>{sanitize_html(b.content)}</div>"


def render_image_block(b: ImageBlock, ctx: RenderContext) -> str:
    s = b.style
    src = sanitize_image_url(b.src)
    if not src:
        return placeholder("Invalid image URL", box(s))

    img_css = [
        ("border-radius", px(s.border_radius, minimum=0)),
        keyword("object-fit", s.object_fit, OBJECT_FITS, "cover"),
        length("width", s.width),
        length("height", s.height),
        "max-width: 100%",
    ]
    return (f"<div{style_attr(box(s))}>"
            f'<img src="{escape_attr(src)}" alt="{sanitize_attr(b.alt or "")}" loading="lazy"{style_attr(img_css)}>'
            f"</div>")


def _responsive_frame(src: str, ratio: str, title: str, allow_fullscreen: bool = True,
                      height: Optional[str] = None) -> str:
    """iframe sandboxée dans un conteneur à ratio fixe (ou à hauteur fixe)."""
    if height:
        outer = [("position", "relative"), ("width", "100%"), ("height", height)]
    else:
        outer = [("position", "relative"), ("padding-bottom", ratio), ("height", "0"), ("overflow", "hidden")]
    frame_css = "position: absolute; top: 0; left: 0; width: 100%; height: 100%; border: none;"
    fullscreen = " allowfullscreen" if allow_fullscreen else ""
    return (f"<div{style_attr(outer)}>"
            f'<iframe src="{escape_attr(src)}" title="{sanitize_attr(title)}" style="{frame_css}" '
            f'sandbox="{IFRAME_SANDBOX}" allow="{IFRAME_ALLOW}" referrerpolicy="{IFRAME_REFERRER_POLICY}" '
            f'loading="lazy"{fullscreen}></iframe>'
            f"</div>")


def render_video_block(b: VideoBlock, ctx: RenderContext) -> str:
    s = b.style
    safe = get_safe_embed_url(b.url, b.source) if b.source in VIDEO_SOURCES else None
    if not safe:
        return placeholder("Invalid or unsafe video URL", box(s))

    ratio = VIDEO_ASPECT_RATIOS.get(s.aspect_ratio, "56.25%")
    if b.source == "direct":
        video_css = [("width", "100%"), ("display", "block")]
        return (f"<div{style_attr(box(s))}>"
                f'<video src="{escape_attr(safe)}" controls playsinline preload="metadata"{style_attr(video_css)}></video>'
                f"</div>")
    return f"<div{style_attr(box(s))}>{_responsive_frame(safe, ratio, f'{b.source} video')}</div>"


def render_button_block(b: ButtonBlock, ctx: RenderContext) -> str:
    s = b.style
    href = sanitize_url(b.href) or "#"
    layout = {
        "inline": ["display: inline-block"],
        "center": ["display: inline-block"],
        "full-width": ["display: block", "width: 100%", "text-align: center"],
    }.get(s.layout, ["display: inline-block"])
    wrapper = [spacing_to_css(s.margin, "margin")]
    if s.layout == "center":
        wrapper.append("text-align: center")
    css = [
        *layout,
        color("background-color", s.background_color),
        color("color", s.color),
        *font(s),
        ("border-radius", px(s.border_radius, minimum=0)),
        spacing_to_css(s.padding, "padding"),
        "text-decoration: none",
        "cursor: pointer",
    ]
    return (f"<div{style_attr(wrapper)}>"
            f'<a href="{escape_attr(href)}"{_target_attrs(b.target)}{style_attr(css)}>{sanitize_text(b.text)}</a>'
            f"</div>")


def _parse_date(value: str) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def countdown_display(target: datetime, now: datetime, display_format: str) -> str:
    """Temps restant figé au moment de l'export (l'export n'exécute aucun script)."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    remaining = max(0, int((target - now).total_seconds()))
    days, rest = divmod(remaining, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    if display_format == "dhms":
        return f"{days}d {hours}h {minutes}m {seconds}s"
    if display_format == "hms":
        return f"{hours + days * 24}h {minutes}m {seconds}s"
    return f"{minutes + (hours + days * 24) * 60}m {seconds}s"


def render_countdown_block(b: CountdownBlock, ctx: RenderContext) -> str:
    s = b.style
    target = _parse_date(b.target_date)
    if target is None:
        return placeholder("Invalid countdown date", box(s))

    display = countdown_display(target, ctx.now or datetime.now(timezone.utc), b.display_format)
    css = [
        *font(s),
        color("color", s.color),
        color("background-color", s.background_color),
        *box(s),
        "text-align: center",
    ]
    label = ""
    if b.label:
        label = f'<div{style_attr([color("color", s.label_color), "margin-bottom: 8px"])}>{sanitize_text(b.label)}</div>'
    value_css = [("font-size", px(sanitize_number(s.font_size, 16) * 1.5)), "font-weight: 700"]
    return f"<div{style_attr(css)}>{label}<div{style_attr(value_css)}>{display}</div></div>"


def render_faq_block(b: FAQBlock, ctx: RenderContext) -> str:
    s = b.style
    question_css = [*font(s), color("color", s.question_color), "cursor: pointer", "list-style: none"]
    answer_css = ["margin-top: 12px", *font(s, weight_field=None), color("color", s.answer_color)]
    items = "".join(
        f'<details{style_attr(["margin-bottom: 12px", "border: 1px solid #e5e7eb", "border-radius: 8px", "padding: 16px"])}>'
        f"<summary{style_attr(question_css)}>{sanitize_html(item.question)}</summary>"
        f"<div{style_attr(answer_css)}>{sanitize_html(item.answer)}</div>"
        f"</details>"
        for item in b.items
    )
    return f"<div{style_attr([color('background-color', s.background_color), *box(s)])}>{items}</div>"


def render_space_block(b: SpaceBlock, ctx: RenderContext) -> str:
    s = b.style
    css = [("height", px(b.height, default=40, minimum=0)), color("background-color", s.background_color), *box(s)]
    return f'<div aria-hidden="true"{style_attr(css)}></div>'


def render_divider_block(b: DividerBlock, ctx: RenderContext) -> str:
    s = b.style
    css = [
        "border: none",
        border(s.height, s.color, s.style, side="border-top"),
        length("width", s.width),
        *box(s),
    ]
    return f"<hr{style_attr(css)}>"


def render_icon_block(b: IconBlock, ctx: RenderContext) -> str:
    s = b.style
    icon_css = [("font-size", px(s.size, default=48, minimum=0)), color("color", s.color), "line-height: 1"]
    icon = f'<span role="img" aria-label="{sanitize_attr(b.icon_name)}"{style_attr(icon_css)}>{glyph(b.icon_name)}</span>'
    href = sanitize_url(b.href) if b.href else None
    if href:
        icon = f'<a href="{escape_attr(href)}"{_target_attrs(b.target)} style="text-decoration: none;">{icon}</a>'
    wrapper = [keyword("text-align", s.alignment, TEXT_ALIGNS, "center"), *box(s)]
    return f"<div{style_attr(wrapper)}>{icon}</div>"


def _social_links(links, size, use_brand_colors: bool, fallback_color: str) -> list:
    rendered = []
    for link in links:
        href = sanitize_url(link.url)
        if not href:
            continue
        bg = BRAND_COLORS.get(link.platform, "#6b7280") if use_brand_colors else sanitize_color(fallback_color)
        css = [
            "display: inline-flex", "align-items: center", "justify-content: center",
            ("width", px(size, default=32, minimum=0)), ("height", px(size, default=32, minimum=0)),
            "border-radius: 50%", ("background-color", bg), "color: #ffffff",
            "text-decoration: none", "font-weight: 700",
        ]
        rendered.append(
            f'<a href="{escape_attr(href)}" target="_blank" rel="noopener noreferrer" '
            f'aria-label="{sanitize_attr(link.platform)}"{style_attr(css)}>{link.platform[:1].upper()}</a>'
        )
    return rendered


def render_social_block(b: SocialBlock, ctx: RenderContext) -> str:
    s = b.style
    links = _social_links(b.links, s.size, s.use_brand_colors, s.color)
    css = [
        "display: flex",
        ("flex-direction", "column" if s.layout == "vertical" else "row"),
        ("justify-content" if s.layout == "horizontal" else "align-items", ALIGN_TO_JUSTIFY.get(s.alignment, "center")),
        ("gap", px(s.spacing, minimum=0)),
        *box(s),
    ]
    return f"<div{style_attr(css)}>{''.join(links)}</div>"


# ── Blocs marketing ──────────────────────────────────────────────────────────

def _card(s, *extra) -> list:
    return [
        color("background-color", s.background_color),
        ("border-radius", px(s.border_radius, minimum=0)),
        ("font-family", sanitize_font_family(s.font_family)),
        keyword("text-align", s.alignment, TEXT_ALIGNS, "left"),
        *extra,
        *box(s),
    ]


def render_testimonial_block(b: TestimonialBlock, ctx: RenderContext) -> str:
    s = b.style
    rating = ""
    if s.show_rating:
        stars = max(0, min(5, b.rating))
        rating = (f'<div aria-label="{stars} / 5"{style_attr([color("color", s.rating_color), "margin-bottom: 12px"])}>'
                  f"{'★' * stars}{'☆' * (5 - stars)}</div>")

    photo = ""
    image = sanitize_image_url(b.author_image) if b.author_image else None
    if image:
        photo_css = ["width: 48px", "height: 48px", "border-radius: 50%", "object-fit: cover", "display: inline-block"]
        photo = f'<img src="{escape_attr(image)}" alt="{sanitize_attr(b.author_name)}"{style_attr(photo_css)}>'

    role = f'<div{style_attr([color("color", s.role_color), "font-size: 14px"])}>{sanitize_text(b.author_role)}</div>' if b.author_role else ""
    quote_css = [color("color", s.text_color), ("font-size", px(s.font_size, default=16)), "margin-bottom: 16px"]
    return (f"<div{style_attr(_card(s, border(s.border_width, s.border_color)))}>"
            f"{rating}"
            f"<blockquote{style_attr(quote_css)}>{sanitize_text(b.quote)}</blockquote>"
            f"{photo}"
            f'<div{style_attr([color("color", s.author_color), "font-weight: 600"])}>{sanitize_text(b.author_name)}</div>'
            f"{role}"
            f"</div>")


def render_feature_block(b: FeatureBlock, ctx: RenderContext) -> str:
    s = b.style
    icon = ""
    if s.show_icon:
        icon_css = [("font-size", px(s.icon_size, default=48)), color("color", s.icon_color), "line-height: 1", "margin-bottom: 16px"]
        icon = f'<div role="img" aria-label="{sanitize_attr(b.icon_name)}"{style_attr(icon_css)}>{glyph(b.icon_name)}</div>'
    title_css = [color("color", s.title_color), ("font-size", px(s.title_size, default=20)),
                 ("font-weight", num(s.title_weight, 600, 100, 900)), "margin-bottom: 8px"]
    desc_css = [color("color", s.description_color), ("font-size", px(s.description_size, default=14))]
    return (f"<div{style_attr(_card(s, border(s.border_width, s.border_color)))}>"
            f"{icon}"
            f"<h3{style_attr(title_css)}>{sanitize_text(b.title)}</h3>"
            f"<p{style_attr(desc_css)}>{sanitize_text(b.description)}</p>"
            f"</div>")


def render_pricing_block(b: PricingBlock, ctx: RenderContext) -> str:
    s = b.style
    accent = sanitize_color(s.highlight_color)
    frame = border(2, s.highlight_color) if b.highlighted else border(s.border_width, s.border_color)
    badge = ""
    if b.highlighted:
        badge_css = ["display: inline-block", ("background-color", accent), "color: #ffffff",
                     "font-size: 12px", "font-weight: 700", "padding: 4px 12px", "border-radius: 9999px", "margin-bottom: 12px"]
        badge = f"<div{style_attr(badge_css)}>Most Popular</div>"

    features = "".join(
        f"<li{style_attr(['margin-bottom: 8px'])}>✓ {sanitize_text(feature)}</li>" for feature in b.features
    )
    button_css = ["display: block", ("background-color", accent), "color: #ffffff", "padding: 12px 24px",
                  "border-radius: 6px", "text-decoration: none", "font-weight: 600", "margin-top: 24px", "text-align: center"]
    return (f"<div{style_attr(_card(s, frame))}>"
            f"{badge}"
            f'<h3{style_attr([color("color", s.plan_name_color), ("font-size", px(s.plan_name_size, default=24))])}>{sanitize_text(b.plan_name)}</h3>'
            f'<div{style_attr(["margin: 16px 0"])}>'
            f'<span{style_attr([color("color", s.price_color), ("font-size", px(s.price_size, default=48)), "font-weight: 800"])}>'
            f"{sanitize_text(b.currency)}{sanitize_text(b.price)}</span>"
            f'<span{style_attr([color("color", s.period_color), ("font-size", px(s.period_size, default=16))])}> {sanitize_text(b.period)}</span>'
            f"</div>"
            f'<ul{style_attr(["list-style: none", color("color", s.features_color), ("font-size", px(s.features_size, default=14))])}>{features}</ul>'
            f'<a href="{escape_attr(sanitize_url(b.button_link) or "#")}"{style_attr(button_css)}>{sanitize_text(b.button_text)}</a>'
            f"</div>")


def _form_field(field, s) -> str:
    field_id = sanitize_attr(field.id)
    required = " required" if field.required else ""
    label_css = ["display: block", color("color", s.label_color), ("font-size", px(s.label_size, default=14)), "margin-bottom: 6px"]
    input_css = [
        "width: 100%", "padding: 10px 12px",
        color("background-color", s.input_background_color),
        color("color", s.input_text_color),
        border(1, s.input_border_color),
        ("border-radius", px(s.input_border_radius, minimum=0)),
    ]
    label = f'<label for="{field_id}"{style_attr(label_css)}>{sanitize_text(field.label)}{" *" if field.required else ""}</label>'
    placeholder_attr = f' placeholder="{sanitize_attr(field.placeholder)}"' if field.placeholder else ""

    if field.type == "textarea":
        control = f'<textarea id="{field_id}" name="{field_id}" rows="4"{placeholder_attr}{required}{style_attr(input_css)}></textarea>'
    elif field.type == "select":
        options = "".join(
            f'<option value="{sanitize_attr(o)}">{sanitize_text(o)}</option>' for o in (field.options or [])
        )
        control = f'<select id="{field_id}" name="{field_id}"{required}{style_attr(input_css)}>{options}</select>'
    elif field.type == "checkbox":
        control = f'<input type="checkbox" id="{field_id}" name="{field_id}"{required}>'
        return (f'<div{style_attr([("margin-bottom", px(s.spacing, default=20))])}>'
                f"{control} {label}</div>")
    else:
        control = f'<input type="{field.type}" id="{field_id}" name="{field_id}"{placeholder_attr}{required}{style_attr(input_css)}>'
    return f'<div{style_attr([("margin-bottom", px(s.spacing, default=20))])}>{label}{control}</div>'


def render_form_block(b: FormBlock, ctx: RenderContext) -> str:
    s = b.style
    title = f"<h3{style_attr(['font-size: 24px', 'font-weight: 700', 'margin-bottom: 8px'])}>{sanitize_text(b.title)}</h3>" if b.title else ""
    description = f"<p{style_attr(['margin-bottom: 24px', 'color: #6b7280'])}>{sanitize_text(b.description)}</p>" if b.description else ""
    fields = "".join(_form_field(f, s) for f in b.fields)
    button_css = [
        color("background-color", s.button_background_color),
        color("color", s.button_text_color),
        ("border-radius", px(s.button_border_radius, minimum=0)),
        "border: none", "padding: 12px 24px", "font-weight: 600", "cursor: pointer",
    ]
    return (f"<div{style_attr(_card(s))}>"
            f"{title}{description}"
            f'<form action="#" method="post">{fields}'
            f'<button type="submit"{style_attr(button_css)}>{sanitize_text(b.submit_button_text)}</button>'
            f"</form>"
            f"</div>")


def render_accordion_block(b: AccordionBlock, ctx: RenderContext) -> str:
    s = b.style
    parts = []
    for i, item in enumerate(b.items):
        is_open = i == b.default_expanded_index
        item_css = [
            color("background-color", s.expanded_item_background_color if is_open else s.item_background_color),
            border(1, s.item_border_color),
            "border-radius: 6px", "padding: 12px 16px",
            ("margin-bottom", px(s.spacing, default=12)),
        ]
        title_css = [color("color", s.title_color), ("font-size", px(s.title_size, default=16)), "font-weight: 600", "cursor: pointer"]
        content_css = [color("color", s.content_color), ("font-size", px(s.content_size, default=14)), "margin-top: 8px"]
        parts.append(
            f'<details{" open" if is_open else ""}{style_attr(item_css)}>'
            f"<summary{style_attr(title_css)}>{sanitize_text(item.title)}</summary>"
            f"<div{style_attr(content_css)}>{sanitize_html(item.content)}</div>"
            f"</details>"
        )
    return f"<div{style_attr(_card(s))}>{''.join(parts)}</div>"


def render_quote_block(b: QuoteBlock, ctx: RenderContext) -> str:
    s = b.style
    quote_css = [
        color("color", s.quote_color),
        ("font-size", px(s.quote_size, default=20)),
        keyword("font-style", s.font_style, FONT_STYLES, "italic"),
    ]
    mark_css = [color("color", s.quote_mark_color), "font-size: 1.5em", "line-height: 0"]
    text = sanitize_text(b.quote)
    if s.show_quote_marks:
        text = f"<span{style_attr(mark_css)}>“</span>{text}<span{style_attr(mark_css)}>”</span>"

    caption = ""
    if b.author:
        title = f", {sanitize_text(b.author_title)}" if b.author_title else ""
        caption_css = [color("color", s.author_color), ("font-size", px(s.author_size, default=14)), "margin-top: 16px"]
        caption = f"<figcaption{style_attr(caption_css)}>— {sanitize_text(b.author)}{title}</figcaption>"
    return (f"<figure{style_attr(_card(s, border(s.border_left_width, s.border_left_color, side='border-left')))}>"
            f"<blockquote{style_attr(quote_css)}>{text}</blockquote>{caption}"
            f"</figure>")


def progress_percent(value, max_value) -> float:
    value = sanitize_number(value)
    max_value = sanitize_number(max_value)
    if max_value <= 0:
        return 0
    return round(max(0.0, min(100.0, value / max_value * 100)), 2)


def render_stats_block(b: StatsBlock, ctx: RenderContext) -> str:
    s = b.style
    items = []
    for item in b.items:
        bar = ""
        if item.show_progress_bar:
            track = [color("background-color", s.progress_bar_background_color), ("height", px(s.progress_bar_height, 8)),
                     "border-radius: 9999px", "overflow: hidden", "margin-top: 8px"]
            fill = [color("background-color", s.progress_bar_color), "height: 100%",
                    ("width", f"{format_number(progress_percent(item.value, item.max_value))}%")]
            bar = f'<div{style_attr(track)}><div{style_attr(fill)}></div></div>'
        value = f"{sanitize_text(item.prefix)}{num(item.value)}{sanitize_text(item.suffix)}"
        items.append(
            f'<div{style_attr(["flex: 1 1 0", "min-width: 120px"])}>'
            f'<div{style_attr([color("color", s.value_color), ("font-size", px(s.value_size, 36)), "font-weight: 700"])}>{value}</div>'
            f'<div{style_attr([color("color", s.label_color), ("font-size", px(s.label_size, 14))])}>{sanitize_text(item.label)}</div>'
            f"{bar}</div>"
        )
    layout = [
        "display: flex",
        ("flex-direction", "column" if s.layout == "vertical" else "row"),
        "flex-wrap: wrap",
        ("gap", px(s.item_spacing, 24, minimum=0)),
    ]
    return f"<div{style_attr(_card(s))}><div{style_attr(layout)}>{''.join(items)}</div></div>"


def render_team_block(b: TeamBlock, ctx: RenderContext) -> str:
    s = b.style
    photo = ""
    image = sanitize_image_url(b.image_url) if b.image_url else None
    if image:
        photo_css = [("width", px(s.image_size, 120)), ("height", px(s.image_size, 120)),
                     ("border-radius", px(s.image_border_radius, minimum=0)), "object-fit: cover", "margin: 0 auto 16px"]
        photo = f'<img src="{escape_attr(image)}" alt="{sanitize_attr(b.name)}"{style_attr(photo_css)}>'

    links = _social_links(b.social_links, 32, True, "#6b7280")
    social = f'<div{style_attr(["display: flex", "gap: 8px", "justify-content: center", "margin-top: 16px"])}>{"".join(links)}</div>' if links else ""
    card = [color("background-color", s.card_background_color), border(s.card_border_width, s.card_border_color),
            ("border-radius", px(s.border_radius, minimum=0)), "padding: 24px"]
    return (f"<div{style_attr(_card(s))}><div{style_attr(card)}>"
            f"{photo}"
            f'<h3{style_attr([color("color", s.name_color), ("font-size", px(s.name_size, 24))])}>{sanitize_text(b.name)}</h3>'
            f'<div{style_attr([color("color", s.role_color), ("font-size", px(s.role_size, 16)), "margin-bottom: 8px"])}>{sanitize_text(b.role)}</div>'
            f'<p{style_attr([color("color", s.bio_color), ("font-size", px(s.bio_size, 14))])}>{sanitize_text(b.bio)}</p>'
            f"{social}"
            f"</div></div>")


def render_gallery_block(b: GalleryBlock, ctx: RenderContext) -> str:
    """Carrousel exporté en bande à défilement CSS (scroll-snap), sans script."""
    s = b.style
    slides = []
    for image in b.images:
        src = sanitize_image_url(image.url)
        if not src:
            continue
        caption = ""
        if s.show_captions and image.caption:
            caption_css = ["position: absolute", "left: 0", "right: 0", "bottom: 0", "padding: 8px 12px",
                           color("color", s.caption_color), color("background-color", s.caption_background_color),
                           ("font-size", px(s.caption_size, 14)), ("font-family", sanitize_font_family(s.font_family))]
            caption = f"<figcaption{style_attr(caption_css)}>{sanitize_text(image.caption)}</figcaption>"
        figure_css = ["position: relative", "flex: 0 0 100%", "scroll-snap-align: start",
                      ("aspect-ratio", GALLERY_ASPECT_RATIOS.get(s.aspect_ratio, "16 / 9"))]
        img_css = ["width: 100%", "height: 100%", keyword("object-fit", s.image_object_fit, OBJECT_FITS, "cover")]
        slides.append(
            f"<figure{style_attr(figure_css)}>"
            f'<img src="{escape_attr(src)}" alt="{sanitize_attr(image.alt)}" loading="lazy"{style_attr(img_css)}>'
            f"{caption}</figure>"
        )
    if not slides:
        return placeholder("No images in gallery", box(s))

    strip_css = ["display: flex", "overflow-x: auto", "scroll-snap-type: x mandatory",
                 ("border-radius", px(s.border_radius, minimum=0))]
    return f"<div{style_attr(box(s))}><div{style_attr(strip_css)}>{''.join(slides)}</div></div>"


def render_logo_grid_block(b: LogoGridBlock, ctx: RenderContext) -> str:
    s = b.style
    cells = []
    for logo in b.logos:
        src = sanitize_image_url(logo.image_url)
        if not src:
            continue
        img_css = [("max-height", px(s.logo_size, 60)), "max-width: 100%", "margin: 0 auto",
                   ("opacity", num(s.opacity, 1, 0, 1)), "filter: grayscale(100%)" if s.grayscale else None]
        cell = f'<img src="{escape_attr(src)}" alt="{sanitize_attr(logo.alt)}" loading="lazy"{style_attr(img_css)}>'
        href = sanitize_url(logo.link) if logo.link else None
        if href:
            cell = f'<a href="{escape_attr(href)}"{_target_attrs(logo.target)}>{cell}</a>'
        cell_css = [color("background-color", s.logo_background_color), ("border-radius", px(s.border_radius, minimum=0)),
                    "padding: 16px", "display: flex", "align-items: center", "justify-content: center"]
        cells.append(f"<div{style_attr(cell_css)}>{cell}</div>")
    if not cells:
        return placeholder("No logos to display", box(s))

    grid_css = ["display: grid", ("grid-template-columns", f"repeat({int(num(s.columns, 3, 1, 12))}, minmax(0, 1fr))"),
                ("gap", px(s.gap, 24, minimum=0))]
    wrapper = [color("background-color", s.background_color), *box(s)]
    return f"<div{style_attr(wrapper)}><div{style_attr(grid_css)}>{''.join(cells)}</div></div>"


def render_embed_block(b: EmbedBlock, ctx: RenderContext) -> str:
    s = b.style
    wrapper = [
        color("background-color", s.background_color),
        ("border-radius", px(s.border_radius, minimum=0)),
        border(s.border.width, s.border.color, s.border.style),
        length("width", s.width),
        *box(s),
    ]
    if not b.embed_url.strip():
        return placeholder("No embed URL configured", wrapper)
    safe = get_safe_iframe_url(b.embed_url, b.embed_type, ctx.extra_hosts)
    if not safe:
        return placeholder("Invalid or unsupported embed URL", wrapper)

    if s.aspect_ratio == "custom":
        frame = _responsive_frame(safe, "", b.title or b.embed_type, b.allow_full_screen,
                                  height=length("height", s.height)[1])
    else:
        frame = _responsive_frame(safe, EMBED_ASPECT_RATIOS.get(s.aspect_ratio, "56.25%"),
                                  b.title or b.embed_type, b.allow_full_screen)
    return f"<div{style_attr(wrapper)}>{frame}</div>"


def render_newsletter_block(b: NewsletterBlock, ctx: RenderContext) -> str:
    s = b.style
    heading_css = [color("color", s.heading_color), ("font-size", px(s.heading_size, 28)),
                   ("font-weight", num(s.heading_weight, 700, 100, 900)),
                   keyword("text-align", s.heading_align, TEXT_ALIGNS, "center"), "margin-bottom: 8px"]
    desc_css = [color("color", s.description_color), ("font-size", px(s.description_size, 16)),
                keyword("text-align", s.description_align, TEXT_ALIGNS, "center"), "margin-bottom: 16px"]
    form_css = ["display: flex", ("flex-direction", "column" if s.layout == "stacked" else "row"),
                ("gap", px(s.gap, 16, minimum=0)), "flex-wrap: wrap"]
    input_css = ["flex: 1 1 200px",
                 color("background-color", s.input_background_color), color("color", s.input_text_color),
                 border(s.input_border_width, s.input_border_color),
                 ("border-radius", px(s.input_border_radius, minimum=0)), ("padding", px(s.input_padding, 12))]
    button_css = [color("background-color", s.button_background_color), color("color", s.button_text_color),
                  ("border-radius", px(s.button_border_radius, minimum=0)), ("padding", f"{px(s.button_padding, 12)} 24px"),
                  ("font-size", px(s.button_font_size, 16)), ("font-weight", num(s.button_font_weight, 600, 100, 900)),
                  "border: none", "cursor: pointer"]
    privacy = ""
    if b.show_privacy_checkbox:
        privacy = (f'<label{style_attr(["display: block", "margin-top: 12px", "font-size: 14px", color("color", s.description_color)])}>'
                   f'<input type="checkbox" name="privacy" required> {sanitize_text(b.privacy_text)}</label>')

    wrapper = [color("background-color", s.background_color), ("border-radius", px(s.border_radius, minimum=0)), *box(s)]
    heading = f"<h2{style_attr(heading_css)}>{sanitize_text(b.heading)}</h2>" if b.heading else ""
    description = f"<p{style_attr(desc_css)}>{sanitize_text(b.description)}</p>" if b.description else ""
    return (f"<div{style_attr(wrapper)}>"
            f"{heading}{description}"
            f'<form action="#" method="post">'
            f"<div{style_attr(form_css)}>"
            f'<input type="email" name="email" required placeholder="{sanitize_attr(b.input_placeholder)}"{style_attr(input_css)}>'
            f'<button type="submit"{style_attr(button_css)}>{sanitize_text(b.button_text)}</button>'
            f"</div>{privacy}</form>"
            f"</div>")


# ── Dispatch ─────────────────────────────────────────────────────────────────

_RENDERERS: Dict[Type[BaseBlock], Callable[[BaseBlock, RenderContext], str]] = {
    TextBlock: render_text_block,
    ImageBlock: render_image_block,
    VideoBlock: render_video_block,
    ButtonBlock: render_button_block,
    CountdownBlock: render_countdown_block,
    FAQBlock: render_faq_block,
    SpaceBlock: render_space_block,
    DividerBlock: render_divider_block,
    IconBlock: render_icon_block,
    SocialBlock: render_social_block,
    TestimonialBlock: render_testimonial_block,
    FeatureBlock: render_feature_block,
    PricingBlock: render_pricing_block,
    FormBlock: render_form_block,
    AccordionBlock: render_accordion_block,
    QuoteBlock: render_quote_block,
    StatsBlock: render_stats_block,
    TeamBlock: render_team_block,
    GalleryBlock: render_gallery_block,
    LogoGridBlock: render_logo_grid_block,
    EmbedBlock: render_embed_block,
    NewsletterBlock: render_newsletter_block,
}


def unhandled_variants() -> list:
    """Types de blocs déclarés sans sous-renderer (doit rester vide)."""
    return [t for t, cls in BLOCK_REGISTRY.items() if cls not in _RENDERERS]


def render_block(block: BaseBlock, ctx: Optional[RenderContext] = None) -> str:
    ctx = ctx or RenderContext()
    renderer = _RENDERERS.get(type(block))
    if renderer is None:
        block_type = _COMMENT_SAFE_RE.sub("", str(getattr(block, "type", "?")).lower())
        log.warning("Aucun renderer pour le bloc de type %s", block_type)
        return f"<!-- Bloc non implémenté : {block_type} -->"
    html = renderer(block, ctx)
    if ctx.preview:
        return f'<div data-block-id="{sanitize_attr(block.id)}" data-block-type="{sanitize_attr(block.type)}">{html}</div>'
    return html


def render_section(section: Section, ctx: Optional[RenderContext] = None) -> str:
    ctx = ctx or RenderContext()
    blocks = "".join(render_block(block, ctx) for block in section.blocks)
    hook = f' data-section-id="{sanitize_attr(section.id)}"' if ctx.preview else ""
    return f"<section{hook}{style_attr(section_declarations(section))}>{blocks}</section>"


# ── Points d'entrée publics ──────────────────────────────────────────────────

def render_page(page: Page, now: Optional[datetime] = None, lang: Optional[str] = None,
                extra_hosts: Optional[Sequence[str]] = None) -> str:
    """Document HTML autonome : CSP (aucun script), viewport, reset CSS, une <section> par Section."""
    settings = get_settings()
    hosts = settings.extra_frame_hosts if extra_hosts is None else list(extra_hosts)
    ctx = RenderContext(now=now, extra_hosts=tuple(hosts))
    sections = "\n".join(render_section(section, ctx) for section in page.sections)
    lang_attr = sanitize_attr(lang or settings.lang) or "en"
    log.info("Export HTML : %s (%d sections)", page.id, len(page.sections))

    return f"""<!DOCTYPE html>
<html lang="{lang_attr}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="Content-Security-Policy" content="{escape_attr(build_csp(hosts))}">
  <title>{sanitize_text(page.name)}</title>
  <style>
{CSS_RESET}
  </style>
</head>
<body>
{sections}
</body>
</html>"""


def render_preview(page: Page, now: Optional[datetime] = None,
                   extra_hosts: Optional[Sequence[str]] = None) -> str:
    """Vue éditable : même balisage assaini, sans coque CSP, avec crochets data-* pour l'UI."""
    hosts = get_settings().extra_frame_hosts if extra_hosts is None else list(extra_hosts)
    ctx = RenderContext(now=now, extra_hosts=tuple(hosts), preview=True)
    sections = "\n".join(render_section(section, ctx) for section in page.sections)
    return f'<div class="page-studio-preview" data-page-id="{sanitize_attr(page.id)}">\n{sections}\n</div>'


_SLUG_RE = re.compile(r"[^a-z0-9]+")


def export_filename(page: Page) -> str:
    """Nom du fichier exporté : "Ma Page!" → "ma-page.html"."""
    slug = _SLUG_RE.sub("-", (page.name or "").lower()).strip("-")
    return f"{slug or 'page'}.html"


class HtmlRenderer:
    """Implémentation du protocole Renderer pour l'export HTML."""

    def __init__(self, now: Optional[datetime] = None, extra_hosts: Optional[Sequence[str]] = None):
        self.now = now
        self.extra_hosts = extra_hosts

    def render_page(self, page: Page) -> str:
        return render_page(page, now=self.now, extra_hosts=self.extra_hosts)

    def render_block(self, block: BaseBlock) -> str:
        hosts = get_settings().extra_frame_hosts if self.extra_hosts is None else self.extra_hosts
        return render_block(block, RenderContext(now=self.now, extra_hosts=tuple(hosts)))
