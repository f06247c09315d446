"""
Traduction style → CSS inline.

Toutes les valeurs passent par core.sanitize avant d'être interpolées :
couleurs, polices, longueurs, mots-clés énumérés, url().
Le CSS utilisateur brut n'existe pas dans le modèle.
"""
import re
from typing import Iterable, Optional, Sequence, Tuple, Union

from ..core.layout import resolve_layout
from ..core.sanitize import (
    escape_attr, format_number, frame_sources, sanitize_color, sanitize_css_keyword,
    sanitize_css_length, sanitize_font_family, sanitize_image_url, sanitize_number,
)
from ..core.schemas import Section, Spacing

Declaration = Tuple[str, str]

CSS_RESET = """* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: system-ui, -apple-system, sans-serif; line-height: 1.5; }
img { display: block; max-width: 100%; }
details > summary { list-style: none; }"""

TEXT_ALIGNS = ("left", "center", "right", "justify")
FONT_STYLES = ("normal", "italic")
OBJECT_FITS = ("cover", "contain", "fill", "none", "scale-down")
BORDER_STYLES = ("solid", "dashed", "dotted")
BACKGROUND_SIZES = ("cover", "contain", "auto")
BACKGROUND_REPEATS = ("no-repeat", "repeat", "repeat-x", "repeat-y")

_BACKGROUND_POSITION_RE = re.compile(r"[a-z0-9%.\s-]{1,40}")
# Caractères qui fermeraient url("…")
_CSS_URL_ESCAPES = {'"': "%22", "'": "%27", "(": "%28", ")": "%29", "\\": "%5C"}


def px(value, default: float = 0, minimum: Optional[float] = None) -> str:
    return f"{format_number(sanitize_number(value, default=default, minimum=minimum))}px"


def num(value, default: float = 0, minimum: Optional[float] = None,
        maximum: Optional[float] = None) -> str:
    return format_number(sanitize_number(value, default=default, minimum=minimum, maximum=maximum))


def spacing_to_css(spacing: Spacing, prop: str = "padding") -> Declaration:
    """Spacing 4 côtés → ("padding", "8px 8px 8px 8px")."""
    return prop, " ".join(px(getattr(spacing, side)) for side in ("top", "right", "bottom", "left"))


def css_url(url: str) -> str:
    return 'url("' + "".join(_CSS_URL_ESCAPES.get(c, c) for c in url) + '")'


def background_position(value: str) -> str:
    if isinstance(value, str) and _BACKGROUND_POSITION_RE.fullmatch(value.strip().lower()):
        return value.strip().lower()
    return "center"


def box(style) -> list:
    """Padding + marge d'un style de bloc (padding absent sur les styles « marge seule »)."""
    declarations = []
    if hasattr(style, "padding"):
        declarations.append(spacing_to_css(style.padding, "padding"))
    declarations.append(spacing_to_css(style.margin, "margin"))
    return declarations


def font(style, size_field: str = "font_size", weight_field: Optional[str] = "font_weight") -> list:
    declarations = [("font-family", sanitize_font_family(style.font_family))]
    if size_field:
        declarations.append(("font-size", px(getattr(style, size_field), default=16, minimum=0)))
    if weight_field:
        declarations.append(("font-weight", num(getattr(style, weight_field), default=400, minimum=100, maximum=900)))
    return declarations


def color(prop: str, value: str) -> Declaration:
    return prop, sanitize_color(value)


def length(prop: str, value) -> Declaration:
    return prop, sanitize_css_length(value)


def keyword(prop: str, value: str, allowed: Sequence[str], default: str) -> Declaration:
    return prop, sanitize_css_keyword(value, allowed, default)


def border(width, border_color: str, line: str = "solid", side: str = "border") -> Declaration:
    return side, f"{px(width, minimum=0)} {sanitize_css_keyword(line, BORDER_STYLES, 'solid')} {sanitize_color(border_color)}"


def to_css(declarations: Iterable[Union[Declaration, str, None]]) -> str:
    """Assemble des déclarations ; les chaînes sont des fragments constants, None est ignoré."""
    parts = []
    for declaration in declarations:
        if not declaration:
            continue
        if isinstance(declaration, str):
            parts.append(declaration.rstrip(";") + ";")
        else:
            prop, value = declaration
            parts.append(f"{prop}: {value};")
    return " ".join(parts)


def style_attr(declarations: Iterable[Union[Declaration, str, None]]) -> str:
    """` style="…"` prêt à insérer dans une balise (échappé pour l'attribut)."""
    css = to_css(declarations)
    return f' style="{escape_attr(css)}"' if css else ""


def section_declarations(section: Section) -> list:
    """Fond + boîte + instructions de layout d'une section."""
    style = section.style
    declarations = [color("background-color", style.background_color)]

    image = sanitize_image_url(style.background_image) if style.background_image else None
    if image:
        declarations += [
            ("background-image", css_url(image)),
            keyword("background-size", style.background_size, BACKGROUND_SIZES, "cover"),
            ("background-position", background_position(style.background_position)),
            keyword("background-repeat", style.background_repeat, BACKGROUND_REPEATS, "no-repeat"),
        ]

    declarations += [
        spacing_to_css(style.padding, "padding"),
        spacing_to_css(style.margin, "margin"),
    ]
    declarations += resolve_layout(style, section.layout, section.columns).declarations()
    return declarations


def build_csp(extra_hosts: Sequence[str] = ()) -> str:
    """Content-Security-Policy du document exporté : aucun script, iframes limitées aux fournisseurs."""
    return (
        "default-src 'self'; script-src 'none'; style-src 'unsafe-inline'; "
        "img-src * data:; media-src *; "
        f"frame-src {' '.join(frame_sources(extra_hosts))}"
    )
