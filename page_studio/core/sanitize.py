"""
Couche de sanitization — nettoyage par liste blanche des chaînes libres
destinées à un contexte HTML / CSS / URL / iframe.

Règle : aucune fonction de ce module ne lève d'exception sur une entrée invalide.
Chaque échec est ramené à une valeur sûre documentée :
  URL invalide   → None (l'appelant la traite comme absente)
  couleur        → "transparent"
  police         → pile de polices système
  longueur CSS   → "0px"
"""
import html
import logging
import math
import re
from typing import Iterable, Optional, Sequence
from urllib.parse import parse_qs, urlparse, urlunparse

import bleach

log = logging.getLogger(__name__)


# ── HTML / texte ─────────────────────────────────────────────────────────────

ALLOWED_TAGS = frozenset({"b", "i", "em", "strong", "a", "p", "br", "ul", "ol", "li", "span"})
ALLOWED_ATTRS = ["href", "target", "rel"]
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})


def sanitize_html(value: str) -> str:
    """Réduit à un petit sous-ensemble de balises inline. Pas de script, pas d'on*, pas de data-*."""
    if not isinstance(value, str) or not value:
        return ""
    return bleach.clean(
        value,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRS,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )


def sanitize_text(value: str) -> str:
    """Supprime tout balisage ; le résultat est sûr en contenu d'élément HTML."""
    if not isinstance(value, str) or not value:
        return ""
    return bleach.clean(value, tags=frozenset(), attributes={}, strip=True, strip_comments=True)


def sanitize_attr(value: str) -> str:
    """Texte sans balisage, guillemets échappés : sûr dans un attribut entre guillemets."""
    return sanitize_text(value).replace('"', "&quot;").replace("'", "&#x27;")


def escape_attr(value: str) -> str:
    """Échappe une valeur déjà validée (URL, couleur…) pour un attribut HTML."""
    return html.escape(value if isinstance(value, str) else str(value), quote=True)


# ── URL ──────────────────────────────────────────────────────────────────────

DANGEROUS_PROTOCOLS = ("javascript:", "data:", "vbscript:", "file:")
_PASSTHROUGH_PREFIXES = ("/", "#", "http://", "https://", "mailto:", "tel:")
# Les navigateurs ignorent tabulations/retours ligne dans une URL : "java\tscript:" == "javascript:"
_URL_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def sanitize_url(url: str) -> Optional[str]:
    """
    Valide une URL libre.

    - javascript:/data:/vbscript:/file: (insensible à la casse) → None
    - "/", "#", http://, https://, mailto:, tel: → inchangée
    - nom d'hôte nu ("example.com/page") → "https://example.com/page"
    """
    if not url or not isinstance(url, str):
        return None

    cleaned = _URL_CONTROL_RE.sub("", url).strip()
    if not cleaned:
        return None

    lower = cleaned.lower()
    for protocol in DANGEROUS_PROTOCOLS:
        if lower.startswith(protocol):
            log.warning("URL bloquée (protocole %s)", protocol)
            return None

    if lower.startswith(_PASSTHROUGH_PREFIXES):
        return cleaned

    if "://" not in cleaned:
        return f"https://{cleaned}"

    return cleaned


_DATA_IMAGE_RE = re.compile(r"data:image/(png|jpe?g|gif|webp);base64,[A-Za-z0-9+/]+={0,2}")


def sanitize_image_url(url: str) -> Optional[str]:
    """
    Comme sanitize_url, mais accepte aussi une image base64 issue d'un upload
    (png, jpeg, gif, webp uniquement ; jamais de SVG).
    """
    if isinstance(url, str):
        compact = _URL_CONTROL_RE.sub("", url).strip()
        if _DATA_IMAGE_RE.fullmatch(compact):
            return compact
    return sanitize_url(url)


def _parse(url: str):
    try:
        return urlparse(url)
    except ValueError:
        return None


def _host_matches(host: str, domains: Iterable[str]) -> bool:
    return any(host == d or host.endswith("." + d) for d in domains)


# ── Couleurs / polices / CSS ─────────────────────────────────────────────────

_HEX_COLOR_RE = re.compile(r"#(?:[A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})")
NAMED_COLORS = frozenset({
    "transparent", "black", "white", "red", "green", "blue",
    "yellow", "orange", "purple", "pink", "gray", "grey",
})


def sanitize_color(color: str) -> str:
    """Hex 3/6 chiffres ou couleur nommée de la liste blanche ; sinon "transparent"."""
    if not isinstance(color, str):
        return "transparent"
    if _HEX_COLOR_RE.fullmatch(color):
        return color
    if color.lower() in NAMED_COLORS:
        return color.lower()
    return "transparent"


SYSTEM_FONT_STACK = "system-ui, -apple-system, sans-serif"
_FONT_STRIP_RE = re.compile(r"['\"\\<>]")
_FONT_ALLOWED_RE = re.compile(r"[a-zA-Z0-9\s,\-]+")


def sanitize_font_family(font_family: str) -> str:
    if not isinstance(font_family, str):
        return SYSTEM_FONT_STACK
    stripped = _FONT_STRIP_RE.sub("", font_family)
    if _FONT_ALLOWED_RE.fullmatch(stripped) and stripped.strip():
        return stripped
    return SYSTEM_FONT_STACK


def sanitize_number(value, default: float = 0, minimum: Optional[float] = None,
                    maximum: Optional[float] = None) -> float:
    """Nombre fini borné ; tout le reste (str, bool, NaN…) → default."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        return default
    if minimum is not None and value < minimum:
        return minimum
    if maximum is not None and value > maximum:
        return maximum
    return value


def format_number(value: float) -> str:
    """16.0 → "16", 1.5 → "1.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


_CSS_LENGTH_RE = re.compile(r"-?\d+(\.\d+)?(px|em|rem|%|vh|vw)")


def sanitize_css_length(value) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return "0px"
        return f"{format_number(value)}px"
    if isinstance(value, str):
        value = value.strip()
        if value == "auto" or _CSS_LENGTH_RE.fullmatch(value):
            return value
    return "0px"


def sanitize_css_keyword(value: str, allowed: Sequence[str], default: str) -> str:
    """Valeur CSS énumérée (text-align, object-fit…) : uniquement depuis `allowed`."""
    return value if isinstance(value, str) and value in allowed else default


# ── Vidéo / embeds ───────────────────────────────────────────────────────────

IFRAME_SANDBOX = "allow-scripts allow-same-origin allow-presentation allow-popups"
IFRAME_ALLOW = "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
IFRAME_REFERRER_POLICY = "no-referrer-when-downgrade"

VIDEO_SOURCES = ("youtube", "vimeo", "instagram", "tiktok", "direct")
_VIDEO_HOSTS = {
    "youtube":   ("youtube.com", "youtu.be", "youtube-nocookie.com"),
    "vimeo":     ("vimeo.com",),
    "instagram": ("instagram.com",),
    "tiktok":    ("tiktok.com",),
}
DIRECT_VIDEO_EXTENSIONS = (".mp4", ".webm", ".ogg", ".mov")

VIDEO_FRAME_SOURCES = (
    "https://www.youtube-nocookie.com",
    "https://player.vimeo.com",
    "https://www.tiktok.com",
    "https://www.instagram.com",
    "https://instagram.com",
)

_YOUTUBE_ID_RE = re.compile(r"[A-Za-z0-9_-]{1,64}")
_YOUTUBE_PATH_RE = re.compile(r"^/(?:embed|shorts|live)/([^/?#]+)")
_VIMEO_ID_RE = re.compile(r"/(\d+)")
_INSTAGRAM_RE = re.compile(r"/(p|reel)/([A-Za-z0-9_-]+)")
_TIKTOK_RE = re.compile(r"/video/(\d+)")
_IFRAME_SRC_RE = re.compile(r"""src=["']([^"']+)["']""")


def extract_url_from_embed(value: str) -> str:
    """Si l'utilisateur colle un <iframe …>, renvoie son src ; sinon l'entrée telle quelle."""
    if not isinstance(value, str):
        return ""
    if "<iframe" not in value and "</iframe>" not in value:
        return value
    match = _IFRAME_SRC_RE.search(value)
    if not match:
        return value
    embed_url = match.group(1)
    if "youtube.com/embed/" in embed_url or "youtube-nocookie.com/embed/" in embed_url:
        video = re.search(r"/embed/([^?\"']+)", embed_url)
        if video:
            return f"https://www.youtube.com/watch?v={video.group(1)}"
    return embed_url


def detect_video_source(url: str) -> Optional[str]:
    """Devine le fournisseur d'une URL vidéo (None si aucun ne correspond)."""
    for source in VIDEO_SOURCES:
        if validate_video_url(url, source):
            return source
    return None


def validate_video_url(url: str, source: str) -> bool:
    """Vérifie l'appartenance de l'URL au domaine (ou à l'extension) du fournisseur."""
    sanitized = sanitize_url(url)
    if not sanitized:
        return False
    parsed = _parse(sanitized)
    if parsed is None:
        return False
    if source == "direct":
        return parsed.path.lower().endswith(DIRECT_VIDEO_EXTENSIONS)
    domains = _VIDEO_HOSTS.get(source)
    if not domains:
        return False
    return _host_matches((parsed.hostname or "").lower(), domains)


def get_safe_embed_url(url: str, source: str) -> Optional[str]:
    """
    Canonicalise une URL vidéo : extrait l'identifiant du fournisseur puis
    reconstruit une URL d'embed minimale. L'URL d'origine n'est jamais renvoyée
    telle quelle (sauf fichier direct, qui ne va pas dans une iframe).
    """
    if not validate_video_url(url, source):
        return None
    sanitized = sanitize_url(url)
    parsed = _parse(sanitized) if sanitized else None
    if parsed is None:
        return None

    if source == "direct":
        return sanitized

    host = (parsed.hostname or "").lower()
    path = parsed.path or ""

    if source == "youtube":
        video_id = None
        if _host_matches(host, ("youtu.be",)):
            video_id = path.lstrip("/").split("/")[0]
        else:
            video_id = parse_qs(parsed.query).get("v", [None])[0]
            if not video_id:
                m = _YOUTUBE_PATH_RE.match(path)
                video_id = m.group(1) if m else None
        if video_id and _YOUTUBE_ID_RE.fullmatch(video_id):
            return f"https://www.youtube-nocookie.com/embed/{video_id}"

    elif source == "vimeo":
        m = _VIMEO_ID_RE.search(path)
        if m:
            return f"https://player.vimeo.com/video/{m.group(1)}"

    elif source == "instagram":
        m = _INSTAGRAM_RE.search(path)
        if m:
            return f"https://www.instagram.com/{m.group(1)}/{m.group(2)}/embed/"

    elif source == "tiktok":
        m = _TIKTOK_RE.search(path)
        if m:
            return f"https://www.tiktok.com/embed/v2/{m.group(1)}"

    log.info("Identifiant %s introuvable dans l'URL vidéo", source)
    return None


# Embeds génériques (cartes, formulaires, agendas) : hôte + préfixe de chemin
EMBED_PROVIDERS = {
    "map":      (("www.google.com", "google.com", "maps.google.com"), "/maps"),
    "form":     (("docs.google.com",), "/forms"),
    "calendar": (("calendar.google.com",), "/calendar"),
}


def get_safe_iframe_url(url: str, embed_type: str,
                        extra_hosts: Sequence[str] = ()) -> Optional[str]:
    """
    Valide l'URL d'un bloc embed et la reconstruit depuis ses composants
    (https uniquement, sans identifiants ni fragment).
    Type "custom" : seuls les hôtes de `extra_hosts` sont acceptés.
    """
    sanitized = sanitize_url(extract_url_from_embed(url))
    if not sanitized:
        return None
    parsed = _parse(sanitized)
    if parsed is None or parsed.scheme.lower() != "https":
        return None
    host = (parsed.hostname or "").lower()
    if not host:
        return None

    if embed_type in EMBED_PROVIDERS:
        hosts, path_prefix = EMBED_PROVIDERS[embed_type]
        if host not in hosts or not parsed.path.startswith(path_prefix):
            return None
    elif embed_type == "custom":
        if not extra_hosts or host not in extra_hosts:
            return None
    else:
        return None

    return urlunparse(("https", host, parsed.path, "", parsed.query, ""))


def frame_sources(extra_hosts: Sequence[str] = ()) -> list:
    """Origines autorisées dans le frame-src de la CSP exportée."""
    sources = list(VIDEO_FRAME_SOURCES)
    for hosts, _ in EMBED_PROVIDERS.values():
        sources.extend(f"https://{h}" for h in hosts)
    sources.extend(f"https://{h}" for h in extra_hosts)
    return list(dict.fromkeys(sources))
