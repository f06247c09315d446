"""Tests export HTML — document autonome, CSP, sanitization au rendu, placeholders, aperçu."""
import logging
from datetime import timedelta

import pytest
from pydantic import ValidationError

from page_studio.blocks import (
    BLOCK_TYPES, BaseBlock, ButtonBlock, CountdownBlock, EmbedBlock, GalleryBlock, ImageBlock,
    LogoGridBlock, SocialBlock, SocialLink, TextBlock, VideoBlock,
)
from page_studio.blocks.factories import create_block, create_section
from page_studio.core.schemas import Page
from page_studio.renderer import (
    HtmlRenderer, Renderer, RenderContext, build_csp, export_filename, render_block,
    render_page, render_preview,
)
from page_studio.renderer.css import css_url, escape_attr, section_declarations
from page_studio.renderer.html import countdown_display, progress_percent, unhandled_variants

ALL_TYPES = list(BLOCK_TYPES)


def _page_with(*blocks, name="Test"):
    return Page(id="p", name=name, sections=[{"id": "s", "blocks": list(blocks)}])


# ── Document exporté ─────────────────────────────────────────────────────────

class TestDocument:
    def test_shell(self, page, now):
        html = render_page(page, now=now)
        assert html.startswith("<!DOCTYPE html>")
        assert '<meta name="viewport"' in html
        assert "Content-Security-Policy" in html
        assert "box-sizing: border-box" in html
        assert html.count("<section") == len(page.sections)

    def test_csp_forbids_scripts(self, page):
        csp = build_csp()
        assert "script-src 'none'" in csp
        assert "frame-src https://www.youtube-nocookie.com" in csp
        assert escape_attr(csp) in render_page(page)

    def test_no_raw_script_from_text(self, now):
        block = TextBlock(id="t", content="<p>Hi</p><script>alert(1)</script>")
        html = render_page(_page_with(block), now=now)
        assert "<script" not in html.lower()
        assert "<p>Hi</p>" in html

    def test_no_raw_script_anywhere(self, ids, now):
        """Charge utile <script> dans chaque champ texte de chaque variante."""
        payload = "<script>alert(1)</script>"
        page = Page(id="p", name=payload, sections=[])
        for block_type in ALL_TYPES:
            block = create_block(block_type, ids)
            for key, value in block.model_dump().items():
                if not isinstance(value, str) or key in ("id", "type"):
                    continue
                try:
                    block = block.model_validate({**block.model_dump(), key: payload})
                except ValidationError:
                    pass  # champ énuméré (source, target…)
            section = create_section(ids)
            section.blocks.append(block)
            page.sections.append(section)
        html = render_page(page, now=now)
        assert "<script" not in html.lower()

    def test_title_sanitized(self):
        html = render_page(Page(id="p", name="<b>Promo</b> & co"))
        assert "<title>Promo &amp; co</title>" in html

    def test_lang_from_settings(self, page, clean_env):
        clean_env.setenv("PAGE_STUDIO_LANG", "fr")
        assert '<html lang="fr">' in render_page(page)
        assert '<html lang="de">' in render_page(page, lang="de")

    def test_section_layout_inline(self, ids):
        section = create_section(ids)
        section.layout = "grid"
        section.columns = 3
        html = render_page(Page(id="p", sections=[section]))
        assert "grid-template-columns: repeat(3, minmax(0, 1fr))" in html

    @pytest.mark.parametrize("block_type", ALL_TYPES)
    def test_every_variant_renders(self, block_type, ids, now):
        html = render_block(create_block(block_type, ids), RenderContext(now=now))
        assert html
        assert "Bloc non implémenté" not in html

    def test_no_unhandled_variant(self):
        assert unhandled_variants() == []


# ── Sanitization au rendu ────────────────────────────────────────────────────

class TestSanitizedOutput:
    def test_button_javascript_href(self):
        html = render_block(ButtonBlock(id="b", text="Go", href="javascript:alert(1)"))
        assert 'href="#"' in html
        assert "javascript" not in html

    def test_color_injection(self):
        block = TextBlock(id="t", content="x")
        block.style.color = "red; background:url(x)"
        html = render_block(block)
        assert "color: transparent;" in html
        assert "url(x)" not in html

    def test_font_injection(self):
        block = TextBlock(id="t", content="x")
        block.style.font_family = "x;}</style><script>"
        html = render_block(block)
        assert "system-ui, -apple-system, sans-serif" in html
        assert "</style>" not in html

    def test_alt_attribute_injection(self):
        block = ImageBlock(id="i", src="https://example.com/a.png", alt='" onerror="alert(1)')
        html = render_block(block)
        assert 'onerror="' not in html

    def test_social_drops_unsafe_links(self):
        block = SocialBlock(id="s", links=[
            SocialLink(platform="facebook", url="javascript:alert(1)"),
            SocialLink(platform="twitter", url="https://twitter.com/x"),
        ])
        html = render_block(block)
        assert "javascript" not in html
        assert html.count("<a ") == 1

    def test_external_link_rel(self):
        html = render_block(ButtonBlock(id="b", text="Go", href="https://example.com", target="_blank"))
        assert 'rel="noopener noreferrer"' in html

    def test_section_background_image(self):
        section = create_section()
        section.style.background_image = "data:image/png;base64,iVBORw0KGgo="
        decl = dict(section_declarations(section))
        assert decl["background-image"] == 'url("data:image/png;base64,iVBORw0KGgo=")'
        section.style.background_image = "javascript:alert(1)"
        assert "background-image" not in dict(section_declarations(section))

    def test_css_url_escapes(self):
        assert css_url("https://x.com/a(1).png") == 'url("https://x.com/a%281%29.png")'
        assert css_url('https://x.com/a".png') == 'url("https://x.com/a%22.png")'

    def test_css_url_keeps_semicolons(self):
        assert css_url("https://x.com/a;b.png") == 'url("https://x.com/a;b.png")'
        section = create_section()
        section.style.background_image = "data:image/webp;base64,UklGRg=="
        assert "data:image/webp;base64,UklGRg==" in dict(section_declarations(section))["background-image"]


# ── Placeholders ─────────────────────────────────────────────────────────────

class TestPlaceholders:
    @pytest.mark.parametrize("block,message", [
        (ImageBlock(id="b", src="javascript:alert(1)"), "Invalid image URL"),
        (VideoBlock(id="b", url="https://evil.com/v", source="youtube"), "Invalid or unsafe video URL"),
        (VideoBlock(id="b", url=""), "Invalid or unsafe video URL"),
        (GalleryBlock(id="b"), "No images in gallery"),
        (LogoGridBlock(id="b"), "No logos to display"),
        (EmbedBlock(id="b"), "No embed URL configured"),
        (EmbedBlock(id="b", embed_url="https://evil.com/x", embed_type="map"), "Invalid or unsupported embed URL"),
        (CountdownBlock(id="b", target_date="not a date"), "Invalid countdown date"),
    ])
    def test_placeholder(self, block, message):
        html = render_block(block)
        assert message in html
        assert "<iframe" not in html

    def test_placeholder_keeps_document_valid(self, now):
        html = render_page(_page_with(GalleryBlock(id="g")), now=now)
        assert html.rstrip().endswith("</html>")


# ── Médias ───────────────────────────────────────────────────────────────────

class TestMedia:
    def test_youtube_iframe(self):
        html = render_block(VideoBlock(id="v", url="https://youtu.be/abc123", source="youtube"))
        assert 'src="https://www.youtube-nocookie.com/embed/abc123"' in html
        assert 'sandbox="' in html
        assert "allowfullscreen" in html

    def test_direct_video_tag(self):
        html = render_block(VideoBlock(id="v", url="https://cdn.example.com/a.mp4", source="direct"))
        assert '<video src="https://cdn.example.com/a.mp4"' in html
        assert "<iframe" not in html

    def test_map_embed(self):
        html = render_block(EmbedBlock(id="e", embed_url="https://www.google.com/maps/embed?pb=1", embed_type="map"))
        assert 'src="https://www.google.com/maps/embed?pb=1"' in html

    def test_custom_embed_needs_host(self, clean_env, now):
        block = EmbedBlock(id="e", embed_url="https://widgets.example.org/w", embed_type="custom")
        assert "Invalid or unsupported embed URL" in render_page(_page_with(block), now=now)
        html = render_page(_page_with(block), now=now, extra_hosts=["widgets.example.org"])
        assert 'src="https://widgets.example.org/w"' in html
        assert "https://widgets.example.org" in build_csp(["widgets.example.org"])


# ── Countdown / stats / accordéon ────────────────────────────────────────────

class TestStaticWidgets:
    def test_countdown_formats(self, now):
        target = now + timedelta(days=1, hours=2, minutes=3, seconds=4)
        assert countdown_display(target, now, "dhms") == "1d 2h 3m 4s"
        assert countdown_display(target, now, "hms") == "26h 3m 4s"
        assert countdown_display(target, now, "ms") == "1563m 4s"

    def test_countdown_past_is_zero(self, now):
        assert countdown_display(now - timedelta(days=2), now, "dhms") == "0d 0h 0m 0s"

    def test_countdown_block_uses_clock(self, now):
        block = CountdownBlock(id="c", target_date=(now + timedelta(hours=5)).isoformat(), label="Ends in")
        html = render_block(block, RenderContext(now=now))
        assert "0d 5h 0m 0s" in html
        assert "Ends in" in html

    def test_countdown_zulu_date(self, now):
        block = CountdownBlock(id="c", target_date="2025-01-02T12:00:00Z", display_format="hms")
        assert "24h 0m 0s" in render_block(block, RenderContext(now=now))

    def test_progress_percent(self):
        assert progress_percent(250, 300) == 83.33
        assert progress_percent(5, 0) == 0
        assert progress_percent(150, 100) == 100
        assert progress_percent("x", 100) == 0

    def test_accordion_default_open(self, ids):
        html = render_block(create_block("accordion", ids))
        assert html.count("<details open") == 1

    def test_static_forms(self, ids):
        html = render_block(create_block("form", ids))
        assert '<form action="#" method="post">' in html
        assert "required" in html


# ── Aperçu / dispatch ────────────────────────────────────────────────────────

class MarqueeBlock(BaseBlock):
    type: str = "marquee"


class TestPreviewAndDispatch:
    def test_preview_hooks(self, page, now):
        html = render_preview(page, now=now)
        assert 'data-page-id="page-1"' in html
        assert 'data-section-id="section-2"' in html
        assert 'data-block-id="block-3"' in html
        assert 'data-block-type="text"' in html
        assert "<!DOCTYPE" not in html
        assert "Content-Security-Policy" not in html

    def test_export_has_no_hooks(self, page, now):
        assert "data-block-id" not in render_page(page, now=now)

    def test_unhandled_variant_fallback(self, caplog):
        with caplog.at_level(logging.WARNING, logger="page_studio.renderer.html"):
            html = render_block(MarqueeBlock(id="m1"))
        assert html == "<!-- Bloc non implémenté : marquee -->"
        assert "marquee" in caplog.text

    def test_html_renderer_protocol(self, ids, now):
        renderer = HtmlRenderer(now=now)
        assert isinstance(renderer, Renderer)
        assert "Enter your text here" in renderer.render_block(create_block("text", ids))
        assert renderer.render_page(_page_with()).startswith("<!DOCTYPE html>")

    @pytest.mark.parametrize("name,expected", [
        ("Ma Page!", "ma-page.html"),
        ("Summer Sale 2025", "summer-sale-2025.html"),
        ("***", "page.html"),
        ("", "page.html"),
    ])
    def test_export_filename(self, name, expected):
        assert export_filename(Page(id="p", name=name)) == expected
