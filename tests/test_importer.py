"""
Tests import — détection de schéma, conversion produit, chargement natif.
"""
import pytest
from pydantic import ValidationError

from page_studio.blocks.factories import create_page
from page_studio.core.invariants import find_problems
from page_studio.importer import (
    auto_convert_to_page_builder, convert_product_schema, detect_schema_type, dump_page,
    is_page_builder_schema, is_product_schema, schema_message,
)
from page_studio.importer.product import format_price
from page_studio.renderer import render_page

PRODUCT = {
    "hero": {
        "headline": "H",
        "subheadline": "S",
        "cta_text": "Go",
        "media_type": "image",
        "media_url": "https://x/y.jpg",
    },
    "faq": [{"q": "Q1", "a": "A1"}],
}

FULL_PRODUCT = {
    "hero": {"headline": "Super Blender", "subheadline": "Blends anything",
             "media_type": "video", "media_url": "https://vimeo.com/123"},
    "variants": [{"id": "v1", "label": "1 unit", "price": 29.9}, {"id": "v2", "label": "2 units", "price": 50}],
    "reviews": [{"author": "Ali", "text": "Great!"}],
    "faq": [{"q": "Warranty?", "a": "1 year"}, {"q": "Shipping?", "a": "3 days"}],
    "upsell_page": {"headline": "Add a spare jar", "image_url": "https://cdn.example.com/jar.png"},
    "theme": {"primary": "#ff0000", "bg": "#fafafa", "font_heading": "Georgia, serif"},
}


# ── Détection ────────────────────────────────────────────────────────────────

class TestDetection:
    def test_native_schema(self):
        """Scenario A : sections[0] a blocks ET style."""
        data = {"sections": [{"id": "s1", "style": {}, "blocks": []}]}
        result = detect_schema_type(data)
        assert result.type == "page-builder"
        assert result.confidence == 1.0

    def test_native_empty_sections(self):
        assert is_page_builder_schema({"sections": []})

    def test_native_needs_style_and_blocks(self):
        assert not is_page_builder_schema({"sections": [{"id": "s1", "blocks": []}]})
        assert not is_page_builder_schema({"sections": "nope"})

    def test_product_schema(self):
        """Scenario B : hero + faq suffisent."""
        result = detect_schema_type(PRODUCT)
        assert result.type == "product-ecommerce"
        assert result.confidence == 0.95

    def test_product_needs_two_fields(self):
        assert not is_product_schema({"hero": {}})
        assert is_product_schema({"hero": {}, "theme": {}})

    def test_product_field_types_matter(self):
        assert not is_product_schema({"hero": "text", "faq": "text"})
        assert not is_product_schema({"hero": [], "theme": [], "products": []})
        assert is_product_schema({"hero": {}, "faq": []})

    def test_confidence_is_fixed(self):
        assert detect_schema_type({"hero": {}, "faq": []}).confidence == \
            detect_schema_type(FULL_PRODUCT).confidence

    @pytest.mark.parametrize("data", [{}, {"foo": 1}, [], "text", None, 42])
    def test_unknown(self, data):
        result = detect_schema_type(data)
        assert result.type == "unknown"
        assert result.confidence == 0

    def test_messages(self):
        assert schema_message(detect_schema_type(PRODUCT)).startswith("E-commerce")
        assert schema_message(detect_schema_type({})).startswith("Unknown")


# ── Conversion produit ───────────────────────────────────────────────────────

class TestProductConversion:
    def test_scenario_b(self, ids):
        result = auto_convert_to_page_builder(PRODUCT, ids=ids)
        assert result.success
        assert result.schema_type == "product-ecommerce"
        page = result.page
        assert len(page.sections) >= 2
        faqs = [b for s in page.sections for b in s.blocks if b.type == "faq"]
        assert len(faqs) == 1
        assert [(i.question, i.answer) for i in faqs[0].items] == [("Q1", "A1")]

    def test_section_order(self, ids):
        page = convert_product_schema(FULL_PRODUCT, ids=ids)
        first_blocks = [s.blocks[0].type for s in page.sections]
        assert len(page.sections) == 5
        assert first_blocks == ["video", "text", "text", "text", "text"]

    def test_hero(self, ids):
        hero = convert_product_schema(FULL_PRODUCT, ids=ids).sections[0]
        video, headline, _, button = hero.blocks
        assert video.source == "vimeo"
        assert "Super Blender" in headline.content
        assert headline.style.font_family == "Georgia, serif"
        assert button.href == "#order"
        assert button.text == "Order Now"
        assert button.style.background_color == "#ff0000"
        assert hero.style.background_color == "#fafafa"

    def test_hero_image(self, ids):
        hero = convert_product_schema(PRODUCT, ids=ids).sections[0]
        assert hero.blocks[0].type == "image"
        assert hero.blocks[0].src == "https://x/y.jpg"
        assert hero.blocks[-1].text == "Go"

    def test_video_provider_fallback(self, ids):
        data = {"hero": {"media_type": "video", "media_url": "https://example.com/watch"}, "faq": []}
        assert convert_product_schema(data, ids=ids).sections[0].blocks[0].source == "youtube"

    def test_variants(self, ids):
        section = convert_product_schema(FULL_PRODUCT, ids=ids).sections[1]
        assert "Choose Your Package" in section.blocks[0].content
        assert "<strong>1 unit</strong><br>RM 29.90" == section.blocks[1].content
        assert section.blocks[2].content.endswith("RM 50.00")

    def test_currency_from_settings(self, ids, clean_env):
        clean_env.setenv("PAGE_STUDIO_CURRENCY", "EUR")
        section = convert_product_schema(FULL_PRODUCT, ids=ids).sections[1]
        assert section.blocks[1].content.endswith("EUR 29.90")

    def test_reviews_become_testimonials(self, ids):
        section = convert_product_schema(FULL_PRODUCT, ids=ids).sections[2]
        testimonial = section.blocks[1]
        assert testimonial.type == "testimonial"
        assert (testimonial.quote, testimonial.author_name) == ("Great!", "Ali")

    def test_upsell(self, ids):
        section = convert_product_schema(FULL_PRODUCT, ids=ids).sections[4]
        types = [b.type for b in section.blocks]
        assert types == ["text", "text", "image", "button", "text"]
        assert section.style.background_color == "#ff0000"
        assert section.blocks[3].text == "Yes, add it"
        assert section.blocks[3].href == "#add-upsell"

    def test_theme_fallbacks(self, ids):
        page = convert_product_schema(PRODUCT, ids=ids)
        hero = page.sections[0]
        assert hero.style.background_color == "#ffffff"
        assert hero.blocks[-1].style.background_color == "#3b82f6"
        assert hero.blocks[1].style.font_family == "Arial, sans-serif"

    def test_null_values_use_defaults(self, ids):
        data = {"hero": {"headline": "H", "cta_text": None}, "theme": {"primary": ""}}
        hero = convert_product_schema(data, ids=ids).sections[0]
        assert hero.blocks[-1].text == "Order Now"
        assert hero.blocks[-1].style.background_color == "#3b82f6"

    def test_escapes_headline_markup(self, ids):
        data = {"hero": {"headline": "<script>x</script>Deal"}, "faq": []}
        headline = convert_product_schema(data, ids=ids).sections[0].blocks[1]
        assert "<script>" not in headline.content

    def test_ids_unique_and_named(self, ids):
        page = convert_product_schema(FULL_PRODUCT, page_name="Blender", ids=ids)
        assert page.name == "Blender"
        assert find_problems(page) == []

    def test_default_page_name(self, ids):
        assert convert_product_schema(PRODUCT, ids=ids).name == "Imported Product Page"

    def test_invalid_types_raise(self):
        with pytest.raises(ValidationError):
            convert_product_schema({"hero": {}, "variants": [{"label": "x", "price": "cheap"}]})

    def test_converted_page_exports(self, ids, now):
        html = render_page(convert_product_schema(FULL_PRODUCT, ids=ids), now=now)
        assert "https://player.vimeo.com/video/123" in html
        assert "<script" not in html

    def test_format_price(self):
        assert format_price(29.9, "RM") == "RM 29.90"
        assert format_price(0, "$") == "$ 0.00"


# ── Conversion automatique ───────────────────────────────────────────────────

class TestAutoConvert:
    def test_native_passthrough(self, ids, now):
        data = dump_page(create_page("Saved", ids=ids, now=now))
        result = auto_convert_to_page_builder(data)
        assert result.success
        assert result.schema_type == "page-builder"
        assert dump_page(result.page) == data

    def test_native_scenario_a(self, ids):
        result = auto_convert_to_page_builder({"sections": [{"id": "s1", "style": {}, "blocks": []}]}, ids=ids)
        assert result.success
        assert result.page.sections[0].id == "s1"
        assert result.page.name == "Imported Page"

    def test_native_invalid(self):
        data = {"sections": [{"id": "s1", "style": {}, "blocks": [{"id": "b", "type": "marquee"}]}]}
        result = auto_convert_to_page_builder(data)
        assert not result.success
        assert result.schema_type == "page-builder"
        assert result.page is None
        assert result.details

    def test_product_invalid(self):
        result = auto_convert_to_page_builder({"hero": {}, "variants": [{"price": "cheap"}]})
        assert not result.success
        assert result.schema_type == "product-ecommerce"
        assert result.error == "Conversion failed"
        assert any("price" in d for d in result.details)

    def test_unknown_never_guesses(self):
        result = auto_convert_to_page_builder({"title": "x", "blocks": []})
        assert not result.success
        assert result.schema_type == "unknown"
        assert result.page is None
        assert "Unknown or unsupported JSON schema format" in result.error
