"""Tests modèle du document — blocs, factories, invariants, format JSON natif."""
import pytest
from pydantic import TypeAdapter, ValidationError

from page_studio.blocks import BLOCK_REGISTRY, BLOCK_TYPES, BlockUnion, ButtonBlock, TextStyle
from page_studio.blocks.factories import (
    BLOCK_FACTORIES, create_block, create_default_countdown_block, create_page,
    create_section, create_three_column_section, create_two_column_section,
)
from page_studio.core.invariants import InvariantViolation, assert_page, collect_ids, find_problems
from page_studio.core.schemas import Page, Section
from page_studio.importer.native import dump_page, load_page, page_from_json, page_to_json

ALL_TYPES = [
    "text", "image", "video", "button", "countdown", "faq", "space", "divider", "icon",
    "social", "testimonial", "feature", "pricing", "form", "accordion", "quote", "stats",
    "team", "gallery", "logo-grid", "embed", "newsletter",
]


def _full_page(ids, now):
    """Une section par type de bloc."""
    page = create_page("Every block", ids=ids, now=now)
    for block_type in ALL_TYPES:
        section = create_section(ids)
        section.blocks.append(create_block(block_type, ids))
        page.sections.append(section)
    return page


# ── Registre / factories ─────────────────────────────────────────────────────

def test_registry_covers_every_variant():
    assert sorted(BLOCK_TYPES) == sorted(ALL_TYPES)
    assert set(BLOCK_REGISTRY) == set(BLOCK_FACTORIES)


@pytest.mark.parametrize("block_type", ALL_TYPES)
def test_factory_builds_declared_type(block_type, ids):
    block = create_block(block_type, ids)
    assert block.type == block_type
    assert isinstance(block, BLOCK_REGISTRY[block_type])
    assert block.id.startswith("block-")


def test_factory_unknown_type():
    with pytest.raises(ValueError):
        create_block("carousel")


def test_factory_nested_items_get_ids(ids):
    faq = create_block("faq", ids)
    assert [item.id for item in faq.items] == ["item-2", "item-3"]


def test_countdown_default_is_seven_days_ahead(ids, now):
    block = create_default_countdown_block(ids, now=now)
    assert block.target_date.startswith("2025-01-08T12:00:00")


def test_create_page_defaults(ids, now):
    page = create_page(ids=ids, now=now)
    assert page.id == "page-1"
    assert page.name == "Untitled Page"
    assert len(page.sections) == 1
    assert page.sections[0].blocks[0].type == "text"
    assert page.created_at == page.updated_at == now.isoformat()


def test_column_sections(ids):
    two = create_two_column_section(ids)
    three = create_three_column_section(ids)
    assert (two.layout, two.columns, len(two.blocks)) == ("grid", 2, 2)
    assert (three.layout, three.columns, len(three.blocks)) == ("grid", 3, 3)


def test_factory_ids_unique_within_page(ids, now):
    page = _full_page(ids, now)
    assert find_problems(page) == []


# ── Modèle ───────────────────────────────────────────────────────────────────

class TestModel:
    def test_discriminated_union(self):
        adapter = TypeAdapter(BlockUnion)
        block = adapter.validate_python({"id": "b1", "type": "button", "text": "Go"})
        assert isinstance(block, ButtonBlock)
        assert block.style.border_radius == 6

    def test_unknown_block_type_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(BlockUnion).validate_python({"id": "b1", "type": "marquee"})

    def test_camel_case_keys(self, ids, now):
        data = dump_page(create_page(ids=ids, now=now))
        style = data["sections"][0]["style"]
        assert "backgroundColor" in style
        assert "columnGap" in style
        assert "fontFamily" in data["sections"][0]["blocks"][0]["style"]
        assert "createdAt" in data

    def test_snake_and_camel_both_accepted(self):
        assert TextStyle(fontSize=20).font_size == 20
        assert TextStyle(font_size=22).font_size == 22

    def test_none_fields_omitted(self, ids, now):
        data = dump_page(create_page(ids=ids, now=now))
        assert "slug" not in data
        assert "columns" not in data["sections"][0]

    def test_columns_bounds(self):
        with pytest.raises(ValidationError):
            Section(id="s", layout="grid", columns=13)
        with pytest.raises(ValidationError):
            Section(id="s", layout="grid", columns=0)

    def test_page_helpers(self, grid_page):
        first = grid_page.sections[0]
        assert grid_page.find_section(first.id) is first
        assert grid_page.find_section("nope") is None
        assert grid_page.section_index(grid_page.sections[2].id) == 2
        assert grid_page.section_index("nope") == -1
        assert grid_page.block_count() == 6


# ── Invariants ───────────────────────────────────────────────────────────────

class TestInvariants:
    def test_duplicate_block_ids(self, grid_page):
        grid_page.sections[1].blocks[0].id = grid_page.sections[0].blocks[0].id
        problems = find_problems(grid_page)
        assert len(problems) == 1
        assert "dupliqué" in problems[0]

    def test_nested_id_collision(self, ids, grid_page):
        faq = create_block("faq", ids)
        faq.items[0].id = grid_page.sections[0].id
        grid_page.sections[0].blocks.append(faq)
        with pytest.raises(InvariantViolation) as exc:
            assert_page(grid_page)
        assert exc.value.problems

    def test_collect_ids(self, page):
        assert collect_ids(page) == {"page-1", "section-2", "block-3"}


# ── Format natif ─────────────────────────────────────────────────────────────

class TestNativeFormat:
    def test_round_trip_dict(self, ids, now):
        page = _full_page(ids, now)
        assert Page.model_validate(dump_page(page)) == page

    def test_round_trip_json(self, ids, now):
        page = _full_page(ids, now)
        loaded = page_from_json(page_to_json(page))
        assert loaded.ok
        assert loaded.page == page

    def test_load_fills_id_and_name(self, ids):
        result = load_page({"sections": []}, ids=ids)
        assert result.ok
        assert result.page.id == "page-1"
        assert result.page.name == "Imported Page"

    def test_load_rejects_non_object(self):
        result = load_page(["not", "a", "page"])
        assert not result.ok
        assert result.page is None

    def test_load_reports_paths(self):
        result = load_page({"id": "p", "sections": [{"id": "s", "blocks": [{"id": "b", "type": "marquee"}]}]})
        assert not result.ok
        assert result.error == "Document invalide"
        assert any(d.startswith("sections.0.blocks.0") for d in result.details)

    def test_load_rejects_duplicate_ids(self):
        data = {"id": "p", "sections": [{"id": "dup", "blocks": []}, {"id": "dup", "blocks": []}]}
        result = load_page(data)
        assert not result.ok
        assert result.error == "Invariants non respectés"

    def test_unreadable_json(self):
        result = page_from_json("{not json")
        assert not result.ok
        assert result.error == "JSON illisible"
