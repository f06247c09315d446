"""
Fixtures communes — IDs déterministes, horloge figée, pages types.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime, timezone

import pytest

from page_studio.blocks.factories import create_block, create_page, create_section
from page_studio.config import get_settings, reload_settings
from page_studio.core.ids import SequentialIdGenerator
from page_studio.editor import Document

FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def ids():
    return SequentialIdGenerator()


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def page(ids, now):
    """Page par défaut : 1 section, 1 bloc texte."""
    return create_page("Landing", ids=ids, now=now)


@pytest.fixture
def grid_page(ids, now):
    """3 sections × 2 blocs (texte + bouton)."""
    p = create_page("Grid", ids=ids, now=now)
    p.sections = []
    for _ in range(3):
        section = create_section(ids)
        section.blocks = [create_block("text", ids), create_block("button", ids)]
        p.sections.append(section)
    return p


@pytest.fixture
def doc(grid_page, ids):
    return Document(grid_page, ids=ids, history_limit=0)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings relus depuis l'environnement à chaque test."""
    get_settings.cache_clear()
    yield
    reload_settings()


@pytest.fixture
def clean_env(monkeypatch):
    """Environnement PAGE_STUDIO_* vierge."""
    for key in list(os.environ):
        if key.startswith("PAGE_STUDIO_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
