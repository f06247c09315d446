"""
Tests API — endpoints /page-builder/* + /health via TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from page_studio.app import create_app
from page_studio.blocks import BLOCK_TYPES
from page_studio.blocks.factories import create_page
from page_studio.importer import dump_page


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def page_json(ids, now):
    return dump_page(create_page("Summer Sale", ids=ids, now=now))


INVALID_PAGE = {"id": "p", "sections": [{"id": "s", "style": {}, "blocks": [{"id": "b", "type": "marquee"}]}]}


# ── Santé ─────────────────────────────────────────────────────────────────

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


# ── Export / aperçu ───────────────────────────────────────────────────────

class TestRender:
    def test_export(self, client, page_json):
        r = client.post("/page-builder/export", json=page_json)
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/html")
        assert 'filename="summer-sale.html"' in r.headers["content-disposition"]
        assert r.text.startswith("<!DOCTYPE html>")
        assert "script-src" in r.text

    def test_export_invalid(self, client):
        r = client.post("/page-builder/export", json=INVALID_PAGE)
        assert r.status_code == 400
        body = r.json()
        assert body["error"] == "Document invalide"
        assert body["details"]

    def test_export_not_an_object(self, client):
        r = client.post("/page-builder/export", json=[1, 2, 3])
        assert r.status_code == 400

    def test_preview(self, client, page_json):
        r = client.post("/page-builder/preview", json=page_json)
        assert r.status_code == 200
        assert 'data-section-id="section-2"' in r.text
        assert "<!DOCTYPE" not in r.text


# ── Validation / détection / import ───────────────────────────────────────

class TestImport:
    def test_validate_ok(self, client, page_json):
        assert client.post("/page-builder/validate", json=page_json).json() == {"valid": True}

    def test_validate_ko(self, client):
        body = client.post("/page-builder/validate", json=INVALID_PAGE).json()
        assert body["valid"] is False
        assert body["details"]

    def test_detect(self, client):
        body = client.post("/page-builder/detect", json={"hero": {}, "faq": []}).json()
        assert body["type"] == "product-ecommerce"
        assert body["confidence"] == 0.95
        assert body["message"].startswith("E-commerce")

    def test_import_product(self, client):
        data = {"hero": {"headline": "H", "media_url": "https://x/y.jpg"}, "faq": [{"q": "Q1", "a": "A1"}]}
        r = client.post("/page-builder/import", params={"page_name": "Promo"}, json=data)
        assert r.status_code == 200
        body = r.json()
        assert body["schemaType"] == "product-ecommerce"
        assert body["page"]["name"] == "Promo"
        assert len(body["page"]["sections"]) == 2
        assert "backgroundColor" in body["page"]["sections"][0]["style"]

    def test_import_native(self, client, page_json):
        body = client.post("/page-builder/import", json=page_json).json()
        assert body["schemaType"] == "page-builder"
        assert body["page"] == page_json

    def test_import_unknown(self, client):
        r = client.post("/page-builder/import", json={"title": "x"})
        assert r.status_code == 400
        assert "Unknown or unsupported" in r.json()["error"]


# ── Catalogue ─────────────────────────────────────────────────────────────

def test_catalog(client):
    blocks = client.get("/page-builder/catalog").json()["blocks"]
    assert [b["type"] for b in blocks] == list(BLOCK_TYPES)
    button = next(b for b in blocks if b["type"] == "button")
    assert button["defaults"]["text"] == "Click me"
    assert "backgroundColor" in button["schema"]["$defs"]["ButtonStyle"]["properties"]
