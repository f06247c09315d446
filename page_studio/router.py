"""
Router FastAPI — endpoints page_studio.

POST /page-builder/export    → Page JSON → document HTML autonome (pièce jointe)
POST /page-builder/preview   → Page JSON → fragment HTML avec crochets data-*
POST /page-builder/validate  → Page JSON → {"valid": bool, "error"?, "details"?}
POST /page-builder/detect    → JSON quelconque → {"type", "confidence", "description", "message"}
POST /page-builder/import    → JSON quelconque → Page native (conversion automatique)
GET  /page-builder/catalog   → types de blocs disponibles + leurs JSON schemas
"""
from typing import Any, Optional

from fastapi import APIRouter, Body
from fastapi.responses import HTMLResponse, JSONResponse

from .blocks import BLOCK_REGISTRY
from .blocks.factories import create_block
from .core.ids import SequentialIdGenerator
from .importer import (
    auto_convert_to_page_builder, detect_schema_type, dump_page, load_page, schema_message,
)
from .renderer import export_filename, render_page, render_preview

router = APIRouter(prefix="/page-builder", tags=["page_builder"])


def _bad_request(error: str, details=None) -> JSONResponse:
    return JSONResponse({"error": error, "details": details or []}, status_code=400)


@router.post("/export", response_class=HTMLResponse, summary="Exporte une page en HTML autonome")
def export(page: Any = Body(...)):
    """Valide la page puis retourne le document HTML en pièce jointe."""
    loaded = load_page(page)
    if not loaded.ok:
        return _bad_request(loaded.error, loaded.details)
    filename = export_filename(loaded.page)
    return HTMLResponse(
        content=render_page(loaded.page),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/preview", response_class=HTMLResponse, summary="Rend l'aperçu éditable d'une page")
def preview(page: Any = Body(...)):
    loaded = load_page(page)
    if not loaded.ok:
        return _bad_request(loaded.error, loaded.details)
    return HTMLResponse(content=render_preview(loaded.page))


@router.post("/validate", summary="Valide une page sans la rendre")
def validate(page: Any = Body(...)) -> dict:
    """Valide la structure (types, champs, blocs connus, unicité des IDs)."""
    loaded = load_page(page)
    if loaded.ok:
        return {"valid": True}
    return {"valid": False, "error": loaded.error, "details": loaded.details}


@router.post("/detect", summary="Identifie le format d'un JSON importé")
def detect(data: Any = Body(...)) -> dict:
    detection = detect_schema_type(data)
    return {**detection.model_dump(), "message": schema_message(detection)}


@router.post("/import", summary="Importe un JSON (natif ou produit) en page native")
def import_page(data: Any = Body(...), page_name: Optional[str] = None):
    """Détecte, convertit, et retourne la page native sérialisée."""
    result = auto_convert_to_page_builder(data, page_name=page_name)
    if not result.success:
        return _bad_request(result.error, result.details)
    return {"schemaType": result.schema_type, "page": dump_page(result.page)}


@router.get("/catalog", summary="Liste les blocs disponibles et leurs schemas")
def catalog() -> JSONResponse:
    """Catalogue des blocs : type, valeurs par défaut et JSON schema pydantic."""
    ids = SequentialIdGenerator()
    catalog_data = []
    for block_type, cls in BLOCK_REGISTRY.items():
        catalog_data.append({
            "type":     block_type,
            "defaults": create_block(block_type, ids).model_dump(by_alias=True, exclude_none=True, mode="json"),
            "schema":   cls.model_json_schema(by_alias=True),
        })
    return JSONResponse({"blocks": catalog_data})
