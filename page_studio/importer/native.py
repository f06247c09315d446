"""
Format JSON natif — sauvegarde, import et export du document.

Clés camelCase, champs None omis. L'aller-retour est sans perte :
load_page(dump_page(p)).page == p pour toute page bien formée.
"""
import json
import logging
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..core.ids import IdGenerator, default_ids
from ..core.invariants import InvariantViolation, assert_page
from ..core.schemas import Page

log = logging.getLogger(__name__)

DEFAULT_IMPORT_NAME = "Imported Page"


class LoadResult(BaseModel):
    ok: bool
    page: Optional[Page] = None
    error: Optional[str] = None
    details: List[str] = Field(default_factory=list)


def validation_details(exc: ValidationError) -> List[str]:
    """Erreurs pydantic → ["sections.0.blocks.1.type: …", …]."""
    return [
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    ]


def load_page(data: Any, ids: Optional[IdGenerator] = None) -> LoadResult:
    """Valide un dict natif. Complète id/name manquants, vérifie l'unicité des IDs."""
    if not isinstance(data, dict):
        return LoadResult(ok=False, error="Le document doit être un objet JSON")

    payload = dict(data)
    if not payload.get("id"):
        payload["id"] = (ids or default_ids()).new("page")
    if not payload.get("name"):
        payload["name"] = DEFAULT_IMPORT_NAME

    try:
        page = Page.model_validate(payload)
        assert_page(page)
    except ValidationError as exc:
        details = validation_details(exc)
        log.info("Import refusé : %d erreur(s) de validation", len(details))
        return LoadResult(ok=False, error="Document invalide", details=details)
    except InvariantViolation as exc:
        log.info("Import refusé : %s", exc)
        return LoadResult(ok=False, error="Invariants non respectés", details=exc.problems)

    return LoadResult(ok=True, page=page)


def dump_page(page: Page) -> dict:
    return page.model_dump(by_alias=True, exclude_none=True, mode="json")


def page_to_json(page: Page, indent: Optional[int] = 2) -> str:
    return page.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def page_from_json(text: str, ids: Optional[IdGenerator] = None) -> LoadResult:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        return LoadResult(ok=False, error="JSON illisible", details=[str(exc)])
    return load_page(data, ids=ids)
