"""
Détection du schéma d'un JSON importé + conversion automatique.

  page-builder       confiance 1.0   sections[] dont le 1er élément a blocks ET style
  product-ecommerce  confiance 0.95  au moins 2 des 6 champs connus (hero, variants…)
  unknown            confiance 0     aucune conversion, aucun import partiel
"""
import logging
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from ..core.ids import IdGenerator
from ..core.invariants import InvariantViolation, assert_page
from ..core.schemas import Page
from .native import load_page, validation_details
from .product import convert_product_schema

log = logging.getLogger(__name__)

SchemaType = Literal["page-builder", "product-ecommerce", "unknown"]

PRODUCT_CONFIDENCE = 0.95
PRODUCT_MIN_MATCHES = 2

SCHEMA_MESSAGES = {
    "page-builder": "Page builder format detected - ready to import",
    "product-ecommerce": "E-commerce product format detected - will auto-convert to page builder",
    "unknown": "Unknown format - please check your JSON structure",
}


class DetectionResult(BaseModel):
    type: SchemaType
    confidence: float
    description: str


class ConversionResult(BaseModel):
    success: bool
    schema_type: SchemaType
    page: Optional[Page] = None
    error: Optional[str] = None
    details: List[str] = Field(default_factory=list)


def is_page_builder_schema(data: Any) -> bool:
    if not isinstance(data, dict) or not isinstance(data.get("sections"), list):
        return False
    sections = data["sections"]
    if not sections:
        return True
    first = sections[0]
    return isinstance(first, dict) and "blocks" in first and "style" in first


def product_signature(data: Any) -> List[str]:
    """Champs produit reconnus (avec le bon type) présents au premier niveau."""
    if not isinstance(data, dict):
        return []
    checks = {
        "hero": dict,
        "variants": list,
        "products": dict,
        "faq": list,
        "reviews": list,
        "theme": dict,
    }
    return [key for key, kind in checks.items() if isinstance(data.get(key), kind)]


def is_product_schema(data: Any) -> bool:
    return len(product_signature(data)) >= PRODUCT_MIN_MATCHES


def detect_schema_type(data: Any) -> DetectionResult:
    if is_page_builder_schema(data):
        return DetectionResult(type="page-builder", confidence=1.0,
                               description="Native page builder schema - ready to use")
    if is_product_schema(data):
        return DetectionResult(type="product-ecommerce", confidence=PRODUCT_CONFIDENCE,
                               description="E-commerce product schema - will be converted")
    return DetectionResult(type="unknown", confidence=0, description="Unknown schema format")


def schema_message(detection: DetectionResult) -> str:
    return SCHEMA_MESSAGES[detection.type]


def auto_convert_to_page_builder(data: Any, page_name: Optional[str] = None,
                                 ids: Optional[IdGenerator] = None) -> ConversionResult:
    """Classe puis convertit ; jamais d'import partiel ni de devinette."""
    detection = detect_schema_type(data)
    log.info("Schéma détecté : %s (%.2f)", detection.type, detection.confidence)

    if detection.type == "page-builder":
        loaded = load_page(data, ids=ids)
        if not loaded.ok:
            return ConversionResult(success=False, schema_type="page-builder",
                                    error=loaded.error, details=loaded.details)
        return ConversionResult(success=True, schema_type="page-builder", page=loaded.page)

    if detection.type == "product-ecommerce":
        try:
            page = convert_product_schema(data, page_name=page_name, ids=ids)
            assert_page(page)
        except ValidationError as exc:
            return ConversionResult(success=False, schema_type="product-ecommerce",
                                    error="Conversion failed", details=validation_details(exc))
        except InvariantViolation as exc:
            return ConversionResult(success=False, schema_type="product-ecommerce",
                                    error="Conversion failed", details=exc.problems)
        return ConversionResult(success=True, schema_type="product-ecommerce", page=page)

    return ConversionResult(
        success=False,
        schema_type="unknown",
        error="Unknown or unsupported JSON schema format. Please use a page builder schema or product schema.",
    )
