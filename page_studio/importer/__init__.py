"""Import / export : JSON natif, schéma produit, détection automatique."""
from .detector import (
    ConversionResult, DetectionResult, auto_convert_to_page_builder, detect_schema_type,
    is_page_builder_schema, is_product_schema, schema_message,
)
from .native import LoadResult, dump_page, load_page, page_from_json, page_to_json
from .product import ProductSchema, convert_product_schema

__all__ = [
    "ConversionResult", "DetectionResult", "LoadResult", "ProductSchema",
    "auto_convert_to_page_builder", "detect_schema_type", "is_page_builder_schema",
    "is_product_schema", "schema_message", "convert_product_schema",
    "dump_page", "load_page", "page_from_json", "page_to_json",
]
