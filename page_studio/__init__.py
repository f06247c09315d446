"""
page_studio — noyau de page builder.

Document Page → Section → Block, mutations avec undo/redo, sanitization,
export HTML autonome (CSP sans script) et import JSON (natif ou produit).
"""
__version__ = "0.3.0"

from .blocks import BLOCK_REGISTRY, BLOCK_TYPES, BlockUnion
from .blocks.factories import create_block, create_page, create_section
from .core.schemas import Page, Section
from .editor import Document, MutationResult
from .importer import auto_convert_to_page_builder, detect_schema_type, dump_page, load_page
from .renderer import render_page, render_preview

__all__ = [
    "__version__",
    "BLOCK_REGISTRY", "BLOCK_TYPES", "BlockUnion",
    "create_block", "create_page", "create_section",
    "Page", "Section", "Document", "MutationResult",
    "auto_convert_to_page_builder", "detect_schema_type", "dump_page", "load_page",
    "render_page", "render_preview",
]
