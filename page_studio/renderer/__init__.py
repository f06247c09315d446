"""Renderers : export HTML autonome + aperçu éditable."""
from .base import Renderer
from .css import CSS_RESET, build_csp
from .html import (
    HtmlRenderer, RenderContext, export_filename, render_block, render_page,
    render_preview, render_section,
)

__all__ = [
    "Renderer", "HtmlRenderer", "RenderContext",
    "render_page", "render_preview", "render_section", "render_block",
    "export_filename", "build_csp", "CSS_RESET",
]
