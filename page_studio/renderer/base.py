"""
Protocol Renderer — interface pluggable pour les renderers (export HTML, aperçu…).
"""
from typing import Protocol, runtime_checkable

from ..blocks.base import BaseBlock
from ..core.schemas import Page


@runtime_checkable
class Renderer(Protocol):
    def render_page(self, page: Page) -> str: ...
    def render_block(self, block: BaseBlock) -> str: ...
