"""
Schémas Pydantic du document.
Structure : Page → Section → Block (arbre ordonné à trois niveaux).

L'index dans la liste est la seule autorité d'ordre : pas de champ `position`.
Le modèle ne sanitize pas à l'écriture ; seuls les renderers le font.
"""
from typing import List, Literal, Optional

from pydantic import Field

from ..blocks import BlockUnion
from .style import FlexProps, Number, SectionStyle, Spacing, StudioModel, spacing

SectionLayout = Literal["flex", "grid"]


class Section(StudioModel):
    """Section : conteneur ordonné de blocs, en flex ou en grille."""
    id: str
    layout: SectionLayout = "flex"
    columns: Optional[int] = Field(default=None, ge=1, le=12)
    style: SectionStyle = Field(default_factory=SectionStyle)
    blocks: List[BlockUnion] = Field(default_factory=list)


class Page(StudioModel):
    """Page complète (racine du document)."""
    id: str
    name: str = "Untitled Page"
    slug: Optional[str] = None
    sections: List[Section] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def find_section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def section_index(self, section_id: str) -> int:
        """Index de la section, -1 si absente."""
        for i, section in enumerate(self.sections):
            if section.id == section_id:
                return i
        return -1

    def block_count(self) -> int:
        return sum(len(s.blocks) for s in self.sections)


__all__ = [
    "Number", "Spacing", "spacing", "FlexProps", "SectionStyle",
    "SectionLayout", "Section", "Page",
]
