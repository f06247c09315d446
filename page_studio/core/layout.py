"""
Résolution de layout : (style, layout, columns) → instructions flex ou grille.

Règle unique : grille si et seulement si layout == "grid" ; sinon flex.
Pas de mode hybride. Les gaps (columnGap/rowGap) servent aux deux modes.
"""
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel

from .sanitize import format_number, sanitize_css_keyword, sanitize_number
from .style import SectionStyle

DEFAULT_GRID_COLUMNS = 2
MAX_GRID_COLUMNS = 12

FLEX_DIRECTIONS = ("row", "column", "row-reverse", "column-reverse")
ALIGN_ITEMS = ("flex-start", "center", "flex-end", "stretch", "baseline")
JUSTIFY_CONTENT = ("flex-start", "center", "flex-end", "space-between", "space-around", "space-evenly")
FLEX_WRAPS = ("nowrap", "wrap", "wrap-reverse")


class LayoutInstructions(BaseModel):
    """Instructions de mise en page d'une section (pures, sans CSS brut utilisateur)."""
    mode: Literal["flex", "grid"]
    column_gap: float = 0
    row_gap: float = 0
    columns: Optional[int] = None
    direction: Optional[str] = None
    align_items: Optional[str] = None
    justify_content: Optional[str] = None
    wrap: Optional[str] = None

    def declarations(self) -> List[Tuple[str, str]]:
        """Paires (propriété, valeur) CSS, dans un ordre stable."""
        gaps = [
            ("column-gap", f"{format_number(self.column_gap)}px"),
            ("row-gap", f"{format_number(self.row_gap)}px"),
        ]
        if self.mode == "grid":
            return [
                ("display", "grid"),
                ("grid-template-columns", f"repeat({self.columns}, minmax(0, 1fr))"),
                *gaps,
            ]
        return [
            ("display", "flex"),
            ("flex-direction", self.direction),
            ("align-items", self.align_items),
            ("justify-content", self.justify_content),
            ("flex-wrap", self.wrap),
            *gaps,
        ]


def _grid_columns(columns) -> int:
    if isinstance(columns, bool) or not isinstance(columns, int) or columns < 1:
        return DEFAULT_GRID_COLUMNS
    return min(columns, MAX_GRID_COLUMNS)


def resolve_layout(style: SectionStyle, layout: str, columns: Optional[int] = None) -> LayoutInstructions:
    column_gap = sanitize_number(style.column_gap, default=0, minimum=0)
    row_gap = sanitize_number(style.row_gap, default=0, minimum=0)

    if layout == "grid":
        return LayoutInstructions(
            mode="grid",
            columns=_grid_columns(columns),
            column_gap=column_gap,
            row_gap=row_gap,
        )

    flex = style.flex
    return LayoutInstructions(
        mode="flex",
        direction=sanitize_css_keyword(flex.direction, FLEX_DIRECTIONS, "column"),
        align_items=sanitize_css_keyword(flex.align_items, ALIGN_ITEMS, "stretch"),
        justify_content=sanitize_css_keyword(flex.justify_content, JUSTIFY_CONTENT, "flex-start"),
        wrap=sanitize_css_keyword(flex.wrap, FLEX_WRAPS, "nowrap"),
        column_gap=column_gap,
        row_gap=row_gap,
    )
