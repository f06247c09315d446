"""
Types de style communs — Spacing, FlexProps, SectionStyle.

Les objets de style sont toujours complets : chaque champ a une valeur par défaut
posée à la construction, jamais déduite au rendu.
Les clés JSON restent en camelCase (backgroundColor, columnGap…).
"""
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class StudioModel(BaseModel):
    """Modèle de base : champs snake_case côté Python, camelCase côté JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Spacing(StudioModel):
    """Espacement 4 côtés en pixels (jamais de raccourci CSS)."""
    top: Number = 0
    right: Number = 0
    bottom: Number = 0
    left: Number = 0


def spacing(top: Number = 0, right: Number = 0, bottom: Number = 0, left: Number = 0) -> Spacing:
    return Spacing(top=top, right=right, bottom=bottom, left=left)


FlexDirection = Literal["row", "column", "row-reverse", "column-reverse"]
AlignItems = Literal["flex-start", "center", "flex-end", "stretch", "baseline"]
JustifyContent = Literal["flex-start", "center", "flex-end", "space-between", "space-around", "space-evenly"]
FlexWrap = Literal["nowrap", "wrap", "wrap-reverse"]


class FlexProps(StudioModel):
    direction: FlexDirection = "column"
    align_items: AlignItems = "stretch"
    justify_content: JustifyContent = "flex-start"
    wrap: FlexWrap = "nowrap"


class SectionStyle(StudioModel):
    """Fond, boîte et paramètres flex d'une section. columnGap/rowGap servent aux deux modes."""
    background_color: str = "#ffffff"
    background_image: Optional[str] = None
    background_size: Literal["cover", "contain", "auto"] = "cover"
    background_position: str = "center"
    background_repeat: Literal["no-repeat", "repeat", "repeat-x", "repeat-y"] = "no-repeat"
    padding: Spacing = Field(default_factory=lambda: spacing(32, 16, 32, 16))
    margin: Spacing = Field(default_factory=lambda: spacing(0, 0, 24, 0))
    flex: FlexProps = Field(default_factory=FlexProps)
    column_gap: Number = 16
    row_gap: Number = 16
