"""
Configuration page_studio — lue depuis les variables d'environnement.

PAGE_STUDIO_HISTORY_LIMIT      profondeur max de l'historique undo (0 = illimité)
PAGE_STUDIO_LOG_LEVEL          niveau de log de l'app FastAPI
PAGE_STUDIO_LANG               attribut lang du document exporté
PAGE_STUDIO_EXTRA_FRAME_HOSTS  hôtes https supplémentaires autorisés pour les embeds "custom" (séparés par des virgules)
PAGE_STUDIO_CURRENCY           devise utilisée par le convertisseur de schéma produit
"""
import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field


class Settings(BaseModel):
    history_limit: int = Field(default=50, ge=0)
    log_level: str = "INFO"
    lang: str = "en"
    extra_frame_hosts: List[str] = Field(default_factory=list)
    currency: str = "RM"


def _split_hosts(raw: str) -> List[str]:
    return [h.strip().lower() for h in raw.split(",") if h.strip()]


@lru_cache
def get_settings() -> Settings:
    """Construit les Settings une seule fois (cache) depuis l'environnement."""
    return Settings(
        history_limit=int(os.getenv("PAGE_STUDIO_HISTORY_LIMIT", "50")),
        log_level=os.getenv("PAGE_STUDIO_LOG_LEVEL", "INFO"),
        lang=os.getenv("PAGE_STUDIO_LANG", "en"),
        extra_frame_hosts=_split_hosts(os.getenv("PAGE_STUDIO_EXTRA_FRAME_HOSTS", "")),
        currency=os.getenv("PAGE_STUDIO_CURRENCY", "RM"),
    )


def reload_settings() -> Settings:
    """Force la relecture de l'environnement (tests, dev)."""
    get_settings.cache_clear()
    return get_settings()
