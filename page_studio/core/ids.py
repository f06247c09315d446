"""
Génération d'identifiants — capacité injectable.

Les IDs sont de la forme "<prefix>-<suffixe>" (section-…, block-…, item-…).
L'unicité est garantie au sein d'une Page (voir editor.document), pas globalement.
"""
import itertools
import uuid
from typing import Protocol, runtime_checkable


@runtime_checkable
class IdGenerator(Protocol):
    def new(self, prefix: str) -> str: ...


class RandomIdGenerator:
    """Générateur par défaut : suffixe hexadécimal aléatoire (uuid4)."""

    def __init__(self, length: int = 12):
        self.length = length

    def new(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex[:self.length]}"


class SequentialIdGenerator:
    """
    Générateur déterministe pour les tests : section-1, block-2, item-3…

    Le compteur est partagé entre préfixes, deux appels ne renvoient jamais le même ID.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def new(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter)}"


_default = RandomIdGenerator()


def default_ids() -> IdGenerator:
    return _default
