"""
Historique undo/redo par instantanés complets de la page.

Piles strictement linéaires : toute nouvelle mutation vide la pile redo.
Profondeur bornée (0 = illimitée) ; l'instantané le plus ancien part en premier.
"""
from collections import deque
from typing import Deque, Optional

from ..config import get_settings
from ..core.schemas import Page


class History:

    def __init__(self, limit: Optional[int] = None):
        if limit is None:
            limit = get_settings().history_limit
        self.limit = limit
        self._undo: Deque[Page] = deque(maxlen=limit or None)
        self._redo: Deque[Page] = deque(maxlen=limit or None)

    def record(self, before: Page) -> None:
        """Empile l'état précédant une mutation réussie."""
        self._undo.append(before)
        self._redo.clear()

    def undo(self, current: Page) -> Optional[Page]:
        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: Page) -> Optional[Page]:
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def __len__(self) -> int:
        return len(self._undo)
