"""Éditeur : moteur de mutation + historique undo/redo."""
from .document import Document, MutationError, MutationResult
from .history import History

__all__ = ["Document", "MutationError", "MutationResult", "History"]
