"""
Moteur de mutation — un Document possède la Page en cours d'édition.

Chaque opération travaille sur une copie profonde : en cas d'échec l'arbre
reste intact et aucun instantané n'est empilé. En cas de succès l'état
précédent part dans l'historique et la pile redo est vidée.

Rien ne lève d'exception à travers cette frontière : toutes les opérations
renvoient un MutationResult.

Usage:
    >>> doc = Document()
    >>> result = doc.add_block(doc.page.sections[0].id, create_block("button"))
    >>> result.ok
    True
    >>> doc.undo().ok
    True
"""
import logging
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ..blocks import BaseBlock, BlockUnion
from ..blocks.factories import create_page, create_section
from ..core.ids import IdGenerator, default_ids
from ..core.invariants import InvariantViolation, assert_page, collect_ids
from ..core.schemas import Page, Section
from .history import History

log = logging.getLogger(__name__)

_block_adapter = TypeAdapter(BlockUnion)

# Préfixe des IDs régénérés, selon la clé de liste parente
_CHILD_PREFIX = {"sections": "section", "blocks": "block"}
_IMMUTABLE_KEYS = ("id", "type")


class MutationError(ValueError):
    """Cible invalide (section/bloc inconnu, index hors bornes, données invalides)."""


class MutationResult(BaseModel):
    ok: bool
    page: Page
    error: Optional[str] = None


def _key(key: str) -> str:
    """Normalise une clé de mise à jour : snake_case → camelCase, camelCase inchangé."""
    return to_camel(key) if "_" in key else key


def _check_changes(changes: Any) -> None:
    """Un dict à clés str, récursivement ; sinon MutationError."""
    if not isinstance(changes, dict):
        raise MutationError(f"Modifications invalides : dict attendu, reçu {type(changes).__name__}")
    for key, value in changes.items():
        if not isinstance(key, str):
            raise MutationError(f"Clé de modification invalide : {key!r}")
        if isinstance(value, dict):
            _check_changes(value)


def _deep_merge(base: Dict[str, Any], changes: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for raw_key, value in changes.items():
        key = _key(raw_key)
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


class Document:
    """Session d'édition : une Page + son historique."""

    def __init__(self, page: Optional[Page] = None, ids: Optional[IdGenerator] = None,
                 history_limit: Optional[int] = None):
        self.ids = ids or default_ids()
        self.page = page if page is not None else create_page(ids=self.ids)
        self.history = History(history_limit)

    # ── Mécanique commune ────────────────────────────────────────────────────

    def _apply(self, operation: str, mutate: Callable[[Page], None]) -> MutationResult:
        working = self.page.model_copy(deep=True)
        try:
            mutate(working)
            assert_page(working)
        except (MutationError, InvariantViolation) as exc:
            log.debug("%s refusé : %s", operation, exc)
            return MutationResult(ok=False, page=self.page, error=str(exc))
        except ValidationError as exc:
            log.debug("%s refusé : données invalides", operation)
            return MutationResult(ok=False, page=self.page, error=_errors(exc))

        self.history.record(self.page)
        self.page = working
        log.debug("%s appliqué (%d sections, %d blocs)", operation, len(working.sections), working.block_count())
        return MutationResult(ok=True, page=self.page)

    @staticmethod
    def _section(page: Page, section_id: str) -> Section:
        section = page.find_section(section_id)
        if section is None:
            raise MutationError(f"Section inconnue : {section_id}")
        return section

    @staticmethod
    def _block_index(section: Section, block_id: str) -> int:
        for i, block in enumerate(section.blocks):
            if block.id == block_id:
                return i
        raise MutationError(f"Bloc inconnu : {block_id} (section {section.id})")

    def _fresh_id(self, prefix: str, used: set) -> str:
        new_id = self.ids.new(prefix)
        while new_id in used:
            new_id = self.ids.new(prefix)
        used.add(new_id)
        return new_id

    def _renew_ids(self, value: Any, prefix: str, used: set) -> None:
        """Remplace récursivement chaque clé "id" par un ID neuf."""
        if isinstance(value, dict):
            if "id" in value:
                value["id"] = self._fresh_id(prefix, used)
            for key, child in value.items():
                if key != "id":
                    self._renew_ids(child, _CHILD_PREFIX.get(key, "item"), used)
        elif isinstance(value, list):
            for child in value:
                self._renew_ids(child, prefix, used)

    @staticmethod
    def _coerce_block(block: Union[BaseBlock, Dict[str, Any]]) -> BaseBlock:
        if isinstance(block, BaseBlock):
            return _block_adapter.validate_python(block.model_dump(by_alias=True))
        return _block_adapter.validate_python(block)

    @staticmethod
    def _coerce_section(section: Union[Section, Dict[str, Any]]) -> Section:
        if isinstance(section, Section):
            return section.model_copy(deep=True)
        return Section.model_validate(section)

    # ── Sections ─────────────────────────────────────────────────────────────

    def add_section(self, section: Union[Section, Dict[str, Any], None] = None,
                    index: Optional[int] = None) -> MutationResult:
        def mutate(page: Page) -> None:
            new = self._coerce_section(section) if section is not None else create_section(self.ids)
            if isinstance(index, int) and 0 <= index <= len(page.sections):
                page.sections.insert(index, new)
            else:
                page.sections.append(new)
        return self._apply("add_section", mutate)

    def update_section(self, section_id: str, changes: Dict[str, Any]) -> MutationResult:
        def mutate(page: Page) -> None:
            _check_changes(changes)
            index = page.section_index(section_id)
            if index < 0:
                raise MutationError(f"Section inconnue : {section_id}")
            current = page.sections[index]
            normalized = {_key(k) for k in changes}
            if "blocks" in normalized:
                raise MutationError("Les blocs se modifient via les opérations de bloc")
            if "id" in normalized and changes.get("id") != current.id:
                raise MutationError("L'id d'une section est immuable")
            merged = _deep_merge(current.model_dump(by_alias=True), changes)
            page.sections[index] = Section.model_validate(merged)
        return self._apply("update_section", mutate)

    def delete_section(self, section_id: str) -> MutationResult:
        def mutate(page: Page) -> None:
            index = page.section_index(section_id)
            if index < 0:
                raise MutationError(f"Section inconnue : {section_id}")
            del page.sections[index]
        return self._apply("delete_section", mutate)

    def move_section(self, old_index: int, new_index: int) -> MutationResult:
        """Retire puis réinsère ; new_index est borné à la liste après retrait."""
        def mutate(page: Page) -> None:
            if not isinstance(old_index, int) or not 0 <= old_index < len(page.sections):
                raise MutationError(f"Index de section hors bornes : {old_index}")
            if not isinstance(new_index, int):
                raise MutationError(f"Index cible invalide : {new_index}")
            section = page.sections.pop(old_index)
            target = max(0, min(new_index, len(page.sections)))
            page.sections.insert(target, section)
        return self._apply("move_section", mutate)

    def move_section_up(self, section_id: str) -> MutationResult:
        index = self.page.section_index(section_id)
        if index <= 0:
            error = "Section inconnue" if index < 0 else "Section déjà en première position"
            return MutationResult(ok=False, page=self.page, error=f"{error} : {section_id}")
        return self.move_section(index, index - 1)

    def move_section_down(self, section_id: str) -> MutationResult:
        index = self.page.section_index(section_id)
        if index < 0 or index >= len(self.page.sections) - 1:
            error = "Section inconnue" if index < 0 else "Section déjà en dernière position"
            return MutationResult(ok=False, page=self.page, error=f"{error} : {section_id}")
        return self.move_section(index, index + 1)

    def duplicate_section(self, section_id: str) -> MutationResult:
        """Copie profonde avec IDs neufs à tous les niveaux, insérée juste après l'original."""
        def mutate(page: Page) -> None:
            index = page.section_index(section_id)
            if index < 0:
                raise MutationError(f"Section inconnue : {section_id}")
            data = page.sections[index].model_dump(by_alias=True)
            self._renew_ids(data, "section", collect_ids(page))
            page.sections.insert(index + 1, Section.model_validate(data))
        return self._apply("duplicate_section", mutate)

    # ── Blocs ────────────────────────────────────────────────────────────────

    def add_block(self, section_id: str, block: Union[BaseBlock, Dict[str, Any]],
                  index: Optional[int] = None) -> MutationResult:
        """Insère à `index` s'il est dans [0, len], sinon ajoute en fin."""
        def mutate(page: Page) -> None:
            section = self._section(page, section_id)
            new = self._coerce_block(block)
            if isinstance(index, int) and 0 <= index <= len(section.blocks):
                section.blocks.insert(index, new)
            else:
                section.blocks.append(new)
        return self._apply("add_block", mutate)

    def update_block(self, section_id: str, block_id: str, changes: Dict[str, Any]) -> MutationResult:
        def mutate(page: Page) -> None:
            _check_changes(changes)
            section = self._section(page, section_id)
            index = self._block_index(section, block_id)
            current = section.blocks[index]
            for key in _IMMUTABLE_KEYS:
                if key in changes and changes[key] != getattr(current, key):
                    raise MutationError(f"Champ immuable : {key}")
            merged = _deep_merge(current.model_dump(by_alias=True), changes)
            section.blocks[index] = _block_adapter.validate_python(merged)
        return self._apply("update_block", mutate)

    def delete_block(self, section_id: str, block_id: str) -> MutationResult:
        def mutate(page: Page) -> None:
            section = self._section(page, section_id)
            del section.blocks[self._block_index(section, block_id)]
        return self._apply("delete_block", mutate)

    def move_block(self, from_section_id: str, block_id: str, to_section_id: str,
                   target_index: int) -> MutationResult:
        """
        Retire le bloc de sa section d'origine PUIS l'insère dans la destination.
        target_index est interprété (et borné à [0, len]) sur la liste après retrait.
        """
        def mutate(page: Page) -> None:
            origin = self._section(page, from_section_id)
            destination = self._section(page, to_section_id)
            if not isinstance(target_index, int) or isinstance(target_index, bool):
                raise MutationError(f"Index cible invalide : {target_index}")
            block = origin.blocks.pop(self._block_index(origin, block_id))
            target = max(0, min(target_index, len(destination.blocks)))
            destination.blocks.insert(target, block)
        return self._apply("move_block", mutate)

    def duplicate_block(self, section_id: str, block_id: str) -> MutationResult:
        def mutate(page: Page) -> None:
            section = self._section(page, section_id)
            index = self._block_index(section, block_id)
            data = section.blocks[index].model_dump(by_alias=True)
            self._renew_ids(data, "block", collect_ids(page))
            section.blocks.insert(index + 1, _block_adapter.validate_python(data))
        return self._apply("duplicate_block", mutate)

    # ── Historique ───────────────────────────────────────────────────────────

    def undo(self) -> MutationResult:
        previous = self.history.undo(self.page)
        if previous is None:
            return MutationResult(ok=False, page=self.page, error="Rien à annuler")
        self.page = previous
        return MutationResult(ok=True, page=self.page)

    def redo(self) -> MutationResult:
        following = self.history.redo(self.page)
        if following is None:
            return MutationResult(ok=False, page=self.page, error="Rien à rétablir")
        self.page = following
        return MutationResult(ok=True, page=self.page)

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ── Cycle de vie ─────────────────────────────────────────────────────────

    def load_page(self, page: Page) -> MutationResult:
        """Remplacement atomique (import, template). L'historique repart de zéro."""
        candidate = page.model_copy(deep=True)
        try:
            assert_page(candidate)
        except InvariantViolation as exc:
            log.info("Chargement refusé : %s", exc)
            return MutationResult(ok=False, page=self.page, error=str(exc))
        self.page = candidate
        self.history.clear()
        log.info("Page chargée : %s (%d sections)", candidate.name, len(candidate.sections))
        return MutationResult(ok=True, page=self.page)

    def snapshot(self) -> Page:
        """Copie indépendante de la page, pour un export hors du chemin de mutation."""
        return self.page.model_copy(deep=True)
