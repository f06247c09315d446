"""
Invariants structurels d'une Page.

- IDs uniques dans la page (sections, blocs et éléments internes portant un id)
- chaque bloc a un type connu
"""
from typing import Iterator, List

from ..blocks import BLOCK_REGISTRY
from .schemas import Page


class InvariantViolation(ValueError):
    """Levée par assert_page ; toujours interceptée aux frontières (import, mutation)."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


def _nested_ids(value) -> Iterator[str]:
    """IDs des éléments internes d'un bloc (items FAQ, champs de formulaire, logos…)."""
    if isinstance(value, dict):
        if isinstance(value.get("id"), str):
            yield value["id"]
        for child in value.values():
            if isinstance(child, (dict, list)):
                yield from _nested_ids(child)
    elif isinstance(value, list):
        for child in value:
            yield from _nested_ids(child)


def iter_ids(page: Page) -> Iterator[str]:
    yield page.id
    for section in page.sections:
        yield section.id
        for block in section.blocks:
            yield from _nested_ids(block.model_dump())


def collect_ids(page: Page) -> set:
    return set(iter_ids(page))


def find_problems(page: Page) -> List[str]:
    problems = []
    seen = set()
    for id_ in iter_ids(page):
        if id_ in seen:
            problems.append(f"ID dupliqué : {id_}")
        seen.add(id_)
    for section in page.sections:
        for block in section.blocks:
            if block.type not in BLOCK_REGISTRY:
                problems.append(f"Type de bloc inconnu : {block.type} ({block.id})")
    return problems


def assert_page(page: Page) -> None:
    problems = find_problems(page)
    if problems:
        raise InvariantViolation(problems)
