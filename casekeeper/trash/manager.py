"""Soft delete and restore of case entities.

Deleting never erases: the entity moves, unmodified, from the case's live
collection to the front of the matching trash collection. Restoring moves it
back to the front of the live collection.
"""

from dataclasses import replace
from typing import Union

from ..exceptions import NotFoundError
from ..models.case import Case, CaseEntity, Trash, TrashKind
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _kind(kind: Union[TrashKind, str]) -> TrashKind:
    if isinstance(kind, TrashKind):
        return kind
    # Singular names ("task") and collection names ("tasks") are both accepted
    for member in TrashKind:
        if kind in (member.value, member.name.lower()):
            return member
    raise ValueError(f"Unknown entity kind: {kind!r}")


def _split(items: list, item_id: str) -> tuple[CaseEntity, list]:
    """Find an entity by id and return it with the list minus that entity."""
    for index, item in enumerate(items):
        if item.id == item_id:
            return item, items[:index] + items[index + 1:]
    raise KeyError(item_id)


def _move(case: Case, kind: TrashKind, live: list, trashed: list) -> Case:
    trash = replace(case.trash, **{kind.value: trashed})
    return replace(case, trash=trash, **{kind.value: live})


def soft_delete(case: Case, kind: Union[TrashKind, str], item_id: str) -> Case:
    """
    Move an entity from the live collection into the trash.

    Args:
        case: Case owning the entity
        kind: Entity kind
        item_id: ID of the entity

    Returns:
        New Case with the entity at the front of its trash collection

    Raises:
        NotFoundError: If the id is not in the live collection
    """
    kind = _kind(kind)
    try:
        entity, live = _split(case.items(kind), item_id)
    except KeyError:
        raise NotFoundError(kind.value, item_id, where="live") from None

    logger.info(f"Moved {kind.value} item {item_id} of case {case.id} to trash")
    return _move(case, kind, live, [entity, *case.trash.items(kind)])


def restore(case: Case, kind: Union[TrashKind, str], item_id: str) -> Case:
    """
    Move an entity from the trash back into the live collection.

    Raises:
        NotFoundError: If the id is not in the trash collection
    """
    kind = _kind(kind)
    try:
        entity, trashed = _split(case.trash.items(kind), item_id)
    except KeyError:
        raise NotFoundError(kind.value, item_id, where="trash") from None

    logger.info(f"Restored {kind.value} item {item_id} of case {case.id}")
    return _move(case, kind, [entity, *case.items(kind)], trashed)


def list_trash(case: Case, kind: Union[TrashKind, str]) -> list[CaseEntity]:
    """Trashed entities of one kind, newest first (a copy)."""
    trash = case.trash if case.trash is not None else Trash()
    return list(trash.items(_kind(kind)))
