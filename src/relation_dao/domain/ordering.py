"""Result ordering for ``select``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from relation_dao.domain.fields import FieldRef


@dataclass(frozen=True)
class Ordering:
    """Sort by one field. ``None`` values sort last in ascending order."""

    field: FieldRef
    descending: bool = False

    def key(self, obj: Any) -> tuple[bool, Any]:
        value = self.field.get(obj)
        return (value is None, value)

    def __str__(self) -> str:
        return f"{'DESC' if self.descending else 'ASC'}({self.field})"


OrderSpec = Ordering | Sequence[Ordering]


def ASC(field: FieldRef) -> Ordering:  # noqa: N802
    return Ordering(field=field)


def DESC(field: FieldRef) -> Ordering:  # noqa: N802
    return Ordering(field=field, descending=True)


def sort_entities(entities: list[Any], order: OrderSpec | None) -> list[Any]:
    """Return ``entities`` sorted by ``order``.

    A sequence of orderings sorts by the first, breaking ties with the next.
    Sorting is stable, so entities that tie on every key keep their natural
    (insertion) order.
    """
    if order is None:
        return list(entities)
    orderings = [order] if isinstance(order, Ordering) else list(order)
    result = list(entities)
    # Least significant key first; each pass is stable
    for ordering in reversed(orderings):
        result.sort(key=ordering.key, reverse=ordering.descending)
    return result
