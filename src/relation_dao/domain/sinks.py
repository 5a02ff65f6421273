"""Sinks: consumers of the entities produced by a ``select`` traversal.

A DAO calls ``sink.put(obj)`` once per matching entity, in result order,
then ``sink.eof()`` once the traversal is complete, and returns the sink.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from relation_dao.domain.fields import FieldRef


class Sink(Protocol):
    """Structural type for anything a DAO can ``select`` into."""

    def put(self, obj: Any) -> None: ...

    def eof(self) -> None: ...


class ArraySink:
    """Collects whole entities, in result order."""

    def __init__(self) -> None:
        self.array: list[Any] = []

    def put(self, obj: Any) -> None:
        self.array.append(obj)

    def eof(self) -> None:
        pass


class MapSink:
    """Projects one field of each entity into an ordered list.

    Used by the relationship adapter to turn junction rows into the list of
    target ids they point at.
    """

    def __init__(self, field: FieldRef) -> None:
        self.field = field
        self.array: list[Any] = []

    def put(self, obj: Any) -> None:
        self.array.append(self.field.get(obj))

    def eof(self) -> None:
        pass


class CountSink:
    """Counts entities without retaining them."""

    def __init__(self) -> None:
        self.value = 0

    def put(self, obj: Any) -> None:
        self.value += 1

    def eof(self) -> None:
        pass


def MAP(field: FieldRef) -> MapSink:  # noqa: N802
    return MapSink(field)


def COUNT() -> CountSink:  # noqa: N802
    return CountSink()
