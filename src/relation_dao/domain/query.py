"""In-process query pipeline shared by the bundled DAOs.

filter -> order -> skip -> limit -> sink. Backends that cannot push a
predicate down to storage load candidates in natural order and run them
through ``apply_query``.

Pure Python — zero storage imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from relation_dao.domain.ordering import sort_entities
from relation_dao.domain.sinks import ArraySink

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relation_dao.domain.ordering import OrderSpec
    from relation_dao.domain.predicates import Predicate
    from relation_dao.domain.sinks import Sink


def validate_page_bounds(skip: int | None, limit: int | None) -> tuple[int, int | None]:
    """Normalize ``skip``/``limit``. Negative values are rejected."""
    if skip is not None and skip < 0:
        msg = f"skip must be >= 0, got {skip}"
        raise ValueError(msg)
    if limit is not None and limit < 0:
        msg = f"limit must be >= 0, got {limit}"
        raise ValueError(msg)
    return (skip or 0, limit)


def apply_query(
    entities: Iterable[Any],
    sink: Sink | None = None,
    skip: int | None = None,
    limit: int | None = None,
    order: OrderSpec | None = None,
    predicate: Predicate | None = None,
) -> Sink:
    """Run ``entities`` (in natural order) through the select pipeline.

    Returns ``sink``, or a new ``ArraySink`` when none is given, after
    calling ``eof()`` on it.
    """
    start, limit = validate_page_bounds(skip, limit)
    if sink is None:
        sink = ArraySink()

    matched = [e for e in entities if predicate is None or predicate.f(e)]
    ordered = sort_entities(matched, order)
    end = None if limit is None else start + limit

    for entity in ordered[start:end]:
        sink.put(entity)
    sink.eof()
    return sink
