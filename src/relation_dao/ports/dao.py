"""DAO port interface.

Uses typing.Protocol for structural subtyping (not ABCs). The in-memory
and Redis collections implement it, and so does the relationship adapter,
which makes the adapter substitutable wherever a DAO is expected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from relation_dao.domain.models import EntityId
    from relation_dao.domain.ordering import OrderSpec
    from relation_dao.domain.predicates import Predicate
    from relation_dao.domain.sinks import Sink


class DAO(Protocol):
    """Protocol for an asynchronous collection of entities."""

    async def put(self, obj: Any) -> Any:
        """Insert or replace ``obj``. Returns the stored entity."""
        ...

    async def find(self, id: EntityId) -> Any | None:  # noqa: A002
        """Return the entity with ``id``, or None if absent."""
        ...

    async def select(
        self,
        sink: Sink | None = None,
        skip: int | None = None,
        limit: int | None = None,
        order: OrderSpec | None = None,
        predicate: Predicate | None = None,
    ) -> Sink:
        """Feed matching entities into ``sink`` and return it.

        ``predicate`` filters first, then ``order`` sorts, then ``skip``
        and ``limit`` page the sorted result. Without a sink a new
        ``ArraySink`` is returned.
        """
        ...
