"""In-memory DAO adapter.

Implements the ``DAO`` protocol over an insertion-ordered dict keyed by
entity id. Insertion order is the collection's natural order: ``select``
without an ``order`` yields entities in the order they were first put.
Replacing an existing id keeps its original position.

Stored entities are deep copies, so mutating an object after ``put`` does
not change what the collection holds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from relation_dao.domain.models import Entity
from relation_dao.domain.query import apply_query
from relation_dao.settings import MemorySettings

if TYPE_CHECKING:
    from relation_dao.domain.models import EntityId
    from relation_dao.domain.ordering import OrderSpec
    from relation_dao.domain.predicates import Predicate
    from relation_dao.domain.sinks import Sink

E = TypeVar("E", bound=Entity)

logger = structlog.get_logger(__name__)


class InMemoryDAO(Generic[E]):
    """DAO implementation backed by a Python dict.

    Satisfies the ``relation_dao.ports.dao.DAO`` protocol.
    """

    def __init__(
        self,
        of: type[E],
        settings: MemorySettings | None = None,
        name: str | None = None,
    ) -> None:
        self.of = of
        self.name = name or of.__name__
        self._settings = settings or MemorySettings()
        self._rows: dict[EntityId, E] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def _read(self, obj: E) -> E:
        return obj.model_copy(deep=True) if self._settings.clone_on_read else obj

    # -- write operations ---------------------------------------------------

    async def put(self, obj: E) -> E:
        """Insert or replace ``obj`` by id. Returns the stored entity."""
        if not isinstance(obj, self.of):
            msg = f"{self.name} stores {self.of.__name__}, got {type(obj).__name__}"
            raise TypeError(msg)

        stored = obj.model_copy(deep=True)
        self._rows[stored.id] = stored
        logger.debug("dao_put", dao=self.name, id=stored.id)
        return self._read(stored)

    async def remove(self, obj: E) -> E | None:
        """Remove ``obj`` by id. Returns the removed entity, or None if absent."""
        removed = self._rows.pop(obj.id, None)
        if removed is not None:
            logger.debug("dao_removed", dao=self.name, id=obj.id)
        return removed

    async def remove_all(self, predicate: Predicate | None = None) -> int:
        """Remove every entity matching ``predicate`` (all when None).

        Returns the number of removed entities.
        """
        doomed = [
            key for key, obj in self._rows.items() if predicate is None or predicate.f(obj)
        ]
        for key in doomed:
            del self._rows[key]
        logger.debug("dao_removed_all", dao=self.name, removed=len(doomed))
        return len(doomed)

    # -- read operations ----------------------------------------------------

    async def find(self, id: EntityId) -> E | None:  # noqa: A002
        """Return the entity with ``id``, or None if absent."""
        obj = self._rows.get(id)
        return None if obj is None else self._read(obj)

    async def select(
        self,
        sink: Sink | None = None,
        skip: int | None = None,
        limit: int | None = None,
        order: OrderSpec | None = None,
        predicate: Predicate | None = None,
    ) -> Sink:
        """Feed matching entities into ``sink`` in natural (insertion) order."""
        rows = [self._read(obj) for obj in self._rows.values()]
        return apply_query(rows, sink, skip, limit, order, predicate)
