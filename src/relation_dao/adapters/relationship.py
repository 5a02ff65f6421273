"""Many-to-many relationship adapter.

``ManyToManyRelationshipDAO`` presents the targets linked to one source
entity as a DAO of its own. It owns no storage: the junction DAO (the
*delegate*) holds one row per link and the target DAO holds the targets.

Two-step protocols, each step awaited strictly after the previous one:

- ``put``: upsert the target, then write the junction row linking it.
  If the junction write fails the target stays stored with no link; the
  error propagates unchanged and nothing is rolled back.
- ``select``: collect the target ids of every junction row for this
  source (no paging), then select from the target DAO filtered by
  ``caller predicate AND target id IN collected ids``, applying the
  caller's sink, skip, limit and order there.

``find`` is a lookup in the target DAO's global id space. It does not check
that the id is linked to this source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from relation_dao.domain.predicates import AND, EQ, IN, TRUE
from relation_dao.domain.sinks import MAP

if TYPE_CHECKING:
    from relation_dao.domain.fields import FieldRef
    from relation_dao.domain.models import Entity, EntityId
    from relation_dao.domain.ordering import OrderSpec
    from relation_dao.domain.predicates import Predicate
    from relation_dao.domain.relationship import Relationship
    from relation_dao.domain.sinks import Sink
    from relation_dao.ports.dao import DAO

logger = structlog.get_logger(__name__)


class ManyToManyRelationshipDAO:
    """DAO over the targets related to ``source`` through ``relationship``.

    Satisfies the ``relation_dao.ports.dao.DAO`` protocol.

    Args:
        relationship: Descriptor of the association.
        source: The entity whose related targets are exposed.
        delegate: Junction DAO.
        target_dao: Target DAO.
        junction_property: Junction field projected in the junction scan.
            Defaults to ``relationship.junction_property``.
        target_property: Target field filtered by the collected ids.
            Defaults to ``relationship.target_property``.
    """

    def __init__(
        self,
        relationship: Relationship,
        source: Entity,
        delegate: DAO,
        target_dao: DAO,
        junction_property: FieldRef | None = None,
        target_property: FieldRef | None = None,
    ) -> None:
        self.relationship = relationship
        self.source = source
        self.delegate = delegate
        self.target_dao = target_dao
        self.junction_property = junction_property or relationship.junction_property
        self.target_property = target_property or relationship.target_property

    @property
    def predicate(self) -> Predicate:
        """Junction rows belonging to ``source``.

        Always matches the junction's inverse (source-id) field, whichever
        side of the relationship this adapter exposes.
        """
        return EQ(self.relationship.inverse_property, self.source.id)

    # -- write operations ---------------------------------------------------

    async def put(self, obj: Any) -> Any:
        """Upsert ``obj`` into the target DAO and link it to ``source``.

        Returns the upserted target. Duplicate links are not detected.
        """
        target = await self.target_dao.put(obj)
        junction = self.relationship.adapt(self.source, target)
        try:
            await self.delegate.put(junction)
        except Exception:
            logger.warning(
                "relationship_link_failed",
                relationship=self.relationship.name,
                source_id=self.source.id,
                target_id=target.id,
            )
            raise

        logger.debug(
            "relationship_put",
            relationship=self.relationship.name,
            source_id=self.source.id,
            target_id=target.id,
        )
        return target

    # -- read operations ----------------------------------------------------

    async def find(self, id: EntityId) -> Any | None:  # noqa: A002
        """Return the target with ``id`` from the target DAO, linked or not."""
        return await self.target_dao.find(id)

    async def select(
        self,
        sink: Sink | None = None,
        skip: int | None = None,
        limit: int | None = None,
        order: OrderSpec | None = None,
        predicate: Predicate | None = None,
    ) -> Sink:
        """Select targets related to ``source``.

        ``predicate``, ``order``, ``skip`` and ``limit`` apply to the
        related targets, never to the junction rows.
        """
        junction_ids = MAP(self.junction_property)
        await self.delegate.select(junction_ids, predicate=self.predicate)
        candidate_ids = junction_ids.array

        logger.debug(
            "relationship_select",
            relationship=self.relationship.name,
            source_id=self.source.id,
            candidate_count=len(candidate_ids),
        )
        return await self.target_dao.select(
            sink,
            skip,
            limit,
            order,
            AND(predicate or TRUE, IN(self.target_property, candidate_ids)),
        )
