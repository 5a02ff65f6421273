"""Name-keyed DAO registry.

Holds DAO handles under string keys so relationship adapters can be wired
from the keys recorded on a ``Relationship`` descriptor. Each key is
resolved once, when the adapter is built; the adapter keeps the handle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from relation_dao.adapters.relationship import ManyToManyRelationshipDAO
from relation_dao.domain.errors import DAONotRegisteredError, RelationshipDefinitionError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from relation_dao.domain.models import Entity
    from relation_dao.domain.relationship import Relationship
    from relation_dao.ports.dao import DAO

logger = structlog.get_logger(__name__)


class DAORegistry:
    """Registry of DAOs keyed by name."""

    def __init__(self, daos: Mapping[str, DAO] | None = None) -> None:
        self._daos: dict[str, DAO] = dict(daos or {})

    def __contains__(self, key: object) -> bool:
        return key in self._daos

    def register(self, key: str, dao: DAO) -> None:
        """Register ``dao`` under ``key``, replacing any previous entry."""
        replaced = key in self._daos
        self._daos[key] = dao
        logger.debug("dao_registered", key=key, replaced=replaced)

    def resolve(self, key: str) -> DAO:
        """Return the DAO registered under ``key``.

        Raises ``DAONotRegisteredError`` if nothing is registered there.
        """
        try:
            return self._daos[key]
        except KeyError:
            raise DAONotRegisteredError(key) from None

    def relationship_dao(
        self,
        relationship: Relationship,
        source: Entity,
    ) -> ManyToManyRelationshipDAO:
        """Build the adapter exposing ``source``'s targets under ``relationship``.

        The junction and target DAOs are looked up by the descriptor's
        ``junction_dao_key`` and ``target_dao_key``.
        """
        if relationship.junction_dao_key is None or relationship.target_dao_key is None:
            raise RelationshipDefinitionError(
                relationship.name,
                "junction_dao_key and target_dao_key are required for registry wiring",
            )
        return ManyToManyRelationshipDAO(
            relationship=relationship,
            source=source,
            delegate=self.resolve(relationship.junction_dao_key),
            target_dao=self.resolve(relationship.target_dao_key),
        )
