"""Relationship descriptors.

A ``Relationship`` is static metadata for one many-to-many association:
the source and target entity types, the junction type linking them, which
junction field holds the source id (the *inverse* field) and which holds
the target id, and how to build a junction row for a (source, target) pair.

Descriptors are built once per relationship type, typically at module
import, and validated eagerly so a misspelled field name fails there.

Pure Python — zero storage imports.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from relation_dao.domain.errors import RelationshipDefinitionError
from relation_dao.domain.fields import FieldRef, field_of
from relation_dao.domain.models import Entity, Junction


@dataclass(frozen=True)
class Relationship:
    """Immutable descriptor of a many-to-many relationship.

    Args:
        name: Human-readable relationship name, used in logs and errors.
        source_type: Entity type on the owning side.
        target_type: Entity type exposed by the relationship adapter.
        junction_type: Link record type.
        inverse_name: Junction field holding the source id.
        target_name: Junction field holding the target id.
        adapt_target: Builds a junction for ``(source, target)``. Defaults
            to ``junction_type(**{inverse_name: source.id, target_name: target.id})``.
        target_id_name: Field on the target type matched against
            ``target_name`` values. Almost always ``"id"``.
        junction_dao_key: Registry key of the junction DAO, if resolved by name.
        target_dao_key: Registry key of the target DAO, if resolved by name.
    """

    name: str
    source_type: type[Entity]
    target_type: type[Entity]
    junction_type: type[Junction]
    inverse_name: str
    target_name: str
    adapt_target: Callable[[Any, Any], Junction] | None = None
    target_id_name: str = "id"
    junction_dao_key: str | None = None
    target_dao_key: str | None = None

    def __post_init__(self) -> None:
        for attr in ("inverse_name", "target_name"):
            field_name = getattr(self, attr)
            if field_name not in self.junction_type.model_fields:
                raise RelationshipDefinitionError(
                    self.name,
                    f"{attr} '{field_name}' is not a field of {self.junction_type.__name__}",
                )
        if self.inverse_name == self.target_name:
            raise RelationshipDefinitionError(
                self.name,
                "inverse_name and target_name must name different junction fields",
            )
        if self.target_id_name not in self.target_type.model_fields:
            raise RelationshipDefinitionError(
                self.name,
                f"target_id_name '{self.target_id_name}' is not a field of "
                f"{self.target_type.__name__}",
            )

    # -- field references ---------------------------------------------------

    @property
    def inverse_property(self) -> FieldRef:
        """Junction field holding the source id."""
        return field_of(self.junction_type, self.inverse_name)

    @property
    def junction_property(self) -> FieldRef:
        """Junction field holding the target id."""
        return field_of(self.junction_type, self.target_name)

    @property
    def target_property(self) -> FieldRef:
        """Target field matched against junction target ids."""
        return field_of(self.target_type, self.target_id_name)

    # -- junction construction ---------------------------------------------

    def adapt(self, source: Entity, target: Entity) -> Junction:
        """Build the junction row linking ``source`` to ``target``.

        Raises ``RelationshipDefinitionError`` if a custom ``adapt_target``
        returns something other than a ``junction_type`` instance.
        """
        if self.adapt_target is None:
            return self.junction_type(
                **{self.inverse_name: source.id, self.target_name: target.id},
            )

        junction = self.adapt_target(source, target)
        if not isinstance(junction, self.junction_type):
            raise RelationshipDefinitionError(
                self.name,
                f"adapt_target returned {type(junction).__name__}, "
                f"expected {self.junction_type.__name__}",
            )
        return junction
