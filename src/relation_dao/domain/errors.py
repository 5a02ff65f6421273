"""Error types raised by relation-dao itself.

Failures raised by backing DAOs are never wrapped in these; they propagate
to the caller unchanged. The types here only cover mistakes made while
wiring fields, relationships and registries together.
"""

from __future__ import annotations

from typing import Any


class RelationDAOError(Exception):
    """Base class for all relation-dao errors."""


class UnknownFieldError(RelationDAOError):
    """Raised when a field reference names a field the model does not declare."""

    def __init__(self, model: type[Any], field: str) -> None:
        self.model = model
        self.field = field
        super().__init__(f"{model.__name__} has no field '{field}'")


class RelationshipDefinitionError(RelationDAOError):
    """Raised when a relationship descriptor is inconsistent."""

    def __init__(self, relationship: str, message: str) -> None:
        self.relationship = relationship
        self.message = message
        super().__init__(f"{relationship}: {message}")


class DAONotRegisteredError(RelationDAOError, KeyError):
    """Raised when a registry lookup misses."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No DAO registered under '{key}'")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])
