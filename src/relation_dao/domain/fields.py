"""Typed field references.

Predicates, projections and orderings never take bare field names. They
take a ``FieldRef`` built by ``field_of``, which checks the name against the
model's declared Pydantic fields when the reference is created, so a typo
fails at import time instead of silently matching nothing at query time.

Pure Python + Pydantic. Zero storage imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from relation_dao.domain.errors import UnknownFieldError

if TYPE_CHECKING:
    from pydantic import BaseModel


@dataclass(frozen=True)
class FieldRef:
    """A reference to one declared field of a model."""

    model: type[BaseModel]
    name: str

    def get(self, obj: Any) -> Any:
        """Read this field's value from ``obj``."""
        return getattr(obj, self.name)

    def __str__(self) -> str:
        return f"{self.model.__name__}.{self.name}"


def field_of(model: type[BaseModel], name: str) -> FieldRef:
    """Return a ``FieldRef`` for ``model.name``.

    Raises ``UnknownFieldError`` if ``model`` does not declare ``name``.
    """
    if name not in model.model_fields:
        raise UnknownFieldError(model, name)
    return FieldRef(model=model, name=name)
