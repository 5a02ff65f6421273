"""Base entity models.

Every object stored in a DAO is a Pydantic v2 model with an ``id``. Concrete
entity types subclass ``Entity``; link records subclass ``Junction``.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# Tried left to right so a UUID read back from JSON is a UUID again, not its
# string form. A UUID-shaped string id therefore also validates as a UUID;
# subclasses that need it kept as text should declare ``id: str``.
EntityId = Annotated[UUID | str | int, Field(union_mode="left_to_right")]


class Entity(BaseModel):
    """An identifiable object owned by exactly one DAO."""

    id: EntityId


class Junction(Entity):
    """One edge of a many-to-many relationship.

    Subclasses declare the two foreign-key fields (one holding a source id,
    one holding a target id) plus any descriptive fields. Which field plays
    which role is recorded on the ``Relationship`` descriptor, not here.
    Junction rows nobody named get a fresh ``uuid4``.
    """

    id: EntityId = Field(default_factory=uuid4)
