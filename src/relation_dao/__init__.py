"""relation-dao: query a many-to-many relationship as if it were a DAO."""

from relation_dao.adapters.memory.store import InMemoryDAO
from relation_dao.adapters.redis.store import RedisDAO
from relation_dao.adapters.registry import DAORegistry
from relation_dao.adapters.relationship import ManyToManyRelationshipDAO
from relation_dao.domain.errors import (
    DAONotRegisteredError,
    RelationDAOError,
    RelationshipDefinitionError,
    UnknownFieldError,
)
from relation_dao.domain.fields import FieldRef, field_of
from relation_dao.domain.models import Entity, EntityId, Junction
from relation_dao.domain.ordering import ASC, DESC, Ordering
from relation_dao.domain.predicates import AND, EQ, FALSE, IN, NOT, OR, TRUE, Predicate
from relation_dao.domain.relationship import Relationship
from relation_dao.domain.sinks import COUNT, MAP, ArraySink, CountSink, MapSink, Sink
from relation_dao.ports.dao import DAO

__all__ = [
    "AND",
    "ASC",
    "COUNT",
    "DAO",
    "DESC",
    "EQ",
    "FALSE",
    "IN",
    "MAP",
    "NOT",
    "OR",
    "TRUE",
    "ArraySink",
    "CountSink",
    "DAONotRegisteredError",
    "DAORegistry",
    "Entity",
    "EntityId",
    "FieldRef",
    "InMemoryDAO",
    "Junction",
    "ManyToManyRelationshipDAO",
    "MapSink",
    "Ordering",
    "Predicate",
    "RedisDAO",
    "RelationDAOError",
    "Relationship",
    "RelationshipDefinitionError",
    "Sink",
    "UnknownFieldError",
    "field_of",
]
