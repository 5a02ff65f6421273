"""Predicate algebra for filtering ``select``.

Immutable boolean expressions over entity fields. Every predicate exposes
``f(obj) -> bool`` and composes with ``&``, ``|`` and ``~``. The upper-case
constructors (``EQ``, ``IN``, ``AND`` ...) are the public building API;
the classes are exported for ``isinstance`` checks and backends that want
to translate predicates into a native query.

Pure Python — zero storage imports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from relation_dao.domain.fields import FieldRef


class Predicate:
    """Base class for all predicates."""

    def f(self, obj: Any) -> bool:
        raise NotImplementedError

    def __and__(self, other: Predicate) -> Predicate:
        return AND(self, other)

    def __or__(self, other: Predicate) -> Predicate:
        return OR(self, other)

    def __invert__(self) -> Predicate:
        return NOT(self)


@dataclass(frozen=True)
class TruePredicate(Predicate):
    """Matches every entity."""

    def f(self, obj: Any) -> bool:
        return True

    def __str__(self) -> str:
        return "TRUE"


@dataclass(frozen=True)
class FalsePredicate(Predicate):
    """Matches no entity."""

    def f(self, obj: Any) -> bool:
        return False

    def __str__(self) -> str:
        return "FALSE"


@dataclass(frozen=True)
class Eq(Predicate):
    field: FieldRef
    value: Any

    def f(self, obj: Any) -> bool:
        return bool(self.field.get(obj) == self.value)

    def __str__(self) -> str:
        return f"EQ({self.field}, {self.value!r})"


@dataclass(frozen=True)
class In(Predicate):
    """Set membership. An empty value set is valid and matches nothing."""

    field: FieldRef
    values: frozenset[Any]

    def f(self, obj: Any) -> bool:
        return self.field.get(obj) in self.values

    def __str__(self) -> str:
        return f"IN({self.field}, {len(self.values)} values)"


@dataclass(frozen=True)
class And(Predicate):
    predicates: tuple[Predicate, ...]

    def f(self, obj: Any) -> bool:
        return all(p.f(obj) for p in self.predicates)

    def __str__(self) -> str:
        return f"AND({', '.join(str(p) for p in self.predicates)})"


@dataclass(frozen=True)
class Or(Predicate):
    predicates: tuple[Predicate, ...]

    def f(self, obj: Any) -> bool:
        return any(p.f(obj) for p in self.predicates)

    def __str__(self) -> str:
        return f"OR({', '.join(str(p) for p in self.predicates)})"


@dataclass(frozen=True)
class Not(Predicate):
    predicate: Predicate

    def f(self, obj: Any) -> bool:
        return not self.predicate.f(obj)

    def __str__(self) -> str:
        return f"NOT({self.predicate})"


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

TRUE = TruePredicate()
FALSE = FalsePredicate()


def EQ(field: FieldRef, value: Any) -> Eq:  # noqa: N802
    return Eq(field=field, value=value)


def IN(field: FieldRef, values: Iterable[Any]) -> In:  # noqa: N802
    """Membership predicate. ``values`` may be empty; it is never None."""
    return In(field=field, values=frozenset(values))


def AND(*predicates: Predicate) -> Predicate:  # noqa: N802
    """Conjunction. ``AND()`` is ``TRUE``; a single argument is returned as-is."""
    if not predicates:
        return TRUE
    if len(predicates) == 1:
        return predicates[0]
    return And(predicates=tuple(predicates))


def OR(*predicates: Predicate) -> Predicate:  # noqa: N802
    """Disjunction. ``OR()`` is ``FALSE``; a single argument is returned as-is."""
    if not predicates:
        return FALSE
    if len(predicates) == 1:
        return predicates[0]
    return Or(predicates=tuple(predicates))


def NOT(predicate: Predicate) -> Not:  # noqa: N802
    return Not(predicate=predicate)
