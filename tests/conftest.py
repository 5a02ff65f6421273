"""Shared pytest fixtures for the relation-dao test suite.

This conftest provides entity factory fixtures and fresh in-memory DAOs
wrapping the helpers in ``tests.fixtures.entities``. No external service
dependencies are required for unit tests.
"""

from __future__ import annotations

import pytest

from relation_dao.adapters.memory.store import InMemoryDAO
from relation_dao.adapters.relationship import ManyToManyRelationshipDAO
from tests.fixtures.entities import (
    USER_GROUPS,
    Group,
    Membership,
    User,
    make_group,
    make_group_dao,
    make_membership_dao,
    make_user,
)


@pytest.fixture()
def user_factory():
    """Return the ``make_user`` factory callable."""
    return make_user


@pytest.fixture()
def group_factory():
    """Return the ``make_group`` factory callable."""
    return make_group


@pytest.fixture()
def group_dao() -> InMemoryDAO[Group]:
    """A fresh, empty target collection."""
    return make_group_dao()


@pytest.fixture()
def membership_dao() -> InMemoryDAO[Membership]:
    """A fresh, empty junction collection."""
    return make_membership_dao()


@pytest.fixture()
def user() -> User:
    return make_user(id="U1", name="U1")


@pytest.fixture()
def other_user() -> User:
    return make_user(id="U2", name="U2")


@pytest.fixture()
def relationship_dao_for(
    group_dao: InMemoryDAO[Group],
    membership_dao: InMemoryDAO[Membership],
):
    """Return a callable building the user->groups adapter for any user.

    All adapters built by the callable share the same two backing DAOs.
    """

    def _build(source: User) -> ManyToManyRelationshipDAO:
        return ManyToManyRelationshipDAO(
            relationship=USER_GROUPS,
            source=source,
            delegate=membership_dao,
            target_dao=group_dao,
        )

    return _build
