"""Unit tests for DAORegistry (adapters/registry.py)."""

from __future__ import annotations

import dataclasses

import pytest

from relation_dao.adapters.registry import DAORegistry
from relation_dao.adapters.relationship import ManyToManyRelationshipDAO
from relation_dao.domain.errors import DAONotRegisteredError, RelationshipDefinitionError
from tests.fixtures.entities import (
    USER_GROUPS,
    make_group,
    make_group_dao,
    make_membership_dao,
    make_user,
)


@pytest.fixture()
def registry() -> DAORegistry:
    return DAORegistry(
        {
            "groupDAO": make_group_dao(),
            "membershipDAO": make_membership_dao(),
        }
    )


class TestResolve:
    def test_resolve_registered(self) -> None:
        dao = make_group_dao()
        registry = DAORegistry()
        registry.register("groupDAO", dao)
        assert registry.resolve("groupDAO") is dao
        assert "groupDAO" in registry

    def test_register_replaces(self) -> None:
        first, second = make_group_dao(), make_group_dao()
        registry = DAORegistry({"groupDAO": first})
        registry.register("groupDAO", second)
        assert registry.resolve("groupDAO") is second

    def test_resolve_missing_raises(self) -> None:
        registry = DAORegistry()
        with pytest.raises(DAONotRegisteredError) as exc_info:
            registry.resolve("groupDAO")
        assert exc_info.value.key == "groupDAO"
        assert str(exc_info.value) == "No DAO registered under 'groupDAO'"

    def test_missing_key_is_also_a_key_error(self) -> None:
        with pytest.raises(KeyError):
            DAORegistry().resolve("anything")


class TestRelationshipDAO:
    def test_builds_adapter_from_descriptor_keys(self, registry: DAORegistry) -> None:
        user = make_user(id="U1")
        dao = registry.relationship_dao(USER_GROUPS, user)

        assert isinstance(dao, ManyToManyRelationshipDAO)
        assert dao.delegate is registry.resolve("membershipDAO")
        assert dao.target_dao is registry.resolve("groupDAO")
        assert dao.source is user

    def test_handles_are_resolved_once(self, registry: DAORegistry) -> None:
        dao = registry.relationship_dao(USER_GROUPS, make_user())
        original_target = dao.target_dao

        registry.register("groupDAO", make_group_dao())

        assert dao.target_dao is original_target

    def test_missing_dao_raises(self) -> None:
        registry = DAORegistry({"membershipDAO": make_membership_dao()})
        with pytest.raises(DAONotRegisteredError, match="groupDAO"):
            registry.relationship_dao(USER_GROUPS, make_user())

    def test_descriptor_without_keys_rejected(self, registry: DAORegistry) -> None:
        unkeyed = dataclasses.replace(USER_GROUPS, junction_dao_key=None, target_dao_key=None)
        with pytest.raises(RelationshipDefinitionError, match="required for registry wiring"):
            registry.relationship_dao(unkeyed, make_user())

    async def test_registry_built_adapters_share_backing_daos(
        self, registry: DAORegistry
    ) -> None:
        u1 = make_user(id="U1")
        u2 = make_user(id="U2")
        await registry.relationship_dao(USER_GROUPS, u1).put(make_group(id="G1"))

        found = await registry.relationship_dao(USER_GROUPS, u2).find("G1")
        assert found is not None
        assert (await registry.relationship_dao(USER_GROUPS, u2).select()).array == []
