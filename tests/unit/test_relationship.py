"""Unit tests for the Relationship descriptor (domain/relationship.py)."""

from __future__ import annotations

import pytest

from relation_dao.domain.errors import RelationshipDefinitionError
from relation_dao.domain.fields import FieldRef
from relation_dao.domain.relationship import Relationship
from tests.fixtures.entities import (
    USER_GROUPS,
    Group,
    Membership,
    User,
    make_group,
    make_user,
)


def _relationship(**overrides) -> Relationship:
    defaults: dict = {
        "name": "user_groups",
        "source_type": User,
        "target_type": Group,
        "junction_type": Membership,
        "inverse_name": "source_id",
        "target_name": "target_id",
    }
    defaults.update(overrides)
    return Relationship(**defaults)


class TestRelationshipValidation:
    def test_valid_descriptor(self) -> None:
        relationship = _relationship()
        assert relationship.target_id_name == "id"
        assert relationship.junction_dao_key is None

    @pytest.mark.parametrize("attr", ["inverse_name", "target_name"])
    def test_unknown_junction_field_rejected(self, attr: str) -> None:
        with pytest.raises(RelationshipDefinitionError, match="not a field of Membership"):
            _relationship(**{attr: "missing"})

    def test_same_field_for_both_sides_rejected(self) -> None:
        with pytest.raises(RelationshipDefinitionError, match="different junction fields"):
            _relationship(target_name="source_id")

    def test_unknown_target_id_field_rejected(self) -> None:
        with pytest.raises(RelationshipDefinitionError, match="target_id_name"):
            _relationship(target_id_name="uuid")

    def test_descriptor_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            USER_GROUPS.name = "other"  # type: ignore[misc]


class TestFieldReferences:
    def test_inverse_property(self) -> None:
        assert USER_GROUPS.inverse_property == FieldRef(Membership, "source_id")

    def test_junction_property(self) -> None:
        assert USER_GROUPS.junction_property == FieldRef(Membership, "target_id")

    def test_target_property(self) -> None:
        assert USER_GROUPS.target_property == FieldRef(Group, "id")


class TestAdapt:
    def test_default_builds_junction_from_ids(self) -> None:
        user = make_user(id="U1")
        group = make_group(id="G1")

        junction = USER_GROUPS.adapt(user, group)

        assert isinstance(junction, Membership)
        assert junction.source_id == "U1"
        assert junction.target_id == "G1"
        assert junction.role == "member"
        assert junction.id  # generated

    def test_each_junction_gets_a_fresh_id(self) -> None:
        user = make_user()
        group = make_group()
        assert USER_GROUPS.adapt(user, group).id != USER_GROUPS.adapt(user, group).id

    def test_custom_adapt_target(self) -> None:
        relationship = _relationship(
            adapt_target=lambda source, target: Membership(
                id=f"{source.id}:{target.id}",
                source_id=source.id,
                target_id=target.id,
                role="owner",
            ),
        )
        junction = relationship.adapt(make_user(id="U1"), make_group(id="G1"))
        assert junction.id == "U1:G1"
        assert junction.role == "owner"

    def test_custom_adapt_target_must_return_junction_type(self) -> None:
        relationship = _relationship(adapt_target=lambda source, target: target)
        with pytest.raises(RelationshipDefinitionError, match="expected Membership"):
            relationship.adapt(make_user(), make_group())
