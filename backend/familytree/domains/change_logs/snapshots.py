"""JSON-safe before/after snapshots of logged entities."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable

from familytree.models import Achievement, FamilyMember, FamilyTree, PassingRecord
from familytree.models.spouse_relationship import SpouseRelationship

FAMILY_TREE_FIELDS = ("family_name", "origin", "establish_year")
FAMILY_MEMBER_FIELDS = (
    "full_name",
    "gender",
    "birthday",
    "address",
    "generation",
    "parent_id",
    "is_root_person",
    "relationship_established_date",
)
SPOUSE_RELATIONSHIP_FIELDS = (
    "family_member1_id",
    "family_member2_id",
    "marriage_date",
    "divorce_date",
)
ACHIEVEMENT_FIELDS = (
    "family_member_id",
    "achievement_type_id",
    "achieve_date",
    "title",
    "description",
)


def to_jsonable(value: Any) -> Any:
    """Render dates as ISO-8601 and enums as their values."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value


def snapshot(obj: Any, fields: Iterable[str]) -> dict[str, Any]:
    """Pick ``fields`` off ``obj`` as a JSON-safe dict."""
    return {name: to_jsonable(getattr(obj, name)) for name in fields}


def family_tree_snapshot(tree: FamilyTree) -> dict[str, Any]:
    return snapshot(tree, FAMILY_TREE_FIELDS)


def family_member_snapshot(member: FamilyMember) -> dict[str, Any]:
    return snapshot(member, FAMILY_MEMBER_FIELDS)


def spouse_relationship_snapshot(relationship: SpouseRelationship) -> dict[str, Any]:
    return snapshot(relationship, SPOUSE_RELATIONSHIP_FIELDS)


def achievement_snapshot(achievement: Achievement) -> dict[str, Any]:
    return snapshot(achievement, ACHIEVEMENT_FIELDS)


def passing_record_snapshot(record: PassingRecord) -> dict[str, Any]:
    """Passing record with its causes and burial places inlined."""
    data = snapshot(record, ("family_member_id", "date_of_passing"))
    data["causes_of_death"] = [c.cause_name for c in record.causes_of_death]
    data["buried_places"] = [
        snapshot(p, ("location", "start_date", "end_date")) for p in record.buried_places
    ]
    return data
