"""Tests for the datetime helpers and the response schemas that use them."""

from datetime import datetime, timedelta, timezone

from familytree import schemas
from familytree.core.datetime_utils import ensure_utc

NAIVE = datetime(2024, 5, 1, 8, 30)


def test_naive_values_are_taken_as_utc():
    assert ensure_utc(NAIVE) == NAIVE.replace(tzinfo=timezone.utc)


def test_aware_values_are_converted():
    hanoi = timezone(timedelta(hours=7))

    assert ensure_utc(datetime(2024, 5, 1, 15, 30, tzinfo=hanoi)) == datetime(
        2024, 5, 1, 8, 30, tzinfo=timezone.utc
    )


def test_family_tree_schema_marks_naive_timestamps_utc():
    tree = schemas.FamilyTree(
        id=1, tree_owner_id=1, family_name="Nguyễn", created_at=NAIVE, modified_at=NAIVE
    )

    assert tree.created_at.tzinfo == timezone.utc
    assert tree.modified_at.tzinfo == timezone.utc
    assert tree.model_dump_json().count("Z") == 2


def test_change_log_schema_marks_naive_timestamps_utc():
    row = schemas.ChangeLog(
        id=1,
        entity_type="FAMILY_TREE",
        entity_id=1,
        action="CREATE",
        family_tree_id=1,
        created_at=NAIVE,
    )

    assert row.created_at.utcoffset() == timedelta(0)
