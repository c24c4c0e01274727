"""UnitOfWork against a real SQLite session."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from familytree.db.unit_of_work import UnitOfWork
from familytree.models import TreeOwner, User


async def _emails(sessions) -> list[str]:
    async with sessions() as other:
        result = await other.execute(select(User.email).order_by(User.id))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_clean_exit_commits(sqlite_db, sqlite_sessions):
    async with UnitOfWork(sqlite_db) as uow:
        sqlite_db.add(User(email="a@example.com"))

    assert uow.committed is True
    assert await _emails(sqlite_sessions) == ["a@example.com"]


@pytest.mark.asyncio
async def test_error_rolls_back_flushed_rows(sqlite_db, sqlite_sessions):
    with pytest.raises(RuntimeError):
        async with UnitOfWork(sqlite_db):
            sqlite_db.add(User(email="b@example.com"))
            await sqlite_db.flush()
            raise RuntimeError("boom")

    assert await _emails(sqlite_sessions) == []


@pytest.mark.asyncio
async def test_constraint_violation_leaves_session_usable(sqlite_db):
    async with UnitOfWork(sqlite_db):
        sqlite_db.add(User(email="c@example.com"))

    with pytest.raises(IntegrityError):
        async with UnitOfWork(sqlite_db):
            sqlite_db.add(User(email="c@example.com"))

    count = await sqlite_db.scalar(select(func.count()).select_from(User))
    assert count == 1


@pytest.mark.asyncio
async def test_foreign_keys_are_enforced(sqlite_db):
    with pytest.raises(IntegrityError):
        async with UnitOfWork(sqlite_db):
            sqlite_db.add(TreeOwner(user_id=999))
