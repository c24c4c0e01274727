"""API test fixtures.

Provides an async HTTP client wired to the FastAPI app with the DI container
overridden to use fakes. Available to all colocated API tests under api/.

Pattern:
    1. Override get_container -> returns test_container (real services over fakes)
    2. Override get_db        -> yields an AsyncMock session
    3. Authenticate with a real signed token, so the session and access
       checks run exactly as in production

``live_client`` skips the overrides: the real container runs against a
temporary SQLite file, for paths that depend on real constraint violations
and rollbacks.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from familytree import schemas
from familytree.api.deps import get_container, get_db
from familytree.core.datetime_utils import utc_now
from familytree.core.security import ACCESS_CODE_LENGTH, hash_password

OWNER_PASSWORD = "correct-horse-battery"
GUEST_CODE = "g" * ACCESS_CODE_LENGTH


@pytest_asyncio.fixture
async def client(test_container):
    """Async HTTP client with faked DI container and datastore session."""
    from familytree.main import app

    async def _fake_db():
        yield AsyncMock()

    app.dependency_overrides[get_container] = lambda: test_container
    app.dependency_overrides[get_db] = _fake_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def owner(fake_user_repo, fake_tree_owner_repo):
    """A registered owner with a known password."""
    user = fake_user_repo.seed(
        email="owner@example.com",
        full_name="Nguyễn Văn Owner",
        password_hash=hash_password(OWNER_PASSWORD),
    )
    fake_tree_owner_repo.seed(user_id=user.id, full_name=user.full_name, email=user.email)
    return user


@pytest.fixture
def owner_headers(test_container, owner):
    """Bearer header for ``owner``."""
    issued = test_container.session_service.issue_owner_session(
        schemas.User.model_validate(owner)
    )
    return {"Authorization": f"Bearer {issued.token}"}


@pytest.fixture
def tree(fake_family_tree_repo, owner):
    """A tree belonging to ``owner``."""
    return fake_family_tree_repo.seed(user_id=owner.id, family_name="Nguyễn")


@pytest.fixture
def root_member(fake_member_repo, tree):
    return fake_member_repo.seed(
        family_tree_id=tree.id,
        full_name="Nguyễn Văn Tổ",
        generation="1",
        is_root_person=True,
    )


@pytest.fixture
def guest_member(fake_member_repo, tree, root_member):
    """The member a guest code is issued for."""
    return fake_member_repo.seed(
        family_tree_id=tree.id,
        full_name="Nguyễn Văn Con",
        generation="2",
        parent_id=root_member.id,
    )


@pytest.fixture
def guest_editor(fake_guest_editor_repo, tree, guest_member):
    return fake_guest_editor_repo.seed(
        family_tree_id=tree.id,
        family_member_id=guest_member.id,
        family_tree=tree,
        family_member=guest_member,
        access_code=GUEST_CODE,
        created_at=utc_now() - timedelta(hours=1),
    )


@pytest_asyncio.fixture
async def guest_client(client, guest_editor):
    """``client`` carrying a guest session cookie for ``guest_member``."""
    response = await client.post("/auth/guest", json={"access_code": GUEST_CODE})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def owner_password():
    return OWNER_PASSWORD


@pytest.fixture
def guest_code():
    return GUEST_CODE


# ---------------------------------------------------------------------------
# Real container over a temporary SQLite file
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def live_client(monkeypatch, sqlite_sessions):
    """Async HTTP client over ``create_container`` and a real datastore.

    Nothing is overridden. The application's session factory and container
    are pointed at the test database instead.
    """
    from familytree.core import container as container_mod
    from familytree.core.config import settings
    from familytree.core.container import create_container
    from familytree.db import session as session_mod
    from familytree.main import app

    monkeypatch.setattr(session_mod, "AsyncSessionLocal", sqlite_sessions)
    monkeypatch.setattr(container_mod, "container", create_container(settings))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def live_owner_client(live_client):
    """``live_client`` signed in as a freshly registered owner."""
    credentials = {"email": "owner@example.com", "password": OWNER_PASSWORD}
    registered = await live_client.post(
        "/auth/register", json={"full_name": "Nguyễn Văn Owner", **credentials}
    )
    assert registered.status_code == 201, registered.text
    signed_in = await live_client.post("/auth/login", json=credentials)
    assert signed_in.status_code == 200, signed_in.text
    return live_client
