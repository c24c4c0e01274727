"""Dependencies that are used in the API endpoints."""

import re
import uuid
from typing import Optional, get_type_hints

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from familytree.api.context import ApiContext
from familytree.core import container as container_mod
from familytree.core.config import settings
from familytree.core.container import Container
from familytree.core.exceptions import AuthenticationError, BadRequestError
from familytree.core.messages import message
from familytree.core.shared_models import AccessLevel
from familytree.db.session import get_db
from familytree.domains.access.exceptions import ActionForbiddenError
from familytree.domains.access.protocols import AccessGuardProtocol
from familytree.domains.sessions.protocols import SessionServiceProtocol
from familytree.domains.sessions.types import ResolvedSession
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree

__all__ = [
    "Inject",
    "MemberAccess",
    "OptionalQueryInt",
    "PathId",
    "TreeAccess",
    "get_container",
    "get_context",
    "get_db",
    "get_session",
    "require_owner",
]

_bearer = HTTPBearer(auto_error=False)
_INTEGER = re.compile(r"[0-9]+")
# Primary keys are INTEGER columns; Postgres caps them at 32 bits.
_MAX_ID = 2**31 - 1


# ---------------------------------------------------------------------------
# Container
# ---------------------------------------------------------------------------


def get_container() -> Container:
    """Get the DI container. Initialized at startup."""
    c = container_mod.container
    if c is None:
        raise RuntimeError("Container not initialized. Call initialize_container() first.")
    return c


# Cache of protocol_type → Container field name, built once at first call.
_INJECT_CACHE: dict[type, str] = {}


def _resolve_field_name(protocol_type: type) -> str:
    """Find which Container field matches the given protocol type.

    Uses get_type_hints() to introspect the Container dataclass.
    Result is cached so the lookup happens at most once per protocol type.
    """
    if not _INJECT_CACHE:
        for name, hint in get_type_hints(Container).items():
            _INJECT_CACHE[hint] = name

    field_name = _INJECT_CACHE.get(protocol_type)
    if field_name is None:
        available = list(_INJECT_CACHE.values())
        raise TypeError(
            f"No binding for {protocol_type.__name__} in Container. Available fields: {available}"
        )
    return field_name


def Inject(protocol_type: type):  # noqa: N802 - uppercase to match FastAPI convention
    """Resolve a protocol implementation from the DI container.

    Works like ``Depends()`` but looks up the implementation by protocol type
    instead of requiring the caller to know about the Container internals.

    Usage in FastAPI endpoints::

        @router.get("")
        async def list_trees(
            family_tree_service: FamilyTreeServiceProtocol = Inject(FamilyTreeServiceProtocol),
        ):
            ...
    """
    field_name = _resolve_field_name(protocol_type)

    def _resolve(c: Container = Depends(get_container)):
        return getattr(c, field_name)

    return Depends(_resolve)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


async def get_session(
    request: Request,
    db: AsyncSession = Depends(get_db),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    session_service: SessionServiceProtocol = Inject(SessionServiceProtocol),
) -> ResolvedSession:
    """Resolve the caller's session from the cookie or a bearer token.

    Raises:
    ------
        AuthenticationError: If there is no token, or it is invalid or expired,
            or the identity behind it no longer exists.

    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token and bearer is not None:
        token = bearer.credentials

    session = await session_service.resolve(db, token)
    if session is None:
        raise AuthenticationError("Not authenticated")
    return session


async def get_context(
    request: Request,
    session: ResolvedSession = Depends(get_session),
) -> ApiContext:
    """Create the API context for the request.

    This is the primary dependency for authenticated endpoints, providing the
    request id, the resolved identity and a logger carrying both.
    """
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

    ctx = ApiContext(
        role=session.role,
        request_id=request_id,
        user=session.user,
        guest_member_id=session.guest_member_id,
        guest_family_tree_id=session.guest_family_tree_id,
        guest_editor_id=session.guest_editor_id,
    )
    request.state.api_context = ctx
    return ctx


async def require_owner(ctx: ApiContext = Depends(get_context)) -> ApiContext:
    """Context of a signed-in owner. Guests get 403."""
    if not ctx.is_owner:
        ctx.logger.warning("Guest session refused on an owner-only endpoint")
        raise ActionForbiddenError(message("forbidden"))
    return ctx


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def _parse_int(raw: Optional[str], name: str) -> int:
    if raw is None or not _INTEGER.fullmatch(raw):
        raise BadRequestError(f"Invalid {name}: must be an integer")
    digits = raw.lstrip("0") or "0"
    if len(digits) > len(str(_MAX_ID)) or int(digits) > _MAX_ID:
        raise BadRequestError(f"Invalid {name}: must be an integer")
    return int(digits)


def PathId(name: str):  # noqa: N802
    """Integer path parameter, rejected with 400 before any datastore access.

    Declare it ahead of ``TreeAccess``/``MemberAccess`` in an endpoint so the
    check runs before the tree lookup.
    """

    def _path_id(request: Request) -> int:
        return _parse_int(request.path_params.get(name), name)

    return Depends(_path_id)


def OptionalQueryInt(name: str):  # noqa: N802
    """Optional integer query parameter with the same 400 rule as ``PathId``."""

    def _query_int(request: Request) -> Optional[int]:
        raw = request.query_params.get(name)
        if raw is None or raw == "":
            return None
        return _parse_int(raw, name)

    return Depends(_query_int)


# ---------------------------------------------------------------------------
# Access
# ---------------------------------------------------------------------------


def TreeAccess(level: AccessLevel = AccessLevel.READ):  # noqa: N802
    """Resolve ``{family_tree_id}`` to a tree the caller may act on at ``level``.

    Usage::

        @router.put("/{family_tree_id}")
        async def update_tree(tree: FamilyTree = TreeAccess(AccessLevel.OWNER_WRITE)):
            ...
    """

    async def _authorize(
        family_tree_id: int = PathId("family_tree_id"),
        db: AsyncSession = Depends(get_db),
        ctx: ApiContext = Depends(get_context),
        guard: AccessGuardProtocol = Inject(AccessGuardProtocol),
    ) -> FamilyTree:
        return await guard.authorize_tree(db, ctx, family_tree_id, level=level)

    return Depends(_authorize)


def MemberAccess(level: AccessLevel = AccessLevel.READ):  # noqa: N802
    """Resolve ``{member_id}`` to a member the caller may act on at ``level``."""

    async def _authorize(
        member_id: int = PathId("member_id"),
        db: AsyncSession = Depends(get_db),
        ctx: ApiContext = Depends(get_context),
        guard: AccessGuardProtocol = Inject(AccessGuardProtocol),
    ) -> FamilyMember:
        return await guard.authorize_member(db, ctx, member_id, level=level)

    return Depends(_authorize)

