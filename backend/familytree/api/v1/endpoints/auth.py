"""Authentication endpoints: owner sign-up and sign-in, guest access-code redemption."""

from datetime import datetime

from fastapi import Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.api.session_cookie import clear_session_cookie, set_session_cookie
from familytree.core.logging import logger
from familytree.core.shared_models import SessionRole
from familytree.domains.sessions.protocols import SessionServiceProtocol
from familytree.domains.sessions.types import ResolvedSession
from familytree.domains.users.protocols import UserServiceProtocol

router = TrailingSlashRouter()


def _owner_session(user: schemas.User, expires_at: datetime) -> schemas.Session:
    return schemas.Session(
        role=SessionRole.OWNER,
        user_id=user.id,
        email=user.email,
        full_name=user.full_name,
        expires_at=expires_at,
    )


@router.post("/register", response_model=schemas.RegistrationResult, status_code=201)
async def register(
    user_in: schemas.UserCreate,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.RegistrationResult:
    """Create an owner account and its tree-owner profile."""
    user = await user_service.register(db, user_in=user_in)
    return schemas.RegistrationResult(user=user)


@router.post("/login", response_model=schemas.Session)
async def login(
    credentials: schemas.LoginRequest,
    response: Response,
    db: AsyncSession = Depends(deps.get_db),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
    session_service: SessionServiceProtocol = Inject(SessionServiceProtocol),
) -> schemas.Session:
    """Sign in with email and password. The session token is set as a cookie."""
    user = await user_service.authenticate(db, credentials=credentials)
    issued = session_service.issue_owner_session(user)
    set_session_cookie(response, issued)
    logger.with_context(user_id=user.id).info("Owner signed in")
    return _owner_session(user, issued.expires_at)


@router.post("/logout")
async def logout(response: Response) -> dict[str, bool]:
    """Clear the session cookie. Tokens are stateless, so nothing else is revoked."""
    clear_session_cookie(response)
    return {"success": True}


@router.post("/guest", response_model=schemas.GuestRedeemResult)
async def redeem_access_code(
    redeem_in: schemas.GuestRedeemRequest,
    response: Response,
    db: AsyncSession = Depends(deps.get_db),
    session_service: SessionServiceProtocol = Inject(SessionServiceProtocol),
) -> schemas.GuestRedeemResult:
    """Redeem a guest access code and start a guest session."""
    issued, result = await session_service.start_guest_session(
        db, access_code=redeem_in.access_code
    )
    set_session_cookie(response, issued)
    return result


@router.get("/session", response_model=schemas.Session)
async def read_session(
    session: ResolvedSession = Depends(deps.get_session),
) -> schemas.Session:
    """Who the current session belongs to."""
    return session.to_schema()
