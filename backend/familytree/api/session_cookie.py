"""Session cookie helpers shared by the auth and account endpoints."""

from fastapi import Response

from familytree.core.config import settings
from familytree.core.datetime_utils import utc_now
from familytree.domains.sessions.types import IssuedSession


def set_session_cookie(response: Response, issued: IssuedSession) -> None:
    """Attach the session token as an HTTP-only cookie that dies with the token."""
    max_age = max(int((issued.expires_at - utc_now()).total_seconds()), 0)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=issued.token,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
