"""Authentication dependencies for FastAPI endpoints."""

from uuid import UUID

from fastapi import Cookie, Depends, Header, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import create_session_token
from app.auth.policy import can_moderate_content, is_curator
from app.auth.session import Identity, resolve_session
from app.config import settings
from app.database import get_db
from app.errors import ForbiddenError, UnauthenticatedError

SESSION_COOKIE_NAME = "session_token"


def set_session_cookie(response: Response, user_id: UUID) -> str:
    """Issue a session token for ``user_id`` as an HttpOnly cookie and return it."""
    token = create_session_token(str(user_id))
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_token_expire_days * 24 * 60 * 60,
    )
    return token


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE_NAME)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


async def get_optional_identity(
    authorization: str | None = Header(default=None),
    session_token: str | None = Cookie(default=None),
    db: AsyncSession = Depends(get_db),
) -> Identity | None:
    """
    Resolve the session for this request, if any.

    The bearer header takes precedence over the session cookie. Used by read
    endpoints that are public but show more to signed-in users.
    """
    token = _bearer_token(authorization) or session_token
    return await resolve_session(db, token)


async def get_current_identity(
    identity: Identity | None = Depends(get_optional_identity),
) -> Identity:
    """
    Require a signed-in user.

    Raises:
        UnauthenticatedError: 401 if no valid session accompanies the request
    """
    if identity is None:
        raise UnauthenticatedError("Sign in required")
    return identity


async def require_moderator(
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    """
    Require a role that may moderate content.

    Raises:
        ForbiddenError: 403 for members
    """
    if not can_moderate_content(identity.role):
        raise ForbiddenError("Moderator access required")
    return identity


async def require_curator(
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    """
    Require a role that may curate the directory.

    Raises:
        ForbiddenError: 403 for members
    """
    if not is_curator(identity.role):
        raise ForbiddenError("Curator access required")
    return identity
