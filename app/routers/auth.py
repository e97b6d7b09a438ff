"""Authentication router for LinkedIn sign-in and sessions."""

from fastapi import APIRouter, Cookie, Depends, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.dependencies import clear_session_cookie, get_current_identity, set_session_cookie
from app.auth.jwt import create_state_token, decode_token
from app.auth.linkedin import LinkedInProvider, get_linkedin_provider
from app.auth.policy import can_moderate_content
from app.auth.session import Identity, identity_from_user
from app.config import settings
from app.database import get_db
from app.errors import BadRequestError, UnauthenticatedError
from app.middleware.rate_limit import limiter
from app.models.user import User
from app.schemas.auth import LogoutResponse, SessionResponse
from app.services.identity import resolve_identity

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])

STATE_COOKIE_NAME = "oauth_state"


def _session_response(identity: Identity) -> SessionResponse:
    return SessionResponse(
        user_id=str(identity.user_id),
        name=identity.name,
        email=identity.email,
        image=identity.image,
        role=identity.role,
        claimed=identity.claimed,
        linkedin_url=identity.external_profile_url,
        can_moderate=can_moderate_content(identity.role),
    )


@router.get(
    "/linkedin/login",
    status_code=status.HTTP_307_TEMPORARY_REDIRECT,
)
async def linkedin_login(
    provider: LinkedInProvider = Depends(get_linkedin_provider),
) -> RedirectResponse:
    """
    Start LinkedIn sign-in.

    Redirects to LinkedIn with a signed state value that is also stored in
    a short-lived cookie for the callback to compare.
    """
    state = create_state_token()
    response = RedirectResponse(provider.get_authorization_url(state))
    response.set_cookie(
        key=STATE_COOKIE_NAME,
        value=state,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=10 * 60,
    )
    return response


@router.get(
    "/linkedin/callback",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
)
@limiter.limit(settings.signin_rate_limit)
async def linkedin_callback(
    request: Request,
    response: Response,
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    error: str | None = Query(default=None),
    oauth_state: str | None = Cookie(default=None),
    db: AsyncSession = Depends(get_db),
    provider: LinkedInProvider = Depends(get_linkedin_provider),
) -> SessionResponse:
    """
    Complete LinkedIn sign-in.

    Resolves the LinkedIn identity to a directory profile (auto-claiming a
    matching unclaimed profile) and sets the session cookie.
    """
    if error:
        raise UnauthenticatedError(f"LinkedIn sign-in was cancelled: {error}")

    if not code or not state:
        raise BadRequestError("Missing code or state")

    payload = decode_token(state)
    if state != oauth_state or not payload or payload.get("type") != "oauth_state":
        raise BadRequestError("Invalid sign-in state")

    account = await provider.exchange_code(code)
    user_id = await resolve_identity(db, account)
    await db.commit()

    result = await db.execute(
        select(User)
        .options(selectinload(User.accounts))
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    identity = identity_from_user(result.scalar_one())

    set_session_cookie(response, identity.user_id)
    response.delete_cookie(key=STATE_COOKIE_NAME)

    return _session_response(identity)


@router.get(
    "/session",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
)
async def get_session(
    identity: Identity = Depends(get_current_identity),
) -> SessionResponse:
    """Return the identity behind the current session, re-read from the database."""
    return _session_response(identity)


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
)
async def logout(response: Response) -> LogoutResponse:
    """Clear the session cookie."""
    clear_session_cookie(response)
    return LogoutResponse(signed_out=True)
