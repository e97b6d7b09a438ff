"""Session materialization: signed token -> Identity."""

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.jwt import SESSION_TOKEN_TYPE, decode_token
from app.models.user import Role, User

logger = logging.getLogger(__name__)

LINKEDIN_PROVIDER = "linkedin"


@dataclass(frozen=True)
class Identity:
    """The signed-in user as seen by the authorization policy for one request."""

    user_id: UUID
    role: Role
    claimed: bool
    name: str | None
    email: str | None
    image: str | None
    external_profile_url: str | None


def identity_from_user(user: User) -> Identity:
    """
    Build an Identity from a user row with its accounts loaded.

    The external profile URL is the one derived from the linked LinkedIn
    identity, falling back to the profile's own URL.
    """
    linked = [a for a in user.accounts if a.provider == LINKEDIN_PROVIDER]
    if linked:
        profile_url = linked[-1].profile_url
    else:
        profile_url = user.linkedin_url

    return Identity(
        user_id=user.id,
        role=Role(user.role),
        claimed=bool(user.claimed),
        name=user.name,
        email=user.email,
        image=user.image,
        external_profile_url=profile_url,
    )


async def resolve_session(db: AsyncSession, token: str | None) -> Identity | None:
    """
    Resolve a session token to the current Identity.

    Returns None for a missing, invalid, or expired token, or when the user no
    longer exists. Role and claim state always come from storage, so a role
    change applies on the next request.
    """
    if not token:
        return None

    payload = decode_token(token)
    if not payload or payload.get("type") != SESSION_TOKEN_TYPE:
        return None

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        return None

    result = await db.execute(
        select(User)
        .options(selectinload(User.accounts))
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if not user:
        logger.info("Session token refers to missing user %s", user_id)
        return None

    return identity_from_user(user)
