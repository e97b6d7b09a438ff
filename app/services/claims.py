"""Profile claim workflow: UNCLAIMED -> CLAIMED."""

import logging
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.policy import can_claim
from app.auth.session import Identity
from app.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from app.models.user import OAuthAccount, User

logger = logging.getLogger(__name__)


async def claim_profile(db: AsyncSession, identity: Identity, target_user_id: UUID) -> User:
    """
    Bind an unclaimed profile to the signed-in identity.

    The profile's LinkedIn URL must exactly match the identity's. On success
    the profile takes the identity's email and avatar, becomes claimed, and
    the identity's external account links move to it, so the next session
    resolves to the claimed profile.

    Raises:
        NotFoundError: the profile does not exist
        ConflictError: the profile is already claimed (including a lost race)
        ForbiddenError: the LinkedIn URLs do not match
        BadRequestError: the identity has no email to bind
    """
    result = await db.execute(
        select(User)
        .where(User.id == target_user_id)
        .execution_options(populate_existing=True)
    )
    target = result.scalar_one_or_none()

    if not target:
        raise NotFoundError("User not found")

    if target.claimed:
        raise ConflictError("Profile already claimed")

    if not can_claim(identity.external_profile_url, target.linkedin_url, target.claimed):
        logger.info(
            "Rejected claim of %s by %s: LinkedIn URL mismatch",
            target_user_id,
            identity.user_id,
        )
        raise ForbiddenError(
            "Your LinkedIn profile does not match this profile. "
            "Contact a curator if you believe this profile is yours."
        )

    if not identity.email:
        raise BadRequestError("An email address is required to claim a profile")

    result = await db.execute(
        update(User)
        .where(User.id == target_user_id)
        .where(User.claimed.is_(False))
        .values(email=identity.email, image=identity.image, claimed=True)
        .returning(User.id)
        .execution_options(synchronize_session=False)
    )
    if result.first() is None:
        raise ConflictError("Profile already claimed")

    if identity.user_id != target_user_id:
        await db.execute(
            update(OAuthAccount)
            .where(OAuthAccount.user_id == identity.user_id)
            .values(user_id=target_user_id)
            .execution_options(synchronize_session=False)
        )

    await db.commit()
    logger.info("Profile %s claimed by %s", target_user_id, identity.user_id)

    result = await db.execute(
        select(User)
        .where(User.id == target_user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()
