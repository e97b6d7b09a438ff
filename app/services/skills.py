"""User skill set replacement."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.errors import BadRequestError, NotFoundError
from app.models.skill import Skill, UserSkill
from app.models.user import User

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def clamp_rating(rating: int) -> int:
    """Clamp a submitted rating into [1, 5]."""
    return max(MIN_RATING, min(MAX_RATING, rating))


async def replace_user_skills(
    db: AsyncSession,
    user_id: UUID,
    entries: list[tuple[UUID, int]],
) -> list[UserSkill]:
    """
    Replace a user's whole skill set with the submitted (skill_id, rating) pairs.

    Existing rows are deleted and the submitted ones recreated; skills absent
    from the submission are removed. Ratings are clamped to [1, 5]. When a
    skill is submitted more than once the last entry wins.

    Raises:
        NotFoundError: the user does not exist
        BadRequestError: a submitted skill id is unknown
    """
    result = await db.execute(select(User.id).where(User.id == user_id))
    if result.first() is None:
        raise NotFoundError("User not found")

    ratings: dict[UUID, int] = {}
    for skill_id, rating in entries:
        ratings[skill_id] = clamp_rating(rating)

    if ratings:
        result = await db.execute(select(Skill.id).where(Skill.id.in_(list(ratings))))
        known = {row[0] for row in result.all()}
        unknown = set(ratings) - known
        if unknown:
            raise BadRequestError(
                f"Unknown skill ids: {', '.join(sorted(str(s) for s in unknown))}"
            )

    await db.execute(delete(UserSkill).where(UserSkill.user_id == user_id))
    db.add_all(
        UserSkill(user_id=user_id, skill_id=skill_id, rating=rating)
        for skill_id, rating in ratings.items()
    )
    await db.commit()
    logger.info("Replaced skill set of user %s with %d skills", user_id, len(ratings))

    return await list_user_skills(db, user_id)


async def list_user_skills(db: AsyncSession, user_id: UUID) -> list[UserSkill]:
    """A user's skills with skill and expertise area loaded, best rated first."""
    result = await db.execute(
        select(UserSkill)
        .options(selectinload(UserSkill.skill).selectinload(Skill.expertise_area))
        .where(UserSkill.user_id == user_id)
        .order_by(UserSkill.rating.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())
