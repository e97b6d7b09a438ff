"""Users router for directory profiles, skills, and claiming."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.dependencies import (
    get_current_identity,
    get_optional_identity,
    require_curator,
    set_session_cookie,
)
from app.auth.policy import can_claim, can_edit_user
from app.auth.session import Identity
from app.config import settings
from app.database import get_db
from app.errors import ConflictError, ForbiddenError, NotFoundError
from app.middleware.rate_limit import limiter
from app.models.forum import Comment
from app.models.skill import Skill, UserSkill
from app.models.user import User
from app.routers.serializers import (
    profile_comment_response,
    skill_rating_response,
    user_response,
)
from app.schemas.users import (
    ClaimResponse,
    CreateUserRequest,
    ListUsersResponse,
    ProfileCommentResponse,
    ReplaceSkillsRequest,
    ReplaceSkillsResponse,
    UpdateUserRequest,
    UserMeResponse,
    UserProfileResponse,
    UserResponse,
    UserSummary,
)
from app.services.claims import claim_profile
from app.services.moderation import is_visible
from app.services.skills import replace_user_skills

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["Users"])

TOP_SKILLS_IN_LISTING = 5


def _with_profile_relations(query):
    return query.options(
        selectinload(User.skills).selectinload(UserSkill.skill).selectinload(Skill.expertise_area),
        selectinload(User.comments_received).selectinload(Comment.author),
    ).execution_options(populate_existing=True)


def _sorted_skills(user: User) -> list[UserSkill]:
    return sorted(user.skills, key=lambda us: us.rating, reverse=True)


async def _get_user_or_404(db: AsyncSession, user_id: UUID) -> User:
    result = await db.execute(
        select(User).where(User.id == user_id).execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if not user:
        raise NotFoundError(f"User '{user_id}' not found")
    return user


async def _ensure_linkedin_url_free(db: AsyncSession, url: str, owner_id: UUID | None = None) -> None:
    query = select(User.id).where(User.linkedin_url == url)
    if owner_id is not None:
        query = query.where(User.id != owner_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise ConflictError("A profile with this LinkedIn URL already exists")


# --- Directory listing ---


@router.get(
    "",
    response_model=ListUsersResponse,
    status_code=status.HTTP_200_OK,
)
async def list_users(
    db: AsyncSession = Depends(get_db),
) -> ListUsersResponse:
    """
    List all directory profiles ordered by name.

    Each entry carries the user's five best-rated skills.
    """
    result = await db.execute(
        select(User)
        .options(
            selectinload(User.skills).selectinload(UserSkill.skill).selectinload(Skill.expertise_area)
        )
        .order_by(User.name.asc())
        .execution_options(populate_existing=True)
    )
    users = result.scalars().all()

    items = [
        UserSummary(
            user_id=str(user.id),
            name=user.name,
            image=user.image,
            claimed=bool(user.claimed),
            top_skills=[
                skill_rating_response(us) for us in _sorted_skills(user)[:TOP_SKILLS_IN_LISTING]
            ],
        )
        for user in users
    ]

    return ListUsersResponse(items=items)


# --- Create unclaimed profile ---


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    data: CreateUserRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_curator),
) -> UserResponse:
    """
    Seed an unclaimed profile.

    Requires curator or moderator role. The profile is claimed later by
    whoever signs in with the matching LinkedIn identity.
    """
    await _ensure_linkedin_url_free(db, data.linkedin_url)

    user = User(
        name=data.name,
        linkedin_url=data.linkedin_url,
        education=data.education,
        years_experience=data.years_experience,
        bio=data.bio,
        claimed=False,
    )
    db.add(user)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("A profile with this LinkedIn URL already exists")

    logger.info("Curator %s created unclaimed profile %s", identity.user_id, user.id)
    return user_response(user)


# --- Dashboard ---


@router.get(
    "/me",
    response_model=UserMeResponse,
    status_code=status.HTTP_200_OK,
)
async def get_current_user_profile(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> UserMeResponse:
    """
    Get the signed-in user's own profile.

    Includes private fields, all rated skills, and approved comments received.
    """
    result = await db.execute(_with_profile_relations(select(User).where(User.id == identity.user_id)))
    user = result.scalar_one()

    return UserMeResponse(
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        image=user.image,
        linkedin_url=user.linkedin_url,
        role=user.role,
        claimed=bool(user.claimed),
        bio=user.bio,
        education=user.education,
        years_experience=user.years_experience,
        skills=[skill_rating_response(us) for us in _sorted_skills(user)],
        comments_received=[
            profile_comment_response(c)
            for c in user.comments_received
            if c.approved
        ],
    )


# --- Public profile ---


@router.get(
    "/{user_id}",
    response_model=UserProfileResponse,
    status_code=status.HTTP_200_OK,
)
async def get_user_profile(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity | None = Depends(get_optional_identity),
) -> UserProfileResponse:
    """
    Get a user's public profile.

    Returns public information only (no email). Only approved comments are
    shown. ``can_edit`` and ``can_claim`` reflect the caller's permissions.
    """
    result = await db.execute(_with_profile_relations(select(User).where(User.id == user_id)))
    user = result.scalar_one_or_none()

    if not user:
        raise NotFoundError(f"User '{user_id}' not found")

    edit_allowed = identity is not None and can_edit_user(identity.user_id, user.id, identity.role)
    claim_allowed = identity is not None and can_claim(
        identity.external_profile_url, user.linkedin_url, bool(user.claimed)
    )

    return UserProfileResponse(
        user_id=str(user.id),
        name=user.name,
        image=user.image,
        linkedin_url=user.linkedin_url,
        role=user.role,
        claimed=bool(user.claimed),
        bio=user.bio,
        education=user.education,
        years_experience=user.years_experience,
        skills=[skill_rating_response(us) for us in _sorted_skills(user)],
        comments=[
            profile_comment_response(c)
            for c in user.comments_received
            if c.approved
        ],
        can_edit=edit_allowed,
        can_claim=claim_allowed,
    )


@router.get(
    "/{user_id}/comments",
    response_model=list[ProfileCommentResponse],
    status_code=status.HTTP_200_OK,
)
async def list_profile_comments(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity | None = Depends(get_optional_identity),
) -> list[ProfileCommentResponse]:
    """
    List comments on a profile that the caller may see, newest first.

    Pending comments appear only for their author and for moderators.
    """
    await _get_user_or_404(db, user_id)

    result = await db.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.target_user_id == user_id)
        .order_by(Comment.created_at.desc())
        .execution_options(populate_existing=True)
    )
    comments = result.scalars().all()

    return [profile_comment_response(c) for c in comments if is_visible(c, identity)]


# --- Edit profile ---


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
)
async def update_user(
    user_id: UUID,
    data: UpdateUserRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> UserResponse:
    """
    Update a profile.

    Allowed for the profile owner and for curators/moderators. Only the
    fields present in the request body are changed.
    """
    if not can_edit_user(identity.user_id, user_id, identity.role):
        raise ForbiddenError("You can only edit your own profile")

    user = await _get_user_or_404(db, user_id)
    fields = data.model_fields_set

    if "linkedin_url" in fields and data.linkedin_url and data.linkedin_url != user.linkedin_url:
        await _ensure_linkedin_url_free(db, data.linkedin_url, owner_id=user.id)

    for field in ("name", "linkedin_url", "education", "years_experience", "bio"):
        if field in fields:
            setattr(user, field, getattr(data, field))

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("A profile with this LinkedIn URL already exists")

    return user_response(user)


# --- Replace skills ---


@router.put(
    "/{user_id}/skills",
    response_model=ReplaceSkillsResponse,
    status_code=status.HTTP_200_OK,
)
async def replace_skills(
    user_id: UUID,
    data: ReplaceSkillsRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ReplaceSkillsResponse:
    """
    Replace the user's whole skill set.

    Skills left out of the submission are removed; ratings are clamped to
    1-5. Allowed for the profile owner and for curators/moderators.
    """
    if not can_edit_user(identity.user_id, user_id, identity.role):
        raise ForbiddenError("You can only edit your own skills")

    skills = await replace_user_skills(
        db,
        user_id,
        [(entry.skill_id, entry.rating) for entry in data.skills],
    )

    return ReplaceSkillsResponse(
        user_id=str(user_id),
        skills=[skill_rating_response(us) for us in skills],
    )


# --- Claim ---


@router.post(
    "/{user_id}/claim",
    response_model=ClaimResponse,
    status_code=status.HTTP_200_OK,
)
@limiter.limit(settings.claim_rate_limit)
async def claim(
    request: Request,
    response: Response,
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> ClaimResponse:
    """
    Claim an unclaimed profile whose LinkedIn URL matches the caller's.

    On success the session cookie is reissued for the claimed profile.
    A second claim of the same profile returns 409.
    """
    user = await claim_profile(db, identity, user_id)
    set_session_cookie(response, user.id)

    return ClaimResponse(
        user_id=str(user.id),
        name=user.name,
        email=user.email,
        claimed=bool(user.claimed),
    )
