"""Curator router for the moderation queue and directory management."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.dependencies import require_curator, require_moderator
from app.auth.session import Identity
from app.database import get_db
from app.errors import NotFoundError
from app.models.forum import Answer, Comment, Question
from app.models.user import User
from app.routers.serializers import comment_response, question_list_item
from app.schemas.curator import (
    DirectoryStatsResponse,
    PendingContentResponse,
    UpdateRoleRequest,
    UpdateRoleResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/curator", tags=["Curator"])


@router.get(
    "/pending",
    response_model=PendingContentResponse,
    status_code=status.HTTP_200_OK,
)
async def list_pending_content(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_moderator),
) -> PendingContentResponse:
    """
    List comments and questions awaiting moderation, newest first.

    Requires moderator or curator role.
    """
    result = await db.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.approved.is_(False))
        .order_by(Comment.created_at.desc())
        .execution_options(populate_existing=True)
    )
    comments = result.scalars().all()

    answer_count = (
        select(func.count(Answer.id))
        .where(Answer.question_id == Question.id)
        .correlate(Question)
        .scalar_subquery()
    )
    result = await db.execute(
        select(Question, answer_count)
        .options(selectinload(Question.author))
        .where(Question.approved.is_(False))
        .order_by(Question.created_at.desc())
        .execution_options(populate_existing=True)
    )

    return PendingContentResponse(
        comments=[comment_response(c) for c in comments],
        questions=[question_list_item(q, count) for q, count in result.all()],
    )


@router.get(
    "/stats",
    response_model=DirectoryStatsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_moderator),
) -> DirectoryStatsResponse:
    """
    Directory counters for the curator dashboard.

    Requires moderator or curator role.
    """
    total_users = await db.scalar(select(func.count(User.id)))
    claimed_users = await db.scalar(select(func.count(User.id)).where(User.claimed.is_(True)))
    pending_comments = await db.scalar(
        select(func.count(Comment.id)).where(Comment.approved.is_(False))
    )
    pending_questions = await db.scalar(
        select(func.count(Question.id)).where(Question.approved.is_(False))
    )

    return DirectoryStatsResponse(
        total_users=total_users or 0,
        claimed_users=claimed_users or 0,
        pending_comments=pending_comments or 0,
        pending_questions=pending_questions or 0,
    )


@router.patch(
    "/users/{user_id}/role",
    response_model=UpdateRoleResponse,
    status_code=status.HTTP_200_OK,
)
async def update_user_role(
    user_id: UUID,
    data: UpdateRoleRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_curator),
) -> UpdateRoleResponse:
    """
    Change a user's role.

    Requires curator or moderator role. Takes effect on the user's next
    request; sessions never cache the role.
    """
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise NotFoundError(f"User '{user_id}' not found")

    user.role = data.role
    await db.commit()
    logger.info("User %s role set to %s by %s", user_id, data.role.value, identity.user_id)

    return UpdateRoleResponse(
        user_id=str(user.id),
        name=user.name,
        role=user.role,
    )
