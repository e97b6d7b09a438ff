"""Comments router for moderated profile comments."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.dependencies import get_current_identity, get_optional_identity
from app.auth.session import Identity
from app.database import get_db
from app.errors import NotFoundError
from app.models.forum import Comment
from app.models.user import User
from app.routers.serializers import comment_response
from app.schemas.forum import CommentResponse, CreateCommentRequest, ModerationRequest
from app.services import moderation

router = APIRouter(prefix="/api/v1/comments", tags=["Comments"])


async def _load_comment(db: AsyncSession, comment_id: UUID) -> Comment | None:
    result = await db.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.id == comment_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    data: CreateCommentRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> CommentResponse:
    """Comment on a profile. The comment stays pending until approved."""
    result = await db.execute(select(User.id).where(User.id == data.target_user_id))
    if result.first() is None:
        raise NotFoundError(f"User '{data.target_user_id}' not found")

    comment = Comment(
        content=data.content,
        author_id=identity.user_id,
        target_user_id=data.target_user_id,
        approved=False,
    )
    db.add(comment)
    await db.commit()

    return comment_response(await _load_comment(db, comment.id))


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_200_OK,
)
async def get_comment(
    comment_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity | None = Depends(get_optional_identity),
) -> CommentResponse:
    """Get a comment; pending ones are only visible to their author and moderators."""
    comment = moderation.ensure_visible(await _load_comment(db, comment_id), identity, "Comment")
    return comment_response(comment)


@router.patch(
    "/{comment_id}",
    response_model=CommentResponse,
    status_code=status.HTTP_200_OK,
)
async def approve_comment(
    comment_id: UUID,
    data: ModerationRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> CommentResponse:
    """
    Approve a pending comment.

    Requires moderator or curator role.
    """
    await moderation.approve(db, Comment, comment_id, identity)
    return comment_response(await _load_comment(db, comment_id))


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_comment(
    comment_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> None:
    """
    Delete a comment.

    Requires moderator or curator role. This is how comments are rejected.
    """
    await moderation.remove(db, Comment, comment_id, identity)
