"""Moderation gate shared by questions and comments.

States: PENDING (approved=false) -> APPROVED, or PENDING -> deleted. There is
no way back from APPROVED; rejecting content means deleting it.
"""

import logging
from typing import TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.policy import can_moderate_content, can_view_pending
from app.auth.session import Identity
from app.errors import ForbiddenError, NotFoundError
from app.models.forum import Answer, Comment, Question

logger = logging.getLogger(__name__)

Moderatable = TypeVar("Moderatable", Question, Comment)

_LABELS = {Question: "Question", Comment: "Comment"}


def is_visible(item: Question | Comment, identity: Identity | None) -> bool:
    """Approved items are public; pending ones only for author and moderators."""
    if item.approved:
        return True
    if identity is None:
        return False
    return can_view_pending(identity.user_id, item.author_id, identity.role)


def ensure_visible(item: Moderatable | None, identity: Identity | None, label: str) -> Moderatable:
    """
    Return the item if the caller may see it.

    Hidden pending items raise the same NotFoundError as missing ones.
    """
    if item is None or not is_visible(item, identity):
        raise NotFoundError(f"{label} not found")
    return item


def _ensure_moderator(identity: Identity) -> None:
    if not can_moderate_content(identity.role):
        raise ForbiddenError("Moderator access required")


async def approve(
    db: AsyncSession,
    model: type[Moderatable],
    item_id: UUID,
    identity: Identity,
) -> Moderatable:
    """
    Transition an item to APPROVED. Approving twice is a no-op.

    Raises:
        ForbiddenError: the caller may not moderate
        NotFoundError: the item does not exist
    """
    _ensure_moderator(identity)
    label = _LABELS[model]

    result = await db.execute(select(model).where(model.id == item_id))
    item = result.scalar_one_or_none()
    if not item:
        raise NotFoundError(f"{label} not found")

    if not item.approved:
        item.approved = True
        await db.commit()
        logger.info("%s %s approved by %s", label, item_id, identity.user_id)

    return item


async def remove(
    db: AsyncSession,
    model: type[Moderatable],
    item_id: UUID,
    identity: Identity,
) -> None:
    """
    Permanently delete an item (and a question's answers).

    Raises:
        ForbiddenError: the caller may not moderate
        NotFoundError: the item does not exist
    """
    _ensure_moderator(identity)
    label = _LABELS[model]

    result = await db.execute(select(model.id).where(model.id == item_id))
    if result.first() is None:
        raise NotFoundError(f"{label} not found")

    if model is Question:
        await db.execute(delete(Answer).where(Answer.question_id == item_id))
    await db.execute(delete(model).where(model.id == item_id))
    await db.commit()
    logger.info("%s %s deleted by %s", label, item_id, identity.user_id)
