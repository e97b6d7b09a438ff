"""Curator dashboard Pydantic schemas."""

from pydantic import BaseModel

from app.models.user import Role
from app.schemas.forum import CommentResponse, QuestionListItem


class PendingContentResponse(BaseModel):
    """Unapproved comments and questions, newest first."""

    comments: list[CommentResponse]
    questions: list[QuestionListItem]


class DirectoryStatsResponse(BaseModel):
    """Directory counters for the curator dashboard."""

    total_users: int
    claimed_users: int
    pending_comments: int
    pending_questions: int


class UpdateRoleRequest(BaseModel):
    """Request to change a user's role."""

    role: Role


class UpdateRoleResponse(BaseModel):
    """Response after changing a user's role."""

    user_id: str
    name: str | None
    role: Role
