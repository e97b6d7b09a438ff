"""Pydantic schemas for request/response validation."""

from app.schemas.auth import LogoutResponse, SessionResponse
from app.schemas.forum import (
    CommentResponse,
    CreateAnswerRequest,
    CreateCommentRequest,
    CreateQuestionRequest,
    ModerationRequest,
)
from app.schemas.users import (
    ClaimResponse,
    CreateUserRequest,
    ReplaceSkillsRequest,
    UpdateUserRequest,
    UserResponse,
)

__all__ = [
    "SessionResponse",
    "LogoutResponse",
    "CreateQuestionRequest",
    "CreateAnswerRequest",
    "CreateCommentRequest",
    "ModerationRequest",
    "CommentResponse",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserResponse",
    "ReplaceSkillsRequest",
    "ClaimResponse",
]
