"""Question, answer, and comment Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel, field_validator


def _require_text(v: str, message: str) -> str:
    if not v.strip():
        raise ValueError(message)
    return v


class CreateQuestionRequest(BaseModel):
    """Request to ask a question."""

    title: str
    content: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title length."""
        if len(v) > 500:
            raise ValueError("Title must be 500 characters or less")
        return _require_text(v, "Title cannot be empty")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _require_text(v, "Content cannot be empty")


class CreateAnswerRequest(BaseModel):
    """Request to answer an approved question."""

    content: str
    question_id: UUID

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _require_text(v, "Content cannot be empty")


class CreateCommentRequest(BaseModel):
    """Request to comment on a user's profile."""

    content: str
    target_user_id: UUID

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Validate content length."""
        if len(v) > 65536:  # 64KB
            raise ValueError("Comment must be 64KB or less")
        return _require_text(v, "Comment cannot be empty")


class ModerationRequest(BaseModel):
    """Approve a pending item."""

    approved: bool

    @field_validator("approved")
    @classmethod
    def validate_approved(cls, v: bool) -> bool:
        """Approval cannot be revoked; rejection is a delete."""
        if not v:
            raise ValueError("Approval cannot be revoked; delete the item instead")
        return v


class AnswerResponse(BaseModel):
    """Response for an answer."""

    id: str
    question_id: str
    content: str
    author_id: str
    author_name: str | None
    created_at: str


class QuestionListItem(BaseModel):
    """Question summary for list endpoints."""

    id: str
    title: str
    author_id: str
    author_name: str | None
    approved: bool
    answer_count: int
    created_at: str


class ListQuestionsResponse(BaseModel):
    """Response for listing questions."""

    items: list[QuestionListItem]


class QuestionResponse(BaseModel):
    """Full question without answers."""

    id: str
    title: str
    content: str
    author_id: str
    author_name: str | None
    approved: bool
    created_at: str


class QuestionWithAnswersResponse(QuestionResponse):
    """Full question with answers, oldest first."""

    answers: list[AnswerResponse]


class CommentResponse(BaseModel):
    """Response for a profile comment."""

    id: str
    content: str
    author_id: str
    author_name: str | None
    target_user_id: str
    approved: bool
    created_at: str
