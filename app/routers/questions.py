"""Questions router for the moderated Q&A forum."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.dependencies import get_current_identity, get_optional_identity
from app.auth.policy import can_moderate_content
from app.auth.session import Identity
from app.database import get_db
from app.models.forum import Answer, Question
from app.routers.serializers import answer_response, question_list_item, question_response
from app.schemas.forum import (
    CreateQuestionRequest,
    ListQuestionsResponse,
    ModerationRequest,
    QuestionResponse,
    QuestionWithAnswersResponse,
)
from app.services import moderation

router = APIRouter(prefix="/api/v1/questions", tags=["Questions"])


async def _load_question(db: AsyncSession, question_id: UUID) -> Question | None:
    result = await db.execute(
        select(Question)
        .options(
            selectinload(Question.author),
            selectinload(Question.answers).selectinload(Answer.author),
        )
        .where(Question.id == question_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


# --- List Questions ---


@router.get(
    "",
    response_model=ListQuestionsResponse,
    status_code=status.HTTP_200_OK,
)
async def list_questions(
    db: AsyncSession = Depends(get_db),
    identity: Identity | None = Depends(get_optional_identity),
) -> ListQuestionsResponse:
    """
    List questions, newest first.

    Moderators see every question; everyone else sees approved questions
    plus their own pending ones.
    """
    answer_count_subq = (
        select(
            Answer.question_id,
            func.count(Answer.id).label("answer_count"),
        )
        .group_by(Answer.question_id)
        .subquery()
    )

    query = (
        select(Question, func.coalesce(answer_count_subq.c.answer_count, 0).label("answer_count"))
        .outerjoin(answer_count_subq, Question.id == answer_count_subq.c.question_id)
        .options(selectinload(Question.author))
        .execution_options(populate_existing=True)
    )

    if identity is None:
        query = query.where(Question.approved.is_(True))
    elif not can_moderate_content(identity.role):
        query = query.where(or_(Question.approved.is_(True), Question.author_id == identity.user_id))

    result = await db.execute(query.order_by(Question.created_at.desc()))

    items = [question_list_item(question, answer_count) for question, answer_count in result.all()]
    return ListQuestionsResponse(items=items)


# --- Create Question ---


@router.post(
    "",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    data: CreateQuestionRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> QuestionResponse:
    """Ask a question. It stays pending until a moderator approves it."""
    question = Question(
        title=data.title,
        content=data.content,
        author_id=identity.user_id,
        approved=False,
    )

    db.add(question)
    await db.commit()

    question = await _load_question(db, question.id)
    return question_response(question)


# --- Get Question ---


@router.get(
    "/{question_id}",
    response_model=QuestionWithAnswersResponse,
    status_code=status.HTTP_200_OK,
)
async def get_question(
    question_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity | None = Depends(get_optional_identity),
) -> QuestionWithAnswersResponse:
    """
    Get a single question with its answers.

    A pending question is reported as not found to anyone but its author
    and moderators.
    """
    question = moderation.ensure_visible(await _load_question(db, question_id), identity, "Question")

    return QuestionWithAnswersResponse(
        **question_response(question).model_dump(),
        answers=[answer_response(a) for a in question.answers],
    )


# --- Moderate Question ---


@router.patch(
    "/{question_id}",
    response_model=QuestionResponse,
    status_code=status.HTTP_200_OK,
)
async def approve_question(
    question_id: UUID,
    data: ModerationRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> QuestionResponse:
    """
    Approve a pending question.

    Requires moderator or curator role.
    """
    await moderation.approve(db, Question, question_id, identity)

    question = await _load_question(db, question_id)
    return question_response(question)


# --- Delete Question ---


@router.delete(
    "/{question_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_question(
    question_id: UUID,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> None:
    """
    Delete a question and its answers.

    Requires moderator or curator role. This is how questions are rejected.
    """
    await moderation.remove(db, Question, question_id, identity)
