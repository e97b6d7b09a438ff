"""Answers router."""

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.dependencies import get_current_identity
from app.auth.session import Identity
from app.database import get_db
from app.errors import NotFoundError
from app.models.forum import Answer, Question
from app.routers.serializers import answer_response
from app.schemas.forum import AnswerResponse, CreateAnswerRequest

router = APIRouter(prefix="/api/v1/answers", tags=["Questions"])


@router.post(
    "",
    response_model=AnswerResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_answer(
    data: CreateAnswerRequest,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> AnswerResponse:
    """
    Answer a question.

    Only approved questions accept answers; pending ones are reported as
    not found.
    """
    result = await db.execute(select(Question).where(Question.id == data.question_id))
    question = result.scalar_one_or_none()

    if not question or not question.approved:
        raise NotFoundError("Question not found or not approved")

    answer = Answer(
        content=data.content,
        question_id=question.id,
        author_id=identity.user_id,
    )
    db.add(answer)
    await db.commit()

    result = await db.execute(
        select(Answer)
        .options(selectinload(Answer.author))
        .where(Answer.id == answer.id)
        .execution_options(populate_existing=True)
    )
    return answer_response(result.scalar_one())
