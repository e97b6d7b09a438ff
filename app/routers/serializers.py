"""Model -> response schema conversion shared by routers."""

from app.models.forum import Answer, Comment, Question
from app.models.skill import SkillType, UserSkill
from app.models.user import User
from app.schemas.forum import AnswerResponse, CommentResponse, QuestionListItem, QuestionResponse
from app.schemas.users import ProfileCommentResponse, SkillRatingResponse, UserResponse


def author_name(user: User | None) -> str | None:
    """Get display name for an author."""
    if not user:
        return None
    return user.name


def skill_rating_response(user_skill: UserSkill) -> SkillRatingResponse:
    skill = user_skill.skill
    return SkillRatingResponse(
        skill_id=str(skill.id),
        skill_name=skill.name,
        skill_type=SkillType(skill.type).value,
        expertise_area=skill.expertise_area.name,
        rating=user_skill.rating,
        verified=bool(user_skill.verified),
    )


def user_response(user: User) -> UserResponse:
    return UserResponse(
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
    )


def profile_comment_response(comment: Comment) -> ProfileCommentResponse:
    return ProfileCommentResponse(
        id=str(comment.id),
        content=comment.content,
        author_id=str(comment.author_id),
        author_name=author_name(comment.author),
        approved=bool(comment.approved),
        created_at=comment.created_at.isoformat(),
    )


def comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=str(comment.id),
        content=comment.content,
        author_id=str(comment.author_id),
        author_name=author_name(comment.author),
        target_user_id=str(comment.target_user_id),
        approved=bool(comment.approved),
        created_at=comment.created_at.isoformat(),
    )


def question_response(question: Question) -> QuestionResponse:
    return QuestionResponse(
        id=str(question.id),
        title=question.title,
        content=question.content,
        author_id=str(question.author_id),
        author_name=author_name(question.author),
        approved=bool(question.approved),
        created_at=question.created_at.isoformat(),
    )


def question_list_item(question: Question, answer_count: int) -> QuestionListItem:
    return QuestionListItem(
        id=str(question.id),
        title=question.title,
        author_id=str(question.author_id),
        author_name=author_name(question.author),
        approved=bool(question.approved),
        answer_count=answer_count,
        created_at=question.created_at.isoformat(),
    )


def answer_response(answer: Answer) -> AnswerResponse:
    return AnswerResponse(
        id=str(answer.id),
        question_id=str(answer.question_id),
        content=answer.content,
        author_id=str(answer.author_id),
        author_name=author_name(answer.author),
        created_at=answer.created_at.isoformat(),
    )
