"""Moderated content: questions, answers, and profile comments."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.user import utcnow


class Question(Base):
    """Forum question. Hidden from the public until approved."""

    __tablename__ = "questions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_questions_approved_created", "approved", "created_at"),
    )

    author = relationship("User", foreign_keys=[author_id])
    answers = relationship(
        "Answer",
        back_populates="question",
        order_by="Answer.created_at",
    )


class Answer(Base):
    """Answer to an approved question."""

    __tablename__ = "answers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    content = Column(Text, nullable=False)
    question_id = Column(Uuid, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_answers_question", "question_id", "created_at"),
    )

    question = relationship("Question", back_populates="answers")
    author = relationship("User", foreign_keys=[author_id])


class Comment(Base):
    """Comment left on another user's profile. Hidden until approved."""

    __tablename__ = "comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    content = Column(Text, nullable=False)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    target_user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_comments_target", "target_user_id", "created_at"),
        Index("idx_comments_approved_created", "approved", "created_at"),
    )

    author = relationship("User", foreign_keys=[author_id])
    target = relationship("User", back_populates="comments_received", foreign_keys=[target_user_id])
