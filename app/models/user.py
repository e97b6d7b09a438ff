"""User and OAuthAccount models."""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, enum.Enum):
    """Directory role of a user."""

    MEMBER = "MEMBER"
    MODERATOR = "MODERATOR"
    CURATOR = "CURATOR"


class User(Base):
    """
    Directory profile and identity record.

    A profile is either seeded unclaimed by a curator or created claimed on
    first sign-in. ``linkedin_url`` is unique when present.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    linkedin_url = Column(String, unique=True)
    email = Column(String)
    name = Column(Text)
    image = Column(Text)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.MEMBER)
    claimed = Column(Boolean, nullable=False, default=False)
    bio = Column(Text)
    education = Column(Text)
    years_experience = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "years_experience IS NULL OR years_experience >= 0",
            name="ck_users_years_experience",
        ),
        Index("idx_users_name", "name"),
    )

    accounts = relationship(
        "OAuthAccount",
        back_populates="user",
        order_by="OAuthAccount.created_at",
    )
    skills = relationship("UserSkill", back_populates="user")
    comments_received = relationship(
        "Comment",
        back_populates="target",
        foreign_keys="Comment.target_user_id",
        order_by="Comment.created_at.desc()",
    )


class OAuthAccount(Base):
    """Link between an external identity and the user it resolves to."""

    __tablename__ = "oauth_accounts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    provider = Column(String, nullable=False)
    provider_account_id = Column(String, nullable=False)
    profile_url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("provider", "provider_account_id", name="uq_oauth_accounts_provider_subject"),
        Index("idx_oauth_accounts_user", "user_id"),
    )

    user = relationship("User", back_populates="accounts")
