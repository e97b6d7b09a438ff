"""ExpertiseArea, Skill and UserSkill models."""

import enum
import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.database import Base


class SkillType(str, enum.Enum):
    GENERAL = "GENERAL"
    TOOL = "TOOL"
    LANGUAGE = "LANGUAGE"


class ExpertiseArea(Base):
    """Named skill category with a display order."""

    __tablename__ = "expertise_areas"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, unique=True, nullable=False)
    description = Column(Text)
    order = Column(Integer, nullable=False, default=0)

    skills = relationship(
        "Skill",
        back_populates="expertise_area",
        order_by="Skill.order",
    )


class Skill(Base):
    """Skill belonging to exactly one expertise area."""

    __tablename__ = "skills"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    type = Column(Enum(SkillType, name="skill_type"), nullable=False, default=SkillType.GENERAL)
    order = Column(Integer, nullable=False, default=0)
    expertise_area_id = Column(
        Uuid,
        ForeignKey("expertise_areas.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("name", "expertise_area_id", name="uq_skills_name_area"),
    )

    expertise_area = relationship("ExpertiseArea", back_populates="skills")


class UserSkill(Base):
    """Rated skill of a user. The whole set is replaced on every edit."""

    __tablename__ = "user_skills"

    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    skill_id = Column(
        Uuid,
        ForeignKey("skills.id", ondelete="CASCADE"),
        primary_key=True,
    )
    rating = Column(Integer, nullable=False)
    verified = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_user_skills_rating"),
    )

    user = relationship("User", back_populates="skills")
    skill = relationship("Skill")
