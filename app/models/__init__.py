"""Database models for the DeltaProNet directory."""

from app.models.forum import Answer, Comment, Question
from app.models.skill import ExpertiseArea, Skill, SkillType, UserSkill
from app.models.user import OAuthAccount, Role, User

__all__ = [
    "User",
    "Role",
    "OAuthAccount",
    "ExpertiseArea",
    "Skill",
    "SkillType",
    "UserSkill",
    "Question",
    "Answer",
    "Comment",
]
