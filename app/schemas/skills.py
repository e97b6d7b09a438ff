"""Expertise area and skill reference schemas."""

from pydantic import BaseModel


class SkillInfo(BaseModel):
    id: str
    name: str
    type: str
    order: int


class ExpertiseAreaInfo(BaseModel):
    id: str
    name: str
    description: str | None
    order: int
    skills: list[SkillInfo]


class ListExpertiseAreasResponse(BaseModel):
    """Response for GET /expertise-areas."""

    items: list[ExpertiseAreaInfo]
