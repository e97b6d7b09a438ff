"""Expertise area reference data."""

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database import get_db
from app.models.skill import ExpertiseArea, SkillType
from app.schemas.skills import ExpertiseAreaInfo, ListExpertiseAreasResponse, SkillInfo

router = APIRouter(prefix="/api/v1/expertise-areas", tags=["Skills"])


@router.get(
    "",
    response_model=ListExpertiseAreasResponse,
    status_code=status.HTTP_200_OK,
)
async def list_expertise_areas(
    db: AsyncSession = Depends(get_db),
) -> ListExpertiseAreasResponse:
    """List expertise areas in display order, each with its skills in display order."""
    result = await db.execute(
        select(ExpertiseArea)
        .options(selectinload(ExpertiseArea.skills))
        .order_by(ExpertiseArea.order.asc())
        .execution_options(populate_existing=True)
    )
    areas = result.scalars().all()

    return ListExpertiseAreasResponse(
        items=[
            ExpertiseAreaInfo(
                id=str(area.id),
                name=area.name,
                description=area.description,
                order=area.order,
                skills=[
                    SkillInfo(
                        id=str(skill.id),
                        name=skill.name,
                        type=SkillType(skill.type).value,
                        order=skill.order,
                    )
                    for skill in area.skills
                ],
            )
            for area in areas
        ]
    )
