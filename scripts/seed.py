"""Seed expertise areas, skills and the initial unclaimed profiles.

Safe to run repeatedly; existing rows are left untouched.

    python -m scripts.seed
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import AsyncSessionLocal, init_db
from app.models.skill import ExpertiseArea, Skill, SkillType
from app.models.user import User

logger = logging.getLogger(__name__)

# name, description, [(skill, type), ...] in display order
EXPERTISE_AREAS: list[tuple[str, str, list[tuple[str, SkillType]]]] = [
    (
        "Technical Architect",
        "Overall technical architecture and system design",
        [
            ("Algemene kennis Electronica", SkillType.GENERAL),
            ("Algemene kennis Mechanica", SkillType.GENERAL),
            ("Algemene kennis Software", SkillType.GENERAL),
            ("Ontwerp Methodologie", SkillType.GENERAL),
            ("Lean Manufacturing", SkillType.GENERAL),
        ],
    ),
    (
        "Electronica",
        "Electronics engineering and design",
        [
            ("Hoogfrequent", SkillType.GENERAL),
            ("Dataopslag", SkillType.GENERAL),
            ("ESD", SkillType.GENERAL),
            ("Sensoren", SkillType.GENERAL),
            ("Voeding", SkillType.GENERAL),
        ],
    ),
    (
        "Mechanica",
        "Mechanical engineering and design",
        [
            ("Vormgeving", SkillType.GENERAL),
            ("Kunststof engineering en productie", SkillType.GENERAL),
            ("Metaal engineering en productie", SkillType.GENERAL),
            ("Plaatwerk engineering en productie", SkillType.GENERAL),
            ("SolidWorks CAD", SkillType.TOOL),
            ("SolidWorks CAM", SkillType.TOOL),
            ("ProEngineer", SkillType.TOOL),
            ("Fusion CAD", SkillType.TOOL),
            ("Fusion CAM", SkillType.TOOL),
        ],
    ),
    (
        "Software",
        "Software development and engineering",
        [
            ("Architectuur", SkillType.GENERAL),
            ("Data analyse", SkillType.GENERAL),
            ("Back-end", SkillType.GENERAL),
            ("Front-end", SkillType.GENERAL),
            ("Embedded", SkillType.GENERAL),
            ("Assembly", SkillType.LANGUAGE),
            ("C", SkillType.LANGUAGE),
            ("C++", SkillType.LANGUAGE),
            ("Javascript", SkillType.LANGUAGE),
            ("Java", SkillType.LANGUAGE),
            ("Python", SkillType.LANGUAGE),
            ("VHDL", SkillType.LANGUAGE),
        ],
    ),
]

# Stored in the same form LinkedIn sign-in produces, so they auto-claim.
UNCLAIMED_PROFILES: list[tuple[str, str]] = [
    ("A. van der Heijde", "https://www.linkedin.com/in/avanderheijde"),
    ("C. Hoogendijk", "https://www.linkedin.com/in/choogendijk"),
    ("M. Wanninkhof", "https://www.linkedin.com/in/michiel-wanninkhof-0443488a"),
]


async def _get_or_create_area(
    db: AsyncSession, name: str, description: str, order: int
) -> tuple[ExpertiseArea, bool]:
    result = await db.execute(select(ExpertiseArea).where(ExpertiseArea.name == name))
    area = result.scalar_one_or_none()
    if area is not None:
        return area, False
    area = ExpertiseArea(name=name, description=description, order=order)
    db.add(area)
    await db.flush()
    return area, True


async def seed_directory(db: AsyncSession) -> dict[str, int]:
    """Insert missing reference data and seed profiles; return counts of rows created."""
    created = {"expertise_areas": 0, "skills": 0, "users": 0}

    for area_order, (area_name, description, skills) in enumerate(EXPERTISE_AREAS, start=1):
        area, area_created = await _get_or_create_area(db, area_name, description, area_order)
        created["expertise_areas"] += int(area_created)

        result = await db.execute(select(Skill.name).where(Skill.expertise_area_id == area.id))
        existing = set(result.scalars().all())

        for skill_order, (skill_name, skill_type) in enumerate(skills, start=1):
            if skill_name in existing:
                continue
            db.add(
                Skill(
                    name=skill_name,
                    type=skill_type,
                    order=skill_order,
                    expertise_area_id=area.id,
                )
            )
            created["skills"] += 1

    for name, linkedin_url in UNCLAIMED_PROFILES:
        result = await db.execute(select(User.id).where(User.linkedin_url == linkedin_url))
        if result.first() is not None:
            continue
        db.add(User(name=name, linkedin_url=linkedin_url, claimed=False))
        created["users"] += 1

    await db.commit()
    return created


async def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    await init_db()
    async with AsyncSessionLocal() as db:
        created = await seed_directory(db)
    logger.info(
        "Seed complete: %d expertise areas, %d skills, %d profiles created",
        created["expertise_areas"],
        created["skills"],
        created["users"],
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
