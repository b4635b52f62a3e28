"""
Analysis Snapshot Loader

Reads the three inputs of a skill gap analysis (skill catalog, career
requirements, the learner's skills) through one database session, so a
single request works from one consistent view of the data.
"""

from dataclasses import dataclass
from typing import Dict, List
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Career, CareerRequirementRow, Skill, UserSkill
from app.services.careers import RequirementResolver
from app.services.skill_catalog import SkillCatalog
from app.services.user_skills import UserSkillEntry, UserSkillMap, build_user_skill_lookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisSnapshot:
    """
    Request-scoped inputs of the gap engine.

    Attributes:
        user_id: Learner the snapshot belongs to
        catalog: Skill catalog
        resolver: Careers and their requirements
        user_skills: Learner entries keyed by skill id
    """
    user_id: str
    catalog: SkillCatalog
    resolver: RequirementResolver
    user_skills: UserSkillMap


async def load_skill_catalog(db: AsyncSession) -> SkillCatalog:
    result = await db.execute(select(Skill).order_by(Skill.name, Skill.id))
    return SkillCatalog.from_records(
        {
            "id": skill.id,
            "name": skill.name,
            "category": skill.category,
            "difficulty": skill.difficulty,
            "proficiency_levels": skill.proficiency_levels or [],
        }
        for skill in result.scalars().all()
    )


async def load_requirement_resolver(db: AsyncSession) -> RequirementResolver:
    """
    Load careers with their requirements.

    Careers are ordered by name, requirements by position.
    """
    careers_result = await db.execute(select(Career).order_by(Career.name, Career.slug))
    careers = careers_result.scalars().all()

    requirements_result = await db.execute(
        select(CareerRequirementRow).order_by(
            CareerRequirementRow.career_id,
            CareerRequirementRow.position,
            CareerRequirementRow.id,
        )
    )
    requirements_by_career: Dict[str, List[dict]] = {}
    for row in requirements_result.scalars().all():
        requirements_by_career.setdefault(row.career_id, []).append({
            "skill_id": row.skill_id,
            "required_level": row.required_level,
            "importance": row.importance,
        })

    return RequirementResolver.from_records(
        {
            "id": career.id,
            "slug": career.slug,
            "name": career.name,
            "requirements": requirements_by_career.get(career.id, []),
        }
        for career in careers
    )


async def load_user_skills(db: AsyncSession, user_id: str) -> UserSkillMap:
    result = await db.execute(
        select(UserSkill).where(UserSkill.user_id == user_id).order_by(UserSkill.skill_id)
    )
    return build_user_skill_lookup(
        UserSkillEntry(
            skill_id=row.skill_id,
            current_level=row.current_level or 0,
            self_assessment=row.self_assessment,
            mentor_assessment=row.mentor_assessment,
            last_practiced_at=row.last_practiced_at,
        )
        for row in result.scalars().all()
    )


async def load_snapshot(db: AsyncSession, user_id: str) -> AnalysisSnapshot:
    """
    Load everything needed to analyze one learner.

    All reads run inside the session's single transaction.

    Args:
        db: Database session
        user_id: Authenticated learner id

    Returns:
        AnalysisSnapshot
    """
    catalog = await load_skill_catalog(db)
    resolver = await load_requirement_resolver(db)
    user_skills = await load_user_skills(db, user_id)

    logger.debug(
        f"Loaded snapshot for user {user_id}: {len(catalog)} skills, "
        f"{len(resolver)} careers, {len(user_skills)} rated skills"
    )
    return AnalysisSnapshot(
        user_id=user_id,
        catalog=catalog,
        resolver=resolver,
        user_skills=user_skills,
    )
