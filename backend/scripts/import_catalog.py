#!/usr/bin/env python3
"""
Skill Catalog Import Script

Imports skills (with proficiency ladders), careers and their skill
requirements into the local database.

This script can:
1. Import a built-in sample catalog (for local development and demos)
2. Import a catalog from a JSON file
3. Verify what is currently stored

JSON Format:
    {
        "skills": [{"id", "name", "slug", "category", "difficulty",
                    "description", "proficiency_levels": [...]}],
        "careers": [{"id", "slug", "name", "description",
                     "requirements": [{"skill_id", "required_level", "importance"}]}],
        "user_skills": [{"user_id", "skill_id", "current_level"}]   # optional
    }

Usage:
    # Import sample data
    python scripts/import_catalog.py --seed

    # Import from a JSON file
    python scripts/import_catalog.py --json-file path/to/catalog.json

    # Verify import
    python scripts/import_catalog.py --verify
"""

import asyncio
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from app.database import Base, to_async_url
from app.models import Career, CareerRequirementRow, Skill, UserSkill
from app.config import get_settings

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

settings = get_settings()

LEVEL_NAMES = ["Beginner", "Intermediate", "Advanced", "Expert", "Master"]


def ladder(hours: List[int], prerequisites: Optional[Dict[int, List[str]]] = None) -> List[dict]:
    """Build a proficiency ladder with one rung per hour figure."""
    prerequisites = prerequisites or {}
    return [
        {
            "level": LEVEL_NAMES[index],
            "title": f"{LEVEL_NAMES[index]} level",
            "description": "",
            "expectations": [],
            "projects": [],
            "hours_to_achieve": rung_hours,
            "prerequisites": prerequisites.get(index + 1, []),
            "resources": [],
        }
        for index, rung_hours in enumerate(hours)
    ]


# ==============================================================================
# Seed Data - Sample Catalog
# ==============================================================================

SEED_SKILLS = [
    {"id": "linux", "name": "Linux", "category": "DevOps", "difficulty": "Beginner",
     "proficiency_levels": ladder([15, 25, 40, 60, 80])},
    {"id": "git", "name": "Git", "category": "Software Engineering", "difficulty": "Beginner",
     "proficiency_levels": ladder([8, 15, 25, 40, 60])},
    {"id": "scripting", "name": "Scripting", "category": "DevOps", "difficulty": "Beginner",
     "proficiency_levels": ladder([15, 25, 40, 60, 80], {2: ["linux"]})},
    {"id": "networking", "name": "Networking", "category": "DevOps", "difficulty": "Intermediate",
     "proficiency_levels": ladder([20, 30, 45, 60, 90], {2: ["linux"]})},
    {"id": "docker", "name": "Docker", "category": "DevOps", "difficulty": "Intermediate",
     "proficiency_levels": ladder([15, 25, 40, 60, 80], {1: ["linux"]})},
    {"id": "ci-cd", "name": "CI/CD", "category": "DevOps", "difficulty": "Intermediate",
     "proficiency_levels": ladder([15, 25, 40, 60, 80], {1: ["git"], 2: ["docker"]})},
    {"id": "kubernetes", "name": "Kubernetes", "category": "DevOps", "difficulty": "Advanced",
     "proficiency_levels": ladder([25, 40, 60, 80, 120], {1: ["docker"], 3: ["networking"]})},
    {"id": "terraform", "name": "Terraform", "category": "DevOps", "difficulty": "Intermediate",
     "proficiency_levels": ladder([15, 25, 40, 60, 80], {2: ["networking"]})},
    {"id": "monitoring", "name": "Monitoring", "category": "DevOps", "difficulty": "Intermediate",
     "proficiency_levels": ladder([10, 20, 35, 50, 70])},
    {"id": "programming", "name": "Programming", "category": "Software Engineering",
     "difficulty": "Beginner", "proficiency_levels": ladder([30, 50, 80, 120, 160])},
    {"id": "apis", "name": "APIs", "category": "Software Engineering", "difficulty": "Intermediate",
     "proficiency_levels": ladder([15, 25, 40, 60, 80], {1: ["programming"]})},
    {"id": "testing", "name": "Testing", "category": "Software Engineering",
     "difficulty": "Intermediate", "proficiency_levels": ladder([10, 20, 35, 50, 70], {1: ["programming"]})},
    {"id": "statistics", "name": "Statistics", "category": "Data", "difficulty": "Intermediate",
     "proficiency_levels": ladder([20, 35, 50, 80, 120])},
    {"id": "ml", "name": "ML", "category": "Data", "difficulty": "Advanced",
     "proficiency_levels": ladder([30, 50, 80, 120, 160], {1: ["statistics", "programming"]})},
    {"id": "data-pipelines", "name": "DataPipelines", "category": "Data", "difficulty": "Intermediate",
     "proficiency_levels": ladder([20, 30, 45, 60, 90], {1: ["programming"]})},
]

SEED_CAREERS = [
    {
        "id": "devops-engineer",
        "slug": "devops-engineer",
        "name": "DevOps Engineer",
        "description": "Builds and operates delivery pipelines and infrastructure.",
        "requirements": [
            {"skill_id": "linux", "required_level": 3, "importance": "essential"},
            {"skill_id": "git", "required_level": 3, "importance": "essential"},
            {"skill_id": "docker", "required_level": 3, "importance": "essential"},
            {"skill_id": "ci-cd", "required_level": 3, "importance": "essential"},
            {"skill_id": "kubernetes", "required_level": 3, "importance": "important"},
            {"skill_id": "terraform", "required_level": 2, "importance": "important"},
            {"skill_id": "monitoring", "required_level": 2, "importance": "important"},
            {"skill_id": "scripting", "required_level": 2, "importance": "nice-to-have"},
        ],
    },
    {
        "id": "backend-developer",
        "slug": "backend-developer",
        "name": "Backend Developer",
        "description": "Designs and builds server-side services and APIs.",
        "requirements": [
            {"skill_id": "programming", "required_level": 4, "importance": "essential"},
            {"skill_id": "apis", "required_level": 3, "importance": "essential"},
            {"skill_id": "git", "required_level": 3, "importance": "essential"},
            {"skill_id": "testing", "required_level": 3, "importance": "important"},
            {"skill_id": "docker", "required_level": 2, "importance": "nice-to-have"},
        ],
    },
    {
        "id": "data-scientist",
        "slug": "data-scientist",
        "name": "Data Scientist",
        "description": "Turns data into models and insight.",
        "requirements": [
            {"skill_id": "statistics", "required_level": 4, "importance": "essential"},
            {"skill_id": "programming", "required_level": 3, "importance": "essential"},
            {"skill_id": "ml", "required_level": 3, "importance": "essential"},
            {"skill_id": "data-pipelines", "required_level": 2, "importance": "important"},
            {"skill_id": "git", "required_level": 2, "importance": "nice-to-have"},
        ],
    },
]


# ==============================================================================
# Database Operations
# ==============================================================================

async def get_async_session() -> AsyncSession:
    """Create an async database session."""
    engine = create_async_engine(to_async_url(settings.database_url), echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return async_session()


async def import_skills(session: AsyncSession, skills: List[dict]) -> int:
    count = 0
    for skill_data in skills:
        existing = await session.execute(select(Skill).where(Skill.id == skill_data["id"]))
        if existing.scalars().first():
            logger.debug(f"Skill already exists: {skill_data['name']}")
            continue

        session.add(Skill(
            id=skill_data["id"],
            name=skill_data["name"],
            slug=skill_data.get("slug", skill_data["id"]),
            category=skill_data.get("category", "general"),
            difficulty=skill_data.get("difficulty", "Beginner"),
            description=skill_data.get("description"),
            proficiency_levels=skill_data.get("proficiency_levels", []),
        ))
        count += 1
        logger.info(f"Imported skill: {skill_data['name']}")

    await session.commit()
    return count


async def import_careers(session: AsyncSession, careers: List[dict]) -> int:
    count = 0
    for career_data in careers:
        existing = await session.execute(select(Career).where(Career.slug == career_data["slug"]))
        if existing.scalars().first():
            logger.debug(f"Career already exists: {career_data['slug']}")
            continue

        career = Career(
            id=career_data.get("id", career_data["slug"]),
            slug=career_data["slug"],
            name=career_data["name"],
            description=career_data.get("description"),
        )
        session.add(career)
        for position, requirement in enumerate(career_data.get("requirements", [])):
            session.add(CareerRequirementRow(
                career_id=career.id,
                skill_id=requirement["skill_id"],
                required_level=requirement.get("required_level", 1),
                importance=requirement.get("importance", "important"),
                position=position,
            ))
        count += 1
        logger.info(f"Imported career: {career.name}")

    await session.commit()
    return count


async def import_user_skills(session: AsyncSession, user_skills: List[dict]) -> int:
    count = 0
    for entry in user_skills:
        existing = await session.execute(
            select(UserSkill).where(
                UserSkill.user_id == entry["user_id"],
                UserSkill.skill_id == entry["skill_id"],
            )
        )
        row = existing.scalars().first()
        if row:
            row.current_level = entry.get("current_level", 0)
        else:
            session.add(UserSkill(
                user_id=entry["user_id"],
                skill_id=entry["skill_id"],
                current_level=entry.get("current_level", 0),
            ))
        count += 1

    await session.commit()
    return count


async def import_json_file(session: AsyncSession, json_path: Path) -> int:
    """Import skills, careers and optional user skills from a JSON file."""
    if not json_path.exists():
        logger.error(f"JSON file not found: {json_path}")
        return 0

    with open(json_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    count = await import_skills(session, data.get("skills", []))
    count += await import_careers(session, data.get("careers", []))
    count += await import_user_skills(session, data.get("user_skills", []))
    return count


async def verify_import(session: AsyncSession) -> None:
    """Verify import by checking counts."""
    skills = (await session.execute(select(Skill))).scalars().all()
    careers = (await session.execute(select(Career))).scalars().all()
    requirements = (await session.execute(select(CareerRequirementRow))).scalars().all()

    logger.info(f"Skills in database: {len(skills)}")
    logger.info(f"Careers in database: {len(careers)}")
    logger.info(f"Career requirements in database: {len(requirements)}")

    skill_ids = {s.id for s in skills}
    dangling = [r for r in requirements if r.skill_id not in skill_ids]
    if dangling:
        logger.warning(f"{len(dangling)} requirement(s) reference unknown skills")


# ==============================================================================
# Main
# ==============================================================================

async def main() -> None:
    parser = argparse.ArgumentParser(description="Import skill catalog and careers")
    parser.add_argument("--json-file", type=Path, help="Path to catalog JSON file")
    parser.add_argument("--seed", action="store_true", help="Import sample catalog")
    parser.add_argument("--verify", action="store_true", help="Verify import")

    args = parser.parse_args()

    session = await get_async_session()

    try:
        if args.json_file:
            logger.info(f"Importing from JSON: {args.json_file}")
            count = await import_json_file(session, args.json_file)
            logger.info(f"Imported {count} records from JSON")

        elif args.verify:
            await verify_import(session)

        else:
            if not args.seed:
                logger.info("No arguments provided, importing sample catalog...")
            count = await import_skills(session, SEED_SKILLS)
            count += await import_careers(session, SEED_CAREERS)
            logger.info(f"Imported {count} sample records")

    finally:
        await session.close()


if __name__ == "__main__":
    asyncio.run(main())
