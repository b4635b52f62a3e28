"""
Shared fixtures for skill gap tests.

Catalog used throughout:
    javascript, html, css, git, testing   - no prerequisites
    react        - requires javascript from level 1, testing from level 3
    node         - requires javascript from level 1
Every skill costs 10/20/30/40/50 hours for levels 1-5.
"""
import pytest

from app.services.careers import CareerPath, CareerRequirement, Importance
from app.services.skill_catalog import SkillCatalog

LADDER_HOURS = [10, 20, 30, 40, 50]


def _skill(skill_id, name, prerequisites=None, category="Web"):
    prerequisites = prerequisites or {}
    return {
        "id": skill_id,
        "name": name,
        "category": category,
        "difficulty": "Intermediate",
        "proficiency_levels": [
            {
                "level": level,
                "title": f"Level {level}",
                "hours_to_achieve": hours,
                "prerequisites": prerequisites.get(level, []),
            }
            for level, hours in enumerate(LADDER_HOURS, start=1)
        ],
    }


@pytest.fixture
def catalog_records():
    return [
        _skill("javascript", "JavaScript"),
        _skill("html", "HTML"),
        _skill("css", "CSS"),
        _skill("git", "Git", category="Tools"),
        _skill("testing", "Testing", category="Quality"),
        _skill("react", "React", {1: ["javascript"], 3: ["testing"]}),
        _skill("node", "Node", {1: ["javascript"]}),
    ]


@pytest.fixture
def catalog(catalog_records):
    return SkillCatalog.from_records(catalog_records)


@pytest.fixture
def make_career():
    """Factory: make_career("slug", [("skill", level, "essential"), ...])."""
    def _make(slug, requirements, name=None, career_id=None):
        return CareerPath(
            id=career_id or f"id-{slug}",
            slug=slug,
            name=name or slug.replace("-", " ").title(),
            requirements=tuple(
                CareerRequirement(
                    skill_id=skill_id,
                    required_level=level,
                    importance=Importance(importance),
                )
                for skill_id, level, importance in requirements
            ),
        )
    return _make


@pytest.fixture
def frontend_career(make_career):
    """Five-skill career used by several scenarios."""
    return make_career(
        "frontend-developer",
        [
            ("javascript", 3, "essential"),
            ("html", 3, "essential"),
            ("css", 3, "important"),
            ("react", 3, "important"),
            ("git", 2, "nice-to-have"),
        ],
        name="Frontend Developer",
    )
