"""
Skill Catalog Reader

Immutable, in-memory view of the skill catalog used by the gap engine.
Each skill carries its ordered proficiency ladder; the engine reads level
hour costs and prerequisites from it.

Level Resolution:
    Catalog entries tag their levels either by name (Beginner, Intermediate,
    Advanced, Expert, Master) or by number ("3", 3). Unrecognised tags fall
    back to the rung's 1-based position in the ladder.

Usage:
    catalog = SkillCatalog.from_records([
        {"id": "docker", "name": "Docker", "proficiency_levels": [...]},
    ])
    skill = catalog.get("docker")
    hours = skill.hours_for_level(2)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple
import logging

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 5

LEVEL_TAGS: Dict[str, int] = {
    "beginner": 1,
    "intermediate": 2,
    "advanced": 3,
    "expert": 4,
    "master": 5,
}


def resolve_level_tag(tag: Any, position: int) -> int:
    """
    Map a catalog level tag to its ordinal.

    Args:
        tag: Level name or number as stored in the catalog
        position: 1-based index of the rung in its ladder

    Returns:
        Ordinal level (1-5)
    """
    if isinstance(tag, bool):
        return position
    if isinstance(tag, int):
        return tag
    text = str(tag or "").strip().lower()
    if text.isdigit():
        return int(text)
    return LEVEL_TAGS.get(text, position)


def parse_hours(value: Any, tag: Any) -> Optional[int]:
    """
    Read a rung's study hours.

    Returns None when the catalog gives no usable figure; negative figures
    are floored at 0.
    """
    if value is None or value == "":
        return None
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid hours '{value}' for level '{tag}'")
        return None


@dataclass(frozen=True)
class ProficiencyLevel:
    """
    One rung of a skill's learning ladder.

    Attributes:
        level: Ordinal level (1-5)
        tag: Level tag as written in the catalog
        title: Short title
        description: What this level means
        expectations: Expected outcomes at this level
        projects: Suggested practice projects
        hours_to_achieve: Estimated study hours to reach this level, None
            when the catalog has no usable figure
        prerequisites: Skill ids that should be learned first
        resources: Opaque learning resource references
    """
    level: int
    tag: str
    title: str = ""
    description: str = ""
    expectations: Tuple[str, ...] = ()
    projects: Tuple[str, ...] = ()
    hours_to_achieve: Optional[int] = None
    prerequisites: FrozenSet[str] = frozenset()
    resources: Tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, data: dict, position: int) -> "ProficiencyLevel":
        tag = data.get("level", position)
        hours = data.get("hours_to_achieve", data.get("timeToAchieve"))
        return cls(
            level=resolve_level_tag(tag, position),
            tag=str(tag),
            title=data.get("title", ""),
            description=data.get("description", ""),
            expectations=tuple(data.get("expectations") or ()),
            projects=tuple(data.get("projects") or ()),
            hours_to_achieve=parse_hours(hours, tag),
            prerequisites=frozenset(data.get("prerequisites") or ()),
            resources=tuple(data.get("resources") or ()),
        )


@dataclass(frozen=True)
class CatalogSkill:
    """
    A skill as seen by the gap engine.

    Attributes:
        id: Canonical skill identifier
        name: Display name
        category: Skill family
        difficulty: Overall difficulty tag
        levels: Ladder ordered by level
    """
    id: str
    name: str
    category: str = "general"
    difficulty: str = "Beginner"
    levels: Tuple[ProficiencyLevel, ...] = field(default_factory=tuple)

    def level(self, level: int) -> Optional[ProficiencyLevel]:
        """Return the rung matching `level` exactly, if the ladder defines it."""
        for rung in self.levels:
            if rung.level == level:
                return rung
        return None

    def hours_for_level(self, level: int) -> Optional[int]:
        """
        Hours needed to reach `level`.

        Uses the exact rung when defined, otherwise the highest defined
        rung below it. Returns None when nothing at or below `level` exists
        or the chosen rung has no hour figure.
        """
        rung = self.level(level)
        if rung is None:
            lower = [r for r in self.levels if r.level < level]
            if not lower:
                return None
            rung = max(lower, key=lambda r: r.level)
        return rung.hours_to_achieve

    def prerequisites_between(self, current_level: int, required_level: int) -> Set[str]:
        """
        Prerequisite skill ids of the rungs still to be climbed.

        Args:
            current_level: Level the learner holds (exclusive)
            required_level: Level the learner must reach (inclusive)

        Returns:
            Union of prerequisite ids, never including this skill itself
        """
        prerequisites: Set[str] = set()
        for rung in self.levels:
            if current_level < rung.level <= required_level:
                prerequisites.update(rung.prerequisites)
        prerequisites.discard(self.id)
        return prerequisites


class SkillCatalog:
    """
    Read-only lookup of catalog skills by canonical id.

    Name resolution is a separate, explicit step (`find_by_name`) so that
    requirements are always matched by id.
    """

    def __init__(self, skills: Iterable[CatalogSkill] = ()):
        self._skills: Dict[str, CatalogSkill] = {}
        for skill in skills:
            self._skills[skill.id] = skill

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[CatalogSkill]:
        return iter(self._skills.values())

    def get(self, skill_id: str) -> Optional[CatalogSkill]:
        return self._skills.get(skill_id)

    def find_by_name(self, name: str) -> Optional[CatalogSkill]:
        """Case-insensitive lookup by display name."""
        wanted = name.strip().lower()
        for skill in self._skills.values():
            if skill.name.lower() == wanted:
                return skill
        return None

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "SkillCatalog":
        """
        Build a catalog from plain dicts (ORM rows converted by the loader,
        seed files, test fixtures).

        Args:
            records: Dicts with keys id, name, category, difficulty,
                proficiency_levels

        Returns:
            Populated SkillCatalog
        """
        skills: List[CatalogSkill] = []
        for record in records:
            raw_levels = record.get("proficiency_levels") or []
            levels = [
                ProficiencyLevel.from_dict(data, position)
                for position, data in enumerate(raw_levels, start=1)
                if isinstance(data, dict)
            ]
            levels.sort(key=lambda rung: rung.level)
            skills.append(CatalogSkill(
                id=str(record["id"]),
                name=record.get("name") or str(record["id"]),
                category=record.get("category") or "general",
                difficulty=record.get("difficulty") or "Beginner",
                levels=tuple(levels),
            ))
        logger.debug(f"Loaded skill catalog with {len(skills)} skills")
        return cls(skills)
