"""
User skill profile snapshot types.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional


MIN_CURRENT_LEVEL = 0
MAX_CURRENT_LEVEL = 5


@dataclass(frozen=True)
class UserSkillEntry:
    """
    A learner's rating for one skill.

    Attributes:
        skill_id: Catalog skill id
        current_level: 0 (not started) to 5
        self_assessment: Optional self-assessment score
        mentor_assessment: Optional mentor-assessment score
        last_practiced_at: When the skill was last practiced
    """
    skill_id: str
    current_level: int = 0
    self_assessment: Optional[float] = None
    mentor_assessment: Optional[float] = None
    last_practiced_at: Optional[datetime] = None


UserSkillMap = Dict[str, UserSkillEntry]


def build_user_skill_lookup(entries: Iterable[UserSkillEntry]) -> UserSkillMap:
    """Index entries by skill id; a later entry for the same skill wins."""
    return {entry.skill_id: entry for entry in entries}


def levels_from_mapping(levels: Dict[str, int]) -> UserSkillMap:
    """Shortcut for building a profile from {skill_id: level}."""
    return {
        skill_id: UserSkillEntry(skill_id=skill_id, current_level=level)
        for skill_id, level in levels.items()
    }
