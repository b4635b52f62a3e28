"""
Gap Calculator

Compares a learner's current levels with a career's requirements and
produces one SkillDetail per requirement whose skill exists in the catalog.

Priority:
    priority = importance_weight * (levels_needed + 1)

    With the default weights (essential=3, important=2, nice-to-have=1) an
    essential skill four levels short scores 15 while a met nice-to-have
    skill scores 1. Met skills are always ordered after unmet ones.

Usage:
    details = calculate_skill_details(career.requirements, user_skills, catalog)
    details[0].status   # SkillStatus.MISSING
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence
import logging

from app.services.careers import CareerRequirement, Importance
from app.services.skill_catalog import SkillCatalog, MIN_LEVEL, MAX_LEVEL
from app.services.user_skills import UserSkillEntry, MIN_CURRENT_LEVEL, MAX_CURRENT_LEVEL

logger = logging.getLogger(__name__)

IMPORTANCE_WEIGHTS: Dict[Importance, int] = {
    Importance.ESSENTIAL: 3,
    Importance.IMPORTANT: 2,
    Importance.NICE_TO_HAVE: 1,
}


class SkillStatus(str, Enum):
    MET = "met"
    NEEDS_IMPROVEMENT = "needs_improvement"
    MISSING = "missing"


@dataclass(frozen=True)
class SkillDetail:
    """
    Gap between one requirement and the learner's level.

    Attributes:
        skill_id: Catalog skill id
        skill_name: Display name from the catalog
        category: Catalog category
        required_level: Target level (clamped to 1-5)
        current_level: Learner level (clamped to 0-5)
        levels_needed: max(0, required_level - current_level)
        status: met / needs_improvement / missing
        importance: Importance tier of the requirement
        priority: Urgency score, higher first
        recommendation: One-line advice for this skill
    """
    skill_id: str
    skill_name: str
    category: str
    required_level: int
    current_level: int
    levels_needed: int
    status: SkillStatus
    importance: Importance
    priority: int
    recommendation: str

    @property
    def is_met(self) -> bool:
        return self.status == SkillStatus.MET

    def to_dict(self) -> dict:
        """Convert to the wire shape used by API responses."""
        return {
            "skillName": self.skill_name,
            "requiredLevel": self.required_level,
            "currentLevel": self.current_level,
            "levelsNeeded": self.levels_needed,
            "status": self.status.value,
            "importance": self.importance.value,
            "priority": self.priority,
            "recommendation": self.recommendation,
        }


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def determine_status(current_level: int, levels_needed: int) -> SkillStatus:
    if levels_needed == 0:
        return SkillStatus.MET
    if current_level == 0:
        return SkillStatus.MISSING
    return SkillStatus.NEEDS_IMPROVEMENT


def calculate_priority(
    importance: Importance,
    levels_needed: int,
    weights: Optional[Mapping[Importance, int]] = None
) -> int:
    weights = weights or IMPORTANCE_WEIGHTS
    return weights.get(importance, IMPORTANCE_WEIGHTS[importance]) * (levels_needed + 1)


def recommendation_for(
    skill_name: str,
    status: SkillStatus,
    importance: Importance,
    levels_needed: int,
    required_level: int
) -> str:
    """
    Pick the advice template for a (status, importance) pair.

    Args:
        skill_name: Skill display name
        status: Gap status
        importance: Requirement tier
        levels_needed: Levels still to climb
        required_level: Target level

    Returns:
        Human-readable recommendation
    """
    if status == SkillStatus.MET:
        if importance == Importance.ESSENTIAL:
            return f"Great job! You meet the level {required_level} requirement for {skill_name}, a core skill for this role."
        return f"You already meet the requirement for {skill_name}. Keep it fresh with regular practice."

    if status == SkillStatus.MISSING:
        if importance == Importance.ESSENTIAL:
            return f"Priority: start learning {skill_name} now. It is essential for this role (target level {required_level})."
        if importance == Importance.IMPORTANT:
            return f"Start learning {skill_name} soon to reach level {required_level}."
        return f"Consider picking up {skill_name} once your core skills are in place."

    if levels_needed == 1:
        return f"Quick win: one more level in {skill_name} meets the requirement."
    if importance == Importance.ESSENTIAL:
        return f"Focus on {skill_name}: you need {levels_needed} more levels in this essential skill."
    return f"Improve {skill_name} by {levels_needed} levels to reach level {required_level}."


def merge_duplicate_requirements(
    requirements: Sequence[CareerRequirement],
    weights: Optional[Mapping[Importance, int]] = None
) -> List[CareerRequirement]:
    """
    Collapse requirements that name the same skill more than once.

    The merged requirement keeps the position of the first occurrence, the
    highest required level and the heaviest importance tier.
    """
    weights = weights or IMPORTANCE_WEIGHTS
    merged: Dict[str, CareerRequirement] = {}

    for requirement in requirements:
        existing = merged.get(requirement.skill_id)
        if existing is None:
            merged[requirement.skill_id] = requirement
            continue

        logger.warning(
            f"Duplicate requirement for skill id '{requirement.skill_id}', "
            f"merging levels {existing.required_level} and {requirement.required_level}"
        )
        importance = max(
            (existing.importance, requirement.importance),
            key=lambda tier: weights.get(tier, IMPORTANCE_WEIGHTS[tier]),
        )
        merged[requirement.skill_id] = replace(
            existing,
            required_level=max(existing.required_level, requirement.required_level),
            importance=importance,
        )

    return list(merged.values())


def calculate_skill_details(
    requirements: Sequence[CareerRequirement],
    user_skills: Mapping[str, UserSkillEntry],
    catalog: SkillCatalog,
    weights: Optional[Mapping[Importance, int]] = None
) -> List[SkillDetail]:
    """
    Build the gap detail list for one career.

    Requirements whose skill id is not in the catalog are skipped and
    repeated skill ids are merged into one requirement. Levels outside their
    valid range are clamped rather than rejected.

    Args:
        requirements: Career requirements in administrator order
        user_skills: Learner entries keyed by skill id
        catalog: Skill catalog snapshot
        weights: Optional importance weight overrides

    Returns:
        Details ordered unmet-first by descending priority, then met skills;
        ties keep requirement order
    """
    details: List[SkillDetail] = []

    for requirement in merge_duplicate_requirements(requirements, weights):
        skill = catalog.get(requirement.skill_id)
        if skill is None:
            logger.warning(
                f"Skipping requirement for unknown skill id '{requirement.skill_id}'"
            )
            continue

        required_level = clamp(requirement.required_level, MIN_LEVEL, MAX_LEVEL)
        if required_level != requirement.required_level:
            logger.warning(
                f"Required level {requirement.required_level} for '{skill.name}' "
                f"out of range, clamped to {required_level}"
            )

        entry = user_skills.get(requirement.skill_id)
        raw_current = entry.current_level if entry else 0
        current_level = clamp(raw_current, MIN_CURRENT_LEVEL, MAX_CURRENT_LEVEL)
        if current_level != raw_current:
            logger.warning(
                f"Current level {raw_current} for '{skill.name}' "
                f"out of range, clamped to {current_level}"
            )

        levels_needed = max(0, required_level - current_level)
        status = determine_status(current_level, levels_needed)

        details.append(SkillDetail(
            skill_id=skill.id,
            skill_name=skill.name,
            category=skill.category,
            required_level=required_level,
            current_level=current_level,
            levels_needed=levels_needed,
            status=status,
            importance=requirement.importance,
            priority=calculate_priority(requirement.importance, levels_needed, weights),
            recommendation=recommendation_for(
                skill.name, status, requirement.importance, levels_needed, required_level
            ),
        ))

    # Stable sort: equal keys keep requirement order
    details.sort(key=lambda d: (d.is_met, -d.priority))
    return details
