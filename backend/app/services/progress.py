"""
Progress Aggregator

Summarises a career's SkillDetail list into counts and an overall
progress percentage.

Overall progress is the mean, over analysed skills, of
min(current, required) / required, scaled to 0-100 and rounded half up.
A career with nothing to analyse counts as 100% matched.
"""

from dataclasses import dataclass
from typing import Sequence

from app.services.gap_calculator import SkillDetail, SkillStatus

EMPTY_PROGRESS = 100


@dataclass(frozen=True)
class ProgressSummary:
    total_skills: int
    skills_analyzed: int
    skills_met: int
    skills_needing_improvement: int
    skills_missing: int
    overall_progress: int


def round_half_up(value: float) -> int:
    return int(value + 0.5)


def calculate_overall_progress(details: Sequence[SkillDetail]) -> int:
    if not details:
        return EMPTY_PROGRESS
    ratio_sum = sum(
        min(d.current_level, d.required_level) / d.required_level
        for d in details
    )
    return round_half_up(100 * ratio_sum / len(details))


def aggregate_progress(details: Sequence[SkillDetail], total_skills: int) -> ProgressSummary:
    """
    Aggregate a detail list.

    Args:
        details: SkillDetails produced for the career
        total_skills: Number of requirements before unresolved skills
            were dropped

    Returns:
        ProgressSummary
    """
    return ProgressSummary(
        total_skills=total_skills,
        skills_analyzed=len(details),
        skills_met=sum(1 for d in details if d.status == SkillStatus.MET),
        skills_needing_improvement=sum(
            1 for d in details if d.status == SkillStatus.NEEDS_IMPROVEMENT
        ),
        skills_missing=sum(1 for d in details if d.status == SkillStatus.MISSING),
        overall_progress=calculate_overall_progress(details),
    )
