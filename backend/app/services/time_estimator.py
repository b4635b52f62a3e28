"""
Time Estimator

Estimates how long closing the remaining gaps takes, from the hour cost
of each unmet skill's target level and a weekly study budget.

    total_weeks = ceil(sum(hours_to_achieve(target_level)) / hours_per_week)
    months = total_weeks // 4
    weeks = total_weeks % 4
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping
import math

from app.services.gap_calculator import SkillDetail
from app.services.skill_catalog import SkillCatalog

DEFAULT_HOURS_PER_WEEK = 10
DEFAULT_LEVEL_HOURS = 20
WEEKS_PER_MONTH = 4

ALL_MET_DESCRIPTION = "All required skills already met"


@dataclass(frozen=True)
class TimeEstimate:
    total_weeks: int
    months: int
    weeks: int
    description: str

    def to_dict(self) -> dict:
        return {
            "totalWeeks": self.total_weeks,
            "months": self.months,
            "weeks": self.weeks,
            "description": self.description,
        }


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def describe_duration(total_weeks: int) -> str:
    """Format a week count as "3 months, 2 weeks"."""
    months, weeks = divmod(total_weeks, WEEKS_PER_MONTH)
    parts = []
    if months:
        parts.append(_plural(months, "month"))
    if weeks:
        parts.append(_plural(weeks, "week"))
    return ", ".join(parts) if parts else "Less than a week"


def target_level_hours(
    details: Iterable[SkillDetail],
    catalog: SkillCatalog,
    default_level_hours: int = DEFAULT_LEVEL_HOURS
) -> Dict[str, int]:
    """
    Look up the hour cost of each skill's target level.

    Args:
        details: SkillDetails to cost
        catalog: Skill catalog snapshot
        default_level_hours: Cost used when the catalog has no figure

    Returns:
        Mapping of skill id to hours
    """
    hours: Dict[str, int] = {}
    for detail in details:
        skill = catalog.get(detail.skill_id)
        level_hours = skill.hours_for_level(detail.required_level) if skill else None
        hours[detail.skill_id] = default_level_hours if level_hours is None else level_hours
    return hours


def calculate_total_weeks(
    details: Iterable[SkillDetail],
    hours: Mapping[str, int],
    hours_per_week: int = DEFAULT_HOURS_PER_WEEK,
    default_level_hours: int = DEFAULT_LEVEL_HOURS
) -> int:
    total_hours = sum(
        hours.get(d.skill_id, default_level_hours) for d in details if not d.is_met
    )
    return math.ceil(total_hours / max(1, hours_per_week))


def estimate_time(
    details: Iterable[SkillDetail],
    hours: Mapping[str, int],
    hours_per_week: int = DEFAULT_HOURS_PER_WEEK,
    default_level_hours: int = DEFAULT_LEVEL_HOURS
) -> TimeEstimate:
    """
    Estimate time to close all unmet gaps.

    Met details are ignored, so the full detail list may be passed.

    Args:
        details: SkillDetails for the career
        hours: Target-level hour cost per skill id
        hours_per_week: Weekly study budget
        default_level_hours: Cost for skills missing from `hours`

    Returns:
        TimeEstimate; zero weeks when nothing is unmet
    """
    unmet = [d for d in details if not d.is_met]
    if not unmet:
        return TimeEstimate(total_weeks=0, months=0, weeks=0, description=ALL_MET_DESCRIPTION)

    total_weeks = calculate_total_weeks(unmet, hours, hours_per_week, default_level_hours)
    return TimeEstimate(
        total_weeks=total_weeks,
        months=total_weeks // WEEKS_PER_MONTH,
        weeks=total_weeks % WEEKS_PER_MONTH,
        description=describe_duration(total_weeks),
    )
