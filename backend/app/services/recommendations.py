"""
Recommendation Generator

Turns a career's progress summary and gap details into an ordered list of
advisory messages. Rules are evaluated in a fixed order and do not
suppress each other:

    success    once, when nothing is missing or needs improvement
    priority   per essential skill that is missing
    quick_win  per skill exactly one level short
    improve    once, when a needs-improvement skill is more than one level short
    focus      once, naming the highest-priority unmet skill
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from app.services.careers import Importance
from app.services.gap_calculator import SkillDetail, SkillStatus
from app.services.progress import ProgressSummary


class RecommendationType(str, Enum):
    SUCCESS = "success"
    FOCUS = "focus"
    IMPROVE = "improve"
    PRIORITY = "priority"
    QUICK_WIN = "quick_win"


class RecommendationPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Recommendation:
    type: RecommendationType
    message: str
    priority: RecommendationPriority

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "message": self.message,
            "priority": self.priority.value,
        }


def generate_recommendations(
    summary: ProgressSummary,
    details: Sequence[SkillDetail]
) -> List[Recommendation]:
    """
    Generate recommendations for one career.

    Args:
        summary: Aggregated progress for the career
        details: SkillDetails in gap calculator order (unmet first, priority
            descending, ties in requirement order)

    Returns:
        Recommendations in rule order
    """
    recommendations: List[Recommendation] = []

    if summary.skills_missing == 0 and summary.skills_needing_improvement == 0:
        recommendations.append(Recommendation(
            type=RecommendationType.SUCCESS,
            message="You meet every skill requirement for this career. You're ready to apply!",
            priority=RecommendationPriority.MEDIUM,
        ))

    for detail in details:
        if detail.status == SkillStatus.MISSING and detail.importance == Importance.ESSENTIAL:
            recommendations.append(Recommendation(
                type=RecommendationType.PRIORITY,
                message=(
                    f"{detail.skill_name} is essential for this career and you haven't "
                    f"started it yet. Make it a top priority."
                ),
                priority=RecommendationPriority.HIGH,
            ))

    for detail in details:
        if detail.levels_needed == 1:
            recommendations.append(Recommendation(
                type=RecommendationType.QUICK_WIN,
                message=(
                    f"Quick win: reaching level {detail.required_level} in "
                    f"{detail.skill_name} closes this gap."
                ),
                priority=(
                    RecommendationPriority.HIGH
                    if detail.importance == Importance.ESSENTIAL
                    else RecommendationPriority.MEDIUM
                ),
            ))

    uncovered = [
        d for d in details
        if d.status == SkillStatus.NEEDS_IMPROVEMENT and d.levels_needed > 1
    ]
    if summary.skills_needing_improvement > 0 and uncovered:
        names = ", ".join(d.skill_name for d in uncovered)
        recommendations.append(Recommendation(
            type=RecommendationType.IMPROVE,
            message=(
                f"Keep building on skills you've started: {names} "
                f"{'needs' if len(uncovered) == 1 else 'need'} more practice."
            ),
            priority=RecommendationPriority.MEDIUM,
        ))

    # details arrive unmet-first by descending priority, ties in requirement order
    unmet = [d for d in details if not d.is_met]
    if summary.skills_analyzed > 0 and unmet:
        top = unmet[0]
        recommendations.append(Recommendation(
            type=RecommendationType.FOCUS,
            message=(
                f"Focus next on {top.skill_name}: you need {top.levels_needed} more "
                f"level{'s' if top.levels_needed != 1 else ''} to reach level {top.required_level}."
            ),
            priority=RecommendationPriority.MEDIUM,
        ))

    return recommendations
