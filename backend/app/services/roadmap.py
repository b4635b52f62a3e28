"""
Roadmap Builder

Groups a career's unmet skills into ordered learning phases so that
prerequisites are always learned in an earlier phase than the skills that
need them.

Prerequisites of a skill are read from the catalog rungs the learner still
has to climb (current level + 1 up to the required level), and only count
when the prerequisite is itself unmet in the same analysis.

Phase order and membership come from SkillGraph.learning_layers(); within
a phase skills are ordered by descending priority, ties kept in gap
calculator order.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence
import logging

from app.services.careers import Importance
from app.services.gap_calculator import IMPORTANCE_WEIGHTS, SkillDetail
from app.services.skill_catalog import SkillCatalog
from app.services.skill_graph import SkillGraph
from app.services.time_estimator import (
    DEFAULT_HOURS_PER_WEEK,
    DEFAULT_LEVEL_HOURS,
    calculate_total_weeks,
)

logger = logging.getLogger(__name__)

FOUNDATION_TITLE = "Foundation Skills"
FOUNDATION_DESCRIPTION = "Start with the skills that everything else in this career builds on."

PHASE_TITLES: Dict[Importance, str] = {
    Importance.ESSENTIAL: "Core Competencies",
    Importance.IMPORTANT: "Professional Growth",
    Importance.NICE_TO_HAVE: "Specialization",
}

PHASE_DESCRIPTIONS: Dict[Importance, str] = {
    Importance.ESSENTIAL: "Build the essential skills this role depends on, now that their prerequisites are in place.",
    Importance.IMPORTANT: "Strengthen the skills most employers expect for this role.",
    Importance.NICE_TO_HAVE: "Round out your profile with skills that set you apart.",
}


@dataclass(frozen=True)
class RoadmapPhase:
    phase: int
    title: str
    description: str
    skills: List[SkillDetail] = field(default_factory=list)
    estimated_weeks: int = 0

    def to_dict(self) -> dict:
        return {
            "phase": self.phase,
            "title": self.title,
            "description": self.description,
            "skills": [s.to_dict() for s in self.skills],
            "estimatedWeeks": self.estimated_weeks,
        }


def dominant_importance(skills: Sequence[SkillDetail]) -> Importance:
    """Most frequent tier in a phase; ties go to the heavier tier."""
    counts = Counter(s.importance for s in skills)
    return max(counts, key=lambda tier: (counts[tier], IMPORTANCE_WEIGHTS[tier]))


def build_prerequisite_graph(
    unmet: Sequence[SkillDetail],
    catalog: SkillCatalog
) -> SkillGraph:
    graph = SkillGraph()
    for detail in unmet:
        graph.add_skill(detail.skill_id, name=detail.skill_name)

    for detail in unmet:
        skill = catalog.get(detail.skill_id)
        if skill is None:
            continue
        for prerequisite in sorted(
            skill.prerequisites_between(detail.current_level, detail.required_level)
        ):
            if graph.has_skill(prerequisite):
                graph.add_relationship(detail.skill_id, prerequisite, "requires")
    return graph


def build_roadmap(
    details: Sequence[SkillDetail],
    catalog: SkillCatalog,
    hours: Mapping[str, int],
    hours_per_week: int = DEFAULT_HOURS_PER_WEEK,
    default_level_hours: int = DEFAULT_LEVEL_HOURS
) -> List[RoadmapPhase]:
    """
    Build the phased learning roadmap for one career.

    Args:
        details: SkillDetails in gap calculator order (met ones are ignored)
        catalog: Skill catalog snapshot, for prerequisites
        hours: Target-level hour cost per skill id
        hours_per_week: Weekly study budget
        default_level_hours: Cost for skills missing from `hours`

    Returns:
        Ordered phases; empty when every skill is met
    """
    unmet = [d for d in details if not d.is_met]
    if not unmet:
        return []

    graph = build_prerequisite_graph(unmet, catalog)
    by_id = {d.skill_id: d for d in unmet}
    rank = {d.skill_id: index for index, d in enumerate(unmet)}

    phases: List[RoadmapPhase] = []
    for number, layer in enumerate(graph.learning_layers(), start=1):
        members = sorted(
            (by_id[skill_id] for skill_id in layer),
            key=lambda d: (-d.priority, rank[d.skill_id]),
        )
        if number == 1:
            title, description = FOUNDATION_TITLE, FOUNDATION_DESCRIPTION
        else:
            tier = dominant_importance(members)
            title, description = PHASE_TITLES[tier], PHASE_DESCRIPTIONS[tier]

        phases.append(RoadmapPhase(
            phase=number,
            title=title,
            description=description,
            skills=members,
            estimated_weeks=calculate_total_weeks(
                members, hours, hours_per_week, default_level_hours
            ),
        ))

    logger.debug(f"Built roadmap with {len(phases)} phases for {len(unmet)} skills")
    return phases
