"""
Skill Gap Analysis Service

This service compares a learner's skill levels with the requirements of
career paths, enabling:
- A per-career gap report with a prioritized detail list
- A phased learning roadmap and time-to-complete estimate
- Advisory recommendations
- A ranked all-careers dashboard and summary

The analysis is a pure computation over one snapshot of the skill catalog,
the career requirements and the learner's skills. Nothing is cached or
stored; identical inputs always give identical output.

Usage:
    analyzer = SkillGapAnalyzer(catalog=catalog, resolver=resolver)
    analysis = analyzer.get_career_gap_analysis("devops-engineer", user_skills)
    # Returns: SkillGapAnalysis(career_name="DevOps Engineer", overall_progress=40, ...)
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional
import logging

from app.services.careers import CareerPath, Importance, RequirementResolver
from app.services.gap_calculator import (
    IMPORTANCE_WEIGHTS,
    SkillDetail,
    calculate_skill_details,
    merge_duplicate_requirements,
)
from app.services.progress import aggregate_progress
from app.services.recommendations import Recommendation, generate_recommendations
from app.services.roadmap import RoadmapPhase, build_roadmap
from app.services.skill_catalog import SkillCatalog
from app.services.time_estimator import (
    DEFAULT_HOURS_PER_WEEK,
    DEFAULT_LEVEL_HOURS,
    TimeEstimate,
    estimate_time,
    target_level_hours,
)
from app.services.user_skills import UserSkillEntry

logger = logging.getLogger(__name__)

DEFAULT_TOP_CAREERS = 3


@dataclass(frozen=True)
class SkillGapAnalysis:
    """
    Gap report for one career.

    Attributes:
        career_name: Career display name
        total_skills: Number of distinct skills the career requires
        skills_analyzed: Requirements whose skill resolved in the catalog
        skills_met: Requirements fully met
        skills_needing_improvement: Started but below the required level
        skills_missing: Not started at all
        overall_progress: 0-100
        skill_details: Details, priority descending, met skills last
        recommendations: Advisory messages
        estimated_time_to_complete: Time estimate for unmet skills
        roadmap: Ordered learning phases
    """
    career_name: str
    total_skills: int
    skills_analyzed: int
    skills_met: int
    skills_needing_improvement: int
    skills_missing: int
    overall_progress: int
    skill_details: List[SkillDetail]
    recommendations: List[Recommendation]
    estimated_time_to_complete: TimeEstimate
    roadmap: List[RoadmapPhase]

    @property
    def unresolved_requirements(self) -> int:
        return self.total_skills - self.skills_analyzed

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "careerName": self.career_name,
            "totalSkills": self.total_skills,
            "skillsAnalyzed": self.skills_analyzed,
            "skillsMet": self.skills_met,
            "skillsNeedingImprovement": self.skills_needing_improvement,
            "skillsMissing": self.skills_missing,
            "overallProgress": self.overall_progress,
            "skillDetails": [d.to_dict() for d in self.skill_details],
            "recommendations": [r.to_dict() for r in self.recommendations],
            "estimatedTimeToComplete": self.estimated_time_to_complete.to_dict(),
            "roadmap": [p.to_dict() for p in self.roadmap],
        }


@dataclass(frozen=True)
class CareerGapAnalysis:
    """A SkillGapAnalysis tagged with the career it belongs to."""
    career_id: str
    career_slug: str
    analysis: SkillGapAnalysis

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        data = self.analysis.to_dict()
        data["careerId"] = self.career_id
        data["careerSlug"] = self.career_slug
        return data


@dataclass(frozen=True)
class SkillGapSummary:
    """
    Dashboard summary across all careers.

    Attributes:
        total_careers: Number of careers analysed
        total_skills_needed: Sum of requirement counts
        total_skills_missing: Sum of missing skills
        total_skills_needing_improvement: Sum of skills needing improvement
        best_career_match: Highest-ranked career, if any
        top_careers: First few careers of the ranking
        mastered: Sum of met skills
    """
    total_careers: int
    total_skills_needed: int
    total_skills_missing: int
    total_skills_needing_improvement: int
    best_career_match: Optional[CareerGapAnalysis]
    top_careers: List[CareerGapAnalysis]
    mastered: int

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "totalCareers": self.total_careers,
            "totalSkillsNeeded": self.total_skills_needed,
            "totalSkillsMissing": self.total_skills_missing,
            "totalSkillsNeedingImprovement": self.total_skills_needing_improvement,
            "bestCareerMatch": (
                self.best_career_match.to_dict() if self.best_career_match else None
            ),
            "topCareers": [c.to_dict() for c in self.top_careers],
            "skillDistribution": {
                "mastered": self.mastered,
                "needsImprovement": self.total_skills_needing_improvement,
                "missing": self.total_skills_missing,
            },
        }


def build_user_skill_map(user_skills: Mapping[str, UserSkillEntry]) -> Dict[str, dict]:
    """
    Wire view of the learner's skills for the all-careers dashboard.

    Returns:
        {skill_id: {"selected": True, "level": current_level}}, sorted by id
    """
    return {
        skill_id: {"selected": True, "level": entry.current_level}
        for skill_id, entry in sorted(user_skills.items())
    }


def rank_careers(career_gaps: List[CareerGapAnalysis]) -> List[CareerGapAnalysis]:
    """
    Order careers best match first.

    Highest overall progress first, then the shortest time to complete,
    then slug so the order is fully deterministic.
    """
    return sorted(
        career_gaps,
        key=lambda c: (
            -c.analysis.overall_progress,
            c.analysis.estimated_time_to_complete.total_weeks,
            c.career_slug,
        ),
    )


class SkillGapAnalyzer:
    """
    Assembles skill gap analyses for one learner.

    Attributes:
        catalog: Skill catalog snapshot
        resolver: Career requirement snapshot
        hours_per_week: Weekly study budget for time estimates
        default_level_hours: Hour cost when the catalog has none
        weights: Importance weights for priority scoring
        top_careers_limit: Careers listed in the summary
    """

    def __init__(
        self,
        catalog: SkillCatalog,
        resolver: RequirementResolver,
        hours_per_week: int = DEFAULT_HOURS_PER_WEEK,
        default_level_hours: int = DEFAULT_LEVEL_HOURS,
        weights: Optional[Mapping[Importance, int]] = None,
        top_careers_limit: int = DEFAULT_TOP_CAREERS
    ):
        """
        Initialize skill gap analyzer.

        Args:
            catalog: Skill catalog snapshot
            resolver: Career requirement snapshot
            hours_per_week: Weekly study budget (hours)
            default_level_hours: Fallback hour cost per level
            weights: Optional importance weight overrides
            top_careers_limit: Number of careers in the summary's top list
        """
        self.catalog = catalog
        self.resolver = resolver
        self.hours_per_week = hours_per_week
        self.default_level_hours = default_level_hours
        self.weights = dict(weights) if weights else dict(IMPORTANCE_WEIGHTS)
        self.top_careers_limit = top_careers_limit

    def analyze_career(
        self,
        career: CareerPath,
        user_skills: Mapping[str, UserSkillEntry]
    ) -> SkillGapAnalysis:
        """
        Run the full analysis for one career.

        Args:
            career: Career with its requirements
            user_skills: Learner entries keyed by skill id

        Returns:
            SkillGapAnalysis
        """
        requirements = merge_duplicate_requirements(career.requirements, self.weights)
        details = calculate_skill_details(
            requirements, user_skills, self.catalog, self.weights
        )
        summary = aggregate_progress(details, total_skills=len(requirements))
        hours = target_level_hours(details, self.catalog, self.default_level_hours)

        if summary.skills_analyzed < summary.total_skills:
            logger.warning(
                f"Career '{career.slug}': {summary.total_skills - summary.skills_analyzed} "
                f"requirement(s) reference unknown skills"
            )

        return SkillGapAnalysis(
            career_name=career.name,
            total_skills=summary.total_skills,
            skills_analyzed=summary.skills_analyzed,
            skills_met=summary.skills_met,
            skills_needing_improvement=summary.skills_needing_improvement,
            skills_missing=summary.skills_missing,
            overall_progress=summary.overall_progress,
            skill_details=details,
            recommendations=generate_recommendations(summary, details),
            estimated_time_to_complete=estimate_time(
                details, hours, self.hours_per_week, self.default_level_hours
            ),
            roadmap=build_roadmap(
                details, self.catalog, hours, self.hours_per_week, self.default_level_hours
            ),
        )

    def get_career_gap_analysis(
        self,
        career_slug: str,
        user_skills: Mapping[str, UserSkillEntry]
    ) -> SkillGapAnalysis:
        """
        Analyze one career by slug.

        Raises:
            CareerNotFoundError: If the slug does not resolve
        """
        career = self.resolver.resolve(career_slug)
        return self.analyze_career(career, user_skills)

    def get_all_career_gap_analysis(
        self,
        user_skills: Mapping[str, UserSkillEntry]
    ) -> List[CareerGapAnalysis]:
        """
        Analyze every known career and rank them best match first.

        Args:
            user_skills: Learner entries keyed by skill id

        Returns:
            CareerGapAnalysis list sorted by rank_careers()
        """
        career_gaps = [
            CareerGapAnalysis(
                career_id=career.id,
                career_slug=career.slug,
                analysis=self.analyze_career(career, user_skills),
            )
            for career in self.resolver.careers()
        ]
        return rank_careers(career_gaps)

    def get_skill_gap_summary(
        self,
        user_skills: Mapping[str, UserSkillEntry]
    ) -> SkillGapSummary:
        """
        Get a dashboard summary across all careers.

        Args:
            user_skills: Learner entries keyed by skill id

        Returns:
            SkillGapSummary with aggregated statistics
        """
        ranked = self.get_all_career_gap_analysis(user_skills)

        return SkillGapSummary(
            total_careers=len(ranked),
            total_skills_needed=sum(c.analysis.total_skills for c in ranked),
            total_skills_missing=sum(c.analysis.skills_missing for c in ranked),
            total_skills_needing_improvement=sum(
                c.analysis.skills_needing_improvement for c in ranked
            ),
            best_career_match=ranked[0] if ranked else None,
            top_careers=ranked[:self.top_careers_limit],
            mastered=sum(c.analysis.skills_met for c in ranked),
        )
