"""
Skill gap response models.

Field names are snake_case in Python and serialised in camelCase, which
is the contract the dashboard, career view and roadmap view consume.
"""

from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.services.careers import Importance
from app.services.gap_calculator import SkillStatus
from app.services.recommendations import RecommendationPriority, RecommendationType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


T = TypeVar("T")


class SkillGapEnvelope(CamelModel, Generic[T]):
    """Wrapper every skill gap endpoint returns: `{"success": true, "data": ...}`."""

    success: bool = True
    data: T


class SkillDetailResponse(CamelModel):
    skill_name: str
    required_level: int
    current_level: int
    levels_needed: int
    status: SkillStatus
    importance: Importance
    priority: int
    recommendation: str


class RecommendationResponse(CamelModel):
    type: RecommendationType
    message: str
    priority: RecommendationPriority


class TimeEstimateResponse(CamelModel):
    total_weeks: int
    months: int
    weeks: int
    description: str


class RoadmapPhaseResponse(CamelModel):
    phase: int
    title: str
    description: str
    skills: List[SkillDetailResponse]
    estimated_weeks: int


class SkillGapAnalysisResponse(CamelModel):
    career_name: str
    total_skills: int
    skills_analyzed: int
    skills_met: int
    skills_needing_improvement: int
    skills_missing: int
    overall_progress: int
    skill_details: List[SkillDetailResponse]
    recommendations: List[RecommendationResponse]
    estimated_time_to_complete: TimeEstimateResponse
    roadmap: List[RoadmapPhaseResponse]


class CareerGapAnalysisResponse(SkillGapAnalysisResponse):
    career_id: str
    career_slug: str


class UserSkillSelection(CamelModel):
    selected: bool
    level: int


class AllCareerGapAnalysisResponse(CamelModel):
    total_careers: int
    user_skills: Dict[str, UserSkillSelection]
    career_gaps: List[CareerGapAnalysisResponse]


class SkillRoadmapResponse(CamelModel):
    career_name: str
    career_slug: str
    gap_analysis: SkillGapAnalysisResponse
    roadmap: List[RoadmapPhaseResponse]
    estimated_time_to_complete: TimeEstimateResponse


class SkillDistribution(CamelModel):
    mastered: int
    needs_improvement: int
    missing: int


class SkillGapSummaryResponse(CamelModel):
    total_careers: int
    total_skills_needed: int
    total_skills_missing: int
    total_skills_needing_improvement: int
    best_career_match: Optional[CareerGapAnalysisResponse] = None
    top_careers: List[CareerGapAnalysisResponse]
    skill_distribution: SkillDistribution
