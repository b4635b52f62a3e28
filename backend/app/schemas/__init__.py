from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.skill_gap import (
    AllCareerGapAnalysisResponse,
    CareerGapAnalysisResponse,
    SkillGapAnalysisResponse,
    SkillGapEnvelope,
    SkillGapSummaryResponse,
    SkillRoadmapResponse,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "AllCareerGapAnalysisResponse",
    "CareerGapAnalysisResponse",
    "SkillGapAnalysisResponse",
    "SkillGapEnvelope",
    "SkillGapSummaryResponse",
    "SkillRoadmapResponse",
]
