"""
Skill Gap API - Read-only endpoints over the skill gap engine.

Provides REST endpoints for:
- All-careers gap analysis, ranked best match first
- Dashboard summary across careers
- Single-career gap analysis
- Single-career learning roadmap

All endpoints require an authenticated caller; the analysis is computed
for that caller from one snapshot of catalog, careers and skill ratings.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.config import get_settings
from app.database import get_db
from app.middleware.metrics import analysis_timer, record_unresolved_requirements
from app.schemas.skill_gap import (
    AllCareerGapAnalysisResponse,
    SkillGapAnalysisResponse,
    SkillGapEnvelope,
    SkillGapSummaryResponse,
    SkillRoadmapResponse,
)
from app.services.careers import CareerNotFoundError, Importance
from app.services.skill_gaps import SkillGapAnalysis, SkillGapAnalyzer, build_user_skill_map
from app.services.snapshot import AnalysisSnapshot, load_snapshot
from app.services.user_skills import UserSkillMap

router = APIRouter()


# ==============================================================================
# Dependencies
# ==============================================================================

async def get_analysis_snapshot(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user),
) -> AnalysisSnapshot:
    """Load the caller's analysis inputs in one session."""
    return await load_snapshot(db, user_id)


def get_skill_gap_analyzer(
    snapshot: AnalysisSnapshot = Depends(get_analysis_snapshot),
) -> SkillGapAnalyzer:
    """Build an analyzer over the request snapshot using configured tuning."""
    settings = get_settings()
    return SkillGapAnalyzer(
        catalog=snapshot.catalog,
        resolver=snapshot.resolver,
        hours_per_week=settings.hours_per_week,
        default_level_hours=settings.default_level_hours,
        weights={
            Importance.ESSENTIAL: settings.essential_weight,
            Importance.IMPORTANT: settings.important_weight,
            Importance.NICE_TO_HAVE: settings.nice_to_have_weight,
        },
        top_careers_limit=settings.top_careers_limit,
    )


def analyze_career_or_404(
    analyzer: SkillGapAnalyzer,
    career_slug: str,
    user_skills: UserSkillMap,
) -> SkillGapAnalysis:
    try:
        with analysis_timer("career"):
            analysis = analyzer.get_career_gap_analysis(career_slug, user_skills)
    except CareerNotFoundError:
        raise HTTPException(status_code=404, detail="Career not found")
    record_unresolved_requirements(analysis.unresolved_requirements)
    return analysis


# ==============================================================================
# API Endpoints
# ==============================================================================

@router.get("", response_model=SkillGapEnvelope[AllCareerGapAnalysisResponse])
async def get_all_career_gap_analysis(
    snapshot: AnalysisSnapshot = Depends(get_analysis_snapshot),
    analyzer: SkillGapAnalyzer = Depends(get_skill_gap_analyzer),
) -> SkillGapEnvelope[AllCareerGapAnalysisResponse]:
    """
    Get skill gap analysis for every career.

    Careers are sorted by overall progress (descending), then by estimated
    weeks to complete (ascending).

    Example:
        GET /skill-gap

        Response:
        {
            "success": true,
            "data": {
                "totalCareers": 2,
                "userSkills": {"docker": {"selected": true, "level": 2}},
                "careerGaps": [{"careerId": "...", "careerSlug": "devops-engineer", ...}]
            }
        }
    """
    with analysis_timer("all"):
        career_gaps = analyzer.get_all_career_gap_analysis(snapshot.user_skills)
    record_unresolved_requirements(
        sum(c.analysis.unresolved_requirements for c in career_gaps)
    )

    return SkillGapEnvelope(data=AllCareerGapAnalysisResponse.model_validate({
        "totalCareers": len(career_gaps),
        "userSkills": build_user_skill_map(snapshot.user_skills),
        "careerGaps": [c.to_dict() for c in career_gaps],
    }))


@router.get("/summary", response_model=SkillGapEnvelope[SkillGapSummaryResponse])
async def get_skill_gap_summary(
    snapshot: AnalysisSnapshot = Depends(get_analysis_snapshot),
    analyzer: SkillGapAnalyzer = Depends(get_skill_gap_analyzer),
) -> SkillGapEnvelope[SkillGapSummaryResponse]:
    """
    Get summary of skill gaps across all careers.

    Example:
        GET /skill-gap/summary

        Response:
        {
            "success": true,
            "data": {
                "totalCareers": 3,
                "totalSkillsNeeded": 15,
                "totalSkillsMissing": 6,
                "totalSkillsNeedingImprovement": 4,
                "bestCareerMatch": {...},
                "topCareers": [...],
                "skillDistribution": {"mastered": 5, "needsImprovement": 4, "missing": 6}
            }
        }
    """
    with analysis_timer("summary"):
        summary = analyzer.get_skill_gap_summary(snapshot.user_skills)

    return SkillGapEnvelope(data=SkillGapSummaryResponse.model_validate(summary.to_dict()))


@router.get("/{career_slug}", response_model=SkillGapEnvelope[SkillGapAnalysisResponse])
async def get_career_gap_analysis(
    career_slug: str,
    snapshot: AnalysisSnapshot = Depends(get_analysis_snapshot),
    analyzer: SkillGapAnalyzer = Depends(get_skill_gap_analyzer),
) -> SkillGapEnvelope[SkillGapAnalysisResponse]:
    """
    Get skill gap analysis for one career.

    Raises:
        HTTPException 404 if the career slug is unknown
    """
    analysis = analyze_career_or_404(analyzer, career_slug, snapshot.user_skills)

    return SkillGapEnvelope(data=SkillGapAnalysisResponse.model_validate(analysis.to_dict()))


@router.get("/{career_slug}/roadmap", response_model=SkillGapEnvelope[SkillRoadmapResponse])
async def get_skill_roadmap(
    career_slug: str,
    snapshot: AnalysisSnapshot = Depends(get_analysis_snapshot),
    analyzer: SkillGapAnalyzer = Depends(get_skill_gap_analyzer),
) -> SkillGapEnvelope[SkillRoadmapResponse]:
    """
    Get the phased learning roadmap for one career.

    Raises:
        HTTPException 404 if the career slug is unknown
    """
    analysis = analyze_career_or_404(analyzer, career_slug, snapshot.user_skills)

    data = analysis.to_dict()
    return SkillGapEnvelope(data=SkillRoadmapResponse.model_validate({
        "careerName": analysis.career_name,
        "careerSlug": career_slug,
        "gapAnalysis": data,
        "roadmap": data["roadmap"],
        "estimatedTimeToComplete": data["estimatedTimeToComplete"],
    }))
