"""
Tests for the recommendation generator.
"""
from app.services.careers import CareerRequirement, Importance
from app.services.gap_calculator import calculate_skill_details
from app.services.progress import aggregate_progress
from app.services.recommendations import (
    RecommendationPriority,
    RecommendationType,
    generate_recommendations,
)
from app.services.user_skills import levels_from_mapping


def recommend(catalog, requirements, levels):
    details = calculate_skill_details(
        [
            CareerRequirement(skill_id=s, required_level=r, importance=Importance(i))
            for s, r, i in requirements
        ],
        levels_from_mapping(levels),
        catalog,
    )
    summary = aggregate_progress(details, total_skills=len(requirements))
    return generate_recommendations(summary, details)


def types_of(recommendations):
    return [r.type for r in recommendations]


class TestGenerateRecommendations:
    """Rule order and triggers."""

    def test_all_met_gives_single_success(self, catalog):
        recommendations = recommend(
            catalog,
            [("javascript", 2, "essential"), ("git", 1, "nice-to-have")],
            {"javascript": 3, "git": 1},
        )
        assert types_of(recommendations) == [RecommendationType.SUCCESS]

    def test_empty_career_gives_success(self, catalog):
        assert types_of(recommend(catalog, [], {})) == [RecommendationType.SUCCESS]

    def test_missing_essential_skills_get_priority_each(self, catalog):
        recommendations = recommend(
            catalog,
            [("javascript", 3, "essential"), ("html", 3, "essential"), ("css", 3, "important")],
            {},
        )
        priority = [r for r in recommendations if r.type == RecommendationType.PRIORITY]

        assert len(priority) == 2
        assert all(r.priority == RecommendationPriority.HIGH for r in priority)
        assert "JavaScript" in priority[0].message
        assert "HTML" in priority[1].message
        assert RecommendationType.SUCCESS not in types_of(recommendations)

    def test_quick_win_priority_follows_importance(self, catalog):
        recommendations = recommend(
            catalog,
            [("javascript", 3, "essential"), ("css", 2, "important")],
            {"javascript": 2, "css": 1},
        )
        quick_wins = {
            r.message: r.priority
            for r in recommendations if r.type == RecommendationType.QUICK_WIN
        }

        assert len(quick_wins) == 2
        assert sorted(quick_wins.values()) == sorted(
            [RecommendationPriority.HIGH, RecommendationPriority.MEDIUM]
        )

    def test_improve_lists_skills_more_than_one_level_short(self, catalog):
        recommendations = recommend(
            catalog,
            [("javascript", 4, "important"), ("css", 2, "important")],
            {"javascript": 1, "css": 1},
        )
        improve = [r for r in recommendations if r.type == RecommendationType.IMPROVE]

        assert len(improve) == 1
        assert "JavaScript" in improve[0].message
        assert "CSS" not in improve[0].message

    def test_no_improve_when_every_started_skill_is_one_level_short(self, catalog):
        recommendations = recommend(
            catalog, [("css", 2, "important")], {"css": 1}
        )
        assert RecommendationType.IMPROVE not in types_of(recommendations)
        assert RecommendationType.QUICK_WIN in types_of(recommendations)

    def test_focus_names_top_priority_unmet_skill(self, catalog):
        recommendations = recommend(
            catalog,
            [("git", 1, "nice-to-have"), ("html", 4, "important")],
            {},
        )
        focus = recommendations[-1]

        assert focus.type == RecommendationType.FOCUS
        assert "HTML" in focus.message

    def test_focus_tie_goes_to_first_requirement(self, catalog):
        recommendations = recommend(
            catalog,
            [("css", 2, "important"), ("html", 2, "important")],
            {},
        )
        focus = recommendations[-1]

        assert focus.type == RecommendationType.FOCUS
        assert focus.message.startswith("Focus next on CSS:")

    def test_rule_order(self, catalog):
        recommendations = recommend(
            catalog,
            [
                ("javascript", 3, "essential"),
                ("html", 2, "important"),
                ("css", 4, "important"),
            ],
            {"html": 1, "css": 1},
        )
        assert types_of(recommendations) == [
            RecommendationType.PRIORITY,
            RecommendationType.QUICK_WIN,
            RecommendationType.IMPROVE,
            RecommendationType.FOCUS,
        ]

    def test_to_dict(self, catalog):
        data = recommend(catalog, [], {})[0].to_dict()
        assert data["type"] == "success"
        assert data["priority"] == "medium"
        assert data["message"]
