"""
Tests for progress aggregation.
"""
from app.services.careers import CareerRequirement, Importance
from app.services.gap_calculator import calculate_skill_details
from app.services.progress import (
    EMPTY_PROGRESS,
    aggregate_progress,
    calculate_overall_progress,
    round_half_up,
)
from app.services.user_skills import levels_from_mapping


def details_for(catalog, requirements, levels):
    return calculate_skill_details(
        [
            CareerRequirement(skill_id=s, required_level=r, importance=Importance.IMPORTANT)
            for s, r in requirements
        ],
        levels_from_mapping(levels),
        catalog,
    )


class TestOverallProgress:
    """Overall progress percentage."""

    def test_no_details_counts_as_complete(self):
        assert calculate_overall_progress([]) == EMPTY_PROGRESS == 100

    def test_fresh_user_has_zero_progress(self, catalog):
        details = details_for(catalog, [("javascript", 3), ("html", 2)], {})
        assert calculate_overall_progress(details) == 0

    def test_all_met_is_100(self, catalog):
        details = details_for(catalog, [("javascript", 3)], {"javascript": 3})
        assert calculate_overall_progress(details) == 100

    def test_surplus_levels_are_capped(self, catalog):
        """Being over-qualified in one skill does not cover another."""
        details = details_for(
            catalog, [("javascript", 1), ("html", 4)], {"javascript": 5}
        )
        # (1/1 + 0/4) / 2
        assert calculate_overall_progress(details) == 50

    def test_partial_progress_rounds_half_up(self, catalog):
        details = details_for(
            catalog,
            [("javascript", 3), ("html", 3)],
            {"javascript": 2, "html": 1},
        )
        # (2/3 + 1/3) / 2 = 50%
        assert calculate_overall_progress(details) == 50

        details = details_for(catalog, [("javascript", 3)], {"javascript": 2})
        # 66.67 -> 67
        assert calculate_overall_progress(details) == 67

    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(12.49) == 12
        assert round_half_up(0.0) == 0

    def test_raising_a_level_never_lowers_progress(self, catalog):
        previous = -1
        for level in range(0, 6):
            details = details_for(
                catalog, [("javascript", 4), ("html", 2)], {"javascript": level, "html": 1}
            )
            progress = calculate_overall_progress(details)
            assert progress >= previous
            assert 0 <= progress <= 100
            previous = progress


class TestAggregateProgress:
    """Status counts."""

    def test_counts_partition_analyzed_skills(self, catalog):
        details = details_for(
            catalog,
            [("javascript", 3), ("html", 3), ("css", 3), ("git", 1)],
            {"javascript": 3, "html": 1, "git": 2},
        )
        summary = aggregate_progress(details, total_skills=4)

        assert summary.skills_met == 2
        assert summary.skills_needing_improvement == 1
        assert summary.skills_missing == 1
        assert (
            summary.skills_met + summary.skills_needing_improvement + summary.skills_missing
            == summary.skills_analyzed
        )

    def test_total_includes_unresolved_requirements(self, catalog):
        details = details_for(catalog, [("javascript", 2), ("cobol", 2)], {})
        summary = aggregate_progress(details, total_skills=2)

        assert summary.total_skills == 2
        assert summary.skills_analyzed == 1
        assert summary.overall_progress == 0

    def test_only_unresolved_requirements_is_complete(self, catalog):
        details = details_for(catalog, [("cobol", 2)], {})
        summary = aggregate_progress(details, total_skills=1)

        assert summary.skills_analyzed == 0
        assert summary.overall_progress == 100
