"""
Tests for the time estimator.
"""
import logging

import pytest

from app.services.careers import CareerRequirement, Importance
from app.services.gap_calculator import calculate_skill_details
from app.services.skill_catalog import SkillCatalog
from app.services.time_estimator import (
    ALL_MET_DESCRIPTION,
    calculate_total_weeks,
    describe_duration,
    estimate_time,
    target_level_hours,
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


class TestDescribeDuration:
    @pytest.mark.parametrize("weeks,expected", [
        (0, "Less than a week"),
        (1, "1 week"),
        (3, "3 weeks"),
        (4, "1 month"),
        (6, "1 month, 2 weeks"),
        (9, "2 months, 1 week"),
        (12, "3 months"),
    ])
    def test_formatting(self, weeks, expected):
        assert describe_duration(weeks) == expected


class TestTargetLevelHours:
    """Hour cost lookup with fallbacks."""

    def test_uses_target_rung(self, catalog):
        details = details_for(catalog, [("javascript", 3)], {})
        assert target_level_hours(details, catalog) == {"javascript": 30}

    def test_falls_back_to_highest_lower_rung(self):
        catalog = SkillCatalog.from_records([{
            "id": "sql",
            "name": "SQL",
            "proficiency_levels": [
                {"level": 1, "hours_to_achieve": 8},
                {"level": 2, "hours_to_achieve": 16},
            ],
        }])
        details = details_for(catalog, [("sql", 4)], {})
        assert target_level_hours(details, catalog) == {"sql": 16}

    def test_falls_back_to_default_without_ladder(self):
        catalog = SkillCatalog.from_records([{"id": "sql", "name": "SQL"}])
        details = details_for(catalog, [("sql", 2)], {})

        assert target_level_hours(details, catalog) == {"sql": 20}
        assert target_level_hours(details, catalog, default_level_hours=7) == {"sql": 7}

    def test_accepts_legacy_hours_key(self):
        catalog = SkillCatalog.from_records([{
            "id": "sql",
            "name": "SQL",
            "proficiency_levels": [{"level": "Beginner", "timeToAchieve": 12}],
        }])
        details = details_for(catalog, [("sql", 1)], {})
        assert target_level_hours(details, catalog) == {"sql": 12}

    def test_invalid_hours_fall_back_to_default(self, caplog):
        """One bad catalog figure is logged and priced at the default."""
        with caplog.at_level(logging.WARNING):
            catalog = SkillCatalog.from_records([{
                "id": "sql",
                "name": "SQL",
                "proficiency_levels": [
                    {"level": 1, "hours_to_achieve": 8},
                    {"level": 2, "hours_to_achieve": "lots"},
                ],
            }])
        details = details_for(catalog, [("sql", 2)], {})

        assert target_level_hours(details, catalog) == {"sql": 20}
        assert "Ignoring invalid hours 'lots'" in caplog.text

    def test_rung_without_hours_falls_back_to_default(self):
        catalog = SkillCatalog.from_records([{
            "id": "sql",
            "name": "SQL",
            "proficiency_levels": [{"level": 1, "title": "Basics"}],
        }])
        details = details_for(catalog, [("sql", 1)], {})
        assert target_level_hours(details, catalog, default_level_hours=7) == {"sql": 7}


class TestEstimateTime:
    """Weeks, months and description."""

    def test_all_met(self, catalog):
        details = details_for(catalog, [("javascript", 2)], {"javascript": 3})
        estimate = estimate_time(details, target_level_hours(details, catalog))

        assert estimate.total_weeks == 0
        assert estimate.months == 0
        assert estimate.weeks == 0
        assert estimate.description == ALL_MET_DESCRIPTION

    def test_sums_unmet_target_hours(self, catalog):
        details = details_for(
            catalog,
            [("javascript", 3), ("html", 2), ("css", 1)],
            {"css": 1},
        )
        hours = target_level_hours(details, catalog)
        # 30 + 20 hours at 10 h/week; css is met and ignored
        estimate = estimate_time(details, hours)

        assert estimate.total_weeks == 5
        assert estimate.months == 1
        assert estimate.weeks == 1
        assert estimate.description == "1 month, 1 week"

    def test_rounds_up_partial_weeks(self, catalog):
        details = details_for(catalog, [("javascript", 1)], {})
        estimate = estimate_time(details, {"javascript": 11}, hours_per_week=10)
        assert estimate.total_weeks == 2

    def test_months_and_weeks_recompose(self, catalog):
        details = details_for(
            catalog, [("javascript", 5), ("html", 5), ("css", 4)], {}
        )
        estimate = estimate_time(details, target_level_hours(details, catalog), hours_per_week=3)

        assert estimate.months * 4 + estimate.weeks == estimate.total_weeks
        assert 0 <= estimate.weeks < 4

    def test_zero_budget_is_treated_as_one_hour(self, catalog):
        details = details_for(catalog, [("javascript", 1)], {})
        assert calculate_total_weeks(details, {"javascript": 10}, hours_per_week=0) == 10

    def test_to_dict(self, catalog):
        details = details_for(catalog, [("javascript", 2)], {})
        data = estimate_time(details, target_level_hours(details, catalog)).to_dict()

        assert data == {"totalWeeks": 2, "months": 0, "weeks": 2, "description": "2 weeks"}
