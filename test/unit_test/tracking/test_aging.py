"""Unit tests for aging levels and lifecycle progress."""

from datetime import datetime, timezone

import pytest

from meridian.core.models.domain.enums import AgingLevel
from meridian.tracking.aging import (
    compute_aging_days,
    compute_issue_age_days,
    compute_progress_percent,
    get_aging_level,
    round_half_up,
    stage_index,
)


class TestAgingDays:
    def test_whole_days_are_floored(self):
        assert compute_aging_days(datetime(2025, 1, 1), now=datetime(2025, 1, 9, 12)) == 8

    def test_same_day_is_zero(self):
        assert compute_aging_days(datetime(2025, 1, 1, 8), now=datetime(2025, 1, 1, 20)) == 0

    def test_aware_datetimes_are_normalised(self):
        entered = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert compute_aging_days(entered, now=datetime(2025, 1, 3)) == 2

    def test_resolved_issue_stops_aging(self):
        created = datetime(2025, 1, 1)
        resolved = datetime(2025, 1, 4)
        assert compute_issue_age_days(created, resolved, now=datetime(2025, 2, 1)) == 3

    def test_open_issue_ages_until_now(self):
        assert compute_issue_age_days(datetime(2025, 1, 1), None, now=datetime(2025, 1, 11)) == 10


class TestAgingLevel:
    @pytest.mark.parametrize(
        "days,expected",
        [(0, AgingLevel.normal), (7, AgingLevel.normal), (8, AgingLevel.warning), (14, AgingLevel.warning), (15, AgingLevel.critical)],
    )
    def test_object_thresholds(self, days, expected):
        assert get_aging_level(days, "object") == expected

    @pytest.mark.parametrize(
        "days,expected",
        [(3, AgingLevel.normal), (4, AgingLevel.warning), (7, AgingLevel.warning), (8, AgingLevel.critical)],
    )
    def test_issue_thresholds(self, days, expected):
        assert get_aging_level(days, "issue") == expected


class TestProgress:
    @pytest.mark.parametrize(
        "stage,expected",
        [
            ("requirements", 11),
            ("mapping", 22),
            ("extraction", 33),
            ("ingestion", 44),
            ("transformation", 56),
            ("push_to_target", 67),
            ("validation", 78),
            ("signoff", 89),
            ("live", 100),
        ],
    )
    def test_progress_per_stage(self, stage, expected):
        assert compute_progress_percent(stage) == expected

    def test_unknown_stage(self):
        assert stage_index("unknown") == -1
        assert compute_progress_percent("unknown") == 0

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2
