"""
Tests for adherence statistics.

History covers every tracked day (newest first) with the rounded average
number of supplements per day and the rounded completion rate. The weekly
overview is a Sunday-to-Saturday grid of per-day completion.
"""

from datetime import date, timedelta

import pytest

from domain.enums import TimeCategory
from domain.schemas.tracker_schemas import DayData
from services.stats_service import StatsService, percent, round_half_up, week_start_for
from test_fixtures import (
    TODAY,
    USER_ID,
    FakeClock,
    RecordingStore,
    make_supplement,
    seed_day,
)


@pytest.mark.parametrize(
    "value, expected", [(2.5, 3), (2.4999, 2), (0.5, 1), (66.6667, 67), (0, 0)]
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_percent_of_nothing_is_zero():
    assert percent(0, 0) == 0
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2026, 10, 11), date(2026, 10, 11)),  # Sunday
        (date(2026, 10, 14), date(2026, 10, 11)),  # Wednesday
        (date(2026, 10, 17), date(2026, 10, 11)),  # Saturday
        (date(2026, 10, 19), date(2026, 10, 18)),  # Monday
    ],
)
def test_week_starts_on_sunday(day, expected):
    assert week_start_for(day) == expected


def test_history_summary():
    store = RecordingStore()
    older = TODAY - timedelta(days=1)
    seed_day(
        store,
        older,
        [
            make_supplement("Vitamin D3", completed=True),
            make_supplement("Zinc", "15 mg", completed=True),
            make_supplement("Iron", "18 mg"),
        ],
    )
    seed_day(store, TODAY, [make_supplement("Calcium", "500 mg"), make_supplement("Biotin")])
    seed_day(store, TODAY, [make_supplement("Other user")], user_id="other-user")

    summary = StatsService.history_summary(store, USER_ID)

    assert [d.date for d in summary.days] == [TODAY, older]
    assert summary.days_tracked == 2
    assert summary.total_supplements == 5
    assert summary.total_completed == 2
    assert summary.average_daily_supplements == 3  # 2.5 rounds up
    assert summary.completion_rate == 40


def test_history_summary_with_no_data():
    summary = StatsService.history_summary(RecordingStore(), USER_ID)
    assert summary.days == []
    assert summary.average_daily_supplements == 0
    assert summary.completion_rate == 0


def test_day_completion_by_category():
    day = DayData.model_validate(
        {
            "date": TODAY.isoformat(),
            "supplements": [
                make_supplement("Vitamin D3", completed=True),
                make_supplement("Multivitamin", "1 tablet", completed=True),
                make_supplement("Magnesium", "400 mg", TimeCategory.BEFORE_BED),
            ],
        }
    )

    completion = StatsService.day_completion(day, today=TODAY)

    assert completion.total == 3
    assert completion.completed == 2
    assert completion.completion_percent == 67
    assert completion.is_today is True
    assert [(c.time_category, c.all_done) for c in completion.by_category] == [
        (TimeCategory.MORNING, True),
        (TimeCategory.BEFORE_BED, False),
    ]


def test_weekly_overview_for_past_week():
    store = RecordingStore()
    wednesday = date(2026, 10, 14)
    seed_day(
        store,
        wednesday,
        [make_supplement("Vitamin C", completed=True), make_supplement("Zinc")],
    )
    # outside the week
    seed_day(store, date(2026, 10, 18), [make_supplement("Iron", completed=True)])

    overview = StatsService.weekly_overview(store, USER_ID, wednesday, FakeClock())

    assert overview.week_start == date(2026, 10, 11)
    assert overview.week_end == date(2026, 10, 17)
    assert overview.is_current_week is False
    assert len(overview.days) == 7
    assert overview.days[3].date == wednesday
    assert overview.days[3].completion_percent == 50
    assert overview.days[0].total == 0
    assert overview.completion_percent == 50


def test_weekly_overview_defaults_to_current_week():
    store = RecordingStore()
    seed_day(store, TODAY, [make_supplement("Vitamin D3", completed=True)])

    overview = StatsService.weekly_overview(store, USER_ID, clock=FakeClock())

    assert overview.week_start == date(2026, 10, 18)
    assert overview.is_current_week is True
    assert [d.is_today for d in overview.days].count(True) == 1
    assert overview.days[1].is_today is True
    assert overview.completion_percent == 100
