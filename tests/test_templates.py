"""
Tests for the daily template and the template applier.

This suite covers:
- Saving a template (only name, dosage and time_category are kept)
- Applying the template to one date (full replace, fresh ids)
- Applying the template over a date range (validation before any write,
  sequential application, partial failure accounting)
"""

from datetime import timedelta

import pytest

from app.exceptions import ServiceValidationError
from domain.enums import RangeApplyStatus, TimeCategory
from repositories import DailyDataRepository, TemplateRepository
from services.template_service import NO_TEMPLATE, TemplateService
from test_fixtures import (
    TODAY,
    USER_ID,
    FakeClock,
    RecordingStore,
    day_key,
    make_supplement,
    seed_day,
)


TEMPLATE_FLOW = """
Template Flow
=============

1. SAVE TEMPLATE
   PUT /templates
   {"supplements": [{"name": "Vitamin D3", "dosage": "2000 IU",
                     "time_category": "Morning (Wake + Breakfast)"}]}

2. APPLY TO ONE DATE (replaces the day's list)
   POST /templates/apply/2026-10-20

3. APPLY TO A RANGE
   POST /templates/apply-range
   {"start_date": "2026-10-20", "end_date": "2026-10-26",
    "displayed_start": "2026-10-18", "displayed_end": "2026-10-24"}

   Response: 200 OK
   {"status": "success", "success_count": 7, "error_count": 0, ...}
"""


def _template_entries():
    return [
        make_supplement("Vitamin D3", "2000 IU", TimeCategory.MORNING),
        make_supplement("Magnesium", "400 mg", TimeCategory.BEFORE_BED),
    ]


def _store_with_template(clock=None):
    store = RecordingStore()
    TemplateService.save_template(store, USER_ID, _template_entries(), clock or FakeClock())
    store.writes.clear()
    store.reads.clear()
    return store


# =============================================================================
# SAVE
# =============================================================================


def test_save_template_keeps_only_template_fields():
    """Saving strips id, completed and taken_at from each entry"""
    store = RecordingStore()
    entries = [
        make_supplement("Omega-3 Fish Oil", "1000 mg", TimeCategory.EVENING, completed=True)
    ]

    result = TemplateService.save_template(store, USER_ID, entries, FakeClock())

    assert result.success is True
    doc = store.get("daily_templates", USER_ID)
    assert doc["supplements"] == [
        {
            "name": "Omega-3 Fish Oil",
            "dosage": "1000 mg",
            "time_category": "Evening (Dinner)",
        }
    ]


def test_save_template_overwrites_previous():
    store = RecordingStore()
    clock = FakeClock()
    TemplateService.save_template(store, USER_ID, _template_entries(), clock)
    TemplateService.save_template(store, USER_ID, [make_supplement("Zinc", "15 mg")], clock)

    template = TemplateRepository(store).get(USER_ID)
    assert [e.name for e in template.supplements] == ["Zinc"]


def test_save_empty_template_is_rejected():
    store = RecordingStore()
    with pytest.raises(ServiceValidationError) as exc_info:
        TemplateService.save_template(store, USER_ID, [], FakeClock())
    assert exc_info.value.code == "EMPTY_TEMPLATE"
    assert store.writes == []


def test_save_template_storage_failure_is_reported():
    store = RecordingStore()
    store.fail_keys = {USER_ID}

    result = TemplateService.save_template(store, USER_ID, _template_entries(), FakeClock())

    assert result.success is False
    assert result.error == "Failed to save template"


def test_save_from_day_uses_tracked_supplements():
    store = RecordingStore()
    seed_day(
        store,
        TODAY,
        [
            make_supplement("Probiotics", "10 billion CFU", completed=True),
            make_supplement("Calcium", "500 mg", TimeCategory.MIDDAY),
        ],
    )

    result = TemplateService.save_from_day(store, USER_ID, TODAY, FakeClock())

    assert result.success is True
    template = TemplateService.get_template(store, USER_ID)
    assert [(e.name, e.time_category) for e in template.supplements] == [
        ("Probiotics", TimeCategory.MORNING),
        ("Calcium", TimeCategory.MIDDAY),
    ]


# =============================================================================
# APPLY TO ONE DATE
# =============================================================================


def test_apply_replaces_existing_day():
    """The previous list for the target date is overwritten, not merged"""
    clock = FakeClock()
    store = _store_with_template(clock)
    seed_day(store, TODAY, [make_supplement("Iron", "18 mg", completed=True)])

    result = TemplateService.apply_to_date(store, USER_ID, TODAY, clock)

    assert result.success is True
    day = DailyDataRepository(store).read(USER_ID, TODAY)
    assert [s.name for s in day.supplements] == ["Vitamin D3", "Magnesium"]
    assert all(s.completed is False for s in day.supplements)
    assert all(s.taken_at == clock.now() for s in day.supplements)


def test_apply_generates_fresh_ids_each_time():
    clock = FakeClock()
    store = _store_with_template(clock)
    repo = DailyDataRepository(store)

    TemplateService.apply_to_date(store, USER_ID, TODAY, clock)
    first_ids = {s.id for s in repo.read(USER_ID, TODAY).supplements}
    TemplateService.apply_to_date(store, USER_ID, TODAY, clock)
    second_ids = {s.id for s in repo.read(USER_ID, TODAY).supplements}

    assert len(first_ids) == 2
    assert len(second_ids) == 2
    assert first_ids.isdisjoint(second_ids)


def test_apply_without_template_writes_nothing():
    store = RecordingStore()

    result = TemplateService.apply_to_date(store, USER_ID, TODAY, FakeClock())

    assert result.success is False
    assert result.code == NO_TEMPLATE
    assert store.day_writes() == []


# =============================================================================
# APPLY TO A RANGE
# =============================================================================


def test_range_apply_covers_every_date_in_order():
    clock = FakeClock()
    store = _store_with_template(clock)
    end = TODAY + timedelta(days=2)

    result = TemplateService.apply_to_range(store, USER_ID, TODAY, end, clock)

    expected = [TODAY, TODAY + timedelta(days=1), TODAY + timedelta(days=2)]
    assert result.attempted_dates == expected
    assert store.day_writes() == [day_key(d) for d in expected]
    assert result.status == RangeApplyStatus.SUCCESS
    assert result.success_count == 3
    assert result.error_count == 0


def test_single_day_range():
    clock = FakeClock()
    store = _store_with_template(clock)

    result = TemplateService.apply_to_range(store, USER_ID, TODAY, TODAY, clock)

    assert result.attempted_dates == [TODAY]
    assert result.success_count == 1


def test_reversed_range_is_rejected_before_any_io():
    store = RecordingStore()

    with pytest.raises(ServiceValidationError) as exc_info:
        TemplateService.apply_to_range(
            store, USER_ID, TODAY, TODAY - timedelta(days=1), FakeClock()
        )

    assert exc_info.value.code == "INVALID_RANGE"
    assert store.writes == []
    assert store.reads == []


def test_ninety_day_range_is_accepted():
    clock = FakeClock()
    store = _store_with_template(clock)

    result = TemplateService.apply_to_range(
        store, USER_ID, TODAY, TODAY + timedelta(days=89), clock
    )

    assert result.success_count == 90
    assert len(store.day_writes()) == 90


def test_ninety_one_day_range_is_rejected():
    clock = FakeClock()
    store = _store_with_template(clock)

    with pytest.raises(ServiceValidationError) as exc_info:
        TemplateService.apply_to_range(
            store, USER_ID, TODAY, TODAY + timedelta(days=90), clock
        )

    assert exc_info.value.code == "RANGE_TOO_LONG"
    assert store.writes == []


def test_range_apply_continues_past_failures():
    """Two of five writes fail; every date is still attempted"""
    clock = FakeClock()
    store = _store_with_template(clock)
    dates = [TODAY + timedelta(days=i) for i in range(5)]
    store.fail_keys = {day_key(dates[1]), day_key(dates[3])}

    result = TemplateService.apply_to_range(store, USER_ID, dates[0], dates[-1], clock)

    assert result.status == RangeApplyStatus.PARTIAL
    assert result.success_count == 3
    assert result.error_count == 2
    assert result.failed_dates == [dates[1], dates[3]]
    assert len(store.day_writes()) == 5

    repo = DailyDataRepository(store)
    assert len(repo.read(USER_ID, dates[0]).supplements) == 2
    assert repo.read(USER_ID, dates[1]).supplements == []
    assert len(repo.read(USER_ID, dates[4]).supplements) == 2


def test_range_apply_without_template_fails_every_date():
    store = RecordingStore()

    result = TemplateService.apply_to_range(
        store, USER_ID, TODAY, TODAY + timedelta(days=2), FakeClock()
    )

    assert result.status == RangeApplyStatus.FAILED
    assert result.success_count == 0
    assert result.error_count == 3
    assert result.message == "No daily template saved"
    assert store.day_writes() == []


def test_range_apply_flags_dates_outside_displayed_window():
    clock = FakeClock()
    store = _store_with_template(clock)
    window_end = TODAY + timedelta(days=6)

    inside = TemplateService.apply_to_range(
        store,
        USER_ID,
        TODAY,
        TODAY + timedelta(days=2),
        clock,
        displayed_start=TODAY,
        displayed_end=window_end,
    )
    outside = TemplateService.apply_to_range(
        store,
        USER_ID,
        TODAY + timedelta(days=5),
        TODAY + timedelta(days=8),
        clock,
        displayed_start=TODAY,
        displayed_end=window_end,
    )

    assert inside.outside_displayed_window is False
    assert outside.outside_displayed_window is True


def test_reload_window_returns_every_displayed_day():
    clock = FakeClock()
    store = _store_with_template(clock)
    TemplateService.apply_to_date(store, USER_ID, TODAY + timedelta(days=1), clock)

    days = TemplateService.reload_window(
        store, USER_ID, TODAY, TODAY + timedelta(days=2)
    )

    assert [d.date for d in days] == [
        TODAY,
        TODAY + timedelta(days=1),
        TODAY + timedelta(days=2),
    ]
    assert [len(d.supplements) for d in days] == [0, 2, 0]


def test_reload_window_swallows_storage_errors():
    store = RecordingStore()
    store.fail_reads = True

    assert TemplateService.reload_window(store, USER_ID, TODAY, TODAY) == []
