"""
Tests for day rollover detection.

A controller remembers the date its "today" list was built for. These tests
move a fake clock across midnight and check what the controller does:
- nothing, when the date has not changed
- apply the saved template to the new day
- start a fresh day (default) or carry the previous list forward unchecked
- retry on the next check when the store fails mid-transition
"""

import threading
from datetime import timedelta

import anyio
import pytest

from domain.enums import RolloverOutcome, TimeCategory
from repositories import DailyDataRepository
from services.rollover_service import DayRolloverController, RolloverScheduler
from services.template_service import TemplateService
from test_fixtures import (
    TODAY,
    USER_ID,
    FakeClock,
    RecordingStore,
    day_key,
    make_supplement,
    seed_day,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


def _controller(store, clock, carry_forward=False):
    controller = DayRolloverController(store, USER_ID, clock, carry_forward=carry_forward)
    assert controller.check_day() == RolloverOutcome.INITIALIZED
    return controller


def test_first_check_loads_today_without_transition():
    store = RecordingStore()
    clock = FakeClock()
    seed_day(store, TODAY, [make_supplement("Vitamin C", "1000 mg")])

    controller = _controller(store, clock)

    assert controller.current_date == TODAY
    assert [s.name for s in controller.supplements] == ["Vitamin C"]
    # only the seed write
    assert store.day_writes() == [day_key(TODAY)]


def test_unchanged_day_is_a_no_op():
    """Repeated checks on the same date touch no store and count no transition"""
    store = RecordingStore()
    clock = FakeClock()
    controller = _controller(store, clock)
    reads, writes, transitions = len(store.reads), len(store.writes), controller.transitions

    clock.advance(days=0, hours=5)
    for _ in range(3):
        assert controller.check_day() == RolloverOutcome.UNCHANGED

    assert len(store.reads) == reads
    assert len(store.writes) == writes
    assert controller.transitions == transitions


def test_day_change_applies_template():
    store = RecordingStore()
    clock = FakeClock()
    seed_day(store, TODAY, [make_supplement("Zinc", "15 mg", completed=True)])
    TemplateService.save_template(
        store,
        USER_ID,
        [
            make_supplement("Vitamin D3", "2000 IU"),
            make_supplement("Ashwagandha", "300 mg", TimeCategory.BEFORE_BED),
        ],
        clock,
    )
    controller = _controller(store, clock)

    clock.advance()
    outcome = controller.check_day()

    tomorrow = TODAY + timedelta(days=1)
    assert outcome == RolloverOutcome.TEMPLATE_APPLIED
    assert controller.current_date == tomorrow
    assert [s.name for s in controller.supplements] == ["Vitamin D3", "Ashwagandha"]
    assert all(not s.completed for s in controller.supplements)

    # yesterday is left as it was
    yesterday = DailyDataRepository(store).read(USER_ID, TODAY)
    assert [(s.name, s.completed) for s in yesterday.supplements] == [("Zinc", True)]


def test_day_change_without_template_starts_fresh_day_by_default():
    store = RecordingStore()
    clock = FakeClock()
    seed_day(store, TODAY, [make_supplement("Biotin", "5000 mcg", completed=True)])
    controller = _controller(store, clock)
    writes_before = len(store.day_writes())

    clock.advance()
    outcome = controller.check_day()

    assert outcome == RolloverOutcome.FRESH_DAY
    assert controller.supplements == []
    assert len(store.day_writes()) == writes_before


def test_fresh_day_shows_what_is_already_stored_for_the_new_date():
    store = RecordingStore()
    clock = FakeClock()
    tomorrow = TODAY + timedelta(days=1)
    seed_day(store, tomorrow, [make_supplement("CoQ10", "100 mg")])
    controller = _controller(store, clock)

    clock.advance()

    assert controller.check_day() == RolloverOutcome.FRESH_DAY
    assert [s.name for s in controller.supplements] == ["CoQ10"]


def test_carry_forward_copies_previous_day_unchecked():
    """
    With carry-forward enabled the previous day is re-read from the store
    (not the in-memory list) and written to the new date with every entry
    unchecked.
    """
    store = RecordingStore()
    clock = FakeClock()
    seed_day(store, TODAY, [make_supplement("Turmeric", "500 mg", completed=True)])
    controller = _controller(store, clock, carry_forward=True)

    # a change made elsewhere after the controller loaded today
    seed_day(
        store,
        TODAY,
        [
            make_supplement("Turmeric", "500 mg", completed=True),
            make_supplement("Vitamin E", "400 IU", TimeCategory.EVENING, completed=True),
        ],
    )

    clock.advance()
    outcome = controller.check_day()

    tomorrow = TODAY + timedelta(days=1)
    assert outcome == RolloverOutcome.CARRIED_FORWARD
    stored = DailyDataRepository(store).read(USER_ID, tomorrow)
    assert [(s.name, s.completed) for s in stored.supplements] == [
        ("Turmeric", False),
        ("Vitamin E", False),
    ]
    assert controller.supplements == stored.supplements


def test_template_wins_over_carry_forward():
    store = RecordingStore()
    clock = FakeClock()
    seed_day(store, TODAY, [make_supplement("Iron", "18 mg")])
    TemplateService.save_template(store, USER_ID, [make_supplement("Calcium", "500 mg")], clock)
    controller = _controller(store, clock, carry_forward=True)

    clock.advance()

    assert controller.check_day() == RolloverOutcome.TEMPLATE_APPLIED
    assert [s.name for s in controller.supplements] == ["Calcium"]


def test_failed_transition_is_retried_on_next_check():
    store = RecordingStore()
    clock = FakeClock()
    controller = _controller(store, clock)

    clock.advance()
    store.fail_reads = True
    assert controller.check_day() == RolloverOutcome.FAILED
    assert controller.current_date == TODAY

    store.fail_reads = False
    assert controller.check_day() == RolloverOutcome.FRESH_DAY
    assert controller.current_date == TODAY + timedelta(days=1)


def test_concurrent_checks_fire_one_transition():
    store = RecordingStore()
    clock = FakeClock()
    controller = _controller(store, clock)
    clock.advance()

    barrier = threading.Barrier(8)
    outcomes = []

    def worker():
        barrier.wait()
        outcomes.append(controller.check_day())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count(RolloverOutcome.FRESH_DAY) == 1
    assert outcomes.count(RolloverOutcome.UNCHANGED) == 7
    assert controller.transitions == 2


def test_multi_day_gap_transitions_once():
    store = RecordingStore()
    clock = FakeClock()
    TemplateService.save_template(store, USER_ID, [make_supplement("Magnesium", "400 mg")], clock)
    controller = _controller(store, clock)
    store.writes.clear()

    clock.advance(days=3)

    assert controller.check_day() == RolloverOutcome.TEMPLATE_APPLIED
    assert controller.current_date == TODAY + timedelta(days=3)
    assert store.day_writes() == [day_key(TODAY + timedelta(days=3))]


# =============================================================================
# SCHEDULER
# =============================================================================


def test_scheduler_tracks_and_checks_users():
    store = RecordingStore()
    clock = FakeClock()
    scheduler = RolloverScheduler(store, clock, interval_sec=60, carry_forward=False)

    controller = scheduler.track(USER_ID)
    assert scheduler.track(USER_ID) is controller
    assert scheduler.tracked_users == [USER_ID]
    assert controller.current_date == TODAY

    assert scheduler.check_all() == {USER_ID: RolloverOutcome.UNCHANGED}
    clock.advance()
    assert scheduler.check_all() == {USER_ID: RolloverOutcome.FRESH_DAY}

    assert scheduler.untrack(USER_ID) is True
    assert scheduler.untrack(USER_ID) is False
    assert scheduler.check_all() == {}


def test_scheduler_isolates_crashing_controller(monkeypatch):
    store = RecordingStore()
    clock = FakeClock()
    scheduler = RolloverScheduler(store, clock, interval_sec=60)
    broken = scheduler.track("broken-user")
    scheduler.track(USER_ID)

    def explode():
        raise RuntimeError("boom")

    monkeypatch.setattr(broken, "check_day", explode)
    clock.advance()

    outcomes = scheduler.check_all()

    assert outcomes["broken-user"] == RolloverOutcome.FAILED
    assert outcomes[USER_ID] == RolloverOutcome.FRESH_DAY


@pytest.mark.anyio
async def test_scheduler_loop_picks_up_day_change():
    store = RecordingStore()
    clock = FakeClock()
    scheduler = RolloverScheduler(store, clock, interval_sec=0.01)
    controller = scheduler.track(USER_ID)
    clock.advance()

    with anyio.move_on_after(0.5):
        await scheduler.run()

    assert controller.current_date == TODAY + timedelta(days=1)
