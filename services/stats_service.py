from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import logging

from adapters.document_store import DocumentStore
from app.clock import Clock, system_clock
from domain.enums import TimeCategory
from domain.schemas.stats_schemas import (
    CategoryCompletion,
    DayCompletion,
    HistorySummary,
    WeeklyOverview,
)
from domain.schemas.tracker_schemas import DayData
from repositories import DailyDataRepository

logger = logging.getLogger("supplement_tracker.stats")


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent(part: int, total: int) -> int:
    if total == 0:
        return 0
    return round_half_up(part / total * 100)


def week_start_for(day: date) -> date:
    """Sunday on or before day"""
    return day - timedelta(days=(day.weekday() + 1) % 7)


class StatsService:
    @staticmethod
    def day_completion(day: DayData, today: Optional[date] = None) -> DayCompletion:
        completed = sum(1 for s in day.supplements if s.completed)
        by_category = []
        for category in TimeCategory:
            entries = [s for s in day.supplements if s.time_category == category]
            if not entries:
                continue
            done = sum(1 for s in entries if s.completed)
            by_category.append(
                CategoryCompletion(
                    time_category=category,
                    total=len(entries),
                    completed=done,
                    all_done=done == len(entries),
                )
            )
        return DayCompletion(
            date=day.date,
            total=len(day.supplements),
            completed=completed,
            completion_percent=percent(completed, len(day.supplements)),
            is_today=day.date == today,
            by_category=by_category,
        )

    @staticmethod
    def history_summary(store: DocumentStore, user_id: str) -> HistorySummary:
        """
        Summarize every tracked day for a user.

        Returns:
            HistorySummary with days newest first, totals, the rounded average
            number of supplements per tracked day and the rounded completion
            rate in percent (0 when nothing is tracked)
        """
        days = DailyDataRepository(store).list_for_user(user_id)
        days.sort(key=lambda d: d.date, reverse=True)

        total = sum(len(d.supplements) for d in days)
        completed = sum(1 for d in days for s in d.supplements if s.completed)
        average = round_half_up(total / len(days)) if days else 0

        return HistorySummary(
            days=days,
            days_tracked=len(days),
            total_supplements=total,
            total_completed=completed,
            average_daily_supplements=average,
            completion_rate=percent(completed, total),
        )

    @staticmethod
    def weekly_overview(
        store: DocumentStore,
        user_id: str,
        reference_date: Optional[date] = None,
        clock: Clock = system_clock,
    ) -> WeeklyOverview:
        """Adherence for the Sunday-to-Saturday week containing reference_date"""
        today = clock.today()
        reference_date = reference_date or today
        start = week_start_for(reference_date)
        end = start + timedelta(days=6)

        days = DailyDataRepository(store).list_range(user_id, start, end)
        completions = [StatsService.day_completion(d, today) for d in days]

        total = sum(c.total for c in completions)
        completed = sum(c.completed for c in completions)
        return WeeklyOverview(
            week_start=start,
            week_end=end,
            is_current_week=start == week_start_for(today),
            completion_percent=percent(completed, total),
            days=completions,
        )
