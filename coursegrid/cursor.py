"""
Week cursor: maps calendar dates to semester week numbers and back.

Week 1 starts on the "anchor Monday", the Monday of the week that contains
the semester start date (a Sunday start belongs to the week before).
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List

from coursegrid.config import DEFAULT_TOTAL_WEEKS


def anchor_monday(semester_start: date) -> date:
    # Sunday=0 .. Saturday=6
    dow = semester_start.isoweekday() % 7
    offset = -6 if dow == 0 else 1 - dow
    return semester_start + timedelta(days=offset)


def current_week_index(anchor: date, today: date) -> int:
    """
    1-based week of `today`. Dates before the anchor count as week 1;
    there is no upper clamp here.
    """
    diff_days = (today - anchor).days
    return max(1, diff_days // 7 + 1)


def week_dates(anchor: date, week: int) -> List[date]:
    """
    Monday..Sunday of the given week.
    """
    monday = anchor + timedelta(days=(week - 1) * 7)
    return [monday + timedelta(days=i) for i in range(7)]


def format_month_day(d: date) -> str:
    return f"{d.month}/{d.day}"


class WeekCursor:
    """
    Selected week plus the semester start it is relative to.

    The cursor only moves through explicit navigation (previous_week,
    next_week, go_to) or jump_to_today.
    """

    def __init__(self, semester_start: date, week: int = 1, total_weeks: int = DEFAULT_TOTAL_WEEKS) -> None:
        if week < 1:
            raise ValueError(f"Week must be >= 1, got {week}")
        self.semester_start = semester_start
        self.week = week
        self.total_weeks = max(1, total_weeks)

    @property
    def anchor(self) -> date:
        return anchor_monday(self.semester_start)

    @property
    def dates(self) -> List[date]:
        return week_dates(self.anchor, self.week)

    @property
    def can_go_previous(self) -> bool:
        return self.week > 1

    @property
    def can_go_next(self) -> bool:
        return self.week < self.total_weeks

    def previous_week(self) -> int:
        if self.can_go_previous:
            self.week -= 1
        return self.week

    def next_week(self) -> int:
        if self.can_go_next:
            self.week += 1
        return self.week

    def go_to(self, week: int) -> int:
        """
        Select a week, clamped to 1..total_weeks.
        """
        self.week = min(max(1, week), self.total_weeks)
        return self.week

    def jump_to_today(self, today: date) -> int:
        self.week = current_week_index(self.anchor, today)
        return self.week

    def date_span(self) -> str:
        dates = self.dates
        return f"{format_month_day(dates[0])} - {format_month_day(dates[-1])}"
