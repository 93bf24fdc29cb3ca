"""
Active-weeks expressions.

A course's "weeks" field is a comma separated list of clauses such as

    "6-8周(双),9-18周"   -> weeks 6 and 8, then every week 9..18
    "3-11周(单), 13-18周" -> odd weeks 3..11, then every week 13..18
    "5周"               -> week 5 only

Each clause is matched against four forms, tried in this order
(the odd/even forms would otherwise also match as a plain range):

    <a>-<b>周(单)   odd weeks only
    <a>-<b>周(双)   even weeks only
    <a>-<b>周       every week
    <n>周           a single week

Clauses that match none of them are dropped without raising.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from coursegrid.config import DEFAULT_TOTAL_WEEKS
from coursegrid.model import Course, CourseSchedule, Parity, WeekRange

log = logging.getLogger(__name__)


# Order matters, see module docstring
_CLAUSE_PATTERNS: Tuple[Tuple[re.Pattern, Parity], ...] = (
    (re.compile(r"(\d+)-(\d+)周\(单\)", re.ASCII), Parity.ODD),
    (re.compile(r"(\d+)-(\d+)周\(双\)", re.ASCII), Parity.EVEN),
    (re.compile(r"(\d+)-(\d+)周", re.ASCII), Parity.NONE),
)
_SINGLE_WEEK = re.compile(r"(\d+)周", re.ASCII)


def _parse_clause(clause: str) -> Optional[WeekRange]:
    for pattern, parity in _CLAUSE_PATTERNS:
        m = pattern.search(clause)
        if m:
            start, end = int(m.group(1)), int(m.group(2))
            if start > end:
                return None
            return WeekRange(start, end, parity)

    m = _SINGLE_WEEK.search(clause)
    if m:
        week = int(m.group(1))
        return WeekRange(week, week)

    return None


@lru_cache(maxsize=1024)
def parse_weeks(expr: Optional[str]) -> Tuple[WeekRange, ...]:
    """
    Parse an active-weeks expression into week ranges (in clause order).

    Empty or missing input gives an empty tuple, i.e. a course that is
    never active. Results are cached per raw string.
    """
    if not expr:
        return ()

    ranges = []
    for part in expr.split(","):
        clause = part.strip()
        if not clause:
            continue
        week_range = _parse_clause(clause)
        if week_range is None:
            log.debug("Dropping unrecognised week clause %r in %r", clause, expr)
            continue
        ranges.append(week_range)

    return tuple(ranges)


def _parity_ok(week: int, parity: Parity) -> bool:
    if parity is Parity.ODD:
        return week % 2 == 1
    if parity is Parity.EVEN:
        return week % 2 == 0
    return True


def is_week_active(week: int, ranges: Iterable[WeekRange]) -> bool:
    """
    True if at least one range contains the week and allows its parity.
    """
    return any(r.start <= week <= r.end and _parity_ok(week, r.parity) for r in ranges)


def course_active(course: Course, week: int) -> bool:
    return is_week_active(week, parse_weeks(course.weeks))


def total_weeks(schedule: Optional[CourseSchedule]) -> int:
    """
    Highest week mentioned by any course, never less than 18.
    """
    max_week = DEFAULT_TOTAL_WEEKS
    if schedule is None:
        return max_week

    for course in schedule.courses:
        for r in parse_weeks(course.weeks):
            if r.end > max_week:
                max_week = r.end
    return max_week
