"""
Presentation state for one timetable viewing session.

Holds what the UI layers (CLI commands, interactive mode) need between
renders: the loaded schedule, the week cursor, the busy flag of the single
outstanding extraction and the error banner text. Everything shown on screen
is recomputed from this state on each render.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from coursegrid.cursor import WeekCursor
from coursegrid.extract import ExtractionError, extract_schedule
from coursegrid.grid import Cell, active_courses, build_week_grid
from coursegrid.model import Course, CourseSchedule
from coursegrid.weeks import total_weeks

log = logging.getLogger(__name__)

Extractor = Callable[[str], CourseSchedule]


class TimetableSession:
    def __init__(
        self,
        semester_start: date,
        schedule: Optional[CourseSchedule] = None,
        extractor: Extractor = extract_schedule,
    ) -> None:
        self.schedule = schedule
        self.extractor = extractor
        self.busy = False
        self.error = ""
        self.cursor = WeekCursor(semester_start, total_weeks=total_weeks(schedule))

    @property
    def semester_start(self) -> date:
        return self.cursor.semester_start

    @semester_start.setter
    def semester_start(self, value: date) -> None:
        self.cursor.semester_start = value

    @property
    def week(self) -> int:
        return self.cursor.week

    @property
    def total_weeks(self) -> int:
        return total_weeks(self.schedule)

    def set_schedule(self, schedule: Optional[CourseSchedule]) -> None:
        self.schedule = schedule
        self.cursor.total_weeks = self.total_weeks
        if self.cursor.week > self.cursor.total_weeks:
            self.cursor.week = self.cursor.total_weeks

    def load(self, path: str | Path, today: Optional[date] = None) -> bool:
        """
        Run the extractor on `path` and jump to the current week.

        Refused (returns False) while another extraction is in flight. On
        failure the error message is kept verbatim in `self.error` and no
        schedule remains loaded.
        """
        if self.busy:
            log.info("Extraction already in progress; ignoring request for %s", path)
            return False

        self.busy = True
        self.error = ""
        try:
            schedule = self.extractor(str(path))
        except ExtractionError as e:
            self.error = str(e)
            self.set_schedule(None)
            return False
        finally:
            self.busy = False

        self.set_schedule(schedule)
        self.jump_to_current_week(today or date.today())
        return True

    def dismiss_error(self) -> None:
        self.error = ""

    def jump_to_current_week(self, today: date) -> int:
        self.cursor.jump_to_today(today)
        return self.cursor.go_to(self.cursor.week)

    def previous_week(self) -> int:
        return self.cursor.previous_week()

    def next_week(self) -> int:
        return self.cursor.next_week()

    def courses(self) -> List[Course]:
        return list(self.schedule.courses) if self.schedule else []

    def active_courses(self) -> List[Course]:
        return active_courses(self.courses(), self.week)

    def grid(self) -> List[List[Cell]]:
        return build_week_grid(self.courses(), self.week)
