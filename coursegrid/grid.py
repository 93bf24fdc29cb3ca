"""
Grid occupancy.

For every (day, section) cell of the displayed week decide one of:

- START:   a course begins here; the cell spans `rowspan` section rows
- COVERED: an earlier row's course still runs here; the cell is not drawn
- EMPTY:   nothing scheduled

Covered is checked first, so a covered cell is never drawn even if
another course (by data error) also starts there. Among several courses
starting in the same cell, the first one in the schedule's order wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from coursegrid.config import SECTIONS_PER_DAY
from coursegrid.model import Course
from coursegrid.weeks import course_active


class CellKind(Enum):
    START = "start"
    COVERED = "covered"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    course: Optional[Course] = None

    @property
    def rowspan(self) -> int:
        if self.kind is CellKind.START and self.course is not None:
            return self.course.rowspan
        return 1


EMPTY_CELL = Cell(CellKind.EMPTY)
COVERED_CELL = Cell(CellKind.COVERED)


def active_courses(courses: Sequence[Course], week: int) -> List[Course]:
    return [c for c in courses if course_active(c, week)]


def _is_covered(courses: Sequence[Course], day: int, section: int, week: int) -> bool:
    return any(
        c.day_of_week == day and c.start_section < section <= c.end_section and course_active(c, week) for c in courses
    )


def _course_starting_at(courses: Sequence[Course], day: int, section: int, week: int) -> Optional[Course]:
    for c in courses:
        if c.day_of_week == day and c.start_section == section and course_active(c, week):
            return c
    return None


def resolve_cell(courses: Sequence[Course], day: int, section: int, week: int) -> Cell:
    """
    Classify one cell of the week grid.
    """
    if _is_covered(courses, day, section, week):
        return COVERED_CELL

    course = _course_starting_at(courses, day, section, week)
    if course is not None:
        return Cell(CellKind.START, course)

    return EMPTY_CELL


def build_week_grid(courses: Sequence[Course], week: int, sections: int = SECTIONS_PER_DAY) -> List[List[Cell]]:
    """
    Rows for sections 1..N, each with 7 cells (Monday..Sunday).
    """
    return [[resolve_cell(courses, day, section, week) for day in range(1, 8)] for section in range(1, sections + 1)]
