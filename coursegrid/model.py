"""
Central data model definitions used across the project.

This module defines the canonical structure of Course, CourseSchedule and
WeekRange objects so that:
- the extractor, the grid resolver and the UI layers share the same field names
- the JSON schema written to the schedule cache stays stable
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class Parity(Enum):
    NONE = "none"
    ODD = "odd"
    EVEN = "even"


@dataclass(frozen=True)
class WeekRange:
    """
    One clause of an active-weeks expression, e.g. "3-11周(单)".

    Bounds are inclusive and start <= end always holds.
    """

    start: int
    end: int
    parity: Parity = Parity.NONE


def _str_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _int_field(data: Dict[str, Any], key: str) -> int:
    """
    Accepts an int, an integral float (3.0) or a decimal string ("3").
    """
    value = data.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    if value is None:
        raise ValueError(f"Missing integer field: {key!r}")
    raise ValueError(f"Invalid integer for {key!r}: {value!r}")


@dataclass(frozen=True)
class Course:
    """
    One scheduled class as it appears in a single cell block of the timetable.

    day_of_week is 1..7 (Monday=1), sections are 1-based and inclusive.
    """

    name: str
    teacher: str
    location: str
    weeks: str
    day_of_week: int
    start_section: int
    end_section: int
    time_slot: str = ""

    @property
    def rowspan(self) -> int:
        return self.end_section - self.start_section + 1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        return cls(
            name=_str_field(data, "name"),
            teacher=_str_field(data, "teacher"),
            location=_str_field(data, "location"),
            weeks=_str_field(data, "weeks"),
            day_of_week=_int_field(data, "day_of_week"),
            start_section=_int_field(data, "start_section"),
            end_section=_int_field(data, "end_section"),
            time_slot=_str_field(data, "time_slot"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "teacher": self.teacher,
            "location": self.location,
            "time_slot": self.time_slot,
            "weeks": self.weeks,
            "day_of_week": self.day_of_week,
            "start_section": self.start_section,
            "end_section": self.end_section,
        }


@dataclass(frozen=True)
class CourseSchedule:
    """
    Everything extracted from one timetable document.

    The order of courses matters: when two courses claim the same cell,
    the earlier one is shown.
    """

    student_name: str = ""
    student_id: str = ""
    semester: str = ""
    courses: Tuple[Course, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CourseSchedule":
        if not isinstance(data, dict):
            raise ValueError("Schedule must be a JSON object")
        raw_courses = data.get("courses") or []
        if not isinstance(raw_courses, list):
            raise ValueError("'courses' must be a list")
        if not all(isinstance(c, dict) for c in raw_courses):
            raise ValueError("Every course must be a JSON object")
        return cls(
            student_name=_str_field(data, "student_name"),
            student_id=_str_field(data, "student_id"),
            semester=_str_field(data, "semester"),
            courses=tuple(Course.from_dict(c) for c in raw_courses),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "student_name": self.student_name,
            "student_id": self.student_id,
            "semester": self.semester,
            "courses": [c.to_dict() for c in self.courses],
        }
