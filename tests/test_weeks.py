"""
Unit tests for active-weeks parsing and week membership.

Grammar (per comma separated clause, first match wins):
- "a-b周(单)" odd weeks, "a-b周(双)" even weeks, "a-b周" every week, "n周" one week
- anything else is dropped without error
"""

import unittest

from coursegrid.model import Course, CourseSchedule, Parity, WeekRange
from coursegrid.weeks import course_active, is_week_active, parse_weeks, total_weeks


def _course(weeks: str) -> Course:
    return Course("C", "", "", weeks, 1, 1, 2)


class TestParseWeeks(unittest.TestCase):
    def test_empty_and_missing(self) -> None:
        self.assertEqual(parse_weeks(""), ())
        self.assertEqual(parse_weeks(None), ())

    def test_plain_range(self) -> None:
        self.assertEqual(parse_weeks("1-16周"), (WeekRange(1, 16, Parity.NONE),))

    def test_odd_range(self) -> None:
        ranges = parse_weeks("3-11周(单)")
        self.assertEqual(ranges, (WeekRange(3, 11, Parity.ODD),))
        self.assertFalse(is_week_active(4, ranges))
        self.assertTrue(is_week_active(5, ranges))

    def test_even_and_plain_clauses(self) -> None:
        ranges = parse_weeks("6-8周(双),9-18周")
        self.assertEqual(ranges, (WeekRange(6, 8, Parity.EVEN), WeekRange(9, 18, Parity.NONE)))
        self.assertFalse(is_week_active(7, ranges))
        self.assertTrue(is_week_active(6, ranges))
        self.assertTrue(is_week_active(12, ranges))

    def test_single_week(self) -> None:
        self.assertEqual(parse_weeks("5周"), (WeekRange(5, 5, Parity.NONE),))

    def test_whitespace_around_clauses(self) -> None:
        ranges = parse_weeks(" 3-11周(单) ,  13-18周 ")
        self.assertEqual(ranges, (WeekRange(3, 11, Parity.ODD), WeekRange(13, 18, Parity.NONE)))

    def test_mixed_single_weeks_and_ranges(self) -> None:
        ranges = parse_weeks("6周,11周,14-18周")
        self.assertEqual(ranges, (WeekRange(6, 6), WeekRange(11, 11), WeekRange(14, 18)))

    def test_unrecognised_clause_is_dropped(self) -> None:
        ranges = parse_weeks("1-4,第五周,7-9周")
        self.assertEqual(ranges, (WeekRange(7, 9),))

    def test_only_garbage_gives_no_ranges(self) -> None:
        self.assertEqual(parse_weeks("every week"), ())

    def test_inverted_range_is_dropped(self) -> None:
        self.assertEqual(parse_weeks("11-3周"), ())

    def test_results_are_cached(self) -> None:
        self.assertIs(parse_weeks("2-10周(双)"), parse_weeks("2-10周(双)"))


class TestIsWeekActive(unittest.TestCase):
    def test_no_ranges_never_active(self) -> None:
        self.assertFalse(is_week_active(1, ()))

    def test_bounds_are_inclusive(self) -> None:
        ranges = (WeekRange(3, 5),)
        self.assertFalse(is_week_active(2, ranges))
        self.assertTrue(is_week_active(3, ranges))
        self.assertTrue(is_week_active(5, ranges))
        self.assertFalse(is_week_active(6, ranges))

    def test_course_active(self) -> None:
        course = _course("1-8周(双)")
        self.assertTrue(course_active(course, 2))
        self.assertFalse(course_active(course, 3))
        self.assertFalse(course_active(_course(""), 1))


class TestTotalWeeks(unittest.TestCase):
    def test_no_schedule(self) -> None:
        self.assertEqual(total_weeks(None), 18)

    def test_floor_is_18(self) -> None:
        schedule = CourseSchedule(courses=(_course("1-12周"),))
        self.assertEqual(total_weeks(schedule), 18)

    def test_max_end_above_18(self) -> None:
        schedule = CourseSchedule(courses=(_course("1-16周"), _course("3-19周(单),20周")))
        self.assertEqual(total_weeks(schedule), 20)


if __name__ == "__main__":
    unittest.main()
