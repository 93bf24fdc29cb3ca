import io
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import date
from pathlib import Path
from unittest import mock

from coursegrid.extract import ExtractionError
from coursegrid.interactive import run_interactive
from coursegrid.session import TimetableSession
from sample_data import SCHEDULE

START = date(2025, 9, 1)


def _drive(session: TimetableSession, answers: list, **kwargs) -> str:
    buf = io.StringIO()
    with redirect_stdout(buf), mock.patch("coursegrid.interactive._prompt", side_effect=answers):
        run_interactive(session, **kwargs)
    return buf.getvalue()


class TestInteractive(unittest.TestCase):
    def test_navigation(self) -> None:
        session = TimetableSession(START, schedule=SCHEDULE)
        _drive(session, ["n", "n", "p", "0"], today=date(2025, 9, 16))
        self.assertEqual(session.week, 4)

    def test_previous_at_first_week(self) -> None:
        session = TimetableSession(START, schedule=SCHEDULE)
        out = _drive(session, ["p", "0"], today=START)
        self.assertEqual(session.week, 1)
        self.assertIn("Already at the first week.", out)

    def test_go_to_and_export(self) -> None:
        session = TimetableSession(START, schedule=SCHEDULE)
        with tempfile.TemporaryDirectory() as d:
            out_file = Path(d) / "w7"
            _drive(session, ["g", "7", "e", str(out_file), "0"], today=START)
            self.assertEqual(session.week, 7)
            self.assertTrue((Path(d) / "w7.html").exists())

    def test_failed_load_shows_error_until_dismissed(self) -> None:
        def fail(path: str):
            raise ExtractionError("PDF 损坏")

        session = TimetableSession(START, extractor=fail)
        out = _drive(session, ["l", "bad.pdf", "x", "0"], today=START)
        self.assertIn("Error: PDF 损坏", out)
        self.assertEqual(session.error, "")
        self.assertIsNone(session.schedule)

    def test_load_saves_cache(self) -> None:
        session = TimetableSession(START, extractor=lambda path: SCHEDULE)
        with tempfile.TemporaryDirectory() as d:
            cache = Path(d) / "schedule.json"
            _drive(session, ["l", "a.pdf", "0"], cache_path=cache, today=date(2025, 9, 16))
            self.assertTrue(cache.exists())
        self.assertEqual(session.week, 3)

    def test_set_semester_start_recomputes_week(self) -> None:
        session = TimetableSession(START, schedule=SCHEDULE)
        _drive(session, ["s", "2025-09-08", "0"], today=date(2025, 9, 16))
        self.assertEqual(session.semester_start, date(2025, 9, 8))
        self.assertEqual(session.week, 2)


if __name__ == "__main__":
    unittest.main()
