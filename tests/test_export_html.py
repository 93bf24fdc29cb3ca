import tempfile
import unittest
from datetime import date
from pathlib import Path

from bs4 import BeautifulSoup

from coursegrid.export_html import build_week_html, export_week_html
from coursegrid.model import Course, CourseSchedule
from coursegrid.session import TimetableSession
from sample_data import SCHEDULE


def _session(week: int) -> TimetableSession:
    session = TimetableSession(date(2025, 9, 1), schedule=SCHEDULE)
    session.cursor.go_to(week)
    return session


class TestExportHTML(unittest.TestCase):
    def test_merged_cells_and_omitted_rows(self) -> None:
        soup = build_week_html(_session(5))

        rows = soup.select("tbody tr")
        self.assertEqual(len(rows), 12)

        # section cell + 7 days, minus cells covered from the row above
        counts = [len(r.find_all("td")) for r in rows]
        self.assertEqual(counts[:5], [8, 7, 7, 7, 8])
        self.assertTrue(all(n == 8 for n in counts[5:]))

        course_cells = soup.select("td.course")
        self.assertEqual(len(course_cells), 2)

        english = rows[0].select_one("td.course")
        self.assertEqual(english["data-day"], "1")
        self.assertEqual(english["rowspan"], "2")
        self.assertIn("大学英语", english.get_text())

        algebra = rows[1].select_one("td.course")
        self.assertEqual(algebra["data-day"], "3")
        self.assertEqual(algebra["rowspan"], "3")
        self.assertIn("赵老师", algebra.get_text())

    def test_header_dates(self) -> None:
        soup = build_week_html(_session(5))
        headers = [th.get_text(" ", strip=True) for th in soup.select("thead th")]
        self.assertEqual(len(headers), 8)
        self.assertEqual(headers[1], "周一 9/29")
        self.assertEqual(headers[7], "周日 10/5")
        self.assertIn("本周共 2 门课", soup.select_one("p.summary").get_text())

    def test_course_without_teacher_or_location(self) -> None:
        soup = build_week_html(_session(12))
        lab = soup.select_one("tr[data-section='7'] td.course")
        self.assertIsNotNone(lab)
        self.assertIn("物理实验", lab.get_text())
        self.assertEqual(lab["rowspan"], "2")
        self.assertEqual(lab.select("div.detail"), [])

    def test_rowspan_stops_at_last_section(self) -> None:
        late = Course("晚课", "钱老师", "教101", "1-16周", day_of_week=2, start_section=11, end_section=13)
        session = TimetableSession(date(2025, 9, 1), schedule=CourseSchedule(courses=(late,)))
        soup = build_week_html(session)

        cell = soup.select_one("tr[data-section='11'] td.course")
        self.assertEqual(cell["rowspan"], "2")
        rows = soup.select("tbody tr")
        self.assertEqual(len(rows), 12)
        self.assertEqual(len(rows[11].find_all("td")), 7)

    def test_export_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "sub" / "week.html"
            written = export_week_html(_session(1), out)
            self.assertEqual(written, out)
            text = out.read_text(encoding="utf-8")
            self.assertIn("<table>", text)
            self.assertIn("2025-2026学年第1学期", text)
            parsed = BeautifulSoup(text, "html.parser")
            self.assertEqual(len(parsed.select("tbody tr")), 12)


if __name__ == "__main__":
    unittest.main()
