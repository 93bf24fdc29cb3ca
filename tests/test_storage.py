"""
Unit tests for the schedule cache.

Storage contract:
- Missing/invalid file -> None
- JSON schema matches the extractor output (student_name, student_id, semester, courses)
"""

import json
import tempfile
import unittest
from pathlib import Path

from coursegrid.storage import load_schedule, save_schedule
from sample_data import SCHEDULE


class TestStorage(unittest.TestCase):
    def test_load_missing_file_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "missing.json"
            self.assertIsNone(load_schedule(p))

    def test_save_and_load_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "schedule.json"
            save_schedule(SCHEDULE, p)
            loaded = load_schedule(p)
            self.assertEqual(loaded, SCHEDULE)

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data["student_id"], "252712004")
            self.assertEqual(data["courses"][0]["weeks"], "1-16周")
            # non-ASCII kept readable
            self.assertIn("线性代数", p.read_text(encoding="utf-8"))

    def test_corrupt_file_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "schedule.json"
            p.write_text("[1, 2", encoding="utf-8")
            self.assertIsNone(load_schedule(p))

    def test_wrong_shape_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "schedule.json"
            p.write_text(json.dumps({"courses": "nope"}), encoding="utf-8")
            self.assertIsNone(load_schedule(p))

    def test_non_finite_number_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "schedule.json"
            data = SCHEDULE.to_dict()
            data["courses"][0]["end_section"] = float("inf")
            p.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            self.assertIsNone(load_schedule(p))


if __name__ == "__main__":
    unittest.main()
