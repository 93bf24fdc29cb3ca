"""
Paths and defaults shared by the CLI, the interactive mode and the extractor.

The data directory can be moved with the COURSEGRID_DATA_DIR environment
variable (useful for tests and for keeping the cache outside the package).
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path


PACKAGE_DIR = Path(__file__).resolve().parent


def data_dir() -> Path:
    """
    Return the directory that holds the cached schedule.
    """
    override = os.environ.get("COURSEGRID_DATA_DIR", "").strip()
    if override:
        return Path(override)
    return PACKAGE_DIR / "data"


def default_schedule_path() -> Path:
    return data_dir() / "schedule.json"


# First day of the default term (week 1)
DEFAULT_SEMESTER_START = date(2025, 9, 1)

SECTIONS_PER_DAY = 12
DEFAULT_TOTAL_WEEKS = 18

# The timetable PDF never has more pages than this
MAX_PDF_PAGES = 10

DAY_LABELS = ["周一", "周二", "周三", "周四", "周五", "周六", "周日"]
