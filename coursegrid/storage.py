"""
Cache for the last extracted schedule.

This module manages the file:

    data/schedule.json   (or $COURSEGRID_DATA_DIR/schedule.json)

Extraction from a PDF is slow compared to everything else, so `coursegrid load`
stores the result here and the other commands read it back.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from coursegrid.config import default_schedule_path
from coursegrid.model import CourseSchedule

log = logging.getLogger(__name__)


def load_schedule(path: str | Path | None = None) -> Optional[CourseSchedule]:
    """
    Load the cached schedule.

    Returns None if the file does not exist or is invalid; a broken cache
    must never crash the application.
    """
    schedule_path = Path(path) if path is not None else default_schedule_path()

    # First run: nothing cached yet
    if not schedule_path.exists():
        return None

    try:
        data = json.loads(schedule_path.read_text(encoding="utf-8"))
        return CourseSchedule.from_dict(data)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
        log.warning("Ignoring unreadable schedule cache %s: %s", schedule_path, e)
        return None


def save_schedule(schedule: CourseSchedule, path: str | Path | None = None) -> Path:
    """
    Save a schedule as JSON. Creates parent directories if needed.
    """
    schedule_path = Path(path) if path is not None else default_schedule_path()
    schedule_path.parent.mkdir(parents=True, exist_ok=True)

    schedule_path.write_text(json.dumps(schedule.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    log.debug("Saved %d courses to %s", len(schedule.courses), schedule_path)
    return schedule_path
