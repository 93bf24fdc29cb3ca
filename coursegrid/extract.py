"""
Extraction (timetable document -> CourseSchedule).

Supported inputs:
- the personal timetable PDF exported by the academic affairs system
  (text is pulled with pdfplumber, then parsed line by line)
- a JSON file holding a previously exported schedule

The PDF text comes out in this order:
    1. the day headers 星期一 .. 星期日, one per line
    2. a section number (1..12), followed by the course blocks of that
       section row, Monday to Sunday
    3. the next section number, and so on

A course block starts with a line carrying ★ or ▲ (the course name) and
continues with detail lines such as

    (1-2节)6-8周(双),9-18周/校区:仙林/场地:教201/教师:王老师/...

Any failure is raised as ExtractionError with a message fit for the user.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pdfplumber

from coursegrid.config import MAX_PDF_PAGES
from coursegrid.model import Course, CourseSchedule

log = logging.getLogger(__name__)


DAY_HEADERS = ["星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日"]
COURSE_MARKERS = ("★", "▲")
PERIOD_MARKERS = ("上午", "下午", "晚上")
SKIP_MARKERS = ("其他课程", "打印时间", "上午", "下午", "晚上", "时间段")


class ExtractionError(Exception):
    """The document could not be turned into a schedule."""

    pass


# ---------------------------------------------------------------------------
# Header helpers
# ---------------------------------------------------------------------------


def _is_chinese_char(c: str) -> bool:
    return "\u4e00" <= c <= "\u9fff"


def extract_semester(line: str) -> str:
    """
    '2025-2026学年第1学期 ...' -> '2025-2026学年第1学期'
    """
    for i, c in enumerate(line):
        if c.isdigit():
            rest = line[i:]
            end = rest.find("学期")
            if end != -1:
                return rest[: end + len("学期")]
            break
    return ""


def extract_student_info(line: str) -> Optional[Tuple[str, str]]:
    """
    '张三课表 学号：252712004' -> ('张三', '252712004')

    Returns None when neither a name nor an id is present.
    """
    name = ""
    student_id = ""

    id_pos = line.find("学号")
    if id_pos != -1:
        after = line[id_pos + len("学号") :]
        colons = [pos for pos in (after.find("："), after.find(":")) if pos != -1]
        if colons:
            digits = []
            for c in after[min(colons) + 1 :].lstrip():
                if not c.isdigit():
                    break
                digits.append(c)
            student_id = "".join(digits)

    ke_pos = line.find("课表")
    if ke_pos != -1:
        chars = []
        for c in line[:ke_pos]:
            if _is_chinese_char(c):
                chars.append(c)
            elif chars:
                break
        name = "".join(chars)

    if name or student_id:
        return name, student_id
    return None


# ---------------------------------------------------------------------------
# Course blocks
# ---------------------------------------------------------------------------


def _value_after(info: str, label: str) -> Optional[str]:
    pos = info.find(label)
    if pos == -1:
        return None
    return info[pos + len(label) :].split("/", 1)[0].strip()


def parse_course_block(text: str, day: int, section: int) -> Optional[Course]:
    """
    Parses one course block (name line + detail lines) into a Course.
    """
    lines = text.splitlines()
    if not lines:
        return None

    name = lines[0]
    for marker in COURSE_MARKERS:
        name = name.replace(marker, "")
    name = name.strip()
    if not name:
        return None

    teacher = ""
    location = ""
    time_slot = ""
    weeks = ""
    start_section = section
    end_section = section

    for raw in lines[1:]:
        info = raw.strip()

        # "(1-2节)6周,11周,14-18周/..."
        open_pos = info.find("(")
        close_pos = info.find("节)")
        if open_pos != -1 and close_pos != -1 and open_pos < close_pos:
            time_slot = info[open_pos + 1 : close_pos + len("节")]
            if "-" in time_slot:
                first, rest = time_slot.split("-", 1)
                if first.isdecimal():
                    start_section = int(first)
                last = rest.split("节", 1)[0]
                if last.isdecimal():
                    end_section = int(last)
            weeks = info[close_pos + len("节)") :].split("/", 1)[0].strip()

        value = _value_after(info, "教师:")
        if value is not None:
            teacher = value

        value = _value_after(info, "场地:")
        if value is not None:
            location = value

    return Course(
        name=name,
        teacher=teacher,
        location=location,
        weeks=weeks,
        day_of_week=day,
        start_section=start_section,
        end_section=end_section,
        time_slot=time_slot,
    )


def _is_section_line(line: str) -> bool:
    return 0 < len(line) <= 3 and line.isdecimal()


def _is_course_line(line: str) -> bool:
    return any(m in line for m in COURSE_MARKERS)


# ---------------------------------------------------------------------------
# Whole document
# ---------------------------------------------------------------------------


def _parse_header(lines: List[str]) -> Tuple[str, str, str]:
    semester = ""
    student_name = ""
    student_id = ""

    for i, line in enumerate(lines):
        if "学年第" in line and "学期" in line:
            semester = extract_semester(line)

        if "课表" in line:
            info = extract_student_info(line)
            if info:
                student_name = info[0]

        if "学号：" in line or "学号:" in line:
            info = extract_student_info(line)
            if info:
                if info[0]:
                    student_name = info[0]
                student_id = info[1]
            # name may sit on the line above
            if i > 0 and not student_name and "课表" in lines[i - 1]:
                prev = extract_student_info(lines[i - 1])
                if prev:
                    student_name = prev[0]

    return semester, student_name, student_id


def parse_schedule_text(text: str) -> CourseSchedule:
    """
    Parses the extracted text of a timetable document.

    A document without the day header row yields a schedule with no courses.
    """
    lines = text.splitlines()
    semester, student_name, student_id = _parse_header(lines)

    header_idx = next((i for i, line in enumerate(lines) if line.strip() == "星期一"), None)
    if header_idx is None:
        log.warning("No day header found in document; no courses extracted")
        return CourseSchedule(student_name, student_id, semester, ())

    day_count = 0
    for offset, day in enumerate(DAY_HEADERS):
        idx = header_idx + offset
        if idx < len(lines) and lines[idx].strip() == day:
            day_count += 1
        else:
            break

    courses: List[Course] = []
    current_section = 0
    blocks: List[Tuple[int, str]] = []  # (day, block text) of the current section row

    def flush() -> None:
        for day, block in blocks:
            course = parse_course_block(block, day, current_section)
            if course is not None:
                courses.append(course)
        blocks.clear()

    i = header_idx + day_count
    while i < len(lines):
        line = lines[i].strip()

        if not line or any(m in line for m in SKIP_MARKERS):
            i += 1
            continue

        if _is_section_line(line):
            flush()
            section = int(line)
            if 1 <= section <= 12:
                current_section = section
            i += 1
            continue

        if _is_course_line(line) and ": 理论" not in line:
            block_lines = [line]
            j = i + 1
            while j < len(lines):
                nxt = lines[j].strip()
                if not nxt:
                    j += 1
                    continue
                if _is_course_line(nxt) or _is_section_line(nxt) or any(m in nxt for m in PERIOD_MARKERS):
                    break
                block_lines.append(nxt)
                j += 1

            day = len(blocks) % 7 + 1
            blocks.append((day, "\n".join(block_lines)))
            i = j
            continue

        i += 1

    flush()

    log.info("Extracted %d courses for %s (%s)", len(courses), student_name or "?", semester or "?")
    return CourseSchedule(student_name, student_id, semester, tuple(courses))


def _read_pdf_pages(path: Path) -> List[str]:
    with pdfplumber.open(path) as pdf:
        return [page.extract_text() or "" for page in pdf.pages[:MAX_PDF_PAGES]]


def _read_pdf_text(path: Path) -> str:
    chunks = [text for text in _read_pdf_pages(path) if text.strip()]
    return "\n".join(chunks) + "\n" if chunks else ""


def read_pdf_pages(path: str | Path) -> List[str]:
    """
    Raw text of each PDF page, as pdfplumber returns it (for debugging the
    line heuristics of parse_schedule_text against a real document).
    """
    p = Path(path)
    if not p.is_file():
        raise ExtractionError(f"File not found: {p}")
    try:
        return _read_pdf_pages(p)
    except Exception as e:
        raise ExtractionError(f"Failed to read PDF {p}: {e}") from e


def _load_json_schedule(path: Path) -> CourseSchedule:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ExtractionError(f"Cannot read schedule JSON {path}: {e}") from e
    try:
        return CourseSchedule.from_dict(data)
    except ValueError as e:
        raise ExtractionError(f"Invalid schedule JSON {path}: {e}") from e


def extract_schedule(path: str | Path) -> CourseSchedule:
    """
    Turns a timetable document (PDF or JSON) into a CourseSchedule.

    Raises ExtractionError on any failure.
    """
    p = Path(path)
    if not p.is_file():
        raise ExtractionError(f"File not found: {p}")

    if p.suffix.lower() == ".json":
        return _load_json_schedule(p)

    log.debug("Reading PDF %s", p)
    try:
        text = _read_pdf_text(p)
    except Exception as e:
        # pdfplumber/pdfminer raise a variety of exception types for broken files
        raise ExtractionError(f"Failed to read PDF {p}: {e}") from e

    if not text.strip():
        raise ExtractionError(f"No text found in PDF {p}")

    return parse_schedule_text(text)
