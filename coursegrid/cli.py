"""
CLI (Command Line Interface).

Quick terminal commands, e.g.:

    coursegrid load <timetable.pdf>
    coursegrid week [N]
    coursegrid courses [N]
    coursegrid export-html <out.html> [N]
    coursegrid dump <timetable.pdf> [--raw]
    coursegrid interactive

Global options (before the command):
    --start YYYY-MM-DD   first day of the semester (week 1)
    --data PATH          schedule cache file
    --verbose            debug logging

Note:
- The interactive UI lives in coursegrid/interactive.py
- `load` caches the extracted schedule; the other commands read that cache
"""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from coursegrid.config import DAY_LABELS, DEFAULT_SEMESTER_START
from coursegrid.export_html import export_week_html
from coursegrid.extract import ExtractionError, extract_schedule, read_pdf_pages
from coursegrid.render import course_lines, print_week, schedule_title, week_summary
from coursegrid.session import TimetableSession
from coursegrid.storage import load_schedule, save_schedule

console = Console()


def _parse_date(text: str) -> date:
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date {text!r} (expected YYYY-MM-DD)") from None


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _open_session(args: argparse.Namespace) -> Optional[TimetableSession]:
    """
    Build a session from the cached schedule, or print a hint and return None.
    """
    schedule = load_schedule(args.data)
    if schedule is None:
        console.print("No schedule loaded. Run: coursegrid load <timetable.pdf>")
        return None
    return TimetableSession(args.start, schedule=schedule)


def _select_week(session: TimetableSession, args: argparse.Namespace) -> bool:
    """
    Select the requested week, or the current one if none was given.
    """
    if args.week is None:
        session.jump_to_current_week(args.today)
        return True

    if args.week < 1:
        console.print(f"Week must be >= 1 (got {args.week}).")
        return False

    selected = session.cursor.go_to(args.week)
    if selected != args.week:
        console.print(f"Week {args.week} is past the last week; showing week {selected}.")
    return True


def _cmd_load(args: argparse.Namespace) -> int:
    """
    Extract a timetable document and cache the result.
    """
    session = TimetableSession(args.start)

    with console.status("加载中..."):
        ok = session.load(args.path, today=args.today)

    if not ok:
        console.print(session.error, markup=False, highlight=False, soft_wrap=True)
        return 1

    assert session.schedule is not None
    out = save_schedule(session.schedule, args.data)

    console.print(schedule_title(session), markup=False)
    console.print(f"Courses: {len(session.schedule.courses)} | Weeks: {session.total_weeks}")
    console.print(f"Current week: {week_summary(session)}", markup=False)
    console.print(f"Saved to: {out}", markup=False, highlight=False)
    return 0


def _cmd_week(args: argparse.Namespace) -> int:
    """
    Print the timetable grid of one week.
    """
    session = _open_session(args)
    if session is None:
        return 1
    if not _select_week(session, args):
        return 1

    print_week(session, console, plain=args.plain)
    return 0


def _cmd_courses(args: argparse.Namespace) -> int:
    """
    List the courses that meet in one week.
    """
    session = _open_session(args)
    if session is None:
        return 1
    if not _select_week(session, args):
        return 1

    console.print(week_summary(session), markup=False)
    courses = sorted(session.active_courses(), key=lambda c: (c.day_of_week, c.start_section))
    for c in courses:
        day = DAY_LABELS[c.day_of_week - 1] if 1 <= c.day_of_week <= 7 else f"day {c.day_of_week}"
        when = f"{day} {c.start_section}-{c.end_section}节"
        line = f"- {when} | {' | '.join(course_lines(c))} | {c.weeks}"
        console.print(line, markup=False, highlight=False, soft_wrap=True)
    return 0


def _cmd_export_html(args: argparse.Namespace) -> int:
    """
    Export one week as an HTML table.
    """
    session = _open_session(args)
    if session is None:
        return 1
    if not _select_week(session, args):
        return 1

    out_path = Path(args.out)
    if out_path.suffix.lower() not in (".html", ".htm"):
        out_path = out_path.with_suffix(".html")

    written = export_week_html(session, out_path)
    console.print(f"Exported week {session.week} to: {written}", markup=False, highlight=False)
    return 0


def _print_plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _cmd_dump(args: argparse.Namespace) -> int:
    """
    Print everything extracted from a timetable document, without caching it.

    With --raw, print the text of each PDF page instead, exactly as the
    parser sees it.
    """
    if args.raw:
        try:
            pages = read_pdf_pages(args.path)
        except ExtractionError as e:
            _print_plain(str(e))
            return 1

        _print_plain(f"Pages: {len(pages)}")
        for n, text in enumerate(pages, start=1):
            _print_plain(f"\n===== Page {n} =====")
            _print_plain(text)
        return 0

    try:
        schedule = extract_schedule(args.path)
    except ExtractionError as e:
        _print_plain(str(e))
        return 1

    _print_plain(f"Student: {schedule.student_name} ({schedule.student_id})")
    _print_plain(f"Semester: {schedule.semester}")
    _print_plain(f"Courses: {len(schedule.courses)}")
    for n, c in enumerate(schedule.courses, start=1):
        _print_plain(f"\n[{n}] {c.name}")
        _print_plain(f"    teacher:  {c.teacher}")
        _print_plain(f"    location: {c.location}")
        _print_plain(f"    sections: {c.time_slot}")
        _print_plain(f"    weeks:    {c.weeks}")
        _print_plain(f"    day:      {c.day_of_week}")
        _print_plain(f"    start:    {c.start_section}")
        _print_plain(f"    end:      {c.end_section}")

    _print_plain("\n===== JSON =====")
    _print_plain(json.dumps(schedule.to_dict(), indent=2, ensure_ascii=False))
    return 0


def _add_week_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("week", type=int, nargs="?", default=None, help="Week number (default: current week)")
    p.add_argument("--today", type=_parse_date, default=date.today(), help="Pretend today is YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursegrid", description="Weekly course timetable viewer")
    parser.add_argument(
        "--start",
        type=_parse_date,
        default=DEFAULT_SEMESTER_START,
        help=f"Semester start date, week 1 (default: {DEFAULT_SEMESTER_START.isoformat()})",
    )
    parser.add_argument("--data", type=Path, default=None, help="Schedule cache file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_load = sub.add_parser("load", help="Extract a timetable PDF (or schedule JSON) and cache it")
    p_load.add_argument("path", type=str, help="Path to the timetable PDF or JSON")
    p_load.add_argument("--today", type=_parse_date, default=date.today(), help="Pretend today is YYYY-MM-DD")

    p_week = sub.add_parser("week", help="Show the timetable of one week")
    _add_week_args(p_week)
    p_week.add_argument("--plain", action="store_true", help="Plain text output (no colours/boxes)")

    p_courses = sub.add_parser("courses", help="List courses active in one week")
    _add_week_args(p_courses)

    p_export = sub.add_parser("export-html", help="Export one week as HTML")
    p_export.add_argument("out", type=str, help="Output file path (e.g. week.html)")
    _add_week_args(p_export)

    p_dump = sub.add_parser("dump", help="Print every course extracted from a timetable (nothing is cached)")
    p_dump.add_argument("path", type=str, help="Path to the timetable PDF or JSON")
    p_dump.add_argument("--raw", action="store_true", help="Print the raw text of each PDF page instead")

    sub.add_parser("interactive", help="Interactive week navigator")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "load":
        raise SystemExit(_cmd_load(args))
    if args.command == "week":
        raise SystemExit(_cmd_week(args))
    if args.command == "courses":
        raise SystemExit(_cmd_courses(args))
    if args.command == "export-html":
        raise SystemExit(_cmd_export_html(args))
    if args.command == "dump":
        raise SystemExit(_cmd_dump(args))

    if args.command == "interactive":
        from coursegrid.interactive import run_interactive

        session = TimetableSession(args.start, schedule=load_schedule(args.data))
        run_interactive(session, cache_path=args.data)
        raise SystemExit(0)

    raise SystemExit(2)
