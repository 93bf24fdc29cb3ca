from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.text import Text

from coursegrid.export_html import export_week_html
from coursegrid.render import print_week, schedule_title, week_summary
from coursegrid.session import TimetableSession
from coursegrid.storage import save_schedule

console = Console()


def _println(msg: str = "") -> None:
    console.print(msg, markup=False, highlight=False)


def _prompt(msg: str) -> str:
    return console.input(msg)


def _print_header(session: TimetableSession) -> None:
    _println(f"\n=== {schedule_title(session)} ===")
    if session.error:
        console.print(Text(f"Error: {session.error}", style="bold red"))
        _println("(press [x] to dismiss)")
    if session.schedule is None:
        _println("No schedule loaded – use [l] to load a timetable PDF.")
        return
    _println(week_summary(session))


def _menu(session: TimetableSession) -> str:
    prev_label = "[p] Previous week" if session.cursor.can_go_previous else "[p] Previous week (first week)"
    next_label = "[n] Next week" if session.cursor.can_go_next else "[n] Next week (last week)"
    return (
        f"\n{prev_label}\n"
        f"{next_label}\n"
        "[t] Jump to current week\n"
        "[g] Go to week\n"
        "[l] Load timetable\n"
        "[s] Set semester start\n"
        "[e] Export week as HTML\n"
        "[0] Exit\n"
        "Select: "
    )


def run_interactive(
    session: TimetableSession,
    cache_path: Optional[Path] = None,
    today: Optional[date] = None,
) -> None:
    """
    Interactive week navigator: shows the grid of the selected week after
    every action.
    """
    today = today or date.today()
    if session.schedule is not None:
        session.jump_to_current_week(today)

    while True:
        _print_header(session)
        if session.schedule is not None:
            print_week(session, console)

        choice = _prompt(_menu(session)).strip().lower()

        if choice == "0":
            _println("Bye.")
            return

        if choice == "p":
            if not session.cursor.can_go_previous:
                _println("Already at the first week.")
            session.previous_week()
        elif choice == "n":
            if not session.cursor.can_go_next:
                _println("Already at the last week.")
            session.next_week()
        elif choice == "t":
            session.jump_to_current_week(today)
        elif choice == "g":
            _flow_go_to(session)
        elif choice == "l":
            _flow_load(session, cache_path, today)
        elif choice == "s":
            _flow_set_start(session, today)
        elif choice == "e":
            _flow_export(session)
        elif choice == "x":
            session.dismiss_error()
        else:
            _println("Invalid choice.")


def _flow_go_to(session: TimetableSession) -> None:
    pick = _prompt(f"Week (1-{session.cursor.total_weeks}): ").strip()
    if not pick.isdecimal():
        _println("Not a number.")
        return
    week = int(pick)
    if not (1 <= week <= session.cursor.total_weeks):
        _println("Out of range.")
        return
    session.cursor.go_to(week)


def _flow_load(session: TimetableSession, cache_path: Optional[Path], today: date) -> None:
    path = _prompt("Timetable PDF or JSON path [blank = back]: ").strip().strip('"')
    if not path:
        return

    if session.busy:
        _println("A timetable is already being loaded.")
        return

    with console.status("加载中..."):
        ok = session.load(path, today=today)

    if not ok:
        return

    assert session.schedule is not None
    out = save_schedule(session.schedule, cache_path)
    _println(f"Loaded {len(session.schedule.courses)} courses (saved to {out}).")


def _flow_set_start(session: TimetableSession, today: date) -> None:
    current = session.semester_start.isoformat()
    raw = _prompt(f"Semester start (YYYY-MM-DD) [{current}]: ").strip()
    if not raw:
        return
    try:
        session.semester_start = datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        _println("Invalid date.")
        return
    if session.schedule is not None:
        session.jump_to_current_week(today)


def _flow_export(session: TimetableSession) -> None:
    if session.schedule is None:
        _println("No schedule loaded.")
        return

    default_name = f"week{session.week:02d}.html"
    out_in = _prompt(f"Output file [{default_name}]: ").strip()
    out_path = Path(out_in) if out_in else Path(default_name)

    if out_path.suffix.lower() not in (".html", ".htm"):
        out_path = out_path.with_suffix(".html")

    written = export_week_html(session, out_path)
    _println(f"Saved to: {written.resolve()}")
