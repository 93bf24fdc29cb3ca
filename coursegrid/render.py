"""
Terminal rendering of the week grid.

Rich tables cannot merge rows, so a course is printed in the row where it
starts and the rows it still covers show a continuation marker instead of
being left out.
"""

from __future__ import annotations

from typing import List

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from coursegrid.config import DAY_LABELS
from coursegrid.cursor import format_month_day
from coursegrid.grid import Cell, CellKind
from coursegrid.model import Course
from coursegrid.session import TimetableSession

CONTINUATION = "┆"


def week_summary(session: TimetableSession) -> str:
    """
    '第 3 周 | 9/15 - 9/21 | 本周共 5 门课'
    """
    n = len(session.active_courses())
    return f"第 {session.week} 周 | {session.cursor.date_span()} | 本周共 {n} 门课"


def schedule_title(session: TimetableSession) -> str:
    sched = session.schedule
    if sched is None:
        return "课程表"
    owner = sched.student_name
    if sched.student_id:
        owner = f"{owner} ({sched.student_id})" if owner else sched.student_id
    title = f"{sched.semester} 课程表".strip()
    return f"{title} – {owner}" if owner else title


def day_headers(session: TimetableSession) -> List[str]:
    return [f"{label}\n{format_month_day(d)}" for label, d in zip(DAY_LABELS, session.cursor.dates)]


def course_lines(course: Course) -> List[str]:
    lines = [course.name]
    if course.teacher:
        lines.append(course.teacher)
    if course.location:
        lines.append(course.location)
    return lines


def _cell_text(cell: Cell) -> Text:
    if cell.kind is CellKind.START and cell.course is not None:
        lines = course_lines(cell.course)
        text = Text(lines[0], style="bold blue")
        for extra in lines[1:]:
            text.append("\n" + extra, style="dim")
        return text
    if cell.kind is CellKind.COVERED:
        return Text(CONTINUATION, style="blue", justify="center")
    return Text("")


def build_week_table(session: TimetableSession) -> Table:
    table = Table(title=week_summary(session), box=box.SQUARE, show_lines=True)
    table.add_column("节次", justify="center", style="bold")
    for header in day_headers(session):
        table.add_column(header, justify="left", overflow="fold")

    for section, row in enumerate(session.grid(), start=1):
        table.add_row(str(section), *[_cell_text(cell) for cell in row])

    return table


def render_plain(session: TimetableSession, col_width: int = 14) -> str:
    """
    Plain text grid (no colours, fixed column width).
    """
    out: List[str] = [schedule_title(session), week_summary(session)]

    headers = ["节次"] + [h.replace("\n", " ") for h in day_headers(session)]
    header = " | ".join(h[:col_width].ljust(col_width) for h in headers)
    out.append(header)
    out.append("-" * len(header))

    for section, row in enumerate(session.grid(), start=1):
        parts = [str(section).ljust(col_width)]
        for cell in row:
            if cell.kind is CellKind.START and cell.course is not None:
                txt = cell.course.name
            elif cell.kind is CellKind.COVERED:
                txt = CONTINUATION
            else:
                txt = ""
            parts.append(txt[:col_width].ljust(col_width))
        out.append(" | ".join(parts))

    return "\n".join(out)


def print_week(session: TimetableSession, console: Console, plain: bool = False) -> None:
    if plain:
        console.print(render_plain(session), markup=False, highlight=False, soft_wrap=True)
        return

    console.print(Text(schedule_title(session), style="bold"))
    console.print(build_week_table(session))
