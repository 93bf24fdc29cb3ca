"""
HTML export of one week of the timetable.

The page holds a single table: a header row with the seven days and their
dates, then one row per section. A course cell carries rowspan for the
sections it occupies and the cells it covers are left out of the rows below,
so the table stays rectangular.
"""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup

from coursegrid.config import DAY_LABELS
from coursegrid.cursor import format_month_day
from coursegrid.grid import CellKind
from coursegrid.render import course_lines, schedule_title, week_summary
from coursegrid.session import TimetableSession

_STYLE = """
table { border-collapse: collapse; width: 100%; font-family: sans-serif; }
th, td { border: 1px solid #ccc; padding: 4px 6px; vertical-align: top; }
th { background: #f0f0f0; }
td.course { background: #eef4ff; }
td.course .name { font-weight: bold; color: #1e3a8a; }
td.course .detail { color: #555; font-size: 0.85em; }
td.section { text-align: center; font-weight: bold; width: 3em; }
"""


def build_week_html(session: TimetableSession) -> BeautifulSoup:
    """
    Build the HTML document for the session's selected week.
    """
    soup = BeautifulSoup("<!DOCTYPE html><html><head></head><body></body></html>", "html.parser")

    meta = soup.new_tag("meta", attrs={"charset": "utf-8"})
    soup.head.append(meta)
    title = soup.new_tag("title")
    title.string = f"{schedule_title(session)} – 第 {session.week} 周"
    soup.head.append(title)
    style = soup.new_tag("style")
    style.string = _STYLE
    soup.head.append(style)

    h1 = soup.new_tag("h1")
    h1.string = schedule_title(session)
    soup.body.append(h1)
    summary = soup.new_tag("p", attrs={"class": "summary"})
    summary.string = week_summary(session)
    soup.body.append(summary)

    table = soup.new_tag("table")
    soup.body.append(table)

    thead = soup.new_tag("thead")
    table.append(thead)
    header_row = soup.new_tag("tr")
    thead.append(header_row)
    corner = soup.new_tag("th")
    corner.string = "节次"
    header_row.append(corner)
    for label, d in zip(DAY_LABELS, session.cursor.dates):
        th = soup.new_tag("th")
        th.append(label)
        th.append(soup.new_tag("br"))
        th.append(format_month_day(d))
        header_row.append(th)

    tbody = soup.new_tag("tbody")
    table.append(tbody)
    rows = session.grid()
    for section, row in enumerate(rows, start=1):
        tr = soup.new_tag("tr", attrs={"data-section": str(section)})
        tbody.append(tr)

        section_td = soup.new_tag("td", attrs={"class": "section"})
        section_td.string = str(section)
        tr.append(section_td)

        for day, cell in enumerate(row, start=1):
            if cell.kind is CellKind.COVERED:
                continue

            td = soup.new_tag("td", attrs={"data-day": str(day)})
            if cell.kind is CellKind.START and cell.course is not None:
                td["class"] = "course"
                # a course running past the last section stops at the table edge
                rowspan = min(cell.rowspan, len(rows) - section + 1)
                if rowspan > 1:
                    td["rowspan"] = str(rowspan)
                lines = course_lines(cell.course)
                name = soup.new_tag("div", attrs={"class": "name"})
                name.string = lines[0]
                td.append(name)
                for extra in lines[1:]:
                    detail = soup.new_tag("div", attrs={"class": "detail"})
                    detail.string = extra
                    td.append(detail)
            tr.append(td)

    return soup


def export_week_html(session: TimetableSession, out_path: str | Path) -> Path:
    """
    Write the selected week as an HTML file. Returns the written path.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(str(build_week_html(session)), encoding="utf-8")
    return out
