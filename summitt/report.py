"""Sorting, top-N selection and rendering of box contents.

Reporting runs once per box after ingestion, in box declaration order, and
never mutates a box. Rows are sorted ascending on the selected field unless
``reverse`` is set. The top-N window keeps the *tail* of an ascending list and
the *head* of a reversed one, so both directions surface the largest entries.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import IO, Any, Dict, List, Optional, Sequence

import pandas as pd

from summitt.box import Box
from summitt.config import RunConfig, SortField
from summitt.utils.humanize import human_bytes

#: Keys longer than this are cut in text output.
MAX_KEY_WIDTH = 80


@dataclass(frozen=True, slots=True)
class ReportRow:
    """One key's statistics as shown in a report."""

    key: str
    sum: int
    count: int
    ratio: int
    max: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BoxReport:
    """Selected rows of one box.

    Attributes:
        index: 1-based box position.
        pattern: Pattern text of the box.
        keys: Number of distinct keys in the box before truncation.
        window: Applied top-N size, or 0 when all rows are kept.
        rows: Surviving rows in report order.
    """

    index: int
    pattern: str
    keys: int
    window: int
    rows: List[ReportRow]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "pattern": self.pattern,
            "keys": self.keys,
            "window": self.window,
            "rows": [row.to_dict() for row in self.rows],
        }


def box_rows(box: Box) -> List[ReportRow]:
    """Materialize a box's mapping in key insertion order."""
    return [
        ReportRow(key=key, sum=agg.sum, count=agg.count, ratio=agg.ratio, max=agg.max)
        for key, agg in box.items()
    ]


def sort_rows(
    rows: Sequence[ReportRow], sort_field: SortField, reverse: bool = False
) -> List[ReportRow]:
    """Order rows by ``sort_field``; ties keep insertion order.

    ``SortField.NONE`` returns the rows unchanged and ignores ``reverse``.
    """
    if sort_field == SortField.NONE:
        return list(rows)
    attr = sort_field.name.lower()
    return sorted(rows, key=lambda row: getattr(row, attr), reverse=reverse)


def select_top(rows: Sequence[ReportRow], top: int, reverse: bool) -> List[ReportRow]:
    """Apply the top-N window to already sorted rows.

    With ``0 < top < len(rows)`` the last ``top`` rows are kept, or the first
    ``top`` rows when ``reverse`` is set. Otherwise all rows are kept.
    """
    if top <= 0 or top >= len(rows):
        return list(rows)
    if reverse:
        return list(rows[:top])
    return list(rows[-top:])


def build_box_report(index: int, box: Box, config: RunConfig) -> BoxReport:
    rows = sort_rows(box_rows(box), config.sort_field, config.reverse)
    selected = select_top(rows, config.top, config.reverse)
    window = config.window if len(selected) < len(rows) else 0
    return BoxReport(
        index=index,
        pattern=box.pattern,
        keys=len(rows),
        window=window,
        rows=selected,
    )


def build_report(boxes: Sequence[Box], config: RunConfig) -> List[BoxReport]:
    """Build reports for all boxes in declaration order.

    Empty boxes are left out when ``config.skip_empty`` is set.
    """
    reports: List[BoxReport] = []
    for index, box in enumerate(boxes, start=1):
        if config.skip_empty and len(box) == 0:
            continue
        reports.append(build_box_report(index, box, config))
    return reports


def format_row(row: ReportRow) -> str:
    """Fixed-width text row: sum, human-readable sum, count, key."""
    return (
        f"{row.sum:15d} {human_bytes(row.sum):>9} {row.count:5d} "
        f"{row.key[:MAX_KEY_WIDTH]}"
    )


def format_header(report: BoxReport) -> List[str]:
    total = f"# = {report.keys}"
    if report.window:
        total += f" (top {report.window})"
    return [f"# #{report.index}", f"# =~ {report.pattern}", total]


def render_box(report: BoxReport, verbose: bool = True) -> List[str]:
    lines: List[str] = []
    if verbose:
        lines.extend(format_header(report))
    lines.extend(format_row(row) for row in report.rows)
    if verbose:
        lines.append("")
    return lines


def render_report(
    reports: Sequence[BoxReport], verbose: bool = True, out: Optional[IO[str]] = None
) -> str:
    """Render all box reports as text; also write it to ``out`` when given."""
    lines: List[str] = []
    for report in reports:
        lines.extend(render_box(report, verbose))
    text = "".join(line + "\n" for line in lines)
    if out is not None:
        out.write(text)
    return text


def report_to_dict(reports: Sequence[BoxReport]) -> Dict[str, Any]:
    """JSON-safe representation of all box reports."""
    return {"boxes": [report.to_dict() for report in reports]}


def report_to_dataframe(reports: Sequence[BoxReport]) -> pd.DataFrame:
    """One DataFrame row per reported key, tagged with its box."""
    columns = ["box", "pattern", "key", "sum", "count", "ratio", "max"]
    records = [
        {"box": report.index, "pattern": report.pattern, **row.to_dict()}
        for report in reports
        for row in report.rows
    ]
    return pd.DataFrame(records, columns=columns)
