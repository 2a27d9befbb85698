# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/report/writers.py
"""
Report rendering.

  json   records + summary + failures, lists kept as lists
  yaml   same document as json
  csv    one row per driver, FIELD_NAMES header, collections joined with ", "
  table  rich table on the console (compact column set)
"""
from __future__ import annotations

import csv
import io
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import yaml
from rich.console import Console
from rich.table import Table

from ..core.exceptions import EXIT_BAD_ARGS, Fatal
from ..core.logger import Log
from ..core.utils import U
from ..drivers.record import FIELD_NAMES
from ..orchestrator.orchestrator import BatchReport

logger = logging.getLogger("infinventory.report")

REPORT_FORMATS = ("table", "json", "csv", "yaml")

TABLE_COLUMNS = (
    "Name",
    "Manufacturer",
    "Provider",
    "ClassName",
    "Version",
    "Date",
    "IsSigned",
    "SupportedPlatforms",
    "SupportedOS",
)


def render_json(report: BatchReport) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False) + "\n"


def render_yaml(report: BatchReport) -> str:
    return yaml.safe_dump(report.to_dict(), sort_keys=False, default_flow_style=False, allow_unicode=True)


def render_csv(report: BatchReport) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(FIELD_NAMES), lineterminator="\n")
    writer.writeheader()
    for record in report.records:
        writer.writerow(record.to_row())
    return buf.getvalue()


def build_table(report: BatchReport) -> Table:
    columns: List[str] = list(TABLE_COLUMNS)
    if any(r.pnp_ids for r in report.records):
        columns.append("PNPIds")

    s = report.summary
    table = Table(
        title=f"Drivers under {report.root}",
        caption=f"{s['records']}/{s['total_inf']} drivers, {s['signed']} signed, {s['failures']} failed",
        row_styles=["dim", ""],
    )
    for col in columns:
        table.add_column(col, overflow="fold")
    for record in report.records:
        row = record.to_row()
        table.add_row(*(row[col] for col in columns))
    return table


def render_table(report: BatchReport, *, width: Optional[int] = None) -> str:
    console = Console(file=io.StringIO(), width=width or 200, force_terminal=False)
    console.print(build_table(report))
    for failure in report.failures:
        console.print(f"[red]failed[/red] {failure.path}: {failure.error}", markup=True, highlight=False)
    return console.file.getvalue()


def render(report: BatchReport, fmt: str) -> str:
    fmt = (fmt or "table").lower()
    if fmt == "json":
        return render_json(report)
    if fmt == "yaml":
        return render_yaml(report)
    if fmt == "csv":
        return render_csv(report)
    if fmt == "table":
        return render_table(report)
    raise Fatal(EXIT_BAD_ARGS, f"unknown report format: {fmt} (choose from {', '.join(REPORT_FORMATS)})")


def write_report(
    report: BatchReport,
    fmt: str = "table",
    output: Optional[str] = None,
    *,
    stream: Optional[TextIO] = None,
) -> None:
    """Write the rendered report to `output` (a file path) or to stdout."""
    if not output and (fmt or "table").lower() == "table":
        Console(file=stream or sys.stdout).print(build_table(report))
        for failure in report.failures:
            Log.warn(logger, f"{failure.path}: {failure.error}")
        return

    text = render(report, fmt)
    if output:
        out = Path(output).expanduser()
        U.ensure_dir(out.parent)
        out.write_text(text, encoding="utf-8")
        logger.info("📝 Report written: %s", out)
        return
    (stream or sys.stdout).write(text)
