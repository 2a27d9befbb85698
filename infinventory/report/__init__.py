# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/report/__init__.py
from .writers import (
    REPORT_FORMATS,
    render,
    render_csv,
    render_json,
    render_table,
    render_yaml,
    write_report,
)

__all__ = [
    "REPORT_FORMATS",
    "render",
    "render_csv",
    "render_json",
    "render_table",
    "render_yaml",
    "write_report",
]
