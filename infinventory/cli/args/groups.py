# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/cli/args/groups.py
from __future__ import annotations

import argparse

from ...drivers.signing import DEFAULT_SIGNING_TIMEOUT, SIGNING_BACKENDS
from ...orchestrator.orchestrator import WORKERS_ENV
from ...report.writers import REPORT_FORMATS


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Global config/logging (two-phase parse relies on these)
    # ------------------------------------------------------------------
    from ... import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged normalized config and exit.")
    p.add_argument("--dump-args", action="store_true", help="Print final parsed args and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv, -vvv (trace)")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less output: -q warnings, -qq errors only")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as JSON lines (NDJSON).")


def _add_input_paths(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    p.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Driver folder to inventory (searched recursively for .inf files), or a single .inf file.",
    )
    p.add_argument(
        "--capture-comments",
        dest="capture_comments",
        action="store_true",
        help="Keep ';' comment lines while parsing (only visible at -vvv).",
    )


def _add_resolution(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    p.add_argument(
        "--list-pnp-ids",
        dest="list_pnp_ids",
        action="store_true",
        help="Include every supported hardware ID in the report.",
    )
    p.add_argument(
        "--signing",
        dest="signing",
        default="auto",
        choices=list(SIGNING_BACKENDS),
        help="Signing check: auto (osslsigncode if installed), none, osslsigncode.",
    )
    p.add_argument(
        "--signing-timeout",
        dest="signing_timeout",
        type=float,
        default=DEFAULT_SIGNING_TIMEOUT,
        help="Seconds allowed per signing check.",
    )
    p.add_argument(
        "--workers",
        dest="workers",
        type=int,
        default=None,
        help=f"Worker threads (default: ${WORKERS_ENV}, else min(4, cpus)).",
    )


def _add_output(p: argparse.ArgumentParser) -> None:
    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    p.add_argument("--format", dest="format", default="table", choices=list(REPORT_FORMATS), help="Report format.")
    p.add_argument("-o", "--output", dest="output", default=None, help="Write the report to this file (default: stdout).")
