# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/cli/args/validators.py
from __future__ import annotations

import argparse
from typing import Any, Dict

from ...drivers.signing import SIGNING_BACKENDS
from ...report.writers import REPORT_FORMATS


def _require(v: Any) -> bool:
    """True if v is meaningfully present (treats empty/whitespace-only strings as missing)."""
    if v is None:
        return False
    if isinstance(v, str):
        return v.strip() != ""
    return True


def _validate_choices(args: argparse.Namespace) -> None:
    # Config-provided defaults bypass argparse `choices`.
    fmt = str(getattr(args, "format", "table") or "table").lower()
    if fmt not in REPORT_FORMATS:
        raise SystemExit(f"format must be one of {', '.join(REPORT_FORMATS)}, got: {fmt}")
    args.format = fmt

    signing = str(getattr(args, "signing", "auto") or "auto").lower()
    if signing not in SIGNING_BACKENDS:
        raise SystemExit(f"signing must be one of {', '.join(SIGNING_BACKENDS)}, got: {signing}")
    args.signing = signing


def _validate_numbers(args: argparse.Namespace) -> None:
    workers = getattr(args, "workers", None)
    if workers is not None:
        try:
            args.workers = int(workers)
        except (TypeError, ValueError):
            raise SystemExit(f"workers must be an integer, got: {workers!r}")
        if args.workers < 1:
            raise SystemExit(f"workers must be >= 1, got: {args.workers}")

    timeout = getattr(args, "signing_timeout", None)
    if timeout is not None:
        try:
            args.signing_timeout = float(timeout)
        except (TypeError, ValueError):
            raise SystemExit(f"signing_timeout must be a number, got: {timeout!r}")
        if args.signing_timeout <= 0:
            raise SystemExit(f"signing_timeout must be > 0, got: {args.signing_timeout}")


def _validate_class_names(conf: Dict[str, Any]) -> None:
    names = conf.get("class_names")
    if names is None:
        return
    if not isinstance(names, dict):
        raise SystemExit("class_names must be a mapping of class GUID -> class name")
    for guid, name in names.items():
        if not _require(str(guid)) or not _require(name):
            raise SystemExit(f"class_names: empty GUID or name in entry {guid!r}: {name!r}")


def validate_args(args: argparse.Namespace, conf: Dict[str, Any]) -> None:
    """
    Checks the merged result (config defaults + CLI overrides).
    No filesystem checks here: a missing folder is reported by the inventory run itself.
    """
    if not _require(getattr(args, "path", None)):
        raise SystemExit("Missing driver folder: give PATH on the command line or `path:` in a config file.")

    _validate_choices(args)
    _validate_numbers(args)
    _validate_class_names(conf)
