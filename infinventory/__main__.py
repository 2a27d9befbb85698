# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/__main__.py
from __future__ import annotations

import argparse
import logging
import sys
import traceback
from typing import Any, Dict, Optional

from . import __version__
from .cli.args.parser import parse_args_with_config
from .core.exceptions import Fatal, format_exception_for_cli
from .core.logger import Log
from .core.logging_utils import log_step
from .drivers.classes import KnownClassLookup
from .drivers.signing import make_verifier
from .orchestrator.orchestrator import BatchOrchestrator
from .report.writers import write_report


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _safe_log(logger, level: str, msg: str) -> None:
    """
    Best-effort logging without assuming logger exists or has a given method.
    """
    if logger is None:
        _print_stderr(msg)
        return

    fn = getattr(logger, level, None)
    if callable(fn):
        fn(msg)
    else:
        _print_stderr(msg)


def run_inventory(logger: logging.Logger, args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    Log.banner(logger, f"infinventory {__version__}")
    verifier = make_verifier(args.signing, logger, timeout=args.signing_timeout)
    lookup = KnownClassLookup(conf.get("class_names"))
    orchestrator = BatchOrchestrator(
        logger,
        verifier=verifier,
        class_lookup=lookup,
        list_pnp_ids=bool(args.list_pnp_ids),
        workers=args.workers,
        capture_comments=bool(args.capture_comments),
    )

    with log_step(logger, f"Driver inventory of {args.path}"):
        report = orchestrator.run(args.path)

    write_report(report, args.format, args.output)
    return 0


def main(argv: Optional[list] = None) -> None:
    logger: Optional[logging.Logger] = None

    # Phase 1: parse (Fatal can happen here)
    try:
        args, conf, logger = parse_args_with_config(argv)
    except Fatal as e:
        # Config loading logs through U.die(); only print when no logger exists yet.
        if logger is None:
            _print_stderr(f"💥 ERROR    {e}")
        raise SystemExit(getattr(e, "code", 1))
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        raise SystemExit(130)

    # Phase 2: run inventory
    try:
        rc = run_inventory(logger, args, conf)
    except Fatal as e:
        _safe_log(logger, "error", format_exception_for_cli(e, verbose=getattr(args, "verbose", 0)))
        rc = getattr(e, "code", 1)
    except KeyboardInterrupt:
        _safe_log(logger, "warning", "Interrupted by user (Ctrl+C).")
        rc = 130
    except Exception as e:
        _safe_log(logger, "error", f"💥 UNHANDLED {type(e).__name__}: {e}")
        _safe_log(logger, "debug", traceback.format_exc())
        rc = 1

    raise SystemExit(rc)


if __name__ == "__main__":
    main()
