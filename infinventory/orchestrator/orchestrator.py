# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/orchestrator/orchestrator.py
"""
Batch driver inventory.
Discovers INF files under a root, resolves each one and aggregates the records.
"""

from __future__ import annotations

import concurrent.futures
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from ..core.exceptions import EXIT_BAD_PATH, EXIT_NO_INF_FILES, Fatal, InfParseError, wrap_fatal
from ..core.logger import Log, is_tty
from ..core.logging_utils import safe_logger
from ..drivers.classes import ClassNameLookup
from ..drivers.record import DriverRecord
from ..drivers.resolver import DriverMetadataResolver
from ..drivers.signing import SigningVerifier, UnsignedVerifier, safe_verify
from ..inf.reader import read_inf_file
from .discovery import FolderHashCache, find_inf_files

WORKERS_ENV = "INFINVENTORY_WORKERS"
DEFAULT_MAX_WORKERS = 4


@dataclass
class InfFailure:
    path: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "error": self.error}


@dataclass
class BatchReport:
    root: str
    records: List[DriverRecord] = field(default_factory=list)
    failures: List[InfFailure] = field(default_factory=list)
    total_inf: int = 0

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "total_inf": self.total_inf,
            "records": len(self.records),
            "failures": len(self.failures),
            "signed": sum(1 for r in self.records if r.is_signed),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "summary": self.summary,
            "drivers": [r.to_dict() for r in self.records],
            "failures": [f.to_dict() for f in self.failures],
        }


def resolve_workers(requested: Optional[int], n_files: int) -> int:
    """
    Worker count: an explicit request wins, then $INFINVENTORY_WORKERS,
    then min(4, files, cpus).
    """
    if requested:
        return max(1, int(requested))
    env_workers = os.environ.get(WORKERS_ENV)
    if env_workers:
        try:
            return max(1, int(env_workers))
        except ValueError:
            pass
    return max(1, min(DEFAULT_MAX_WORKERS, n_files, (os.cpu_count() or 1)))


class BatchOrchestrator:
    """
    Walks a driver folder and produces one DriverRecord per INF file.

    One INF failing (unreadable file, crashing collaborator) is recorded in
    the report's failures and never stops the batch.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        *,
        verifier: Optional[SigningVerifier] = None,
        class_lookup: Optional[ClassNameLookup] = None,
        list_pnp_ids: bool = False,
        workers: Optional[int] = None,
        capture_comments: bool = False,
        show_progress: Optional[bool] = None,
    ):
        self.logger = safe_logger(logger)
        self.verifier = verifier or UnsignedVerifier()
        self.resolver = DriverMetadataResolver(class_lookup, list_pnp_ids=list_pnp_ids, logger=self.logger)
        self.workers = workers
        self.capture_comments = capture_comments
        self.show_progress = show_progress
        self._hashes = FolderHashCache(self.logger)

    def process_one(self, inf_path: Path, root: Path) -> DriverRecord:
        smap = read_inf_file(inf_path, capture_comments=self.capture_comments)
        signing = safe_verify(self.verifier, inf_path, self.logger)
        try:
            rel = inf_path.relative_to(root)
        except ValueError:
            rel = inf_path
        return self.resolver.resolve(
            smap,
            signing,
            name=inf_path.name,
            inf_path=str(rel),
            folder_hash=self._hashes.get(inf_path.parent),
        )

    def run(self, root: Union[str, Path]) -> BatchReport:
        root_path = Path(root).expanduser()
        if not root_path.exists():
            raise Fatal(EXIT_BAD_PATH, f"Driver folder not found: {root_path}")

        try:
            files = find_inf_files(root_path)
        except OSError as e:
            raise wrap_fatal(f"Cannot scan driver folder: {root_path}", e, code=EXIT_BAD_PATH, path=str(root_path)) from e
        if not files:
            raise Fatal(EXIT_NO_INF_FILES, f"No .inf files found under {root_path}")

        base = root_path if root_path.is_dir() else root_path.parent
        report = BatchReport(root=str(root_path), total_inf=len(files))
        workers = resolve_workers(self.workers, len(files))
        Log.step(self.logger, f"Found {len(files)} INF files under {root_path}", workers=workers)
        Log.trace(self.logger, "👷 workers=%d (env=%r)", workers, os.environ.get(WORKERS_ENV))

        results: List[Optional[DriverRecord]] = [None] * len(files)
        errors: List[Optional[str]] = [None] * len(files)

        show = is_tty(sys.stderr) if self.show_progress is None else self.show_progress
        if show:
            with Progress(
                TextColumn("{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                TimeElapsedColumn(),
                TimeRemainingColumn(),
                console=Console(stderr=True),
                transient=True,
            ) as progress:
                task = progress.add_task("Resolving drivers", total=len(files))
                for idx, record, err in self._iter_results(files, base, workers):
                    results[idx], errors[idx] = record, err
                    progress.update(task, advance=1)
        else:
            for idx, record, err in self._iter_results(files, base, workers):
                results[idx], errors[idx] = record, err
                status = "ok" if err is None else "failed"
                self.logger.info("[%d/%d] %s: %s", idx + 1, len(files), files[idx].name, status)

        for path, record, err in zip(files, results, errors):
            if record is not None:
                report.records.append(record)
            else:
                report.failures.append(InfFailure(path=str(path), error=err or "unknown error"))

        s = report.summary
        Log.ok(
            self.logger,
            f"Inventory complete: {s['records']}/{s['total_inf']} drivers, "
            f"{s['signed']} signed, {s['failures']} failed",
        )
        return report

    def _iter_results(self, files: List[Path], base: Path, workers: int):
        """Yields (index, record or None, error or None) in completion order."""
        if workers <= 1:
            for idx, path in enumerate(files):
                yield (idx,) + self._safe_process(path, base)
            return

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self._safe_process, path, base): idx for idx, path in enumerate(files)}
            for future in concurrent.futures.as_completed(futures):
                yield (futures[future],) + future.result()

    def _safe_process(self, path: Path, base: Path) -> Tuple[Optional[DriverRecord], Optional[str]]:
        try:
            return self.process_one(path, base), None
        except InfParseError as e:
            Log.fail(self.logger, e.user_message(include_cause=True))
            return None, str(e)
        except Exception as e:
            Log.fail(self.logger, f"Failed resolving {path.name}: {e}")
            Log.trace(self.logger, "💥 process_one exception: %s", path, exc_info=True)
            return None, f"{type(e).__name__}: {e}"
