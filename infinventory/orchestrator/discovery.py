# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/orchestrator/discovery.py
"""
Driver folder discovery and content hashing.
"""
from __future__ import annotations

import hashlib
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

from ..core.logger import Log
from ..core.logging_utils import safe_logger
from ..core.utils import U

INF_SUFFIX = ".inf"


def find_inf_files(root: Path) -> List[Path]:
    """All `*.inf` files below root (suffix matched case-insensitively), sorted."""
    root = Path(root)
    if root.is_file():
        return [root] if root.suffix.lower() == INF_SUFFIX else []
    return sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() == INF_SUFFIX)


def folder_hash(folder: Path, logger: Optional[logging.Logger] = None) -> str:
    """
    Order-independent content hash of a folder tree.

    sha256 of every regular file, hex digests sorted and concatenated, then
    hashed again. Unreadable files are skipped.
    """
    lg = safe_logger(logger)
    digests: List[str] = []
    for p in sorted(Path(folder).rglob("*")):
        if not p.is_file():
            continue
        try:
            digests.append(U.checksum(p))
        except OSError as e:
            lg.warning("Cannot hash %s: %s", p, e)
    Log.trace(lg, "folder_hash: %s files=%d", folder, len(digests))
    return hashlib.sha256("".join(sorted(digests)).encode("ascii")).hexdigest()


class FolderHashCache:
    """Computes each folder's hash once, shared across worker threads."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = safe_logger(logger)
        self._lock = threading.Lock()
        self._cache: Dict[Path, str] = {}

    def get(self, folder: Path) -> str:
        key = Path(folder).resolve()
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached
        value = folder_hash(key, self.logger)
        with self._lock:
            return self._cache.setdefault(key, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
