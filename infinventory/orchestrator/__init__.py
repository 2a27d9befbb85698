# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/orchestrator/__init__.py
from .discovery import FolderHashCache, find_inf_files, folder_hash
from .orchestrator import BatchOrchestrator, BatchReport, InfFailure, resolve_workers

__all__ = [
    "BatchOrchestrator",
    "BatchReport",
    "FolderHashCache",
    "InfFailure",
    "find_inf_files",
    "folder_hash",
    "resolve_workers",
]
