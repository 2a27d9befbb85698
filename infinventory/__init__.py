# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/__init__.py
"""
infinventory - Windows driver package inventory

Reads the INF files of a driver folder and reports manufacturer, provider,
class, version, platform/OS matrix, signing status and (optionally) the
supported hardware IDs of every driver.

Usage as a library:

    from infinventory import BatchOrchestrator, parse_text, DriverMetadataResolver

    # Whole folder
    report = BatchOrchestrator(list_pnp_ids=True).run("/srv/drivers")

    # Single INF text
    record = DriverMetadataResolver().resolve(parse_text(inf_text), name="netfoo.inf")
"""

__version__ = "0.1.0"

from .core.exceptions import Fatal, InfInventoryError, InfParseError
from .drivers import DriverMetadataResolver, DriverRecord, KnownClassLookup, SigningResult
from .inf import SectionMap, parse_text, read_inf_file, resolve_token
from .orchestrator import BatchOrchestrator, BatchReport

__all__ = [
    "__version__",
    "BatchOrchestrator",
    "BatchReport",
    "DriverMetadataResolver",
    "DriverRecord",
    "Fatal",
    "InfInventoryError",
    "InfParseError",
    "KnownClassLookup",
    "SectionMap",
    "SigningResult",
    "parse_text",
    "read_inf_file",
    "resolve_token",
]
