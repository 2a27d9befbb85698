# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/drivers/__init__.py
"""
Driver metadata: records, resolution and the signing / class-name collaborators.
"""

from .classes import KnownClassLookup
from .record import FIELD_NAMES, DriverRecord
from .resolver import DriverMetadataResolver, first_success, scan_models
from .signing import SigningResult, make_verifier

__all__ = [
    "DriverMetadataResolver",
    "DriverRecord",
    "FIELD_NAMES",
    "KnownClassLookup",
    "SigningResult",
    "first_success",
    "make_verifier",
    "scan_models",
]
