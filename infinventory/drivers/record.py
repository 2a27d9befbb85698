# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/drivers/record.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

# Output column name -> attribute, in report order.
FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Name", "name"),
    ("InfPath", "inf_path"),
    ("Manufacturer", "manufacturer"),
    ("Provider", "provider"),
    ("ClassName", "class_name"),
    ("ClassGUID", "class_guid"),
    ("Date", "date"),
    ("Version", "version"),
    ("CatalogFile", "catalog_file"),
    ("IsSigned", "is_signed"),
    ("DigitalSigner", "digital_signer"),
    ("DigitalSignerVersion", "digital_signer_version"),
    ("SupportedPlatforms", "supported_platforms"),
    ("SupportedOS", "supported_os"),
    ("PNPIds", "pnp_ids"),
    ("FolderHash", "folder_hash"),
)

FIELD_NAMES: Tuple[str, ...] = tuple(name for name, _ in FIELDS)

LIST_JOINER = ", "


@dataclass
class DriverRecord:
    """
    Normalized metadata for one INF file.

    Every field has an empty default so a record can always be produced,
    however little the INF declares.
    """
    name: str = ""
    inf_path: str = ""
    manufacturer: str = ""
    provider: str = ""
    class_name: str = ""
    class_guid: str = ""
    date: str = ""
    version: str = ""
    catalog_file: str = ""
    is_signed: bool = False
    digital_signer: str = ""
    digital_signer_version: str = ""
    supported_platforms: Set[str] = field(default_factory=set)
    supported_os: Set[str] = field(default_factory=set)
    pnp_ids: List[str] = field(default_factory=list)
    folder_hash: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Structured form: sets become sorted lists, PNP IDs keep their order."""
        out: Dict[str, Any] = {}
        for name, attr in FIELDS:
            v = getattr(self, attr)
            if isinstance(v, set):
                v = sorted(v)
            elif isinstance(v, list):
                v = list(v)
            out[name] = v
        return out

    def to_row(self) -> Dict[str, str]:
        """Flat form for CSV/table output; collections are always joined the same way."""
        row: Dict[str, str] = {}
        for name, value in self.to_dict().items():
            if isinstance(value, list):
                row[name] = LIST_JOINER.join(value)
            elif isinstance(value, bool):
                row[name] = "True" if value else "False"
            else:
                row[name] = str(value)
        return row
