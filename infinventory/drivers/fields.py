# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/drivers/fields.py
"""Accessors for the [Version] section."""
from __future__ import annotations

from typing import Tuple

from ..inf.reader import SectionMap
from ..inf.values import MultiValue, strip_annotation

VERSION_SECTION = "Version"
MANUFACTURER_SECTION = "Manufacturer"


def version_field(smap: SectionMap, key: str) -> str:
    """First value of `[Version] key`, `; annotation` dropped, trimmed."""
    sec = smap.get(VERSION_SECTION)
    if sec is None:
        return ""
    return strip_annotation(sec.multi(key).first)


def decorated_catalog(smap: SectionMap) -> str:
    """First `CatalogFile.<decoration>` entry in declaration order."""
    sec = smap.get(VERSION_SECTION)
    if sec is None:
        return ""
    for key, raw in sec.items():
        if key.lower().startswith("catalogfile."):
            value = strip_annotation(MultiValue.parse(raw).first)
            if value:
                return value
    return ""


def declared_catalog(smap: SectionMap) -> str:
    return version_field(smap, "CatalogFile") or decorated_catalog(smap)


def split_driver_ver(driver_ver: str) -> Tuple[str, str]:
    """`10/01/2023,3.2.1.0` -> (`10/01/2023`, `3.2.1.0`)."""
    date, _, version = strip_annotation(driver_ver).partition(",")
    return date.strip(), strip_annotation(version)
