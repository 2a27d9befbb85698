# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/drivers/resolver.py
"""
Driver metadata resolution: SectionMap (+ signing result, class lookup) -> DriverRecord.

Every indirection is an ordered list of providers; the first one returning
a non-empty value wins and a provider that raises counts as "no answer":

  ClassName     class lookup(ClassGUID) -> [Version] Class
  CatalogFile   signer's catalog (signed only) -> [Version] CatalogFile
                -> [Version] CatalogFile.<decoration>
  Models        <base>.<decoration> -> <manufacturer key>.<decoration>

Missing sections never abort resolution; the dependent fields stay empty.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Set, Tuple

from ..core.logger import Log
from ..core.logging_utils import safe_logger
from ..inf.reader import TEXT_KEY, Section, SectionMap
from ..inf.tokens import resolve_token, token_name
from ..inf.values import fields, strip_annotation
from .classes import ClassNameLookup
from .fields import (
    MANUFACTURER_SECTION,
    VERSION_SECTION,
    decorated_catalog,
    split_driver_ver,
    version_field,
)
from .platforms import split_decoration
from .record import DriverRecord
from .signing import SigningResult

Provider = Callable[[], Optional[str]]


def first_success(providers: Iterable[Provider], logger: Optional[logging.Logger] = None) -> str:
    for provider in providers:
        try:
            value = provider()
        except Exception as e:
            Log.trace(safe_logger(logger), "fallback provider failed: %s: %s", type(e).__name__, e)
            continue
        if value:
            return value.strip()
    return ""


@dataclass
class ModelsScan:
    """What the models sections referenced by [Manufacturer] declare."""
    platforms: Set[str] = field(default_factory=set)
    os_tags: Set[str] = field(default_factory=set)
    pnp_ids: List[str] = field(default_factory=list)
    sections: List[str] = field(default_factory=list)
    _seen: Set[str] = field(default_factory=set, repr=False)

    def add_pnp_id(self, hwid: str) -> None:
        folded = hwid.lower()
        if folded not in self._seen:
            self._seen.add(folded)
            self.pnp_ids.append(hwid)


def device_hardware_ids(section: Section) -> List[str]:
    """
    Hardware IDs of the device entries of a models section.

    Each entry is `description = install-section, hw-id[, compatible-ids...]`
    (or the same without `description =`); the ID is the second field.
    """
    out: List[str] = []
    for key in section.keys():
        for entry in section.multi(key).items:
            parts = fields(strip_annotation(entry))
            if len(parts) >= 2 and parts[1]:
                out.append(parts[1])
    return out


def manufacturer_entry(smap: SectionMap) -> Optional[Tuple[str, str]]:
    """
    (key, first value) of the first [Manufacturer] line.

    A bare legacy `%Mfg%` line (no `=`) is stored as free text; it names the
    manufacturer and, by its token name, the models section.
    """
    sec = smap.get(MANUFACTURER_SECTION)
    if sec is None:
        return None
    for key in sec.keys():
        if key.lower() != TEXT_KEY.lower():
            return key, strip_annotation(sec.multi(key).first)

    text = strip_annotation(sec.get(TEXT_KEY))
    if not text:
        return None
    return text, token_name(text) or text


def scan_models(smap: SectionMap, logger: Optional[logging.Logger] = None) -> ModelsScan:
    lg = safe_logger(logger)
    scan = ModelsScan()

    entry = manufacturer_entry(smap)
    if entry is None:
        return scan
    key, value = entry

    parts = [p for p in fields(value) if p]
    if not parts:
        return scan
    base, decorations = parts[0], parts[1:]

    legacy = smap.get(base)
    if legacy is not None:
        scan.sections.append(legacy.name)
        for hwid in device_hardware_ids(legacy):
            scan.add_pnp_id(hwid)

    for decoration in decorations:
        section = _probe_models_section(smap, [base, key], decoration)
        if section is None:
            Log.trace(lg, "no models section for %s.%s", base, decoration)
            continue

        deco = split_decoration(decoration)
        scan.sections.append(section.name)
        scan.platforms.add(deco.architecture)
        if deco.os_tag:
            scan.os_tags.add(deco.os_tag)
        for hwid in device_hardware_ids(section):
            scan.add_pnp_id(hwid)

    return scan


def _probe_models_section(smap: SectionMap, bases: List[str], decoration: str) -> Optional[Section]:
    for base in bases:
        section = smap.get(f"{base}.{decoration}")
        if section is not None:
            return section
    return None


class DriverMetadataResolver:
    """
    Resolves one parsed INF into a DriverRecord.

    Stateless apart from its configuration, so one instance can be shared by
    worker threads.
    """

    def __init__(
        self,
        class_lookup: Optional[ClassNameLookup] = None,
        *,
        list_pnp_ids: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.class_lookup = class_lookup
        self.list_pnp_ids = list_pnp_ids
        self.logger = safe_logger(logger)

    def resolve(
        self,
        smap: SectionMap,
        signing: Optional[SigningResult] = None,
        *,
        name: str = "",
        inf_path: str = "",
        folder_hash: str = "",
    ) -> DriverRecord:
        signing = signing or SigningResult.unsigned()
        log = Log.bind(self.logger, inf=name or inf_path or "?")

        if VERSION_SECTION not in smap:
            log.warning("No [%s] section; version fields left empty", VERSION_SECTION)
        if MANUFACTURER_SECTION not in smap:
            log.warning("No [%s] section; manufacturer and platform fields left empty", MANUFACTURER_SECTION)

        class_guid = version_field(smap, "ClassGuid")
        date, version = split_driver_ver(version_field(smap, "DriverVer"))

        entry = manufacturer_entry(smap)
        manufacturer = resolve_token(entry[0], smap) if entry else ""

        class_name = first_success(
            [
                lambda: self.class_lookup(class_guid) if (self.class_lookup and class_guid) else None,
                lambda: version_field(smap, "Class"),
            ],
            log,
        )
        catalog_file = first_success(
            [
                lambda: signing.catalog_file if signing.is_signed else None,
                lambda: version_field(smap, "CatalogFile"),
                lambda: decorated_catalog(smap),
            ],
            log,
        )

        scan = scan_models(smap, log)
        Log.trace(log, "models sections: %s", scan.sections)

        return DriverRecord(
            name=name,
            inf_path=inf_path,
            manufacturer=manufacturer,
            provider=resolve_token(version_field(smap, "Provider"), smap),
            class_name=class_name,
            class_guid=class_guid,
            date=date,
            version=version,
            catalog_file=catalog_file,
            is_signed=bool(signing.is_signed),
            digital_signer=signing.digital_signer,
            digital_signer_version=signing.digital_signer_version,
            supported_platforms=set(scan.platforms),
            supported_os=set(scan.os_tags),
            pnp_ids=list(scan.pnp_ids) if self.list_pnp_ids else [],
            folder_hash=folder_hash,
        )
