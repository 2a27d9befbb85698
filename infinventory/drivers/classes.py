# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/drivers/classes.py
"""
Device setup class lookup (class GUID -> class name).

On Windows this is an OS service. Here it is a table of the system-defined
device setup classes, optionally extended from configuration.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, Optional

logger = logging.getLogger("infinventory.classes")

ClassNameLookup = Callable[[str], Optional[str]]

KNOWN_DEVICE_CLASSES: Dict[str, str] = {
    "6bdd1fc1-810f-11d0-bec7-08002be2092f": "1394",
    "c166523c-fe0c-4a94-a586-f1a80cfbbf3e": "AudioEndpoint",
    "72631e54-78a4-11d0-bcf7-00aa00b7b32a": "Battery",
    "53d29ef7-377c-4d14-864b-eb3a85769359": "Biometric",
    "e0cbf06c-cd8b-4647-bb8a-263b43f0f974": "Bluetooth",
    "ca3e7ab9-b4c3-4ae6-8251-579ef933890f": "Camera",
    "4d36e965-e325-11ce-bfc1-08002be10318": "CDROM",
    "4d36e967-e325-11ce-bfc1-08002be10318": "DiskDrive",
    "4d36e968-e325-11ce-bfc1-08002be10318": "Display",
    "e2f84ce7-8efa-411c-aa69-97454ca4cb57": "Extension",
    "4d36e969-e325-11ce-bfc1-08002be10318": "FDC",
    "f2e7dd72-6468-4e36-b6f1-6488f42c1b52": "Firmware",
    "4d36e980-e325-11ce-bfc1-08002be10318": "FloppyDisk",
    "4d36e96a-e325-11ce-bfc1-08002be10318": "HDC",
    "745a17a0-74d3-11d0-b6fe-00a0c90f57da": "HIDClass",
    "6bdd1fc6-810f-11d0-bec7-08002be2092f": "Image",
    "6bdd1fc5-810f-11d0-bec7-08002be2092f": "Infrared",
    "4d36e96b-e325-11ce-bfc1-08002be10318": "Keyboard",
    "4d36e96c-e325-11ce-bfc1-08002be10318": "MEDIA",
    "ce5939ae-ebde-11d0-b181-0000f8753ec4": "MediumChanger",
    "4d36e96d-e325-11ce-bfc1-08002be10318": "Modem",
    "4d36e96e-e325-11ce-bfc1-08002be10318": "Monitor",
    "4d36e96f-e325-11ce-bfc1-08002be10318": "Mouse",
    "4d36e970-e325-11ce-bfc1-08002be10318": "MTD",
    "4d36e971-e325-11ce-bfc1-08002be10318": "Multifunction",
    "4d36e972-e325-11ce-bfc1-08002be10318": "Net",
    "4d36e973-e325-11ce-bfc1-08002be10318": "NetClient",
    "4d36e974-e325-11ce-bfc1-08002be10318": "NetService",
    "4d36e975-e325-11ce-bfc1-08002be10318": "NetTrans",
    "4d36e977-e325-11ce-bfc1-08002be10318": "PCMCIA",
    "4d36e978-e325-11ce-bfc1-08002be10318": "Ports",
    "4d36e979-e325-11ce-bfc1-08002be10318": "Printer",
    "50127dc3-0f36-415e-a6cc-4cb3be910b65": "Processor",
    "d48179be-ec20-11d1-b6b8-00c04fa372a7": "SBP2",
    "4d36e97b-e325-11ce-bfc1-08002be10318": "SCSIAdapter",
    "d94ee5d8-d189-4994-83d2-f68d7d41b0e6": "SecurityDevices",
    "5175d334-c371-4806-b3ba-71fd53c9258d": "Sensor",
    "50dd5230-ba8a-11d1-bf5d-0000f805f530": "SmartCardReader",
    "5c4c3332-344d-483c-8739-259e934c9cc8": "SoftwareComponent",
    "4d36e97d-e325-11ce-bfc1-08002be10318": "System",
    "36fc9e60-c465-11cf-8056-444553540000": "USB",
    "71a27cdd-812a-11d0-bec7-08002be2092f": "Volume",
    "eec5ad98-8080-425f-922a-dabf3de3f69a": "WPD",
}


def normalize_guid(guid: str) -> str:
    """`{4D36E972-...}` -> `4d36e972-...`"""
    return (guid or "").strip().strip("{}").strip().lower()


class KnownClassLookup:
    """
    Callable GUID -> class name. Returns None when the GUID is unknown,
    which callers treat as "name unresolved".
    """

    def __init__(self, extra: Optional[Mapping[str, str]] = None) -> None:
        self._table: Dict[str, str] = dict(KNOWN_DEVICE_CLASSES)
        for guid, name in (extra or {}).items():
            if str(name).strip():
                self._table[normalize_guid(str(guid))] = str(name).strip()

    def __call__(self, guid: str) -> Optional[str]:
        key = normalize_guid(guid)
        if not key:
            return None
        name = self._table.get(key)
        if name is None:
            logger.debug("Unknown device setup class GUID: %s", guid)
        return name

    def __len__(self) -> int:
        return len(self._table)
