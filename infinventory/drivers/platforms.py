# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/drivers/platforms.py
"""Platform decorations (`NTamd64.10.0`, `NTx86`, ...) split into architecture and OS tags."""
from __future__ import annotations

from dataclasses import dataclass

ARCH_X64 = "x64"
ARCH_X86 = "x86"

# Decoration prefixes reported as 64-bit; everything else (NTx86 included) is x86.
_X64_PREFIXES = frozenset({"ntamd64", "ntarm64", "ntia64"})


@dataclass(frozen=True)
class PlatformDecoration:
    raw: str
    arch_token: str
    architecture: str
    os_tag: str


def split_decoration(decoration: str) -> PlatformDecoration:
    """
    `NTamd64.10.0` -> arch token `NTamd64` (x64), OS tag `10.0`.
    The OS tag is everything after the first dot, verbatim; empty when absent.
    """
    raw = (decoration or "").strip()
    arch_token, _, os_tag = raw.partition(".")
    architecture = ARCH_X64 if arch_token.lower() in _X64_PREFIXES else ARCH_X86
    return PlatformDecoration(raw=raw, arch_token=arch_token, architecture=architecture, os_tag=os_tag)
