# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/inf/tokens.py
"""%token% substitution against the [Strings] section."""
from __future__ import annotations

from typing import Optional

from .reader import SectionMap
from .values import split_multi

STRINGS_SECTION = "Strings"


def token_name(value: str) -> Optional[str]:
    """Inner name of a `%name%` value, or None if the value is not a token."""
    s = (value or "").strip()
    if len(s) > 2 and s.startswith("%") and s.endswith("%"):
        return s[1:-1]
    return None


def clean_string_value(raw: str) -> str:
    """
    Normalize a [Strings] entry: strip surrounding quotes, keep the first
    `;` segment, trim.

    A quoted string may itself contain `;`, so a leading quote is matched
    against its closing quote before any annotation is dropped.
    """
    s = split_multi(raw)[0].strip() if raw else ""
    if s.startswith('"'):
        end = s.find('"', 1)
        while end != -1 and s[end + 1:end + 2] == '"':
            end = s.find('"', end + 2)
        if end != -1:
            return s[1:end].replace('""', '"').strip()
    return s.split(";", 1)[0].strip().strip('"').strip()


def resolve_token(value: str, smap: SectionMap) -> str:
    """
    Resolve `%name%` through the string table.

    Values that are not tokens, or whose name is missing from [Strings],
    come back trimmed and otherwise unchanged.
    """
    name = token_name(value)
    if name is None:
        return (value or "").strip()

    strings = smap.get(STRINGS_SECTION)
    if strings is None or name not in strings:
        return value.strip()
    return clean_string_value(strings.get(name))
