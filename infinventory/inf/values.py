# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/inf/values.py
"""
Value helpers for INF entries.

A key that repeats inside one section is stored once, with the values joined
by MULTI_SEPARATOR. `MultiValue` is the typed view of such a stored value;
the helpers below implement the "first element of a multi-value field"
conventions the INF dialect relies on.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

MULTI_SEPARATOR = "|"


@dataclass(frozen=True)
class MultiValue:
    """A stored entry value: one item for a unique key, several for a repeated key."""

    items: Tuple[str, ...]

    @classmethod
    def parse(cls, stored: str) -> "MultiValue":
        return cls(tuple(split_multi(stored)))

    @property
    def is_multi(self) -> bool:
        return len(self.items) > 1

    @property
    def first(self) -> str:
        return self.items[0] if self.items else ""

    def __str__(self) -> str:
        return MULTI_SEPARATOR.join(self.items)


def join_multi(existing: str, new: str) -> str:
    return f"{existing}{MULTI_SEPARATOR}{new}"


def split_multi(stored: str) -> List[str]:
    """Recover the individual values of a (possibly repeated) key."""
    if stored is None:
        return []
    return stored.split(MULTI_SEPARATOR)


def strip_annotation(value: str) -> str:
    """Drop a trailing `; ...` annotation and trim."""
    return (value or "").split(";", 1)[0].strip()


def fields(value: str, sep: str = ",") -> List[str]:
    return [f.strip() for f in (value or "").split(sep)]
