# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/inf/reader.py
"""
Structured-text reader for INF files.

Turns INF text into a `SectionMap`: ordered, case-insensitive section names
mapping to ordered, case-insensitive key/value entries.

Line classification (first match wins, after trimming the line):

  [Name]          opens (or re-opens) a section
  ; comment       kept only with capture_comments=True
  key = value     stored; a repeated key appends "|" + value
  (blank)         ignored
  anything else   stored under the synthetic "Text" key, last one wins

Nothing here raises on malformed content. Real-world INF files are noisy
and unparseable lines are simply kept as free text.
"""
from __future__ import annotations

import codecs
import logging
import re
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..core.exceptions import InfParseError
from ..core.logger import Log
from .values import MultiValue, join_multi

logger = logging.getLogger("infinventory.inf")

SECTION_RE = re.compile(r"^\[(.+)\]")
COMMENT_RE = re.compile(r"^;.*")
KEY_VALUE_RE = re.compile(r"^(.+?)\s*=\s*(.*)$")

TEXT_KEY = "Text"
ANONYMOUS_SECTION = ""


class CaseInsensitiveDict(MutableMapping):
    """
    Ordered mapping with case-insensitive string keys.

    INF section names, entries and directives are case-insensitive; the
    spelling seen first is kept for iteration and output.
    """

    def __init__(self, data: Optional[Iterable[Tuple[str, Any]]] = None) -> None:
        self._store: Dict[str, Tuple[str, Any]] = {}
        for k, v in data or ():
            self[k] = v

    def __setitem__(self, key: str, value: Any) -> None:
        folded = key.lower()
        original = self._store[folded][0] if folded in self._store else key
        self._store[folded] = (original, value)

    def __getitem__(self, key: str) -> Any:
        return self._store[key.lower()][1]

    def __delitem__(self, key: str) -> None:
        del self._store[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"


class Section:
    """One `[Name]` block: ordered entries plus captured comments."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.entries: CaseInsensitiveDict = CaseInsensitiveDict()
        # Shadow mapping: sequence number -> comment line (only when captured).
        self.comments: Dict[int, str] = {}

    @property
    def anonymous(self) -> bool:
        return self.name == ANONYMOUS_SECTION

    def add(self, key: str, value: str) -> None:
        if key in self.entries:
            self.entries[key] = join_multi(self.entries[key], value)
        else:
            self.entries[key] = value

    def set_text(self, text: str) -> None:
        self.entries[TEXT_KEY] = text

    def add_comment(self, text: str) -> None:
        self.comments[len(self.comments) + 1] = text

    def get(self, key: str, default: str = "") -> str:
        return self.entries.get(key, default)

    def multi(self, key: str) -> MultiValue:
        return MultiValue.parse(self.entries[key]) if key in self.entries else MultiValue(())

    def keys(self) -> List[str]:
        return list(self.entries.keys())

    def values(self) -> List[str]:
        return list(self.entries.values())

    def items(self) -> List[Tuple[str, str]]:
        return list(self.entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return (
            self.name.lower() == other.name.lower()
            and self.items() == other.items()
            and self.comments == other.comments
        )

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {len(self.entries)} entries)"


class SectionMap:
    """Ordered, case-insensitive collection of sections parsed from one INF."""

    def __init__(self) -> None:
        self._sections: CaseInsensitiveDict = CaseInsensitiveDict()

    def ensure(self, name: str) -> Section:
        if name not in self._sections:
            self._sections[name] = Section(name)
        return self._sections[name]

    def get(self, name: str) -> Optional[Section]:
        return self._sections.get(name)

    def value(self, section: str, key: str, default: str = "") -> str:
        sec = self.get(section)
        return sec.get(key, default) if sec is not None else default

    def names(self) -> List[str]:
        return list(self._sections.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __getitem__(self, name: str) -> Section:
        return self._sections[name]

    def __iter__(self) -> Iterator[Section]:
        return iter(list(self._sections.values()))

    def __len__(self) -> int:
        return len(self._sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SectionMap):
            return NotImplemented
        return list(self) == list(other)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {s.name: dict(s.items()) for s in self}

    def __repr__(self) -> str:
        return f"SectionMap({self.names()!r})"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_lines(lines: Iterable[str], *, capture_comments: bool = False) -> SectionMap:
    smap = SectionMap()
    current: Optional[Section] = None

    def _current() -> Section:
        # Content before the first header lands in the anonymous section.
        nonlocal current
        if current is None:
            current = smap.ensure(ANONYMOUS_SECTION)
        return current

    for raw in lines:
        line = raw.strip()

        m = SECTION_RE.match(line)
        if m:
            name = m.group(1).strip() or m.group(1)
            current = smap.ensure(name)
            continue

        if COMMENT_RE.match(line):
            if capture_comments:
                _current().add_comment(line)
            continue

        m = KEY_VALUE_RE.match(line)
        if m:
            _current().add(m.group(1).strip(), m.group(2).strip())
            continue

        if not line:
            continue

        Log.trace(logger, "free text line: %r", line)
        _current().set_text(line)

    return smap


def parse_text(text: str, *, capture_comments: bool = False) -> SectionMap:
    return parse_lines(text.splitlines(), capture_comments=capture_comments)


def _looks_like_utf16(sample: bytes) -> Optional[str]:
    if len(sample) < 4:
        return None
    even_nuls = sample[0::2].count(0)
    odd_nuls = sample[1::2].count(0)
    half = len(sample) // 2
    if odd_nuls > half * 0.4 and even_nuls == 0:
        return "utf-16-le"
    if even_nuls > half * 0.4 and odd_nuls == 0:
        return "utf-16-be"
    return None


def decode_inf_bytes(data: bytes) -> str:
    """
    Decode raw INF bytes.

    INF files ship as UTF-16 (with or without BOM), UTF-8 (with or without
    BOM) or a legacy ANSI code page.
    """
    if data.startswith(codecs.BOM_UTF16_LE) or data.startswith(codecs.BOM_UTF16_BE):
        return data.decode("utf-16", errors="replace")
    if data.startswith(codecs.BOM_UTF8):
        return data[len(codecs.BOM_UTF8):].decode("utf-8", errors="replace")

    utf16 = _looks_like_utf16(data[:512])
    if utf16:
        return data.decode(utf16, errors="replace")

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("cp1252", errors="replace")


def read_inf_file(path: Path, *, capture_comments: bool = False) -> SectionMap:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise InfParseError(code=1, msg=f"cannot read INF file: {path}", cause=e, context={"path": str(path)}) from e

    smap = parse_text(decode_inf_bytes(data), capture_comments=capture_comments)
    logger.debug("Parsed %s: %d sections", path, len(smap))
    return smap


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def dump_section_map(smap: SectionMap) -> str:
    """Serialize back to INF text; parse_text(dump_section_map(m)) == m."""
    out: List[str] = []
    for section in smap:
        if not section.anonymous:
            if out:
                out.append("")
            out.append(f"[{section.name}]")
        for _seq, comment in sorted(section.comments.items()):
            out.append(comment)
        for key, value in section.items():
            out.append(f"{key}={value}")
    return "\n".join(out) + "\n"
