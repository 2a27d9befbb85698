# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/inf/__init__.py
"""
INF reading: sections, multi-value entries and string-table tokens.
"""

from .reader import (
    Section,
    SectionMap,
    decode_inf_bytes,
    dump_section_map,
    parse_lines,
    parse_text,
    read_inf_file,
)
from .tokens import resolve_token
from .values import MULTI_SEPARATOR, MultiValue, split_multi

__all__ = [
    "MULTI_SEPARATOR",
    "MultiValue",
    "Section",
    "SectionMap",
    "decode_inf_bytes",
    "dump_section_map",
    "parse_lines",
    "parse_text",
    "read_inf_file",
    "resolve_token",
    "split_multi",
]
