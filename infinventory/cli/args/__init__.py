# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/cli/args/__init__.py
"""
Argument parsing for the infinventory CLI (two-phase: config first, then flags).
"""
from __future__ import annotations

from .builder import HelpFormatter, _build_epilog
from .groups import _add_global_config_logging, _add_input_paths, _add_output, _add_resolution
from .parser import _build_preparser, _load_merged_config, build_parser, parse_args_with_config
from .validators import _require, validate_args

__all__ = [
    "HelpFormatter",
    "_add_global_config_logging",
    "_add_input_paths",
    "_add_output",
    "_add_resolution",
    "_build_epilog",
    "_build_preparser",
    "_load_merged_config",
    "_require",
    "build_parser",
    "parse_args_with_config",
    "validate_args",
]
