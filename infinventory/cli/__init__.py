# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/cli/__init__.py
from .args import build_parser, parse_args_with_config

__all__ = ["build_parser", "parse_args_with_config"]
