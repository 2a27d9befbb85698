# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/config/__init__.py
from .config_loader import Config

__all__ = ["Config"]
