# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/config/config_loader.py
"""
YAML/JSON configuration files.

Several files may be given; they are merged in order (later overrides
earlier, nested mappings merged key by key). The merged mapping becomes the
argparse defaults, so anything on the command line still wins.
"""
from __future__ import annotations

import argparse
import glob
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.exceptions import EXIT_BAD_ARGS
from ..core.logger import Log
from ..core.utils import U

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")

# Config-only keys (no matching argparse dest).
NON_ARG_KEYS = frozenset({"class_names"})


def _read_structured_file(path: Path) -> Dict[str, Any]:
    """
    Read a JSON/YAML file into a dict.

    *.json is JSON, *.yml / *.yaml is YAML; anything else is tried as JSON
    first, then YAML.
    """
    sfx = path.suffix.lower()
    raw = path.read_text(encoding="utf-8", errors="replace")
    if sfx == ".json":
        parsed = json.loads(raw)
    elif sfx in (".yml", ".yaml"):
        parsed = yaml.safe_load(raw)
    else:
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = yaml.safe_load(raw)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("top-level config must be a mapping/object (dict)")
    return parsed


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _normalize_keys(conf: Dict[str, Any]) -> Dict[str, Any]:
    """`list-pnp-ids` and `list_pnp_ids` are the same key; nested mappings keep their keys."""
    return {str(k).strip().replace("-", "_"): v for k, v in conf.items()}


class Config:
    @staticmethod
    def expand_configs(logger: logging.Logger, cfgs: Sequence[str]) -> List[Path]:
        """
        Expand user paths, globs and directories (all *.yaml/*.yml/*.json
        inside, sorted) into a list of files. A missing file is fatal.
        """
        out: List[Path] = []
        for raw in cfgs:
            s = os.path.expanduser(os.path.expandvars(str(raw)))
            matches = sorted(glob.glob(s)) if glob.has_magic(s) else [s]
            if not matches:
                U.die(logger, f"Config pattern matched nothing: {raw}", EXIT_BAD_ARGS)
            for m in matches:
                p = Path(m)
                if p.is_dir():
                    out.extend(sorted(x for x in p.iterdir() if x.is_file() and x.suffix.lower() in CONFIG_SUFFIXES))
                elif p.is_file():
                    out.append(p)
                else:
                    U.die(logger, f"Config file not found: {p}", EXIT_BAD_ARGS)
        Log.trace(logger, "config files: %s", [str(p) for p in out])
        return out

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for p in paths:
            try:
                conf = _read_structured_file(Path(p))
            except (OSError, ValueError, yaml.YAMLError) as e:
                U.die(logger, f"Cannot load config {p}: {e}", EXIT_BAD_ARGS)
            logger.debug("Loaded config %s (%d keys)", p, len(conf))
            merged = _deep_merge(merged, _normalize_keys(conf))
        return merged

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Dict[str, Any]) -> None:
        """Config values for known dests become parser defaults; unknown keys are reported once."""
        dests = {a.dest for a in parser._actions}
        defaults: Dict[str, Any] = {}
        for k, v in conf.items():
            if k in dests:
                defaults[k] = v
            elif k not in NON_ARG_KEYS:
                Log.warn_once(logger, ("config-unknown-key", k), f"Ignoring unknown config key: {k}")
        if defaults:
            parser.set_defaults(**defaults)
            Log.trace(logger, "config defaults applied: %s", sorted(defaults))
