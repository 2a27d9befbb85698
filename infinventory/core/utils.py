# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/core/utils.py
from __future__ import annotations

import hashlib
import json
import logging
import shlex
import subprocess
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .exceptions import Fatal


class U:
    @staticmethod
    def die(logger: logging.Logger, msg: str, code: int = 1) -> None:
        logger.error(msg)
        raise Fatal(code, msg)

    @staticmethod
    def ensure_dir(p: Path) -> None:
        p.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def which(prog: str) -> Optional[str]:
        from shutil import which as _which
        return _which(prog)

    @staticmethod
    def json_dump(obj: Any) -> str:
        try:
            return json.dumps(obj, indent=2, sort_keys=True, default=str)
        except Exception:
            return repr(obj)

    @staticmethod
    def _pretty_cmd(cmd: List[str]) -> str:
        return " ".join(shlex.quote(x) for x in cmd)

    @staticmethod
    def run_cmd(
        logger: logging.Logger,
        cmd: List[str],
        *,
        check: bool = True,
        capture: bool = False,
        timeout: Optional[float] = None,
        fatal: bool = False,
    ) -> subprocess.CompletedProcess:
        """
        Run a command.

        - capture=True uses subprocess.run(capture_output=True, text=True)
        - fatal=True wraps failures into Fatal (otherwise re-raises subprocess exceptions)
        """
        pretty = U._pretty_cmd(cmd)
        logger.debug("Running: %s", pretty)

        try:
            return subprocess.run(
                cmd,
                check=check,
                capture_output=capture,
                text=True,
                timeout=timeout,
            )

        except subprocess.CalledProcessError as e:
            stdout = (e.stdout or e.output or "").strip()
            stderr = (e.stderr or "").strip()
            if stdout or stderr:
                logger.debug(
                    "Command failed: %s%s%s",
                    pretty,
                    f"\nstdout:\n{stdout}" if stdout else "",
                    f"\nstderr:\n{stderr}" if stderr else "",
                )
            else:
                logger.debug("Command failed: %s (no output)", pretty)

            if fatal:
                raise Fatal(e.returncode or 1, f"Command failed: {pretty}") from e
            raise

        except subprocess.TimeoutExpired as e:
            logger.warning("Command timed out: %s (timeout=%ss)", pretty, timeout)
            if fatal:
                raise Fatal(124, f"Command timed out: {pretty}") from e
            raise

    @staticmethod
    def checksum(path: Path, algo: str = "sha256") -> str:
        h = hashlib.new(algo)
        chunk = 1024 * 1024

        def _iter_blocks(f) -> Iterable[bytes]:
            while True:
                b = f.read(chunk)
                if not b:
                    break
                yield b

        with open(path, "rb") as f:
            for blk in _iter_blocks(f):
                h.update(blk)
        return h.hexdigest()
