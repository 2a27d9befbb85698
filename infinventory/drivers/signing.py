# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# infinventory/drivers/signing.py
"""
Signing verification collaborators.

A verifier takes the path of an INF file and reports whether its driver
package is signed. "Not signed" is a normal answer, and so is any failure
to find out: callers always get a SigningResult back through safe_verify().
"""
from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Tuple

from ..core.exceptions import EXIT_BAD_ARGS, Fatal
from ..core.logger import Log
from ..core.logging_utils import safe_logger
from ..core.utils import U
from ..inf.reader import read_inf_file
from .fields import declared_catalog

OSSLSIGNCODE = "osslsigncode"
DEFAULT_SIGNING_TIMEOUT = 30.0

SIGNING_BACKENDS = ("auto", "none", OSSLSIGNCODE)


@dataclass(frozen=True)
class SigningResult:
    is_signed: bool = False
    catalog_file: str = ""
    digital_signer: str = ""
    digital_signer_version: str = ""

    @classmethod
    def unsigned(cls) -> "SigningResult":
        return cls()


class SigningVerifier(Protocol):
    def verify(self, inf_path: Path) -> SigningResult:
        ...


class UnsignedVerifier:
    """Reports every package as unsigned (no verification tool configured)."""

    def verify(self, inf_path: Path) -> SigningResult:
        return SigningResult.unsigned()


_SUBJECT_RE = re.compile(r"^\s*Subject\s*:\s*(.+?)\s*$", re.MULTILINE)
_VERSION_RE = re.compile(r"^\s*Version\s*:\s*(.+?)\s*$", re.MULTILINE)
_CN_RE = re.compile(r"CN\s*=\s*([^/,]+)")


def parse_osslsigncode_output(text: str) -> Tuple[str, str]:
    """
    Extract (signer, signer version) from `osslsigncode verify` output.

    The signer is the CN of the first certificate subject (the full subject
    when it has no CN). The version is only present on builds that print
    certificate details.
    """
    signer = ""
    m = _SUBJECT_RE.search(text or "")
    if m:
        subject = m.group(1)
        cn = _CN_RE.search(subject)
        signer = cn.group(1).strip() if cn else subject
    vm = _VERSION_RE.search(text or "")
    return signer, (vm.group(1) if vm else "")


class OsslsigncodeVerifier:
    """
    Verifies the package catalog with `osslsigncode verify -in <catalog>`.

    The catalog is the one the INF declares in [Version] (looked up
    case-insensitively next to the INF), else the first *.cat beside it.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        *,
        tool: str = OSSLSIGNCODE,
        timeout: float = DEFAULT_SIGNING_TIMEOUT,
    ) -> None:
        self.logger = safe_logger(logger)
        self.tool = tool
        self.timeout = timeout

    def find_catalog(self, inf_path: Path) -> Optional[Path]:
        folder = inf_path.parent
        declared = ""
        try:
            declared = declared_catalog(read_inf_file(inf_path))
        except Exception as e:
            Log.trace(self.logger, "catalog lookup: cannot parse %s: %s", inf_path, e)

        cats = sorted(p for p in folder.iterdir() if p.is_file() and p.suffix.lower() == ".cat")
        if declared:
            for cat in cats:
                if cat.name.lower() == declared.lower():
                    return cat
        return cats[0] if cats else None

    def verify(self, inf_path: Path) -> SigningResult:
        catalog = self.find_catalog(inf_path)
        if catalog is None:
            self.logger.debug("No catalog next to %s; treating as unsigned", inf_path)
            return SigningResult.unsigned()

        cp = U.run_cmd(
            self.logger,
            [self.tool, "verify", "-in", str(catalog)],
            check=False,
            capture=True,
            timeout=self.timeout,
        )
        if cp.returncode != 0:
            self.logger.debug("%s: signature not verified (rc=%s)", catalog.name, cp.returncode)
            return SigningResult.unsigned()

        signer, signer_version = parse_osslsigncode_output(cp.stdout or "")
        return SigningResult(
            is_signed=True,
            catalog_file=catalog.name,
            digital_signer=signer,
            digital_signer_version=signer_version,
        )


def safe_verify(verifier: SigningVerifier, inf_path: Path, logger: Optional[logging.Logger] = None) -> SigningResult:
    """Run a verifier; any failure (missing tool, timeout, crash) means unsigned."""
    try:
        return verifier.verify(inf_path)
    except (OSError, subprocess.SubprocessError) as e:
        safe_logger(logger).warning("Signing check failed for %s: %s", inf_path, e)
    except Exception as e:
        safe_logger(logger).warning("Signing check crashed for %s: %s: %s", inf_path, type(e).__name__, e)
    return SigningResult.unsigned()


def make_verifier(
    backend: str,
    logger: Optional[logging.Logger] = None,
    *,
    timeout: float = DEFAULT_SIGNING_TIMEOUT,
) -> SigningVerifier:
    """
    auto          osslsigncode when installed, else unsigned
    none          unsigned
    osslsigncode  osslsigncode (Fatal if the tool is missing)
    """
    lg = safe_logger(logger)
    backend = (backend or "auto").lower()

    if backend == "none":
        return UnsignedVerifier()

    tool = U.which(OSSLSIGNCODE)
    if backend == OSSLSIGNCODE:
        if not tool:
            raise Fatal(EXIT_BAD_ARGS, f"{OSSLSIGNCODE} not found in PATH (required by --signing {OSSLSIGNCODE})")
        return OsslsigncodeVerifier(lg, tool=tool, timeout=timeout)

    if backend == "auto":
        if tool:
            lg.debug("Signing backend: %s (%s)", OSSLSIGNCODE, tool)
            return OsslsigncodeVerifier(lg, tool=tool, timeout=timeout)
        Log.warn_once(lg, "signing-auto-none", f"{OSSLSIGNCODE} not installed; all drivers reported unsigned")
        return UnsignedVerifier()

    raise Fatal(EXIT_BAD_ARGS, f"unknown signing backend: {backend} (choose from {', '.join(SIGNING_BACKENDS)})")
