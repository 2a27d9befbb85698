# SPDX-License-Identifier: LGPL-3.0-or-later
# infinventory/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except Exception:
        return default


def _clamp_exit_code(code: int) -> int:
    # Exit codes are 0..255.
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


_SECRET_KEY_PARTS = (
    "pass",
    "password",
    "secret",
    "token",
    "apikey",
    "api_key",
    "auth",
    "private",
)

REDACTED = "***REDACTED***"


def _is_secret_key(k: str) -> bool:
    ks = (k or "").lower()
    return any(p in ks for p in _SECRET_KEY_PARTS)


def _redact(ctx: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (REDACTED if _is_secret_key(str(k)) else v) for k, v in ctx.items()}


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    # Stable order, redaction, single-line.
    parts = []
    for k, v in sorted(_redact(ctx).items(), key=lambda kv: str(kv[0])):
        parts.append(f"{k}={v!r}" if v != REDACTED else f"{k}=<redacted>")
    return ", ".join(parts)


@dataclass(eq=False)
class InfInventoryError(Exception):
    """
    Base project error with:
      - stable fields (code, msg, cause, context)
      - readable __str__ (what users see)
      - safe code handling (never crashes on int())
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        if self.context is None:
            self.context = {}
        super().__init__(self.msg)
        self.args = (self.msg,)

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """
        Human-friendly message for CLI output/logs.
        """
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context), limit=600)}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)


class Fatal(InfInventoryError):
    """
    User-facing fatal error (exit code is honored by main()).
    """
    pass


class InfParseError(InfInventoryError):
    """
    An INF file could not be read or decoded at all.
    Field-level problems never raise this; they resolve to empty values.
    """
    pass


# Exit codes surfaced to main().
EXIT_BAD_ARGS = 2
EXIT_BAD_PATH = 2
EXIT_NO_INF_FILES = 3


def wrap_fatal(msg: str, exc: Optional[BaseException] = None, code: int = 1, **context: Any) -> Fatal:
    return Fatal(code=code, msg=msg, cause=exc, context=context or None)


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, InfInventoryError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
