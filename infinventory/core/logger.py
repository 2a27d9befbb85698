# SPDX-License-Identifier: LGPL-3.0-or-later
# infinventory/core/logger.py
from __future__ import annotations

import datetime as _dt
import json
import logging
import os
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from termcolor import colored as _colored

# ---------------------------------------------------------------------------
# TRACE level (additive)
# ---------------------------------------------------------------------------

TRACE = 5
if not hasattr(logging, "TRACE"):
    logging.TRACE = TRACE  # type: ignore[attr-defined]
    logging.addLevelName(TRACE, "TRACE")


_LEVEL_EMOJI = {
    "TRACE": "🧬",
    "DEBUG": "🔍",
    "INFO": "✅",
    "WARNING": "⚠️",
    "ERROR": "💥",
    "CRITICAL": "🧨",
}
_LEVEL_COLOR = {
    "TRACE": "cyan",
    "DEBUG": "blue",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red",
}


def is_tty(stream=None) -> bool:
    """True if `stream` (default stdout) is attached to a terminal."""
    try:
        if stream is None:
            stream = sys.stdout
        return stream.isatty()
    except Exception:
        return False


def _supports_unicode() -> bool:
    """
    Best-effort check: if the stream encoding can't handle emoji, degrade gracefully.
    """
    try:
        enc = getattr(sys.stderr, "encoding", None) or "utf-8"
        "✅".encode(enc)
        return True
    except Exception:
        return False


def c(
    text: str,
    color: Optional[str] = None,
    attrs: Optional[List[str]] = None,
    *,
    enable: bool = True,
) -> str:
    """Colorize text with termcolor when enabled."""
    if not enable or not color:
        return text
    try:
        return _colored(text, color=color, attrs=attrs or [])
    except Exception:
        return text


# ---------------------------------------------------------------------------
# Context helpers
# ---------------------------------------------------------------------------

Ctx = Mapping[str, Any]


def _safe_str(v: Any, *, max_len: int = 240) -> str:
    try:
        s = str(v)
    except Exception:
        s = repr(v)
    s = s.replace("\n", "\\n").replace("\r", "\\r")
    if len(s) > max_len:
        s = s[: max_len - 1] + "…"
    return s


def _merge_ctx(base: Optional[Ctx], extra: Optional[Ctx]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if base:
        out.update(dict(base))
    if extra:
        out.update(dict(extra))
    return out


def _format_ctx_kv(ctx: Optional[Ctx]) -> str:
    if not ctx:
        return ""
    items = sorted(ctx.items(), key=lambda kv: str(kv[0]))
    parts = [f"{_safe_str(k, max_len=80)}={_safe_str(v)}" for k, v in items]
    return " " + " ".join(parts) if parts else ""


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter that carries a persistent context dict.
    Call sites can also pass `extra={"ctx": {...}}` which merges on top.

    Usage:
      log = Log.bind(logger, inf="oem1.inf")
      log.info("Resolving")
      log.warning("No [Manufacturer] section", extra={"ctx": {"line": 12}})
    """

    def __init__(self, logger: logging.Logger, ctx: Optional[Ctx] = None):
        super().__init__(logger, extra={"ctx": dict(ctx or {})})

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> Tuple[Any, Dict[str, Any]]:
        extra = kwargs.get("extra") or {}
        extra["ctx"] = _merge_ctx(self.extra.get("ctx"), extra.get("ctx"))
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **ctx: Any) -> "ContextLoggerAdapter":
        return ContextLoggerAdapter(self.logger, _merge_ctx(self.extra.get("ctx"), ctx))


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LogStyle:
    color: bool = True
    show_ms: bool = False
    show_src: bool = False  # module:line
    show_pid: bool = False
    show_thread: bool = False  # worker thread name (parallel batches)
    exception_indent: int = 2
    align_level: int = 8
    unicode: bool = True


class EmojiFormatter(logging.Formatter):
    def __init__(self, style: LogStyle):
        super().__init__()
        self._style = style

    def _now(self, created: float) -> str:
        dt = _dt.datetime.fromtimestamp(created)
        return dt.strftime("%H:%M:%S.%f")[:-3] if self._style.show_ms else dt.strftime("%H:%M:%S")

    def _emoji(self, levelname: str) -> str:
        if not self._style.unicode:
            return "·"
        return _LEVEL_EMOJI.get(levelname, "•")

    def _prefix_bits(self, record: logging.LogRecord) -> str:
        bits: List[str] = []

        if self._style.show_pid:
            bits.append(f"pid={os.getpid()}")

        if self._style.show_thread:
            bits.append(f"thread={record.threadName or threading.current_thread().name}")

        if self._style.show_src:
            bits.append(f"{record.module}:{record.lineno}")

        return (" [" + " ".join(bits) + "]") if bits else ""

    def _format_exception_block(self, record: logging.LogRecord, color_ok: bool) -> str:
        exc_text = self.formatException(record.exc_info) if record.exc_info else ""
        stack_text = record.stack_info if getattr(record, "stack_info", None) else ""
        if not exc_text and not stack_text:
            return ""

        block_text = "\n".join(p for p in (exc_text, stack_text) if p)
        indent = " " * max(0, int(self._style.exception_indent))
        indented = "\n".join(indent + ln for ln in block_text.splitlines())
        if exc_text:
            indented = c(indented, "red", enable=color_ok)
        return "\n" + indented

    def format(self, record: logging.LogRecord) -> str:
        ts = self._now(record.created)
        emoji = self._emoji(record.levelname)

        lvl = record.levelname
        msg = record.getMessage()

        color_ok = bool(self._style.color and is_tty(sys.stderr))

        lvl = c(lvl, _LEVEL_COLOR.get(record.levelname), enable=color_ok)
        if record.levelno >= logging.WARNING:
            msg = c(msg, _LEVEL_COLOR.get(record.levelname), attrs=["bold"], enable=color_ok)

        bits = self._prefix_bits(record)
        ctx_s = _format_ctx_kv(getattr(record, "ctx", None))

        line = f"{ts} {emoji} {lvl:<{self._style.align_level}}{bits} {msg}{ctx_s}"
        line += self._format_exception_block(record, color_ok)
        return line


class JsonFormatter(logging.Formatter):
    """
    NDJSON formatter (one JSON object per line), good for CI/log shipping.

    Includes:
      ts (ISO8601), level, logger, msg, pid, thread, module, lineno, ctx
      plus exception fields when present.
    """

    def __init__(self, *, utc: bool = True, include_src: bool = True):
        super().__init__()
        self._utc = bool(utc)
        self._include_src = bool(include_src)

    def _iso(self, created: float) -> str:
        dt = _dt.datetime.fromtimestamp(created, tz=_dt.timezone.utc) if self._utc else _dt.datetime.fromtimestamp(created)
        return dt.isoformat(timespec="milliseconds")

    def format(self, record: logging.LogRecord) -> str:
        obj: Dict[str, Any] = {
            "ts": self._iso(record.created),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "pid": os.getpid(),
            "thread": record.threadName,
        }
        if self._include_src:
            obj.update({"module": record.module, "lineno": record.lineno})

        ctx = getattr(record, "ctx", None)
        if ctx:
            try:
                obj["ctx"] = dict(ctx)
            except Exception:
                obj["ctx"] = {"_ctx": _safe_str(ctx)}

        if record.exc_info:
            et = record.exc_info[0].__name__ if record.exc_info[0] else "Exception"
            obj["exc_type"] = et
            obj["traceback"] = self.formatException(record.exc_info)

        try:
            return json.dumps(obj, ensure_ascii=False, sort_keys=False)
        except Exception:
            safe_obj = {k: _safe_str(v) for k, v in obj.items()}
            return json.dumps(safe_obj, ensure_ascii=False, sort_keys=False)


# ---------------------------------------------------------------------------
# Once-only warnings (per-process)
# ---------------------------------------------------------------------------

_warn_once_keys: set[str] = set()
_warn_once_lock = threading.Lock()


def _warn_key(key: Union[str, Tuple[Any, ...]]) -> str:
    if isinstance(key, str):
        return key
    return "|".join(_safe_str(x, max_len=160) for x in key)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class Log:
    @staticmethod
    def _level_from_flags(verbose: int, quiet: int) -> int:
        """
        Typical CLI mapping:
          quiet=0: default INFO
          -q: WARNING
          -qq: ERROR
          -v: INFO
          -vv: DEBUG
          -vvv: TRACE
        Quiet wins over verbose if both are set.
        """
        if quiet >= 2:
            return logging.ERROR
        if quiet == 1:
            return logging.WARNING
        if verbose >= 3:
            return TRACE
        if verbose >= 2:
            return logging.DEBUG
        return logging.INFO

    @staticmethod
    def bind(logger: logging.Logger, **ctx: Any) -> ContextLoggerAdapter:
        """Return a LoggerAdapter that carries a persistent context dict."""
        return ContextLoggerAdapter(logger, ctx)

    @staticmethod
    def banner(logger: logging.Logger, title: str, *, char: str = "─") -> None:
        width = 72
        t = f" {title.strip()} "
        side = char * max(8, (width - len(t)) // 2)
        logger.info((side + t + side)[:width])

    @staticmethod
    def step(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("➡️  %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def ok(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.info("✅ %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def warn(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.warning("⚠️  %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def fail(logger: logging.Logger, msg: str, **ctx: Any) -> None:
        logger.error("💥 %s", msg, extra={"ctx": ctx} if ctx else None)

    @staticmethod
    def trace(logger: logging.Logger, msg: str, *args: Any, **ctx: Any) -> None:
        exc_info = ctx.pop("exc_info", None)
        if not logger.isEnabledFor(TRACE):
            return
        logger.log(TRACE, msg, *args, extra={"ctx": ctx} if ctx else None, exc_info=exc_info)

    @staticmethod
    def warn_once(logger: logging.Logger, key: Union[str, Tuple[Any, ...]], msg: str, **ctx: Any) -> bool:
        """
        Log a warning only once per-process for `key`.
        Returns True if it logged, False if suppressed.
        """
        k = _warn_key(key)
        with _warn_once_lock:
            if k in _warn_once_keys:
                return False
            _warn_once_keys.add(k)
        logger.warning("⚠️  %s", msg, extra={"ctx": ctx} if ctx else None)
        return True

    @staticmethod
    def setup(
        verbose: int = 0,
        log_file: Optional[str] = None,
        *,
        quiet: int = 0,
        logger_name: str = "infinventory",
        json_logs: bool = False,
    ) -> logging.Logger:
        """
        Configure and return the project's logger.

        - Worker thread names are shown from -vv on (parallel batches).
        - json_logs=True emits NDJSON on stderr and in the log file.
        - The log file always carries full detail (ms, source, thread).
        """
        logger = logging.getLogger(logger_name)
        logger.propagate = False

        level = Log._level_from_flags(verbose, quiet)
        logger.setLevel(level)

        style = LogStyle(
            show_ms=verbose >= 3,
            show_src=verbose >= 3,
            show_thread=verbose >= 2,
            unicode=_supports_unicode(),
        )

        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

        sh = logging.StreamHandler(stream=sys.stderr)
        sh.setLevel(level)
        sh.setFormatter(JsonFormatter() if json_logs else EmojiFormatter(style))
        logger.addHandler(sh)

        if log_file:
            fp = Path(log_file).expanduser().resolve()
            fp.parent.mkdir(parents=True, exist_ok=True)

            if json_logs:
                fh_fmt: logging.Formatter = JsonFormatter()
            else:
                fh_fmt = EmojiFormatter(
                    LogStyle(
                        color=False,
                        show_ms=True,
                        show_src=True,
                        show_pid=True,
                        show_thread=True,
                        unicode=style.unicode,
                    )
                )

            fh = logging.FileHandler(fp, encoding="utf-8")
            fh.setLevel(level)
            fh.setFormatter(fh_fmt)
            logger.addHandler(fh)

        logger.debug("Logger initialized (level=%s, pid=%s)", logging.getLevelName(level), os.getpid())
        Log.trace(logger, "TRACE enabled (verbose >= 3)")
        return logger
