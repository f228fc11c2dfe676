from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

from .context import get_context

_LEVEL_COLORS = {
    "TRACE": "\033[90m",
    "DEBUG": "\033[37m",
    "INFO": "\033[36m",
    "SUCCESS": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime", "service", "log_context"}


def _record_metadata(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime(record.created)),
        "level": record.levelname,
        "service": getattr(record, "service", None),
        "logger": record.name,
        "function": record.funcName,
        "line_number": record.lineno,
    }


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    ctx = getattr(record, "log_context", None)
    return ctx if ctx is not None else get_context()


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED and not k.startswith("_")}


class ConsoleFormatter(logging.Formatter):
    """One colored line per record: ``time LEVEL [dc] message key=value ...``."""

    def __init__(self, *, color: bool = True) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        try:
            md = _record_metadata(record)
            ctx = _record_context(record)
            parts = [md["timestamp"], f"{record.levelname:<8}"]
            dc = ctx.get("dc")
            if dc:
                parts.append(f"[{dc}]")
            parts.append(record.getMessage())
            fields = _extra_fields(record)
            if fields:
                parts.append(" ".join(f"{k}={v}" for k, v in fields.items()))
            line = " ".join(parts)
            if record.exc_info:
                line = f"{line}\n{self.formatException(record.exc_info)}"
            if not self.color:
                return line
            return f"{_LEVEL_COLORS.get(record.levelname, '')}{line}{_RESET}"
        except Exception:
            return record.msg if isinstance(record.msg, str) else "<log format error>"


class JSONFormatter(logging.Formatter):
    """JSON-lines records for the rotating run log."""

    def format(self, record: logging.LogRecord) -> str:
        try:
            payload: Dict[str, Any] = _record_metadata(record)
            payload["message"] = record.getMessage()
            ctx = _record_context(record)
            if ctx:
                payload["context"] = ctx
            fields = _extra_fields(record)
            if fields:
                payload["fields"] = fields
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str, separators=(",", ":"))
        except Exception:
            return json.dumps({"message": "log format error"}, separators=(",", ":"))
