from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler, QueueHandler, QueueListener
from queue import Queue
from pathlib import Path
from typing import Optional

from .levels import register_levels, to_level
from .context import get_context
from .formatter import ConsoleFormatter, JSONFormatter

_listener: QueueListener | None = None


class _RecordEnricher(logging.Filter):
    """Stamp service name and bound context onto the record before it is queued."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "service"):
            record.service = self.service
        if not hasattr(record, "log_context"):
            record.log_context = get_context()
        return True


def bootstrap_logging(
    *,
    service: str = "adhealth",
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "adhealth.jsonl",
    console: bool | None = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Configure the root logger: console to stderr, JSON lines to ``log_dir``.

    The file handler sits behind a queue so probe tasks never block on disk.
    ``console`` defaults to the ``LOG_CONSOLE`` variable (on unless "false").
    """
    global _listener
    shutdown_logging()
    register_levels()
    root = logging.getLogger()
    root.handlers.clear()
    lvl = to_level(level or os.getenv("LOG_LEVEL"))
    root.setLevel(lvl)
    enricher = _RecordEnricher(service)

    if console is None:
        console = os.getenv("LOG_CONSOLE", "true").strip().lower() != "false"
    if console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setLevel(to_level(os.getenv("LOG_CONSOLE_LEVEL"), default=lvl))
        stream.setFormatter(ConsoleFormatter(color=sys.stderr.isatty()))
        stream.addFilter(enricher)
        root.addHandler(stream)

    if log_dir:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            json_handler = RotatingFileHandler(
                str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        except OSError as e:
            root.warning("file logging disabled: %s", e)
            return
        json_handler.setLevel(lvl)
        json_handler.setFormatter(JSONFormatter())
        q: Queue[logging.LogRecord] = Queue(-1)
        qh = QueueHandler(q)
        qh.addFilter(enricher)
        root.addHandler(qh)
        _listener = QueueListener(q, json_handler, respect_handler_level=True)
        _listener.start()


def shutdown_logging() -> None:
    """Flush and stop the file listener, if one is running."""
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None
