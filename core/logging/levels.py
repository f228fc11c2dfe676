from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    SUCCESS = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


_CUSTOM = (LogLevel.TRACE, LogLevel.SUCCESS)


def register_levels() -> None:
    for lvl in _CUSTOM:
        if logging.getLevelName(int(lvl)) != lvl.name:
            logging.addLevelName(int(lvl), lvl.name)


def to_level(value: int | str | None, default: int = logging.INFO) -> int:
    """Resolve ``value`` (name, number or numeric string) to a logging level."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    text = value.strip().upper()
    if text.isdigit():
        return int(text)
    if text in LogLevel.__members__:
        return int(LogLevel[text])
    return default
