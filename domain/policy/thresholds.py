"""Numeric cutoffs for the threshold metrics."""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Thresholds:
    """Warn/fail cutoffs, built once at startup and shared read-only.

    Comparisons:
      uptime_hours         warn when hours <= uptime_warn_hours
      free_space_percent   fail when <= free_percent_fail, warn when <= free_percent_warn
      free_space_gb        fail when <  free_gb_fail,      warn when <  free_gb_warn
      time_offset_seconds  fail when |offset| >= time_fail_seconds,
                           warn when |offset| >= time_warn_seconds
    """
    uptime_warn_hours: float = 24
    free_percent_fail: float = 5
    free_percent_warn: float = 30
    free_gb_fail: float = 5
    free_gb_warn: float = 10
    time_warn_seconds: float = 0.5
    time_fail_seconds: float = 1.0

    def __post_init__(self) -> None:
        if self.free_percent_fail > self.free_percent_warn:
            raise ValueError("free_percent_fail must not exceed free_percent_warn")
        if self.free_gb_fail > self.free_gb_warn:
            raise ValueError("free_gb_fail must not exceed free_gb_warn")
        if self.time_fail_seconds < self.time_warn_seconds:
            raise ValueError("time_fail_seconds must not be below time_warn_seconds")

    @classmethod
    def from_env(cls) -> "Thresholds":
        """Build Thresholds from ADHEALTH_* environment variables."""
        defaults = cls()

        def _float(name: str, default: float) -> float:
            try:
                return float(os.getenv(name, str(default)))
            except ValueError:
                return default

        return cls(
            uptime_warn_hours=_float("ADHEALTH_UPTIME_WARN_HOURS", defaults.uptime_warn_hours),
            free_percent_fail=_float("ADHEALTH_FREE_PERCENT_FAIL", defaults.free_percent_fail),
            free_percent_warn=_float("ADHEALTH_FREE_PERCENT_WARN", defaults.free_percent_warn),
            free_gb_fail=_float("ADHEALTH_FREE_GB_FAIL", defaults.free_gb_fail),
            free_gb_warn=_float("ADHEALTH_FREE_GB_WARN", defaults.free_gb_warn),
            time_warn_seconds=_float("ADHEALTH_TIME_WARN_SECONDS", defaults.time_warn_seconds),
            time_fail_seconds=_float("ADHEALTH_TIME_FAIL_SECONDS", defaults.time_fail_seconds),
        )
