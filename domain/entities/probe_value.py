"""Probe outcome values: Success, Failure(reason) or Numeric(value)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

# Failure reasons produced by the probes.
FAILED = "failed"
COULD_NOT_MEASURE = "could not measure"
UNREACHABLE = "unreachable"
TIMEOUT = "timeout"
CIM_FAILURE = "cim failure"
NOT_REPORTED = "not reported"

_SUCCESS_TOKENS = frozenset({"success", "passed", "pass", "ok", "running", "true"})
_FAILURE_TOKENS = {
    "fail": FAILED,
    "failed": FAILED,
    "false": FAILED,
    "stopped": FAILED,
    "could not measure": COULD_NOT_MEASURE,
    "unreachable": UNREACHABLE,
    "timeout": TIMEOUT,
    "cim failure": CIM_FAILURE,
    "not reported": NOT_REPORTED,
}


class ProbeValue:
    """Base of the three probe outcome shapes."""

    __slots__ = ()

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def number(self) -> Optional[float]:
        """Numeric payload, or None when this is not a Numeric value."""
        return None

    @classmethod
    def coerce(cls, raw: Any) -> "ProbeValue":
        """Convert a loosely typed token (bool, number, text) to a ProbeValue.

        Unrecognised text becomes a Failure so it can never pass as a number.
        """
        if isinstance(raw, ProbeValue):
            return raw
        if raw is None:
            return Failure(COULD_NOT_MEASURE)
        if isinstance(raw, bool):
            return Success() if raw else Failure(FAILED)
        if isinstance(raw, (int, float)):
            return Numeric(float(raw)) if math.isfinite(raw) else Failure(f"unparseable: {raw}")
        text = str(raw).strip()
        key = text.lower()
        if key in _SUCCESS_TOKENS:
            return Success()
        if key in _FAILURE_TOKENS:
            return Failure(_FAILURE_TOKENS[key])
        try:
            value = float(text)
        except ValueError:
            return Failure(f"unparseable: {text}")
        if not math.isfinite(value):
            return Failure(f"unparseable: {text}")
        return Numeric(value)


@dataclass(frozen=True, slots=True)
class Success(ProbeValue):
    @property
    def is_success(self) -> bool:
        return True

    def __str__(self) -> str:
        return "Success"


@dataclass(frozen=True, slots=True)
class Failure(ProbeValue):
    reason: str = FAILED

    @property
    def is_failure(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.reason.capitalize()


@dataclass(frozen=True, slots=True)
class Numeric(ProbeValue):
    value: float

    @property
    def number(self) -> Optional[float]:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:g}"
