"""Which binary metrics force Critical and which force Warning."""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable

from domain.enums import Metric, Severity
from .dcdiag_tests import DCDIAG_TESTS, DcdiagTest


@dataclass(frozen=True, slots=True)
class SeverityPolicy:
    """Partition of binary metrics by failure severity.

    ``time_fail_is_critical``: a time offset at or beyond the fail threshold
    forces Critical instead of Warning.
    """
    critical_binary: FrozenSet[str]
    warning_binary: FrozenSet[str]
    time_fail_is_critical: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "critical_binary", frozenset(str(m) for m in self.critical_binary))
        object.__setattr__(self, "warning_binary", frozenset(str(m) for m in self.warning_binary))
        overlap = self.critical_binary & self.warning_binary
        if overlap:
            raise ValueError(f"metrics listed as both critical and warning: {sorted(overlap)}")

    @property
    def binary_metrics(self) -> FrozenSet[str]:
        return self.critical_binary | self.warning_binary

    @classmethod
    def from_tests(
        cls,
        tests: Iterable[DcdiagTest] = DCDIAG_TESTS,
        *,
        time_fail_is_critical: bool = True,
    ) -> "SeverityPolicy":
        tests = list(tests)
        critical = {str(m) for m in Metric.binary()}
        critical.update(t.metric for t in tests if t.severity is Severity.CRITICAL)
        warning = {t.metric for t in tests if t.severity is Severity.WARNING}
        return cls(frozenset(critical), frozenset(warning), time_fail_is_critical)

    @classmethod
    def default(cls) -> "SeverityPolicy":
        return cls.from_tests()
