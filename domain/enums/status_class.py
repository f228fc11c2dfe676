"""Per-metric status class used to render each measurement."""
from enum import Enum


class StatusClass(Enum):
    """Display class of one metric.

    NEUTRAL marks a metric that could not be evaluated (unknown name, missing
    value, wrong value shape). It is not a pass and never counts as a warning
    or failure.
    """

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"
    NEUTRAL = "neutral"

    @property
    def css_class(self) -> str:
        return f"status-{self.value}"
