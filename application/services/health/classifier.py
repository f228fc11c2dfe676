"""Per-metric status classification (pass / warn / fail / neutral)."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Mapping, Optional

from domain.entities import ProbeValue
from domain.enums import DCDIAG_PREFIX, Metric, StatusClass
from domain.policy import Thresholds, DCDIAG_TESTS

_BINARY_METRICS = frozenset(str(m) for m in Metric.binary())

# Metrics the aggregator consults; reported as NEUTRAL when absent.
CONSULTED_METRICS: tuple[str, ...] = (
    *(str(m) for m in Metric.binary()),
    *(str(m) for m in Metric.threshold()),
    *(t.metric for t in DCDIAG_TESTS),
)


def is_binary_metric(metric: str) -> bool:
    return metric in _BINARY_METRICS or metric.startswith(DCDIAG_PREFIX)


def _uptime(hours: float, t: Thresholds) -> StatusClass:
    return StatusClass.WARN if hours <= t.uptime_warn_hours else StatusClass.PASS


def _free_percent(percent: float, t: Thresholds) -> StatusClass:
    if percent <= t.free_percent_fail:
        return StatusClass.FAIL
    if percent <= t.free_percent_warn:
        return StatusClass.WARN
    return StatusClass.PASS


def _free_gb(gb: float, t: Thresholds) -> StatusClass:
    if gb < t.free_gb_fail:
        return StatusClass.FAIL
    if gb < t.free_gb_warn:
        return StatusClass.WARN
    return StatusClass.PASS


def _time_offset(offset: float, t: Thresholds) -> StatusClass:
    drift = abs(offset)
    if drift >= t.time_fail_seconds:
        return StatusClass.FAIL
    if drift >= t.time_warn_seconds:
        return StatusClass.WARN
    return StatusClass.PASS


_THRESHOLD_RULES: Dict[str, Callable[[float, Thresholds], StatusClass]] = {
    str(Metric.UPTIME_HOURS): _uptime,
    str(Metric.FREE_SPACE_PERCENT): _free_percent,
    str(Metric.FREE_SPACE_GB): _free_gb,
    str(Metric.TIME_OFFSET_SECONDS): _time_offset,
}


def classify_metric(metric: str, value: Optional[ProbeValue], thresholds: Thresholds) -> StatusClass:
    """Map one probe value to its status class.

    Never raises. Unknown metrics, missing values and values of the wrong
    shape for the metric are NEUTRAL.
    """
    metric = str(metric)
    if value is None:
        return StatusClass.NEUTRAL
    if not isinstance(value, ProbeValue):
        value = ProbeValue.coerce(value)

    if is_binary_metric(metric):
        if value.is_success:
            return StatusClass.PASS
        if value.is_failure:
            return StatusClass.FAIL
        return StatusClass.NEUTRAL

    rule = _THRESHOLD_RULES.get(metric)
    if rule is None:
        return StatusClass.NEUTRAL
    if value.is_failure:
        return StatusClass.FAIL
    number = value.number
    if number is None:
        return StatusClass.NEUTRAL
    return rule(number, thresholds)


def classify_all(
    results: Mapping[str, ProbeValue],
    thresholds: Thresholds,
    *,
    consulted: Iterable[str] = CONSULTED_METRICS,
) -> Dict[str, StatusClass]:
    """Status of every metric in ``results`` plus every consulted metric."""
    statuses: Dict[str, StatusClass] = {}
    for metric in consulted:
        statuses[metric] = classify_metric(metric, results.get(metric), thresholds)
    for metric, value in results.items():
        if metric not in statuses:
            statuses[metric] = classify_metric(metric, value, thresholds)
    return statuses
