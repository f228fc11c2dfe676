"""Fold a node's probe results into one OverallState."""
from __future__ import annotations

from typing import List, Mapping, Optional

from domain.entities import ProbeValue
from domain.enums import Metric, OverallState
from domain.policy import SeverityPolicy, Thresholds
from .models import Verdict


def _number(results: Mapping[str, ProbeValue], metric: Metric) -> Optional[float]:
    value = results.get(str(metric))
    if value is None:
        return None
    if not isinstance(value, ProbeValue):
        value = ProbeValue.coerce(value)
    return value.number


def _failed(results: Mapping[str, ProbeValue], metrics) -> List[str]:
    hits = []
    for metric in sorted(metrics):
        value = results.get(metric)
        if value is None:
            continue
        if not isinstance(value, ProbeValue):
            value = ProbeValue.coerce(value)
        if value.is_failure:
            hits.append(f"{metric} {value}")
    return hits


def aggregate(results: Mapping[str, ProbeValue], thresholds: Thresholds, policy: SeverityPolicy) -> Verdict:
    """Overall verdict, applying the rules in strict precedence order.

    1. any critical binary metric failed                  -> Critical
    2. free space (GB or percent) at its fail threshold   -> Critical
    3. warning binary failure or any warn breach          -> Warning
       (time offset at its fail threshold -> Critical when the policy says so)
    4. otherwise                                          -> Healthy

    Numeric rules only look at Numeric values; failure sentinels on threshold
    metrics do not breach them.
    """
    # 1. critical binary scan
    critical = _failed(results, policy.critical_binary)
    if critical:
        return Verdict(OverallState.CRITICAL, tuple(critical))

    free_gb = _number(results, Metric.FREE_SPACE_GB)
    free_pct = _number(results, Metric.FREE_SPACE_PERCENT)

    # 2. critical numeric scan (fail thresholds only)
    critical = []
    if free_gb is not None and free_gb < thresholds.free_gb_fail:
        critical.append(f"{Metric.FREE_SPACE_GB.value} {free_gb:g} < {thresholds.free_gb_fail:g}")
    if free_pct is not None and free_pct <= thresholds.free_percent_fail:
        critical.append(f"{Metric.FREE_SPACE_PERCENT.value} {free_pct:g} <= {thresholds.free_percent_fail:g}")
    if critical:
        return Verdict(OverallState.CRITICAL, tuple(critical))

    # 3. warning accumulation
    warnings = _failed(results, policy.warning_binary)
    if free_gb is not None and free_gb < thresholds.free_gb_warn:
        warnings.append(f"{Metric.FREE_SPACE_GB.value} {free_gb:g} < {thresholds.free_gb_warn:g}")
    if free_pct is not None and free_pct <= thresholds.free_percent_warn:
        warnings.append(f"{Metric.FREE_SPACE_PERCENT.value} {free_pct:g} <= {thresholds.free_percent_warn:g}")

    offset = _number(results, Metric.TIME_OFFSET_SECONDS)
    if offset is not None:
        drift = abs(offset)
        if drift >= thresholds.time_fail_seconds:
            cause = f"{Metric.TIME_OFFSET_SECONDS.value} {offset:g} >= {thresholds.time_fail_seconds:g}"
            if policy.time_fail_is_critical:
                return Verdict(OverallState.CRITICAL, (cause,))
            warnings.append(cause)
        elif drift >= thresholds.time_warn_seconds:
            warnings.append(f"{Metric.TIME_OFFSET_SECONDS.value} {offset:g} >= {thresholds.time_warn_seconds:g}")

    uptime = _number(results, Metric.UPTIME_HOURS)
    if uptime is not None and uptime <= thresholds.uptime_warn_hours:
        warnings.append(f"{Metric.UPTIME_HOURS.value} {uptime:g} <= {thresholds.uptime_warn_hours:g}")

    if warnings:
        return Verdict(OverallState.WARNING, tuple(warnings))

    # 4.
    return Verdict(OverallState.HEALTHY)


def overall_state(results: Mapping[str, ProbeValue], thresholds: Thresholds, policy: SeverityPolicy) -> OverallState:
    return aggregate(results, thresholds, policy).state
