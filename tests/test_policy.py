"""Tests for thresholds, the DCDIAG table and the severity policy."""

from __future__ import annotations

import pytest

from domain.enums import Severity
from domain.policy import DCDIAG_TESTS, DcdiagTest, SeverityPolicy, Thresholds, dcdiag_test_names


def test_dcdiag_table_has_21_unique_tests() -> None:
    names = dcdiag_test_names()
    assert len(names) == 21
    assert len({n.lower() for n in names}) == 21


def test_default_policy_partitions_every_binary_metric(policy) -> None:
    assert not policy.critical_binary & policy.warning_binary
    for test in DCDIAG_TESTS:
        expected = policy.critical_binary if test.severity is Severity.CRITICAL else policy.warning_binary
        assert test.metric in expected
    assert {"dns", "ping", "service.dns", "service.ntds", "service.netlogon"} <= policy.critical_binary
    assert policy.time_fail_is_critical


def test_policy_from_custom_table() -> None:
    policy = SeverityPolicy.from_tests([DcdiagTest("Replications", Severity.WARNING)])
    assert "dcdiag.Replications" in policy.warning_binary
    assert "dcdiag.Connectivity" not in policy.binary_metrics


def test_overlapping_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        SeverityPolicy(frozenset({"ping"}), frozenset({"ping"}))


def test_thresholds_are_immutable(thresholds) -> None:
    with pytest.raises(AttributeError):
        thresholds.free_gb_fail = 1  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"free_percent_fail": 40, "free_percent_warn": 30},
        {"free_gb_fail": 20, "free_gb_warn": 10},
        {"time_warn_seconds": 2.0, "time_fail_seconds": 1.0},
    ],
)
def test_inverted_thresholds_are_rejected(kwargs) -> None:
    with pytest.raises(ValueError):
        Thresholds(**kwargs)


def test_thresholds_from_env(monkeypatch) -> None:
    monkeypatch.setenv("ADHEALTH_UPTIME_WARN_HOURS", "48")
    monkeypatch.setenv("ADHEALTH_FREE_GB_WARN", "20")
    monkeypatch.setenv("ADHEALTH_TIME_FAIL_SECONDS", "not-a-number")
    t = Thresholds.from_env()
    assert t.uptime_warn_hours == 48
    assert t.free_gb_warn == 20
    assert t.time_fail_seconds == Thresholds().time_fail_seconds
