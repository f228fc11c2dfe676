"""Tests for HTML and JSON report rendering."""

from __future__ import annotations

from datetime import datetime

from application.services.health import HealthEngine
from domain.entities import Failure, Numeric
from domain.enums import Metric
from infrastructure.report import HtmlReportRenderer, format_value, to_json_payload


def _healths(make_node, thresholds, policy):
    engine = HealthEngine(thresholds, policy)
    return engine.evaluate_many([
        make_node("dc01.corp.example.com", site="HQ", fsmo_roles={"PDCEmulator"}),
        make_node(
            "dc02.corp.example.com",
            site="Branch",
            overrides={str(Metric.FREE_SPACE_PERCENT): Numeric(3), "dcdiag.SystemLog": Failure("failed")},
        ),
        make_node("dc01.emea.corp.example.com", domain="emea.corp.example.com", site="<Paris>"),
    ])


def test_html_groups_by_domain_then_site(make_node, thresholds, policy) -> None:
    html = HtmlReportRenderer().render(_healths(make_node, thresholds, policy), generated_at=datetime(2026, 10, 19, 7, 30))
    assert html.startswith("<!DOCTYPE html>")
    assert "Generated 2026-10-19 07:30:00" in html
    assert html.index("<h2>corp.example.com</h2>") < html.index("<h2>emea.corp.example.com</h2>")
    assert "<h3>Site: HQ</h3>" in html
    assert "<h3>Site: Branch</h3>" in html


def test_html_summary_badges(make_node, thresholds, policy) -> None:
    html = HtmlReportRenderer().render(_healths(make_node, thresholds, policy))
    assert "Overall: Critical" in html
    assert "Critical: 1" in html
    assert "Warning: 0" in html
    assert "Healthy: 2" in html


def test_html_status_classes_and_escaping(make_node, thresholds, policy) -> None:
    html = HtmlReportRenderer().render(_healths(make_node, thresholds, policy))
    assert 'class="status-fail">3.0 %' in html
    assert "width:3%" in html
    assert "20/21 passed" in html
    assert "&lt;Paris&gt;" in html
    assert "<Paris>" not in html
    assert "PDCEmulator" in html


def test_format_value() -> None:
    assert format_value("uptime_hours", Numeric(36.4)) == "36 h"
    assert format_value("time_offset_seconds", Numeric(-0.25)) == "-0.250 s"
    assert format_value("free_space_gb", Numeric(12.345)) == "12.3 GB"
    assert format_value("ping", Failure("unreachable")) == "Unreachable"
    assert format_value("ping", None) == "n/a"


def test_json_payload(make_node, thresholds, policy) -> None:
    payload = to_json_payload(_healths(make_node, thresholds, policy))
    assert payload["overall"] == "Critical"
    assert payload["counts"] == {"Healthy": 2, "Warning": 0, "Critical": 1}
    dc02 = payload["domain_controllers"][1]
    assert dc02["hostname"] == "dc02.corp.example.com"
    assert dc02["metrics"]["free_space_percent"]["status"] == "fail"
