"""Tests for the end-to-end health-check run."""

from __future__ import annotations

import asyncio
from typing import List

from application.services.discovery import DiscoveryService
from application.services.health import HealthEngine
from application.use_cases import RunHealthCheckUseCase, summary_text
from domain.entities import MonitoredNode, Numeric
from domain.enums import Metric, OverallState
from domain.errors import DeliveryError
from domain.interfaces import IReportChannel
from infrastructure.delivery import ReportFileStore


class _FakeCollector:
    """Returns canned results per hostname, finishing in reverse order."""

    def __init__(self, results_by_host, delays=None) -> None:
        self.results_by_host = results_by_host
        self.delays = delays or {}
        self.in_flight = 0
        self.peak = 0

    async def collect(self, node: MonitoredNode) -> MonitoredNode:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(node.hostname, 0))
            return node.with_results(self.results_by_host[node.hostname])
        finally:
            self.in_flight -= 1


class _RecordingChannel(IReportChannel):
    def __init__(self, name: str, *, enabled: bool = True, error: Exception | None = None) -> None:
        self.name = name
        self._enabled = enabled
        self.error = error
        self.sent: List[dict] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def deliver(self, *, subject: str, html: str, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append({"subject": subject, "html": html, "text": text})


HOSTS = ["dc01.corp.example.com", "dc02.corp.example.com", "dc03.corp.example.com"]


def _use_case(thresholds, policy, collector, **kwargs) -> RunHealthCheckUseCase:
    return RunHealthCheckUseCase(
        DiscoveryService(runner=None),
        collector,
        HealthEngine(thresholds, policy),
        **kwargs,
    )


def _all_healthy(results):
    return {h: dict(results) for h in HOSTS}


def test_results_keep_input_order(thresholds, policy, results) -> None:
    collector = _FakeCollector(_all_healthy(results), delays={HOSTS[0]: 0.03, HOSTS[1]: 0.01})
    outcome = asyncio.run(_use_case(thresholds, policy, collector).execute(hostnames=HOSTS))
    assert [h.hostname for h in outcome.healths] == HOSTS
    assert outcome.summary.worst is OverallState.HEALTHY


def test_concurrency_is_bounded(thresholds, policy, results) -> None:
    collector = _FakeCollector(_all_healthy(results), delays={h: 0.01 for h in HOSTS})
    asyncio.run(_use_case(thresholds, policy, collector, max_concurrency=2).execute(hostnames=HOSTS))
    assert collector.peak == 2


def test_report_is_written_and_channels_notified(tmp_path, thresholds, policy, results) -> None:
    per_host = _all_healthy(results)
    per_host[HOSTS[1]][str(Metric.FREE_SPACE_GB)] = Numeric(7)
    mail = _RecordingChannel("smtp")
    off = _RecordingChannel("webhook", enabled=False)
    use_case = _use_case(
        thresholds, policy, _FakeCollector(per_host),
        store=ReportFileStore(tmp_path), channels=[mail, off],
    )
    outcome = asyncio.run(use_case.execute(hostnames=HOSTS))

    assert outcome.report_path is not None and outcome.report_path.exists()
    assert outcome.delivered == ["smtp"]
    assert off.sent == []
    sent = mail.sent[0]
    assert sent["subject"].startswith("[Warning] AD health: Warning")
    assert "dc02.corp.example.com: Warning (free_space_gb 7 < 10)" in sent["text"]
    assert "<!DOCTYPE html>" in sent["html"]


def test_only_on_issues_skips_healthy_runs(thresholds, policy, results) -> None:
    mail = _RecordingChannel("smtp")
    use_case = _use_case(thresholds, policy, _FakeCollector(_all_healthy(results)), channels=[mail], only_on_issues=True)
    outcome = asyncio.run(use_case.execute(hostnames=HOSTS))
    assert mail.sent == []
    assert outcome.delivered == []


def test_delivery_error_is_recorded_not_raised(thresholds, policy, results) -> None:
    broken = _RecordingChannel("webhook", error=DeliveryError("webhook", "http 404"))
    mail = _RecordingChannel("smtp")
    use_case = _use_case(thresholds, policy, _FakeCollector(_all_healthy(results)), channels=[broken, mail])
    outcome = asyncio.run(use_case.execute(hostnames=HOSTS))
    assert outcome.delivery_errors == ["webhook: http 404"]
    assert outcome.delivered == ["smtp"]


def test_summary_text_lists_only_unhealthy_dcs(thresholds, policy, make_node) -> None:
    engine = HealthEngine(thresholds, policy)
    healths = engine.evaluate_many([
        make_node("dc01.corp.example.com"),
        make_node("dc02.corp.example.com", overrides={str(Metric.UPTIME_HOURS): Numeric(3)}),
    ])
    lines = summary_text(engine.summarize(healths)).splitlines()
    assert lines[0] == "AD health: Warning (0 Critical, 1 Warning, 1 Healthy of 2 DCs)"
    assert lines[1:] == ["- dc02.corp.example.com: Warning (uptime_hours 3 <= 24)"]
