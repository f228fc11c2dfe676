"""Use case: discover DCs, probe and classify them, render and deliver the report."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from core.logging.logger import StructuredLogger, get_logger
from domain.entities import MonitoredNode
from domain.errors import DeliveryError
from domain.interfaces import IReportChannel
from application.services.discovery import DiscoveryService
from application.services.health import HealthEngine, HealthSummary, NodeHealth
from application.services.probes import ProbeCollector
from infrastructure.delivery.file_store import ReportFileStore
from infrastructure.report.html_report import HtmlReportRenderer


@dataclass
class HealthRunResult:
    healths: List[NodeHealth]
    summary: HealthSummary
    generated_at: datetime
    report_path: Optional[Path] = None
    delivered: List[str] = field(default_factory=list)
    delivery_errors: List[str] = field(default_factory=list)


def summary_text(summary: HealthSummary) -> str:
    """Plain-text body: headline plus one line per DC that is not Healthy."""
    lines = [summary.headline()]
    for sites in summary.groups.values():
        for nodes in sites.values():
            for h in nodes:
                if h.causes:
                    lines.append(f"- {h.hostname}: {h.state.value} ({'; '.join(h.causes)})")
    return "\n".join(lines)


class RunHealthCheckUseCase:
    """
    One health-check run.

    Each DC is probed and classified as its own task; at most
    ``max_concurrency`` DCs are probed at once. Results keep discovery order
    whatever order the tasks finish in.
    """

    def __init__(
        self,
        discovery: DiscoveryService,
        collector: ProbeCollector,
        engine: HealthEngine,
        *,
        renderer: Optional[HtmlReportRenderer] = None,
        store: Optional[ReportFileStore] = None,
        channels: Sequence[IReportChannel] = (),
        max_concurrency: int = 8,
        only_on_issues: bool = False,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.discovery = discovery
        self.collector = collector
        self.engine = engine
        self.renderer = renderer or HtmlReportRenderer()
        self.store = store
        self.channels = list(channels)
        self.max_concurrency = max(1, max_concurrency)
        self.only_on_issues = only_on_issues
        self.logger = logger or get_logger(__name__, service="adhealth")

    async def check_nodes(self, nodes: Sequence[MonitoredNode]) -> List[NodeHealth]:
        sem = asyncio.Semaphore(self.max_concurrency)

        async def _one(node: MonitoredNode) -> NodeHealth:
            async with sem:
                populated = await self.collector.collect(node)
            return self.engine.evaluate(populated)

        return list(await asyncio.gather(*(_one(n) for n in nodes)))

    async def execute(
        self,
        *,
        domain: Optional[str] = None,
        hostnames: Optional[Sequence[str]] = None,
        deliver: bool = True,
    ) -> HealthRunResult:
        if hostnames:
            nodes = self.discovery.from_hostnames(hostnames, domain or "")
        else:
            nodes = await self.discovery.discover(domain)

        with self.logger.timed("health-run", level=logging.INFO, dcs=len(nodes)):
            healths = await self.check_nodes(nodes)

        summary = self.engine.summarize(healths)
        result = HealthRunResult(healths=healths, summary=summary, generated_at=datetime.now())
        html = self.renderer.render(healths, summary, result.generated_at)

        if self.store is not None:
            result.report_path = self.store.save(html, result.generated_at)
            self.logger.info(lambda: f"report written to {result.report_path}")

        if deliver:
            await self._deliver(result, html)
        self.logger.info(lambda: summary.headline())
        return result

    async def _deliver(self, result: HealthRunResult, html: str) -> None:
        summary = result.summary
        if self.only_on_issues and not summary.has_issues:
            self.logger.info("all DCs healthy, delivery skipped")
            return
        subject = f"[{summary.worst.value}] {summary.headline()}"
        text = summary_text(summary)
        for channel in self.channels:
            if not channel.enabled:
                continue
            try:
                await channel.deliver(subject=subject, html=html, text=text)
            except DeliveryError as e:
                self.logger.error(lambda: f"delivery failed: {e}", extra={"channel": channel.name})
                result.delivery_errors.append(str(e))
            else:
                result.delivered.append(channel.name)
