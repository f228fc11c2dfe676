from __future__ import annotations

import asyncio
from typing import Dict, Optional, Sequence

from core.logging.context import node_context
from core.logging.logger import StructuredLogger, get_logger
from domain.entities import UNREACHABLE, Failure, MonitoredNode, ProbeValue
from domain.enums import Metric
from domain.interfaces import IShellRunner
from domain.policy import DCDIAG_TESTS, DcdiagTest
from .dcdiag_probe import DcdiagProbe
from .dns_probe import DNSProbe
from .ping_probe import PingProbe
from .remote_probes import RemoteProbes
from .timeout_config import ProbeTimeouts


class ProbeCollector:
    """Runs every probe against one DC and returns the populated node.

    DNS and ping go first. When ping fails the remote probes are skipped and
    every remote metric is recorded as Failure("unreachable").
    """

    def __init__(
        self,
        runner: IShellRunner,
        timeouts: Optional[ProbeTimeouts] = None,
        logger: Optional[StructuredLogger] = None,
        *,
        system_drive: str = "C:",
        tests: Sequence[DcdiagTest] = DCDIAG_TESTS,
        dns: Optional[DNSProbe] = None,
        ping: Optional[PingProbe] = None,
    ) -> None:
        self.timeouts = timeouts or ProbeTimeouts.from_env()
        self.logger = logger or get_logger(__name__, service="probes")
        self.tests = tuple(tests)
        self.dns = dns or DNSProbe(self.timeouts, self.logger)
        self.ping = ping or PingProbe(runner, self.timeouts, self.logger)
        self.remote = RemoteProbes(runner, self.timeouts, self.logger, system_drive=system_drive)
        self.dcdiag = DcdiagProbe(runner, self.timeouts, self.logger, self.tests)

    def remote_metrics(self) -> list[str]:
        return [
            str(Metric.UPTIME_HOURS),
            str(Metric.FREE_SPACE_PERCENT),
            str(Metric.FREE_SPACE_GB),
            str(Metric.TIME_OFFSET_SECONDS),
            *(str(m) for m in Metric.services()),
            *(t.metric for t in self.tests),
        ]

    async def collect(self, node: MonitoredNode) -> MonitoredNode:
        host = node.hostname
        with node_context(host, node.domain, node.site):
            with self.logger.timed("probes-collected", host=host):
                dns, ping = await asyncio.gather(self.dns.check(host), self.ping.check(host))
                results: Dict[str, ProbeValue] = {str(Metric.DNS): dns, str(Metric.PING): ping}
                if ping.is_failure:
                    self.logger.warning(lambda: f"{host} unreachable, skipping remote probes")
                    results.update({m: Failure(UNREACHABLE) for m in self.remote_metrics()})
                    return node.with_results(results)

                uptime, disk, offset, services, dcdiag = await asyncio.gather(
                    self.remote.uptime_hours(host),
                    self.remote.free_space(host),
                    self.remote.time_offset_seconds(host),
                    self.remote.services(host),
                    self.dcdiag.check(host),
                )
                results[str(Metric.UPTIME_HOURS)] = uptime
                results[str(Metric.TIME_OFFSET_SECONDS)] = offset
                results.update(disk)
                results.update(services)
                results.update(dcdiag)
                return node.with_results(results)
