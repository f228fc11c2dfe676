from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from config import settings
from core.logging.logger import get_logger, StructuredLogger
from domain.enums import OverallState
from domain.errors import ADHealthError, DiscoveryError
from domain.interfaces import IReportChannel, IShellRunner
from domain.policy import SeverityPolicy, Thresholds
from application.services.discovery import DiscoveryService
from application.services.health import HealthEngine
from application.services.probes import ProbeCollector, ProbeTimeouts
from application.use_cases import HealthRunResult, RunHealthCheckUseCase
from infrastructure.delivery import ReportFileStore, SmtpMailer, WebhookNotifier
from infrastructure.report import to_json_payload
from infrastructure.shell import ShellRunner

EXIT_RUN_ERROR = 3

_STATE_MARKS = {
    OverallState.HEALTHY: "OK  ",
    OverallState.WARNING: "WARN",
    OverallState.CRITICAL: "CRIT",
}


def _split_hosts(values: Optional[Iterable[str]]) -> List[str]:
    hosts: List[str] = []
    for value in values or []:
        for h in value.split(","):
            h = h.strip()
            if h and h.lower() not in (x.lower() for x in hosts):
                hosts.append(h)
    return hosts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adhealth",
        description="Health check for Active Directory domain controllers.",
    )
    parser.add_argument("--domain", default=settings.DOMAIN or None, help="check only this domain (default: whole forest)")
    parser.add_argument("--dc", action="append", metavar="HOST", help="check these DCs instead of discovering them (repeatable, comma separated)")
    parser.add_argument("--json", action="store_true", help="print the results as JSON on stdout")
    parser.add_argument("--report-dir", type=Path, default=settings.REPORT_DIR, help="directory for the HTML report")
    parser.add_argument("--no-report", action="store_true", help="do not write the HTML report")
    parser.add_argument("--no-email", action="store_true", help="do not send the report by mail")
    parser.add_argument("--no-webhook", action="store_true", help="do not post the summary to the webhook")
    parser.add_argument("--concurrency", type=int, default=settings.MAX_CONCURRENT_NODES, help="DCs probed at the same time")
    return parser


class HealthCommand:
    """Wires settings, probes, engine and delivery into one CLI run."""

    def __init__(
        self,
        runner: Optional[IShellRunner] = None,
        *,
        thresholds: Optional[Thresholds] = None,
        policy: Optional[SeverityPolicy] = None,
        timeouts: Optional[ProbeTimeouts] = None,
    ) -> None:
        self.logger: StructuredLogger = get_logger(__name__, service="adhealth")
        self.runner = runner or ShellRunner()
        self.thresholds = thresholds or Thresholds.from_env()
        self.policy = policy or SeverityPolicy.default()
        self.timeouts = timeouts or ProbeTimeouts.from_env()

    def _channels(self, args: argparse.Namespace) -> List[IReportChannel]:
        channels: List[IReportChannel] = []
        if not args.no_email:
            channels.append(
                SmtpMailer(
                    settings.SMTP_HOST,
                    port=settings.SMTP_PORT,
                    sender=settings.MAIL_FROM,
                    recipients=settings.MAIL_TO,
                    username=settings.SMTP_USER,
                    password=settings.SMTP_PASSWORD,
                    starttls=settings.SMTP_STARTTLS,
                )
            )
        if not args.no_webhook:
            channels.append(WebhookNotifier(settings.WEBHOOK_URL))
        return channels

    def build_use_case(self, args: argparse.Namespace) -> RunHealthCheckUseCase:
        return RunHealthCheckUseCase(
            DiscoveryService(self.runner),
            ProbeCollector(self.runner, self.timeouts, system_drive=settings.SYSTEM_DRIVE),
            HealthEngine(self.thresholds, self.policy),
            store=None if args.no_report else ReportFileStore(args.report_dir),
            channels=self._channels(args),
            max_concurrency=args.concurrency,
            only_on_issues=settings.ONLY_ON_ISSUES,
        )

    async def execute(self, argv: Optional[Iterable[str]] = None) -> int:
        args = build_parser().parse_args(list(argv) if argv is not None else None)
        try:
            settings.validate()
        except ValueError as e:
            print(f"configuration error: {e}", file=sys.stderr)
            return EXIT_RUN_ERROR
        if args.concurrency < 1:
            print("--concurrency must be >= 1", file=sys.stderr)
            return EXIT_RUN_ERROR
        use_case = self.build_use_case(args)
        try:
            result = await use_case.execute(domain=args.domain, hostnames=_split_hosts(args.dc))
        except DiscoveryError as e:
            self.logger.error(lambda: f"discovery failed: {e}")
            return EXIT_RUN_ERROR
        except ADHealthError as e:
            self.logger.exception(lambda: f"health check failed: {e}")
            return EXIT_RUN_ERROR

        if args.json:
            print(json.dumps(to_json_payload(result.healths, result.summary), ensure_ascii=False))
        else:
            self._print_results(result)
        return result.summary.worst.exit_code

    @staticmethod
    def _print_results(result: HealthRunResult) -> None:
        print(result.summary.headline())
        for h in result.healths:
            line = f"  {_STATE_MARKS[h.state]}  {h.hostname}"
            if h.causes:
                line += f"  ({'; '.join(h.causes)})"
            print(line)
        if result.report_path:
            print(f"Report: {result.report_path}")
        for err in result.delivery_errors:
            print(f"Delivery failed: {err}")


async def run(argv: Optional[Iterable[str]] = None) -> int:
    return await HealthCommand().execute(argv)
