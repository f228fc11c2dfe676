"""Shared test fixtures."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Sequence, Tuple

import pytest

from domain.entities import MonitoredNode, Numeric, ProbeValue, Success
from domain.enums import Metric
from domain.errors import ShellError
from domain.interfaces import CommandResult, IShellRunner
from domain.policy import DCDIAG_TESTS, SeverityPolicy, Thresholds


def healthy_results() -> Dict[str, ProbeValue]:
    """Probe results of a DC with nothing to report."""
    results: Dict[str, ProbeValue] = {str(m): Success() for m in Metric.binary()}
    results.update({t.metric: Success() for t in DCDIAG_TESTS})
    results[str(Metric.UPTIME_HOURS)] = Numeric(500)
    results[str(Metric.FREE_SPACE_PERCENT)] = Numeric(60)
    results[str(Metric.FREE_SPACE_GB)] = Numeric(80)
    results[str(Metric.TIME_OFFSET_SECONDS)] = Numeric(0.01)
    return results


@pytest.fixture
def thresholds() -> Thresholds:
    return Thresholds(
        uptime_warn_hours=24,
        free_percent_fail=5,
        free_percent_warn=30,
        free_gb_fail=5,
        free_gb_warn=10,
        time_warn_seconds=0.5,
        time_fail_seconds=1.0,
    )


@pytest.fixture
def policy() -> SeverityPolicy:
    return SeverityPolicy.default()


@pytest.fixture
def results() -> Dict[str, ProbeValue]:
    return healthy_results()


@pytest.fixture
def make_node() -> Callable[..., MonitoredNode]:
    def _make(hostname: str = "dc01.corp.example.com", *, overrides: Dict[str, Any] | None = None, **identity: Any) -> MonitoredNode:
        probe_results = healthy_results()
        probe_results.update(overrides or {})
        identity.setdefault("domain", "corp.example.com")
        identity.setdefault("site", "Default-First-Site-Name")
        return MonitoredNode(hostname=hostname, probe_results=probe_results, **identity)

    return _make


Response = Any
Rule = Tuple[str, Response]


class FakeShellRunner(IShellRunner):
    """Answers commands by substring match on the joined argv / script.

    A response may be a CommandResult, a str (stdout, exit 0), any JSON-able
    value (for run_powershell_json), an exception instance to raise, or a
    callable receiving the command text.
    """

    def __init__(self, rules: Sequence[Rule] = ()) -> None:
        self.rules: List[Rule] = list(rules)
        self.calls: List[str] = []

    def add(self, needle: str, response: Response) -> "FakeShellRunner":
        self.rules.append((needle, response))
        return self

    def _match(self, text: str) -> Response:
        self.calls.append(text)
        for needle, response in self.rules:
            if needle in text:
                if callable(response) and not isinstance(response, type):
                    response = response(text)
                if isinstance(response, BaseException):
                    raise response
                return response
        raise ShellError(f"no fake response for {text[:60]!r}", returncode=1)

    async def run(self, argv: Sequence[str], *, timeout_s: float, check: bool = True) -> CommandResult:
        text = " ".join(argv)
        response = self._match(text)
        if isinstance(response, CommandResult):
            if check and not response.ok:
                raise ShellError(f"{argv[0]} exited with {response.returncode}", returncode=response.returncode)
            return response
        return CommandResult(argv=tuple(argv), returncode=0, stdout=str(response))

    async def run_powershell(self, script: str, *, timeout_s: float) -> CommandResult:
        response = self._match(script)
        if isinstance(response, CommandResult):
            return response
        return CommandResult(argv=("powershell",), returncode=0, stdout=str(response))

    async def run_powershell_json(self, script: str, *, timeout_s: float) -> Any:
        response = self._match(script)
        if isinstance(response, str):
            return json.loads(response)
        return response


DCDIAG_ALL_PASSED = "\n".join(
    f"   ......................... DC01 passed test {t.name}" for t in DCDIAG_TESTS
)


@pytest.fixture
def fake_runner() -> FakeShellRunner:
    return FakeShellRunner()


@pytest.fixture
def healthy_dc_runner() -> FakeShellRunner:
    """Runner answering every probe of a reachable, healthy DC."""
    return FakeShellRunner([
        ("ping", "Reply from 10.0.0.10: bytes=32 time<1ms TTL=128"),
        ("Win32_OperatingSystem", "512.5"),
        ("Win32_LogicalDisk", {"FreeSpace": 64 * 1024 ** 3, "Size": 128 * 1024 ** 3}),
        ("w32tm", "Tracking dc01 [10.0.0.10:123].\nCollecting 1 samples.\n10:41:03, +00.0025153s\n"),
        ("Get-Service", [
            {"Name": "DNS", "Status": "Running"},
            {"Name": "NTDS", "Status": "Running"},
            {"Name": "Netlogon", "Status": "Running"},
        ]),
        ("dcdiag", DCDIAG_ALL_PASSED),
    ])
