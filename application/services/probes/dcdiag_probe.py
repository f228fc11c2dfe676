from __future__ import annotations

import re
from typing import Dict, Iterable, Sequence

from core.logging.logger import StructuredLogger
from domain.entities import COULD_NOT_MEASURE, FAILED, NOT_REPORTED, TIMEOUT, Failure, ProbeValue, Success
from domain.errors import ShellError
from domain.interfaces import IShellRunner
from domain.policy import DCDIAG_TESTS, DcdiagTest, dcdiag_test_names
from .timeout_config import ProbeTimeouts

# "......................... DC01 passed test Connectivity"
_RESULT_RE = re.compile(r"\b(passed|failed)\s+test\s+(\w+)", re.IGNORECASE)


def parse_dcdiag(output: str, tests: Iterable[DcdiagTest] = DCDIAG_TESTS) -> Dict[str, ProbeValue]:
    """Outcome of every test in ``tests``, keyed by metric name.

    A test that appears more than once (per-partition tests) fails if any of
    its runs failed. Tests missing from the output are Failure("not reported").
    """
    seen: Dict[str, bool] = {}
    for verdict, name in _RESULT_RE.findall(output):
        key = name.lower()
        seen[key] = seen.get(key, True) and verdict.lower() == "passed"
    results: Dict[str, ProbeValue] = {}
    for test in tests:
        passed = seen.get(test.name.lower())
        if passed is None:
            results[test.metric] = Failure(NOT_REPORTED)
        else:
            results[test.metric] = Success() if passed else Failure(FAILED)
    return results


def dcdiag_argv(host: str, tests: Sequence[DcdiagTest] = DCDIAG_TESTS) -> list[str]:
    return ["dcdiag", f"/s:{host}", *(f"/test:{name}" for name in dcdiag_test_names(tests))]


class DcdiagProbe:
    """Runs the DCDIAG test table against one DC."""

    def __init__(
        self,
        runner: IShellRunner,
        timeouts: ProbeTimeouts,
        logger: StructuredLogger,
        tests: Sequence[DcdiagTest] = DCDIAG_TESTS,
    ) -> None:
        self.runner = runner
        self.timeouts = timeouts
        self.logger = logger
        self.tests = tuple(tests)

    async def check(self, host: str) -> Dict[str, ProbeValue]:
        try:
            # dcdiag exits non-zero when any test fails; the output is what counts.
            result = await self.runner.run(dcdiag_argv(host, self.tests), timeout_s=self.timeouts.dcdiag_s, check=False)
        except ShellError as e:
            self.logger.error(lambda: "probe-failed dcdiag", extra={"host": host, "error": str(e)})
            failure = Failure(TIMEOUT if e.timed_out else COULD_NOT_MEASURE)
            return {t.metric: failure for t in self.tests}
        results = parse_dcdiag(result.stdout, self.tests)
        failed = [m for m, v in results.items() if v.is_failure]
        if failed:
            self.logger.warning(lambda: "probe-failed dcdiag", extra={"host": host, "failed": ",".join(failed)})
        else:
            self.logger.debug(lambda: "probe-ok dcdiag", extra={"host": host})
        return results
