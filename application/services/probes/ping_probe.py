from __future__ import annotations

import math
import os
from typing import List

from core.logging.logger import StructuredLogger
from domain.entities import COULD_NOT_MEASURE, UNREACHABLE, Failure, ProbeValue, Success
from domain.errors import ShellError
from domain.interfaces import IShellRunner
from .timeout_config import ProbeTimeouts


def ping_argv(host: str, timeout_ms: int, *, windows: bool = os.name == "nt") -> List[str]:
    if windows:
        return ["ping", "-n", "1", "-w", str(timeout_ms), host]
    return ["ping", "-c", "1", "-W", str(max(1, math.ceil(timeout_ms / 1000))), host]


class PingProbe:
    """Single ICMP echo through the platform ``ping`` binary."""

    def __init__(self, runner: IShellRunner, timeouts: ProbeTimeouts, logger: StructuredLogger, *, windows: bool = os.name == "nt") -> None:
        self.runner = runner
        self.timeouts = timeouts
        self.logger = logger
        self.windows = windows

    async def check(self, host: str) -> ProbeValue:
        argv = ping_argv(host, self.timeouts.ping_timeout_ms, windows=self.windows)
        try:
            # Allow the process itself a little longer than the echo timeout.
            result = await self.runner.run(argv, timeout_s=self.timeouts.ping_s + 2, check=False)
        except ShellError as e:
            if e.timed_out:
                self.logger.warning(lambda: "probe-failed ping", extra={"host": host, "error": "timeout"})
                return Failure(UNREACHABLE)
            self.logger.error(lambda: "probe-failed ping", extra={"host": host, "error": str(e)})
            return Failure(COULD_NOT_MEASURE)
        # Windows ping exits 0 on "Destination host unreachable" replies.
        replied = result.ok and (not self.windows or "ttl=" in result.stdout.lower())
        if not replied:
            self.logger.warning(lambda: "probe-failed ping", extra={"host": host, "returncode": result.returncode})
            return Failure(UNREACHABLE)
        self.logger.debug(lambda: "probe-ok ping", extra={"host": host})
        return Success()
