from __future__ import annotations

import asyncio
import socket
import time

from core.logging.logger import StructuredLogger
from domain.entities import Failure, ProbeValue, Success, TIMEOUT
from .timeout_config import ProbeTimeouts


class DNSProbe:
    """Checks that a DC's hostname resolves."""

    def __init__(self, timeouts: ProbeTimeouts, logger: StructuredLogger) -> None:
        self.timeouts = timeouts
        self.logger = logger

    async def check(self, host: str) -> ProbeValue:
        """Resolve ``host`` and return Success or Failure(reason)."""
        start = time.perf_counter()
        self.logger.debug(lambda: "probe-start dns", extra={"host": host})
        try:
            await asyncio.wait_for(
                asyncio.to_thread(socket.getaddrinfo, host, None, socket.AF_INET),
                timeout=self.timeouts.dns_s,
            )
        except asyncio.TimeoutError:
            self.logger.warning(lambda: "probe-failed dns", extra={"host": host, "error": TIMEOUT})
            return Failure(TIMEOUT)
        except socket.gaierror as e:
            err = "nxdomain" if getattr(e, "errno", None) == socket.EAI_NONAME else "unresolved"
            self.logger.warning(lambda: "probe-failed dns", extra={"host": host, "error": err})
            return Failure(err)
        except OSError as e:
            self.logger.warning(lambda: "probe-failed dns", extra={"host": host, "error": str(e)})
            return Failure(str(e) or "unresolved")
        latency_ms = int((time.perf_counter() - start) * 1000.0)
        self.logger.debug(lambda: "probe-ok dns", extra={"host": host, "latency_ms": latency_ms})
        return Success()
