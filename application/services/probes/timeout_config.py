from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True)
class ProbeTimeouts:
    """Per-probe time limits with env overrides."""
    dns_timeout_ms: int = 2000
    ping_timeout_ms: int = 2000
    remote_timeout_ms: int = 30000
    dcdiag_timeout_ms: int = 300000

    @property
    def dns_s(self) -> float:
        return self.dns_timeout_ms / 1000.0

    @property
    def ping_s(self) -> float:
        return self.ping_timeout_ms / 1000.0

    @property
    def remote_s(self) -> float:
        return self.remote_timeout_ms / 1000.0

    @property
    def dcdiag_s(self) -> float:
        return self.dcdiag_timeout_ms / 1000.0

    @classmethod
    def from_env(cls) -> "ProbeTimeouts":
        """Build ProbeTimeouts from environment variables."""
        defaults = cls()

        def _int(name: str, default: int) -> int:
            try:
                return max(1, int(os.getenv(name, str(default))))
            except ValueError:
                return default

        return cls(
            dns_timeout_ms=_int("ADHEALTH_DNS_TIMEOUT_MS", defaults.dns_timeout_ms),
            ping_timeout_ms=_int("ADHEALTH_PING_TIMEOUT_MS", defaults.ping_timeout_ms),
            remote_timeout_ms=_int("ADHEALTH_REMOTE_TIMEOUT_MS", defaults.remote_timeout_ms),
            dcdiag_timeout_ms=_int("ADHEALTH_DCDIAG_TIMEOUT_MS", defaults.dcdiag_timeout_ms),
        )
