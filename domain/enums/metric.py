"""Metric names used as ProbeResults keys."""
from enum import Enum


class Metric(str, Enum):
    """Fixed (non-DCDIAG) metrics.

    DCDIAG sub-tests are keyed ``dcdiag.<TestName>``; see
    ``domain.policy.dcdiag_tests``.
    """

    DNS = "dns"
    PING = "ping"
    SERVICE_DNS = "service.dns"
    SERVICE_NTDS = "service.ntds"
    SERVICE_NETLOGON = "service.netlogon"
    UPTIME_HOURS = "uptime_hours"
    FREE_SPACE_PERCENT = "free_space_percent"
    FREE_SPACE_GB = "free_space_gb"
    TIME_OFFSET_SECONDS = "time_offset_seconds"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def binary(cls) -> list['Metric']:
        return [cls.DNS, cls.PING, cls.SERVICE_DNS, cls.SERVICE_NTDS, cls.SERVICE_NETLOGON]

    @classmethod
    def threshold(cls) -> list['Metric']:
        return [cls.UPTIME_HOURS, cls.FREE_SPACE_PERCENT, cls.FREE_SPACE_GB, cls.TIME_OFFSET_SECONDS]

    @classmethod
    def services(cls) -> dict['Metric', str]:
        """Service metric -> Windows service name."""
        return {cls.SERVICE_DNS: "DNS", cls.SERVICE_NTDS: "NTDS", cls.SERVICE_NETLOGON: "Netlogon"}


DCDIAG_PREFIX = "dcdiag."


def dcdiag_metric(test_name: str) -> str:
    return f"{DCDIAG_PREFIX}{test_name}"
