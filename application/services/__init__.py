"""Application services root exports."""
from .health import HealthEngine, NodeHealth, HealthSummary
from .probes import ProbeCollector, ProbeTimeouts
from .discovery import DiscoveryService

__all__ = [
    "HealthEngine",
    "NodeHealth",
    "HealthSummary",
    "ProbeCollector",
    "ProbeTimeouts",
    "DiscoveryService",
]
