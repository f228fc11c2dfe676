"""Application layer - health engine, probes, discovery and use cases."""
from .services import HealthEngine, ProbeCollector, DiscoveryService

__all__ = [
    'HealthEngine',
    'ProbeCollector',
    'DiscoveryService',
]
