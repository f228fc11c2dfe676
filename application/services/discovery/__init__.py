from .discovery_service import DiscoveryService, node_from_record

__all__ = ["DiscoveryService", "node_from_record"]
