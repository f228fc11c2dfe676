"""Domain controller under test together with its probe results."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional

from .probe_value import ProbeValue


@dataclass(frozen=True)
class MonitoredNode:
    """One domain controller.

    ``probe_results`` maps metric name to ProbeValue. The node is an immutable
    snapshot: probes build a new node via ``with_results`` instead of mutating
    this one.
    """

    # Identity
    hostname: str
    domain: str = ""
    site: str = ""
    ipv4_address: Optional[str] = None
    os_version: str = ""
    fsmo_roles: FrozenSet[str] = frozenset()

    probe_results: Mapping[str, ProbeValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fsmo_roles", frozenset(self.fsmo_roles))
        # None means "not collected"; such metrics stay absent.
        results = {str(k): ProbeValue.coerce(v) for k, v in dict(self.probe_results).items() if v is not None}
        object.__setattr__(self, "probe_results", MappingProxyType(results))

    def __hash__(self) -> int:
        return hash((self.hostname.lower(), self.domain.lower()))

    @property
    def short_name(self) -> str:
        return self.hostname.split(".", 1)[0]

    def result(self, metric: str) -> Optional[ProbeValue]:
        return self.probe_results.get(str(metric))

    def with_results(self, results: Mapping[str, Any]) -> "MonitoredNode":
        """Copy of this node with ``results`` merged over the existing ones."""
        merged = dict(self.probe_results)
        merged.update({str(k): v for k, v in results.items()})
        return dataclasses.replace(self, probe_results=merged)

    def to_dict(self) -> dict:
        return {
            'hostname': self.hostname,
            'domain': self.domain,
            'site': self.site,
            'ipv4_address': self.ipv4_address,
            'os_version': self.os_version,
            'fsmo_roles': sorted(self.fsmo_roles),
        }
