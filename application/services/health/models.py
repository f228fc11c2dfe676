from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from domain.entities import MonitoredNode
from domain.enums import OverallState, StatusClass


@dataclass(frozen=True, slots=True)
class Verdict:
    """Overall state plus the rule hits that produced it."""
    state: OverallState
    causes: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class NodeHealth:
    """Classification of one domain controller."""
    node: MonitoredNode
    state: OverallState
    statuses: Mapping[str, StatusClass]
    causes: Tuple[str, ...] = ()

    @property
    def hostname(self) -> str:
        return self.node.hostname

    def status(self, metric: str) -> StatusClass:
        return self.statuses.get(str(metric), StatusClass.NEUTRAL)

    def to_dict(self) -> dict:
        return {
            **self.node.to_dict(),
            "state": self.state.value,
            "causes": list(self.causes),
            "metrics": {
                metric: {
                    "value": str(self.node.probe_results[metric]) if metric in self.node.probe_results else None,
                    "status": status.value,
                }
                for metric, status in self.statuses.items()
            },
        }


@dataclass(slots=True)
class HealthSummary:
    """Counts per state and domain -> site -> nodes grouping for the report."""
    counts: Dict[OverallState, int] = field(default_factory=dict)
    groups: Dict[str, Dict[str, List[NodeHealth]]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def worst(self) -> OverallState:
        return OverallState.worst(s for s, n in self.counts.items() if n)

    @property
    def has_issues(self) -> bool:
        return self.worst is not OverallState.HEALTHY

    def headline(self) -> str:
        parts = [f"{self.counts.get(s, 0)} {s.value}" for s in reversed(OverallState.ordered())]
        return f"AD health: {self.worst.value} ({', '.join(parts)} of {self.total} DCs)"

    @classmethod
    def of(cls, healths: List[NodeHealth]) -> "HealthSummary":
        counts = Counter(h.state for h in healths)
        groups: Dict[str, Dict[str, List[NodeHealth]]] = {}
        for h in healths:
            domain = h.node.domain or "(unknown domain)"
            site = h.node.site or "(unknown site)"
            groups.setdefault(domain, {}).setdefault(site, []).append(h)
        return cls(counts={s: counts.get(s, 0) for s in OverallState.ordered()}, groups=groups)
