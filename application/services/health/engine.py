from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from core.logging.levels import LogLevel
from core.logging.logger import StructuredLogger, get_logger
from domain.entities import MonitoredNode
from domain.enums import OverallState
from domain.policy import SeverityPolicy, Thresholds
from .aggregator import aggregate
from .classifier import classify_all
from .models import HealthSummary, NodeHealth

_LOG_LEVELS = {
    OverallState.HEALTHY: int(LogLevel.SUCCESS),
    OverallState.WARNING: logging.WARNING,
    OverallState.CRITICAL: logging.ERROR,
}


class HealthEngine:
    """Classifies domain controllers from their collected probe results.

    Holds only the read-only thresholds and policy, so one engine can be
    shared by any number of concurrent evaluations.
    """

    def __init__(
        self,
        thresholds: Optional[Thresholds] = None,
        policy: Optional[SeverityPolicy] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.thresholds = thresholds or Thresholds()
        self.policy = policy or SeverityPolicy.default()
        self.logger = logger or get_logger(__name__, service="engine")

    def evaluate(self, node: MonitoredNode) -> NodeHealth:
        results = node.probe_results
        verdict = aggregate(results, self.thresholds, self.policy)
        health = NodeHealth(
            node=node,
            state=verdict.state,
            statuses=classify_all(results, self.thresholds),
            causes=verdict.causes,
        )
        self.logger.log(
            _LOG_LEVELS[verdict.state],
            lambda: f"node-classified {node.hostname} {verdict.state.value}",
            extra={"state": verdict.state.value, "causes": "; ".join(verdict.causes)} if verdict.causes else {"state": verdict.state.value},
        )
        return health

    def evaluate_many(self, nodes: Iterable[MonitoredNode]) -> List[NodeHealth]:
        return [self.evaluate(n) for n in nodes]

    @staticmethod
    def summarize(healths: List[NodeHealth]) -> HealthSummary:
        return HealthSummary.of(healths)
