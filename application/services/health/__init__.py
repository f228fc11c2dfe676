from .models import Verdict, NodeHealth, HealthSummary
from .classifier import classify_metric, classify_all, is_binary_metric, CONSULTED_METRICS
from .aggregator import aggregate, overall_state
from .engine import HealthEngine

__all__ = [
    "Verdict",
    "NodeHealth",
    "HealthSummary",
    "classify_metric",
    "classify_all",
    "is_binary_metric",
    "CONSULTED_METRICS",
    "aggregate",
    "overall_state",
    "HealthEngine",
]
