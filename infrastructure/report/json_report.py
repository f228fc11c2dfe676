from __future__ import annotations

from typing import Any, Dict, List

from application.services.health.models import HealthSummary, NodeHealth


def to_json_payload(healths: List[NodeHealth], summary: HealthSummary | None = None) -> Dict[str, Any]:
    summary = summary or HealthSummary.of(healths)
    return {
        "overall": summary.worst.value,
        "counts": {state.value: n for state, n in summary.counts.items()},
        "domain_controllers": [h.to_dict() for h in healths],
    }
