"""Overall health verdict for one domain controller."""
from enum import Enum


class OverallState(Enum):
    """Tri-state verdict, most severe last in ``ordered()``."""

    HEALTHY = "Healthy"
    WARNING = "Warning"
    CRITICAL = "Critical"

    @property
    def exit_code(self) -> int:
        """Process exit code the CLI uses when this is the worst verdict."""
        return {OverallState.HEALTHY: 0, OverallState.WARNING: 1, OverallState.CRITICAL: 2}[self]

    @classmethod
    def ordered(cls) -> list['OverallState']:
        return [cls.HEALTHY, cls.WARNING, cls.CRITICAL]

    @classmethod
    def worst(cls, states) -> 'OverallState':
        """Most severe state in ``states``; Healthy when empty."""
        rank = {s: i for i, s in enumerate(cls.ordered())}
        return max(states, key=rank.__getitem__, default=cls.HEALTHY)
