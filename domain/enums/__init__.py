"""Domain enumerations."""
from .metric import Metric, DCDIAG_PREFIX, dcdiag_metric
from .overall_state import OverallState
from .severity import Severity
from .status_class import StatusClass

__all__ = [
    'Metric',
    'DCDIAG_PREFIX',
    'dcdiag_metric',
    'OverallState',
    'Severity',
    'StatusClass',
]
