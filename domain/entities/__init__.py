"""Domain entities."""
from .probe_value import (
    ProbeValue,
    Success,
    Failure,
    Numeric,
    FAILED,
    COULD_NOT_MEASURE,
    UNREACHABLE,
    TIMEOUT,
    CIM_FAILURE,
    NOT_REPORTED,
)
from .monitored_node import MonitoredNode

__all__ = [
    'ProbeValue',
    'Success',
    'Failure',
    'Numeric',
    'FAILED',
    'COULD_NOT_MEASURE',
    'UNREACHABLE',
    'TIMEOUT',
    'CIM_FAILURE',
    'NOT_REPORTED',
    'MonitoredNode',
]
