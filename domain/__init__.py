"""Domain layer - DC entities, enums, health policy and interfaces."""
from .entities import MonitoredNode, ProbeValue, Success, Failure, Numeric
from .enums import Metric, OverallState, Severity, StatusClass
from .policy import Thresholds, SeverityPolicy, DcdiagTest, DCDIAG_TESTS
from .interfaces import CommandResult, IShellRunner, IReportChannel
from .errors import ADHealthError, ShellError, DiscoveryError, DeliveryError

__all__ = [
    # Entities
    'MonitoredNode',
    'ProbeValue',
    'Success',
    'Failure',
    'Numeric',
    # Enums
    'Metric',
    'OverallState',
    'Severity',
    'StatusClass',
    # Policy
    'Thresholds',
    'SeverityPolicy',
    'DcdiagTest',
    'DCDIAG_TESTS',
    # Interfaces
    'CommandResult',
    'IShellRunner',
    'IReportChannel',
    # Errors
    'ADHealthError',
    'ShellError',
    'DiscoveryError',
    'DeliveryError',
]
