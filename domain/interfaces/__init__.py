"""Domain interfaces."""
from .shell import CommandResult, IShellRunner
from .delivery import IReportChannel

__all__ = [
    'CommandResult',
    'IShellRunner',
    'IReportChannel',
]
