"""Process and PowerShell execution."""
from .runner import ShellRunner, CREATE_NO_WINDOW

__all__ = [
    "ShellRunner",
    "CREATE_NO_WINDOW",
]
