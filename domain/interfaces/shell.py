"""Interface for running external commands against domain controllers."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Completed process output."""
    argv: tuple
    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class IShellRunner(ABC):
    """Runs processes and PowerShell scripts with a time limit.

    Implementations raise ``ShellError`` for timeouts, missing executables and
    (unless ``check`` is False) non-zero exit codes.
    """

    @abstractmethod
    async def run(self, argv: Sequence[str], *, timeout_s: float, check: bool = True) -> CommandResult:
        """Run ``argv`` and capture its output."""

    @abstractmethod
    async def run_powershell(self, script: str, *, timeout_s: float) -> CommandResult:
        """Run a PowerShell script block."""

    @abstractmethod
    async def run_powershell_json(self, script: str, *, timeout_s: float) -> Any:
        """Run a PowerShell script whose output is piped through ConvertTo-Json."""
