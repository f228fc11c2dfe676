"""Errors raised outside the classification engine."""


class ADHealthError(Exception):
    """Base class for run-level failures."""


class ShellError(ADHealthError):
    """A command could not run, timed out or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "", timed_out: bool = False) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
        self.timed_out = timed_out


class DiscoveryError(ADHealthError):
    """The forest or domain could not be enumerated."""


class DeliveryError(ADHealthError):
    """A report channel failed to deliver."""

    def __init__(self, channel: str, message: str) -> None:
        super().__init__(f"{channel}: {message}")
        self.channel = channel
