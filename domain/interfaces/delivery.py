"""Interface for sending a finished report somewhere."""
from abc import ABC, abstractmethod


class IReportChannel(ABC):
    """A destination for the rendered report (mail, chat webhook, ...)."""

    name: str = "channel"

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether the channel is configured."""

    @abstractmethod
    async def deliver(self, *, subject: str, html: str, text: str) -> None:
        """Send the report. Raises ``DeliveryError`` on failure."""
