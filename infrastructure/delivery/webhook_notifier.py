from __future__ import annotations

from typing import Optional

import httpx

from core.logging.logger import StructuredLogger, get_logger
from domain.errors import DeliveryError
from domain.interfaces import IReportChannel
from .retry_policy import RetryPolicy


class TransientHTTPError(Exception):
    def __init__(self, status_code: int, retry_after_ms: Optional[int] = None) -> None:
        super().__init__(f"http {status_code}")
        self.status_code = status_code
        self.retry_after_ms = retry_after_ms


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, (httpx.TimeoutException, httpx.NetworkError, TransientHTTPError))


def _retry_after_ms(resp: httpx.Response) -> Optional[int]:
    value = resp.headers.get("Retry-After")
    if not value:
        return None
    try:
        return int(float(value) * 1000)
    except ValueError:
        return None


class WebhookNotifier(IReportChannel):
    """Posts the run summary to a chat webhook as ``{"text": ...}``.

    The payload shape is accepted by Teams and Slack incoming webhooks.
    """

    name = "webhook"

    def __init__(
        self,
        url: str,
        *,
        retry: Optional[RetryPolicy] = None,
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.url = url
        self.retry = retry or RetryPolicy.from_env()
        self.timeout_s = timeout_s
        self.transport = transport
        self.logger = logger or get_logger(__name__, service="delivery")

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    async def deliver(self, *, subject: str, html: str, text: str) -> None:
        if not self.enabled:
            self.logger.debug("webhook: skipping send (not configured)")
            return
        payload = {"text": f"**{subject}**\n\n{text}"}

        async def _post() -> None:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
                resp = await client.post(self.url, json=payload)
            if resp.status_code == 429 or resp.status_code >= 500:
                raise TransientHTTPError(resp.status_code, _retry_after_ms(resp))
            resp.raise_for_status()

        try:
            await self.retry.run(_post, is_transient=is_transient, logger=self.logger, context={"channel": self.name})
        except (httpx.HTTPError, TransientHTTPError) as e:
            raise DeliveryError(self.name, str(e)) from e
        self.logger.success("webhook: summary posted")
