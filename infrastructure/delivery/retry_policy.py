from __future__ import annotations

import asyncio
import math
import os
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from core.logging.logger import StructuredLogger


TransientPredicate = Callable[[BaseException], bool]
Supplier = Callable[[], Awaitable[Any]]


@dataclass(slots=True)
class RetryPolicy:
    """Exponential backoff for outbound deliveries.

    An exception carrying ``retry_after_ms`` (e.g. from a 429 response) waits
    at least that long before the next attempt.
    """
    max_attempts: int = 3
    backoff_base_ms: int = 500
    backoff_factor: float = 2.0
    jitter_ms: int = 0

    @classmethod
    def from_env(cls) -> "RetryPolicy":
        """Create policy from environment variables."""
        def _int(name: str, default: int) -> int:
            try:
                return int(os.getenv(name, str(default)))
            except ValueError:
                return default

        def _float(name: str, default: float) -> float:
            try:
                return float(os.getenv(name, str(default)))
            except ValueError:
                return default

        return cls(
            max_attempts=max(1, _int("DELIVERY_RETRY_ATTEMPTS", 3)),
            backoff_base_ms=_int("DELIVERY_RETRY_BACKOFF_MS", 500),
            backoff_factor=_float("DELIVERY_RETRY_FACTOR", 2.0),
            jitter_ms=_int("DELIVERY_RETRY_JITTER_MS", 0),
        )

    def backoff_ms(self, attempt: int, exc: Optional[BaseException] = None) -> int:
        delay = int(self.backoff_base_ms * math.pow(self.backoff_factor, attempt - 1)) + self.jitter_ms
        retry_after = getattr(exc, "retry_after_ms", None)
        if isinstance(retry_after, int) and retry_after > 0:
            delay = max(delay, retry_after)
        return delay

    async def run(
        self,
        supplier: Supplier,
        *,
        is_transient: TransientPredicate,
        logger: StructuredLogger,
        context: dict[str, Any] | None = None,
    ) -> Any:
        """Execute an async supplier, retrying transient errors."""
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await supplier()
            except Exception as e:
                transient = is_transient(e)
                logger.warning(
                    lambda: f"retry-attempt {attempt}/{self.max_attempts} {'transient' if transient else 'terminal'}",
                    extra={**(context or {}), "error": str(e)},
                )
                if attempt >= self.max_attempts or not transient:
                    raise
                await asyncio.sleep(self.backoff_ms(attempt, e) / 1000.0)
