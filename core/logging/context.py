from __future__ import annotations

import contextvars
from typing import Any, Dict

_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar("adhealth_log_context", default={})


def get_context() -> Dict[str, Any]:
    return dict(_context.get())


class context(object):
    """Bind values for the duration of a ``with`` block.

    Each asyncio task runs in a copy of the caller's context, so values bound
    inside a per-DC task never leak into a sibling task.
    """

    def __init__(self, **values: Any) -> None:
        self._values = values
        self._token = None

    def __enter__(self) -> Dict[str, Any]:
        current = dict(_context.get())
        current.update({k: v for k, v in self._values.items() if v is not None})
        self._token = _context.set(current)
        return current

    def __exit__(self, exc_type, exc, tb):
        if self._token is not None:
            _context.reset(self._token)
            self._token = None
        return False


def node_context(hostname: str, domain: str | None = None, site: str | None = None) -> context:
    """Log context for work done against one domain controller."""
    return context(dc=hostname, domain=domain, site=site)
