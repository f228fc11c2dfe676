"""Application use cases."""
from .run_health_check import RunHealthCheckUseCase, HealthRunResult, summary_text

__all__ = [
    "RunHealthCheckUseCase",
    "HealthRunResult",
    "summary_text",
]
