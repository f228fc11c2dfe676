"""Presentation layer - command line interface."""
from .cli import HealthCommand

__all__ = [
    "HealthCommand",
]
