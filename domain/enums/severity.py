"""Severity of a binary metric failure."""
from enum import Enum


class Severity(Enum):
    CRITICAL = "critical"
    WARNING = "warning"
