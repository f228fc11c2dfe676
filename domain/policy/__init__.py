"""Health policy: thresholds, DCDIAG test table and severity partition."""
from .thresholds import Thresholds
from .dcdiag_tests import DcdiagTest, DCDIAG_TESTS, dcdiag_test_names
from .severity_policy import SeverityPolicy

__all__ = [
    'Thresholds',
    'DcdiagTest',
    'DCDIAG_TESTS',
    'dcdiag_test_names',
    'SeverityPolicy',
]
