"""Report rendering."""
from .html_report import HtmlReportRenderer, format_value
from .json_report import to_json_payload

__all__ = [
    "HtmlReportRenderer",
    "format_value",
    "to_json_payload",
]
