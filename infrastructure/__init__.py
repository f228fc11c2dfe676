"""Infrastructure layer - process execution, report rendering and delivery."""
from .shell import ShellRunner
from .report import HtmlReportRenderer, to_json_payload
from .delivery import ReportFileStore, RetryPolicy, SmtpMailer, WebhookNotifier

__all__ = [
    'ShellRunner',
    'HtmlReportRenderer',
    'to_json_payload',
    'ReportFileStore',
    'RetryPolicy',
    'SmtpMailer',
    'WebhookNotifier',
]
