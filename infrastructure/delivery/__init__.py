"""Report persistence and delivery channels."""
from .file_store import ReportFileStore
from .retry_policy import RetryPolicy
from .smtp_mailer import SmtpMailer
from .webhook_notifier import WebhookNotifier

__all__ = [
    "ReportFileStore",
    "RetryPolicy",
    "SmtpMailer",
    "WebhookNotifier",
]
