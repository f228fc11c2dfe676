"""Application settings and configuration."""
import os
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _env_bool(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_list(name: str) -> List[str]:
    return [v.strip() for v in os.getenv(name, '').replace(';', ',').split(',') if v.strip()]


class Settings:
    """
    Process-wide settings, read once from the environment (and config/.env).

    Health thresholds and probe timeouts are not kept here: they are built as
    immutable records by ``Thresholds.from_env()`` and
    ``ProbeTimeouts.from_env()`` so the engine never touches this object.
    """

    # ── Scope ──────────────────────────────────────────────────────────────
    # Empty means "every domain in the forest".
    DOMAIN:       str = os.getenv('ADHEALTH_DOMAIN', '')
    SYSTEM_DRIVE: str = os.getenv('ADHEALTH_SYSTEM_DRIVE', 'C:')

    # ── Concurrency ────────────────────────────────────────────────────────
    MAX_CONCURRENT_NODES: int = _env_int('MAX_CONCURRENT_NODES', 8)

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR:   Path = Path(__file__).resolve().parent.parent
    DATA_DIR:   Path = BASE_DIR / 'data'
    REPORT_DIR: Path = Path(os.getenv('REPORT_DIR', str(DATA_DIR / 'reports')))
    LOG_DIR:    Path = Path(os.getenv('LOG_DIR', str(DATA_DIR / 'logs')))

    # ── Mail ───────────────────────────────────────────────────────────────
    SMTP_HOST:     str           = os.getenv('SMTP_HOST', '')
    SMTP_PORT:     int           = _env_int('SMTP_PORT', 25)
    SMTP_USER:     Optional[str] = os.getenv('SMTP_USER') or None
    SMTP_PASSWORD: Optional[str] = os.getenv('SMTP_PASSWORD') or None
    SMTP_STARTTLS: bool          = _env_bool('SMTP_STARTTLS')
    MAIL_FROM:     str           = os.getenv('MAIL_FROM', '')
    MAIL_TO:       List[str]     = _env_list('MAIL_TO')

    # ── Webhook (Teams / Slack compatible {"text": ...}) ──────────────────
    WEBHOOK_URL: str = os.getenv('WEBHOOK_URL', '')

    # Only mail / post when at least one DC is not Healthy.
    ONLY_ON_ISSUES: bool = _env_bool('ONLY_ON_ISSUES')

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if cls.MAX_CONCURRENT_NODES < 1:
            raise ValueError("MAX_CONCURRENT_NODES must be >= 1")
        if cls.SMTP_HOST and not (cls.MAIL_FROM and cls.MAIL_TO):
            raise ValueError("SMTP_HOST is set but MAIL_FROM / MAIL_TO are missing")


settings = Settings()
