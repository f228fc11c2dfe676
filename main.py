"""CLI entry-point."""
from __future__ import annotations

import asyncio
import sys

from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings


def main(argv: list[str] | None = None) -> int:
    bootstrap_logging(
        service="adhealth",
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="adhealth.jsonl",
    )
    try:
        # Imported here so logging is configured before any module logs.
        from presentation.cli import HealthCommand
        try:
            command = HealthCommand()
        except ValueError as e:
            print(f"configuration error: {e}", file=sys.stderr)
            return 3
        return asyncio.run(command.execute(sys.argv[1:] if argv is None else argv))
    except KeyboardInterrupt:
        return 130
    finally:
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
