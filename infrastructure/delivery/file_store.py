from __future__ import annotations

from datetime import datetime
from pathlib import Path


class ReportFileStore:
    """Writes rendered reports under one directory."""

    def __init__(self, directory: Path, prefix: str = "ADHealth") -> None:
        self.directory = Path(directory)
        self.prefix = prefix

    def path_for(self, generated_at: datetime, suffix: str = ".html") -> Path:
        return self.directory / f"{self.prefix}_{generated_at.strftime('%Y-%m-%d_%H%M%S')}{suffix}"

    def save(self, content: str, generated_at: datetime, suffix: str = ".html") -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(generated_at, suffix)
        path.write_text(content, encoding="utf-8")
        return path
