from __future__ import annotations

import asyncio
import json
import os
import shutil
from typing import Any, Optional, Sequence

from core.logging.logger import StructuredLogger, get_logger
from domain.errors import ShellError
from domain.interfaces import CommandResult, IShellRunner

# Keep PowerShell / dcdiag from flashing a console window on Windows.
CREATE_NO_WINDOW = 0x08000000 if os.name == "nt" else 0


def _powershell_executable() -> str:
    for candidate in ("powershell", "pwsh"):
        found = shutil.which(candidate)
        if found:
            return found
    return "powershell"


class ShellRunner(IShellRunner):
    """Runs local processes with asyncio and a hard timeout.

    A process that overruns its timeout is killed and reported as a
    ``ShellError`` with ``timed_out`` set.
    """

    def __init__(self, logger: Optional[StructuredLogger] = None, *, powershell: Optional[str] = None) -> None:
        self.logger = logger or get_logger(__name__, service="shell")
        self.powershell = powershell or _powershell_executable()

    async def run(self, argv: Sequence[str], *, timeout_s: float, check: bool = True) -> CommandResult:
        argv = tuple(str(a) for a in argv)
        self.logger.trace(lambda: f"exec {argv[0]}", extra={"argc": len(argv)})
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                creationflags=CREATE_NO_WINDOW,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise ShellError(f"cannot start {argv[0]}: {e}") from e

        try:
            out, err = await asyncio.wait_for(proc.communicate(), timeout=timeout_s)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise ShellError(f"{argv[0]} timed out after {timeout_s:g}s", timed_out=True) from e

        result = CommandResult(
            argv=argv,
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=_decode(out),
            stderr=_decode(err),
        )
        if check and not result.ok:
            raise ShellError(
                f"{argv[0]} exited with {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )
        return result

    async def run_powershell(self, script: str, *, timeout_s: float) -> CommandResult:
        argv = [self.powershell, "-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command", script]
        return await self.run(argv, timeout_s=timeout_s)

    async def run_powershell_json(self, script: str, *, timeout_s: float) -> Any:
        result = await self.run_powershell(f"{script} | ConvertTo-Json -Depth 4 -Compress", timeout_s=timeout_s)
        text = result.stdout.strip()
        if not text:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ShellError(f"unexpected PowerShell output: {text[:120]!r}") from e


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    for encoding in ("utf-8", "cp850"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="replace")
