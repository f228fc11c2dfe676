"""CIM, time service and service-control probes run against one DC."""
from __future__ import annotations

import re
from typing import Any, Dict, Optional

from core.logging.logger import StructuredLogger
from domain.entities import (
    CIM_FAILURE,
    COULD_NOT_MEASURE,
    NOT_REPORTED,
    TIMEOUT,
    Failure,
    Numeric,
    ProbeValue,
    Success,
)
from domain.enums import Metric
from domain.errors import ShellError
from domain.interfaces import IShellRunner
from .timeout_config import ProbeTimeouts

_GB = 1024 ** 3
_OFFSET_RE = re.compile(r"([+-]?\d+(?:[.,]\d+)?)s\s*$")


def ps_quote(value: str) -> str:
    """Single-quoted PowerShell string literal."""
    return "'" + value.replace("'", "''") + "'"


def parse_stripchart(output: str) -> Optional[float]:
    """Offset in seconds from ``w32tm /stripchart /dataonly`` output.

    Sample lines look like ``10:41:03, +00.0025153s``; error samples
    (``10:41:03, error: 0x800705B4``) are skipped. Returns the last offset.
    """
    offset = None
    for line in output.splitlines():
        m = _OFFSET_RE.search(line.strip())
        if m:
            offset = float(m.group(1).replace(",", "."))
    return offset


def _shell_failure(e: ShellError) -> Failure:
    return Failure(TIMEOUT if e.timed_out else CIM_FAILURE)


class RemoteProbes:
    """Uptime, system-drive space, time offset and service state of one DC."""

    def __init__(
        self,
        runner: IShellRunner,
        timeouts: ProbeTimeouts,
        logger: StructuredLogger,
        *,
        system_drive: str = "C:",
    ) -> None:
        self.runner = runner
        self.timeouts = timeouts
        self.logger = logger
        self.system_drive = system_drive

    async def uptime_hours(self, host: str) -> ProbeValue:
        script = (
            f"$os = Get-CimInstance -ClassName Win32_OperatingSystem -ComputerName {ps_quote(host)} -ErrorAction Stop; "
            "[math]::Round(((Get-Date) - $os.LastBootUpTime).TotalHours, 2).ToString([cultureinfo]::InvariantCulture)"
        )
        try:
            result = await self.runner.run_powershell(script, timeout_s=self.timeouts.remote_s)
        except ShellError as e:
            self.logger.warning(lambda: "probe-failed uptime", extra={"host": host, "error": str(e)})
            return _shell_failure(e)
        # Decimal comma when the host ignores the invariant format.
        value = ProbeValue.coerce(result.stdout.strip().replace(",", "."))
        if value.is_failure:
            self.logger.warning(lambda: "probe-failed uptime", extra={"host": host, "error": str(value)})
        return value

    async def free_space(self, host: str) -> Dict[str, ProbeValue]:
        """``free_space_percent`` and ``free_space_gb`` of the system drive."""
        drive_filter = f"DeviceID='{self.system_drive}'"
        script = (
            f"Get-CimInstance -ClassName Win32_LogicalDisk -ComputerName {ps_quote(host)} "
            f"-Filter {ps_quote(drive_filter)} -ErrorAction Stop | Select-Object FreeSpace, Size"
        )
        percent_key, gb_key = str(Metric.FREE_SPACE_PERCENT), str(Metric.FREE_SPACE_GB)
        try:
            data = await self.runner.run_powershell_json(script, timeout_s=self.timeouts.remote_s)
        except ShellError as e:
            self.logger.warning(lambda: "probe-failed disk", extra={"host": host, "error": str(e)})
            failure = _shell_failure(e)
            return {percent_key: failure, gb_key: failure}

        free, size = _disk_numbers(data)
        if free is None or not size:
            self.logger.warning(lambda: "probe-failed disk", extra={"host": host, "error": "no disk data"})
            return {percent_key: Failure(COULD_NOT_MEASURE), gb_key: Failure(COULD_NOT_MEASURE)}
        return {
            percent_key: Numeric(round(free / size * 100.0, 2)),
            gb_key: Numeric(round(free / _GB, 2)),
        }

    async def time_offset_seconds(self, host: str) -> ProbeValue:
        argv = ["w32tm", "/stripchart", f"/computer:{host}", "/samples:1", "/dataonly"]
        try:
            result = await self.runner.run(argv, timeout_s=self.timeouts.remote_s, check=False)
        except ShellError as e:
            self.logger.warning(lambda: "probe-failed time", extra={"host": host, "error": str(e)})
            return Failure(TIMEOUT if e.timed_out else COULD_NOT_MEASURE)
        offset = parse_stripchart(result.stdout)
        if offset is None:
            self.logger.warning(lambda: "probe-failed time", extra={"host": host, "error": "no sample"})
            return Failure(COULD_NOT_MEASURE)
        return Numeric(offset)

    async def services(self, host: str) -> Dict[str, ProbeValue]:
        """State of the DNS, NTDS and Netlogon services (Running = Success)."""
        wanted = Metric.services()
        names = ",".join(wanted.values())
        script = (
            f"Get-Service -ComputerName {ps_quote(host)} -Name {names} -ErrorAction Stop | "
            "Select-Object Name, @{n='Status';e={$_.Status.ToString()}}"
        )
        try:
            data = await self.runner.run_powershell_json(script, timeout_s=self.timeouts.remote_s)
        except ShellError as e:
            self.logger.warning(lambda: "probe-failed services", extra={"host": host, "error": str(e)})
            failure = Failure(TIMEOUT if e.timed_out else COULD_NOT_MEASURE)
            return {str(m): failure for m in wanted}

        rows = data if isinstance(data, list) else [data] if data else []
        states = {
            str(row.get("Name", "")).lower(): str(row.get("Status", ""))
            for row in rows
            if isinstance(row, dict)
        }
        results: Dict[str, ProbeValue] = {}
        for metric, service in wanted.items():
            status = states.get(service.lower())
            if status is None:
                results[str(metric)] = Failure(NOT_REPORTED)
            elif status.lower() == "running":
                results[str(metric)] = Success()
            else:
                results[str(metric)] = Failure(status.lower() or COULD_NOT_MEASURE)
        return results


def _disk_numbers(data: Any) -> tuple[Optional[float], Optional[float]]:
    if isinstance(data, list):
        data = data[0] if data else None
    if not isinstance(data, dict):
        return None, None
    try:
        free = float(data["FreeSpace"])
        size = float(data["Size"])
    except (KeyError, TypeError, ValueError):
        return None, None
    return free, size
