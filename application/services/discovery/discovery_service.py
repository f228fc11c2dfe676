from __future__ import annotations

from typing import Any, Iterable, List, Optional

from core.logging.logger import StructuredLogger, get_logger
from domain.entities import MonitoredNode
from domain.errors import DiscoveryError, ShellError
from domain.interfaces import IShellRunner
from application.services.probes.remote_probes import ps_quote

FOREST_DOMAINS_SCRIPT = "Import-Module ActiveDirectory -ErrorAction Stop; (Get-ADForest -ErrorAction Stop).Domains"

DOMAIN_CONTROLLERS_SCRIPT = (
    "Import-Module ActiveDirectory -ErrorAction Stop; "
    "Get-ADDomainController -Filter * -Server {server} -ErrorAction Stop | "
    "Select-Object HostName, Domain, Site, IPv4Address, OperatingSystem, "
    "@{{n='OperationMasterRoles';e={{@($_.OperationMasterRoles | ForEach-Object {{ $_.ToString() }})}}}}"
)


def _as_list(data: Any) -> List[Any]:
    if data is None:
        return []
    return data if isinstance(data, list) else [data]


def node_from_record(record: dict, default_domain: str = "") -> Optional[MonitoredNode]:
    """MonitoredNode from one ``Get-ADDomainController`` row, or None without a HostName."""
    hostname = str(record.get("HostName") or "").strip()
    if not hostname:
        return None
    roles = [str(r) for r in _as_list(record.get("OperationMasterRoles")) if r]
    return MonitoredNode(
        hostname=hostname,
        domain=str(record.get("Domain") or default_domain),
        site=str(record.get("Site") or ""),
        ipv4_address=record.get("IPv4Address") or None,
        os_version=str(record.get("OperatingSystem") or ""),
        fsmo_roles=frozenset(roles),
    )


class DiscoveryService:
    """Enumerates the domain controllers to check through the AD PowerShell module."""

    def __init__(self, runner: IShellRunner, logger: Optional[StructuredLogger] = None, *, timeout_s: float = 120.0) -> None:
        self.runner = runner
        self.logger = logger or get_logger(__name__, service="discovery")
        self.timeout_s = timeout_s

    async def forest_domains(self) -> List[str]:
        try:
            data = await self.runner.run_powershell_json(FOREST_DOMAINS_SCRIPT, timeout_s=self.timeout_s)
        except ShellError as e:
            raise DiscoveryError(f"cannot enumerate forest domains: {e}") from e
        domains = [str(d) for d in _as_list(data) if d]
        if not domains:
            raise DiscoveryError("forest returned no domains")
        return domains

    async def domain_controllers(self, domain: str) -> List[MonitoredNode]:
        script = DOMAIN_CONTROLLERS_SCRIPT.format(server=ps_quote(domain))
        data = await self.runner.run_powershell_json(script, timeout_s=self.timeout_s)
        nodes = []
        for record in _as_list(data):
            node = node_from_record(record, domain) if isinstance(record, dict) else None
            if node is not None:
                nodes.append(node)
        return nodes

    async def discover(self, domain: Optional[str] = None) -> List[MonitoredNode]:
        """Every DC of ``domain``, or of every domain in the forest.

        A domain that cannot be enumerated is logged and skipped, unless it is
        the only one requested.
        """
        domains = [domain] if domain else await self.forest_domains()
        self.logger.info(lambda: f"discovering DCs in {len(domains)} domain(s)", extra={"domains": ",".join(domains)})
        seen: dict[str, MonitoredNode] = {}
        for name in domains:
            try:
                nodes = await self.domain_controllers(name)
            except ShellError as e:
                if domain:
                    raise DiscoveryError(f"cannot enumerate domain controllers of {name}: {e}") from e
                self.logger.error(lambda: f"skipping domain {name}", extra={"error": str(e)})
                continue
            for node in nodes:
                seen.setdefault(node.hostname.lower(), node)
        found = sorted(seen.values(), key=lambda n: (n.domain.lower(), n.site.lower(), n.hostname.lower()))
        if not found:
            raise DiscoveryError("no domain controllers found")
        self.logger.info(lambda: f"discovered {len(found)} DC(s)")
        return found

    @staticmethod
    def from_hostnames(hostnames: Iterable[str], domain: str = "") -> List[MonitoredNode]:
        """Bare nodes for an explicit list of DCs (no AD lookup)."""
        nodes = []
        for name in hostnames:
            name = name.strip()
            if not name:
                continue
            dom = domain or (name.split(".", 1)[1] if "." in name else "")
            nodes.append(MonitoredNode(hostname=name, domain=dom))
        return nodes
