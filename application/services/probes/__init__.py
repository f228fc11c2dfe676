from .timeout_config import ProbeTimeouts
from .dns_probe import DNSProbe
from .ping_probe import PingProbe, ping_argv
from .remote_probes import RemoteProbes, parse_stripchart, ps_quote
from .dcdiag_probe import DcdiagProbe, parse_dcdiag, dcdiag_argv
from .collector import ProbeCollector

__all__ = [
    "ProbeTimeouts",
    "DNSProbe",
    "PingProbe",
    "ping_argv",
    "RemoteProbes",
    "parse_stripchart",
    "ps_quote",
    "DcdiagProbe",
    "parse_dcdiag",
    "dcdiag_argv",
    "ProbeCollector",
]
