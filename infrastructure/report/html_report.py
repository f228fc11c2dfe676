"""HTML health report: summary badge, then domain -> site -> DC tables."""
from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Iterable, List, Optional, Sequence

from application.services.health.models import HealthSummary, NodeHealth
from domain.entities import ProbeValue
from domain.enums import Metric, OverallState, StatusClass
from domain.policy import DCDIAG_TESTS, DcdiagTest

_STATE_COLORS = {
    OverallState.HEALTHY: "#2e7d32",
    OverallState.WARNING: "#ef6c00",
    OverallState.CRITICAL: "#c62828",
}

_STYLE = """
body { font-family: Segoe UI, Arial, sans-serif; font-size: 13px; color: #222; margin: 24px; }
h1 { font-size: 20px; } h2 { font-size: 17px; margin-top: 28px; } h3 { font-size: 14px; color: #555; }
table { border-collapse: collapse; margin-bottom: 12px; }
th, td { border: 1px solid #ccc; padding: 4px 8px; text-align: center; white-space: nowrap; }
th { background: #37474f; color: #fff; font-weight: 600; }
td.dc { text-align: left; font-weight: 600; }
.status-pass { background: #c8e6c9; } .status-warn { background: #ffe0b2; }
.status-fail { background: #ffcdd2; } .status-neutral { background: #eceff1; color: #777; }
.badge { display: inline-block; padding: 4px 12px; border-radius: 12px; color: #fff; font-weight: 600; margin-right: 6px; }
.meter { width: 80px; height: 8px; background: #e0e0e0; border-radius: 4px; margin: 2px auto 0; }
.meter > span { display: block; height: 100%; border-radius: 4px; }
ul.causes { margin: 0; padding-left: 16px; text-align: left; font-size: 12px; }
"""

_MAIN_COLUMNS = (
    ("DNS", Metric.DNS),
    ("Ping", Metric.PING),
    ("Uptime", Metric.UPTIME_HOURS),
    ("Time offset", Metric.TIME_OFFSET_SECONDS),
    ("Free %", Metric.FREE_SPACE_PERCENT),
    ("Free GB", Metric.FREE_SPACE_GB),
    ("DNS svc", Metric.SERVICE_DNS),
    ("NTDS svc", Metric.SERVICE_NTDS),
    ("Netlogon svc", Metric.SERVICE_NETLOGON),
)


def format_value(metric: str, value: Optional[ProbeValue]) -> str:
    """Display text for one probe value."""
    if value is None:
        return "n/a"
    number = value.number
    if number is None:
        return str(value)
    metric = str(metric)
    if metric == Metric.UPTIME_HOURS.value:
        return f"{number:.0f} h"
    if metric == Metric.TIME_OFFSET_SECONDS.value:
        return f"{number:+.3f} s"
    if metric == Metric.FREE_SPACE_PERCENT.value:
        return f"{number:.1f} %"
    if metric == Metric.FREE_SPACE_GB.value:
        return f"{number:.1f} GB"
    return f"{number:g}"


def _cell(health: NodeHealth, metric: str) -> str:
    metric = str(metric)
    status = health.status(metric)
    text = escape(format_value(metric, health.node.result(metric)))
    if metric == Metric.FREE_SPACE_PERCENT.value:
        value = health.node.result(metric)
        number = value.number if value is not None else None
        if number is not None:
            fill = max(0.0, min(100.0, number))
            color = {StatusClass.FAIL: "#c62828", StatusClass.WARN: "#ef6c00"}.get(status, "#2e7d32")
            text += f'<div class="meter"><span style="width:{fill:.0f}%;background:{color}"></span></div>'
    return f'<td class="{status.css_class}">{text}</td>'


def _badge(state: OverallState, label: str) -> str:
    return f'<span class="badge" style="background:{_STATE_COLORS[state]}">{escape(label)}</span>'


class HtmlReportRenderer:
    """Renders classified DCs as a self-contained HTML page."""

    def __init__(self, title: str = "Active Directory Health Report", tests: Sequence[DcdiagTest] = DCDIAG_TESTS) -> None:
        self.title = title
        self.tests = tuple(tests)

    def render(self, healths: List[NodeHealth], summary: Optional[HealthSummary] = None, generated_at: Optional[datetime] = None) -> str:
        summary = summary or HealthSummary.of(healths)
        generated_at = generated_at or datetime.now()
        parts = [
            "<!DOCTYPE html>",
            '<html><head><meta charset="utf-8">',
            f"<title>{escape(self.title)}</title>",
            f"<style>{_STYLE}</style></head><body>",
            f"<h1>{escape(self.title)}</h1>",
            f"<p>Generated {escape(generated_at.strftime('%Y-%m-%d %H:%M:%S'))}</p>",
            self._summary(summary),
        ]
        for domain, sites in summary.groups.items():
            parts.append(f"<h2>{escape(domain)}</h2>")
            for site, nodes in sites.items():
                parts.append(f"<h3>Site: {escape(site)}</h3>")
                parts.append(self._main_table(nodes))
                parts.append(self._dcdiag_table(nodes))
        parts.append("</body></html>")
        return "\n".join(parts)

    def _summary(self, summary: HealthSummary) -> str:
        badges = [_badge(summary.worst, f"Overall: {summary.worst.value}")]
        for state in reversed(OverallState.ordered()):
            badges.append(_badge(state, f"{state.value}: {summary.counts.get(state, 0)}"))
        return f'<p>{"".join(badges)} <strong>{summary.total}</strong> domain controller(s)</p>'

    def _main_table(self, nodes: Iterable[NodeHealth]) -> str:
        head = ["DC", "IP", "OS", "FSMO roles", "State", *(label for label, _ in _MAIN_COLUMNS), "DCDIAG", "Findings"]
        rows = ["<table><tr>" + "".join(f"<th>{escape(h)}</th>" for h in head) + "</tr>"]
        for h in nodes:
            node = h.node
            failed = sum(1 for t in self.tests if h.status(t.metric) is StatusClass.FAIL)
            dcdiag_status = StatusClass.FAIL if failed else StatusClass.PASS
            causes = "".join(f"<li>{escape(c)}</li>" for c in h.causes)
            cells = [
                f'<td class="dc">{escape(node.hostname)}</td>',
                f"<td>{escape(node.ipv4_address or '')}</td>",
                f"<td>{escape(node.os_version)}</td>",
                f"<td>{escape(', '.join(sorted(node.fsmo_roles)) or '-')}</td>",
                f'<td style="color:#fff;background:{_STATE_COLORS[h.state]}">{escape(h.state.value)}</td>',
                *(_cell(h, metric) for _, metric in _MAIN_COLUMNS),
                f'<td class="{dcdiag_status.css_class}">{len(self.tests) - failed}/{len(self.tests)} passed</td>',
                f'<td><ul class="causes">{causes}</ul></td>' if causes else "<td></td>",
            ]
            rows.append("<tr>" + "".join(cells) + "</tr>")
        rows.append("</table>")
        return "\n".join(rows)

    def _dcdiag_table(self, nodes: Iterable[NodeHealth]) -> str:
        head = "".join(f"<th>{escape(t.name)}</th>" for t in self.tests)
        rows = [f"<table><tr><th>DCDIAG</th>{head}</tr>"]
        for h in nodes:
            cells = "".join(_cell(h, t.metric) for t in self.tests)
            rows.append(f'<tr><td class="dc">{escape(h.node.short_name)}</td>{cells}</tr>')
        rows.append("</table>")
        return "\n".join(rows)
