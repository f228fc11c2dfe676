"""Tests for the ``adhealth`` command."""

from __future__ import annotations

import asyncio
import json
import socket

import pytest

from config import Settings
from domain.errors import ShellError
from presentation.cli import HealthCommand, build_parser
from presentation.cli.health_command import _split_hosts

BASE_ARGS = ["--no-report", "--no-email", "--no-webhook"]


@pytest.fixture(autouse=True)
def resolvable_hosts(monkeypatch):
    monkeypatch.setattr(socket, "getaddrinfo", lambda *args, **kwargs: [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.10", 0))])


def _run(command: HealthCommand, argv) -> int:
    return asyncio.run(command.execute(argv))


def test_split_hosts_dedupes_case_insensitively() -> None:
    assert _split_hosts(["dc01,DC02", " dc02 ", "dc03"]) == ["dc01", "DC02", "dc03"]


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.dc is None
    assert not args.json
    assert args.concurrency >= 1


def test_healthy_run_exits_zero_and_prints_json(healthy_dc_runner, thresholds, policy, capsys) -> None:
    command = HealthCommand(healthy_dc_runner, thresholds=thresholds, policy=policy)
    code = _run(command, [*BASE_ARGS, "--json", "--dc", "dc01.corp.example.com"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["overall"] == "Healthy"
    assert payload["domain_controllers"][0]["domain"] == "corp.example.com"


def test_critical_run_exits_two(healthy_dc_runner, thresholds, policy, capsys) -> None:
    healthy_dc_runner.rules.insert(0, ("Win32_LogicalDisk", {"FreeSpace": 2 * 1024 ** 3, "Size": 128 * 1024 ** 3}))
    command = HealthCommand(healthy_dc_runner, thresholds=thresholds, policy=policy)
    code = _run(command, [*BASE_ARGS, "--dc", "dc01.corp.example.com"])
    out = capsys.readouterr().out
    assert code == 2
    assert out.startswith("AD health: Critical")
    assert "CRIT  dc01.corp.example.com" in out


def test_discovery_failure_exits_three(fake_runner, thresholds, policy) -> None:
    fake_runner.add("Get-ADForest", ShellError("ActiveDirectory module not installed", returncode=1))
    command = HealthCommand(fake_runner, thresholds=thresholds, policy=policy)
    assert _run(command, BASE_ARGS) == 3


def test_invalid_concurrency_exits_three(fake_runner, thresholds, policy) -> None:
    command = HealthCommand(fake_runner, thresholds=thresholds, policy=policy)
    assert _run(command, [*BASE_ARGS, "--concurrency", "0", "--dc", "dc01"]) == 3
    assert fake_runner.calls == []


def test_incomplete_mail_settings_exit_three(monkeypatch, fake_runner, thresholds, policy, capsys) -> None:
    monkeypatch.setattr(Settings, "SMTP_HOST", "smtp.example.com")
    monkeypatch.setattr(Settings, "MAIL_TO", [])
    command = HealthCommand(fake_runner, thresholds=thresholds, policy=policy)
    assert _run(command, [*BASE_ARGS, "--dc", "dc01"]) == 3
    assert "MAIL_FROM / MAIL_TO" in capsys.readouterr().err
