"""Tests for DC discovery through the AD PowerShell module."""

from __future__ import annotations

import asyncio

import pytest

from application.services.discovery import DiscoveryService, node_from_record
from domain.errors import DiscoveryError, ShellError

from conftest import FakeShellRunner

CORP_DCS = [
    {
        "HostName": "dc02.corp.example.com",
        "Domain": "corp.example.com",
        "Site": "Branch",
        "IPv4Address": "10.1.0.10",
        "OperatingSystem": "Windows Server 2022 Standard",
        "OperationMasterRoles": [],
    },
    {
        "HostName": "dc01.corp.example.com",
        "Domain": "corp.example.com",
        "Site": "HQ",
        "IPv4Address": "10.0.0.10",
        "OperatingSystem": "Windows Server 2022 Datacenter",
        "OperationMasterRoles": ["SchemaMaster", "DomainNamingMaster", "PDCEmulator"],
    },
]


def test_node_from_record() -> None:
    node = node_from_record(CORP_DCS[1])
    assert node is not None
    assert node.hostname == "dc01.corp.example.com"
    assert node.site == "HQ"
    assert node.ipv4_address == "10.0.0.10"
    assert node.fsmo_roles == frozenset({"SchemaMaster", "DomainNamingMaster", "PDCEmulator"})


def test_node_from_record_without_hostname() -> None:
    assert node_from_record({"Domain": "corp.example.com"}) is None


def test_single_role_string_is_accepted() -> None:
    node = node_from_record({"HostName": "dc03", "OperationMasterRoles": "RIDMaster"}, "corp.example.com")
    assert node.fsmo_roles == frozenset({"RIDMaster"})
    assert node.domain == "corp.example.com"


def test_discover_whole_forest() -> None:
    runner = FakeShellRunner([
        ("Get-ADForest", ["corp.example.com", "emea.corp.example.com"]),
        ("-Server 'corp.example.com'", CORP_DCS),
        ("-Server 'emea.corp.example.com'", {"HostName": "dc01.emea.corp.example.com", "Domain": "emea.corp.example.com", "Site": "Paris"}),
    ])
    nodes = asyncio.run(DiscoveryService(runner).discover())
    assert [n.hostname for n in nodes] == [
        "dc02.corp.example.com",
        "dc01.corp.example.com",
        "dc01.emea.corp.example.com",
    ]


def test_failing_domain_is_skipped_in_forest_scan() -> None:
    runner = FakeShellRunner([
        ("Get-ADForest", ["corp.example.com", "lab.example.com"]),
        ("-Server 'corp.example.com'", CORP_DCS),
        ("-Server 'lab.example.com'", ShellError("server not operational", returncode=1)),
    ])
    nodes = asyncio.run(DiscoveryService(runner).discover())
    assert len(nodes) == 2


def test_requested_domain_failure_raises() -> None:
    runner = FakeShellRunner([("-Server 'lab.example.com'", ShellError("server not operational", returncode=1))])
    with pytest.raises(DiscoveryError):
        asyncio.run(DiscoveryService(runner).discover("lab.example.com"))
    assert not any("Get-ADForest" in c for c in runner.calls)


def test_forest_failure_raises() -> None:
    runner = FakeShellRunner([("Get-ADForest", ShellError("module not found", returncode=1))])
    with pytest.raises(DiscoveryError):
        asyncio.run(DiscoveryService(runner).discover())


def test_from_hostnames() -> None:
    nodes = DiscoveryService.from_hostnames(["dc01.corp.example.com", " ", "dc02"])
    assert [(n.hostname, n.domain) for n in nodes] == [("dc01.corp.example.com", "corp.example.com"), ("dc02", "")]
