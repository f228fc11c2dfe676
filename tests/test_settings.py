"""Tests for environment parsing in the settings module."""

from __future__ import annotations

import pytest

from config.settings import _env_bool, _env_int, _env_list


@pytest.mark.parametrize("raw, expected", [("12", 12), ("eight", 8), ("", 8), ("2.5", 8)])
def test_env_int_falls_back_on_malformed_values(monkeypatch, raw, expected) -> None:
    monkeypatch.setenv("MAX_CONCURRENT_NODES", raw)
    assert _env_int("MAX_CONCURRENT_NODES", 8) == expected


def test_env_int_unset_uses_default(monkeypatch) -> None:
    monkeypatch.delenv("SMTP_PORT", raising=False)
    assert _env_int("SMTP_PORT", 25) == 25


def test_env_list_accepts_commas_and_semicolons(monkeypatch) -> None:
    monkeypatch.setenv("MAIL_TO", "ops@example.com; ad@example.com, ,")
    assert _env_list("MAIL_TO") == ["ops@example.com", "ad@example.com"]


def test_env_bool(monkeypatch) -> None:
    monkeypatch.setenv("ONLY_ON_ISSUES", " Yes ")
    assert _env_bool("ONLY_ON_ISSUES")
    monkeypatch.setenv("ONLY_ON_ISSUES", "0")
    assert not _env_bool("ONLY_ON_ISSUES")
