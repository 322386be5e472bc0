"""Tests for environment-driven configuration."""

import pytest

from bookfilters.config import DEBUG_ENV_VAR, resolve_verbose


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("TRUE", True), ("0", False), ("", False)])
def test_resolve_verbose(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv(DEBUG_ENV_VAR, value)
    assert resolve_verbose() is expected


def test_resolve_verbose_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)
    assert resolve_verbose() is False
