"""Tests for the linkmeta CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cli.main import app
from linkmeta.resolver.errors import MissingURLError
from linkmeta.resolver.models import MetadataResult

runner = CliRunner()

_RESULT = MetadataResult(
    title="GitHub",
    normalized_url="https://github.com",
    description="Where code lives",
    icon="https://github.com/favicon.ico",
)


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    """Keep the runner's temporary streams out of the root log handler."""
    monkeypatch.setattr("cli.main.configure_logging", lambda **kwargs: None)


def test_normalize_prints_url():
    result = runner.invoke(app, ["normalize", "github"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "https://github.com"


def test_normalize_invalid_exits_1():
    result = runner.invoke(app, ["normalize", "badurl!!!"])
    assert result.exit_code == 1


def test_resolve_human_output():
    with patch("cli.main.resolve", return_value=_RESULT) as mock_resolve:
        result = runner.invoke(app, ["resolve", "github"])

    mock_resolve.assert_called_once_with("github")
    assert result.exit_code == 0
    assert "GitHub" in result.stdout
    assert "Where code lives" in result.stdout
    assert "https://github.com/favicon.ico" in result.stdout


def test_resolve_json_output():
    with patch("cli.main.resolve", return_value=_RESULT):
        result = runner.invoke(app, ["resolve", "github", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == _RESULT.to_dict()


def test_resolve_fallback_is_flagged():
    fallback = MetadataResult(
        title="Github",
        normalized_url="https://github.com",
        icon="https://github.com/favicon.ico",
        is_fallback=True,
    )
    with patch("cli.main.resolve", return_value=fallback):
        result = runner.invoke(app, ["resolve", "github"])

    assert result.exit_code == 0
    assert "derived from the hostname" in result.stdout


def test_resolve_missing_url_exits_1():
    with patch("cli.main.resolve", side_effect=MissingURLError()):
        result = runner.invoke(app, ["resolve", ""])

    assert result.exit_code == 1
