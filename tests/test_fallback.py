"""Tests for hostname-derived fallback metadata."""

from __future__ import annotations

import pytest

from linkmeta.resolver.fallback import fallback, title_from_host


class TestTitleFromHost:
    @pytest.mark.parametrize(
        "host, expected",
        [
            ("my-cool-site.com", "My Cool Site"),
            ("www.example.com", "Example"),
            ("github.com", "Github"),
            ("docs.python.org", "Docs"),
            ("localhost", "Localhost"),
        ],
    )
    def test_titles(self, host: str, expected: str) -> None:
        assert title_from_host(host) == expected

    def test_empty_host(self) -> None:
        assert title_from_host("") == ""

    def test_bare_www_prefix_leaves_nothing(self) -> None:
        assert title_from_host("www.") == ""


class TestFallback:
    def test_builds_fallback_result(self) -> None:
        result = fallback("https://www.my-cool-site.com/some/page")
        assert result.title == "My Cool Site"
        assert result.description is None
        assert result.icon == "https://www.my-cool-site.com/favicon.ico"
        assert result.is_fallback is True
        assert result.normalized_url == "https://www.my-cool-site.com/some/page"

    def test_icon_keeps_non_default_port(self) -> None:
        result = fallback("http://example.com:8080/x")
        assert result.icon == "http://example.com:8080/favicon.ico"

    def test_ipv4_host_title(self) -> None:
        result = fallback("https://192.168.0.1/")
        assert result.title == "192"
        assert result.icon == "https://192.168.0.1/favicon.ico"
