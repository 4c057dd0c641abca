"""Tests for the /api/metadata and /health endpoints.

The resolver is patched where only the HTTP contract is under test; one
end-to-end case goes through the real pipeline with ``respx``.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import patch

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from linkmeta.api.app import create_app
from linkmeta.resolver.errors import InvalidURLError
from linkmeta.resolver.models import MetadataResult


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestMetadataEndpoint:
    def test_success_shape(self, client) -> None:
        result = MetadataResult(
            title="Example Domain",
            normalized_url="https://example.com",
            icon="https://example.com/favicon.ico",
        )
        with patch("linkmeta.api.routers.metadata.resolve", return_value=result) as mock_resolve:
            resp = client.post("/api/metadata", json={"url": "example.com"})

        mock_resolve.assert_called_once_with("example.com")
        assert resp.status_code == 200
        assert resp.json() == {
            "title": "Example Domain",
            "description": None,
            "icon": "https://example.com/favicon.ico",
            "isFallback": False,
            "normalizedUrl": "https://example.com",
        }

    def test_end_to_end_with_fallback(self, client) -> None:
        with respx.mock:
            respx.get("https://blocked-site.com/").mock(return_value=httpx.Response(403))
            resp = client.post("/api/metadata", json={"url": "blocked-site"})

        assert resp.status_code == 200
        assert resp.json() == {
            "title": "Blocked Site",
            "description": None,
            "icon": "https://blocked-site.com/favicon.ico",
            "isFallback": True,
            "normalizedUrl": "https://blocked-site.com",
        }

    @pytest.mark.parametrize("payload", [{"url": ""}, {}, {"url": None}, {"url": "  "}])
    def test_missing_url(self, client, payload) -> None:
        resp = client.post("/api/metadata", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_missing_body(self, client) -> None:
        resp = client.post("/api/metadata")
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_malformed_json_body(self, client) -> None:
        resp = client.post(
            "/api/metadata",
            content=b"not json",
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    @pytest.mark.parametrize("payload", [{"url": 123}, {"url": ["a.com"]}, ["a.com"]])
    def test_non_string_url(self, client, payload) -> None:
        resp = client.post("/api/metadata", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_invalid_url(self, client) -> None:
        resp = client.post("/api/metadata", json={"url": "badurl!!!"})
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "Invalid URL format",
            "normalizedUrl": "https://badurl!!!.com",
        }

    def test_invalid_url_error_from_resolver(self, client) -> None:
        exc = InvalidURLError("https://x y.com")
        with patch("linkmeta.api.routers.metadata.resolve", side_effect=exc):
            resp = client.post("/api/metadata", json={"url": "x y"})

        assert resp.status_code == 400
        assert resp.json()["normalizedUrl"] == "https://x y.com"

    def test_unexpected_error_is_500(self, client) -> None:
        with patch(
            "linkmeta.api.routers.metadata.resolve", side_effect=RuntimeError("boom")
        ):
            resp = client.post("/api/metadata", json={"url": "example.com"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch metadata"}


class TestHealth:
    def test_health(self, client) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
