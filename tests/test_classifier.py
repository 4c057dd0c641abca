"""Tests for response classification."""

from __future__ import annotations

import pytest

from linkmeta.resolver.classifier import classify
from linkmeta.resolver.models import Classification, FetchOutcome

_URL = "https://example.com"


def _response(status: int, text: str | None = "<html></html>") -> FetchOutcome:
    return FetchOutcome(url=_URL, status_code=status, text=text, attempts=1)


class TestClassify:
    def test_ok_response_is_usable(self) -> None:
        assert classify(_response(200)) is Classification.USABLE

    def test_other_2xx_is_usable(self) -> None:
        assert classify(_response(203)) is Classification.USABLE

    @pytest.mark.parametrize("status", [403, 429])
    def test_blocking_statuses(self, status: int) -> None:
        assert classify(_response(status)) is Classification.BLOCKED

    @pytest.mark.parametrize("status", [301, 304, 400, 404, 410, 500, 503])
    def test_other_statuses_fail(self, status: int) -> None:
        assert classify(_response(status)) is Classification.FAILED

    def test_transport_failure_fails(self) -> None:
        outcome = FetchOutcome(url=_URL, error="ConnectError: refused", attempts=3)
        assert classify(outcome) is Classification.FAILED

    def test_missing_body_fails(self) -> None:
        assert classify(_response(200, text=None)) is Classification.FAILED

    def test_empty_body_is_still_usable(self) -> None:
        assert classify(_response(200, text="")) is Classification.USABLE
