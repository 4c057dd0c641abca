"""Input errors: the only failures a resolution surfaces to its caller."""

from __future__ import annotations


class ResolutionError(Exception):
    """Base class for errors that stop a resolution before any fetch."""


class MissingURLError(ResolutionError):
    def __init__(self) -> None:
        super().__init__("URL is required")


class InvalidURLError(ResolutionError):
    """Raised when even the repaired input does not parse as a URL."""

    def __init__(self, normalized_url: str, reason: str = "") -> None:
        self.normalized_url = normalized_url
        self.reason = reason
        super().__init__("Invalid URL format")
