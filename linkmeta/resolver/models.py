"""Data models for the metadata resolution pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Classification(str, Enum):
    """How the coordinator should treat a :class:`FetchOutcome`."""

    USABLE = "usable"
    BLOCKED = "blocked"
    FAILED = "failed"


@dataclass
class FetchOutcome:
    """The result of retrieving a single URL.

    Exactly one of two shapes: a response (``status_code`` set, ``error`` is
    ``None``) or a terminal transport failure (``error`` set, no status).
    """

    url: str
    status_code: Optional[int] = None
    text: Optional[str] = None
    content_type: Optional[str] = None
    final_url: Optional[str] = None
    error: Optional[str] = None
    attempts: int = 0
    elapsed_ms: int = 0

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class MetadataResult:
    """Presentable metadata for one link."""

    title: str
    normalized_url: str
    description: Optional[str] = None
    icon: Optional[str] = None
    is_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation consumed by link-creation clients."""
        return {
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "isFallback": self.is_fallback,
            "normalizedUrl": self.normalized_url,
        }
