"""Resolver package — normalise, fetch, classify, extract or fall back."""

from linkmeta.resolver.classifier import classify
from linkmeta.resolver.coordinator import resolve
from linkmeta.resolver.errors import InvalidURLError, MissingURLError, ResolutionError
from linkmeta.resolver.extractor import extract
from linkmeta.resolver.fallback import fallback
from linkmeta.resolver.fetcher import fetch
from linkmeta.resolver.models import Classification, FetchOutcome, MetadataResult
from linkmeta.resolver.normalizer import normalize

__all__ = [
    "resolve",
    "normalize",
    "fetch",
    "classify",
    "extract",
    "fallback",
    "Classification",
    "FetchOutcome",
    "MetadataResult",
    "ResolutionError",
    "MissingURLError",
    "InvalidURLError",
]
