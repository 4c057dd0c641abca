"""Fallback metadata synthesised from the URL alone (no network access)."""

from __future__ import annotations

from linkmeta.resolver.models import MetadataResult
from linkmeta.resolver.normalizer import origin, parse_url


def title_from_host(host: str) -> str:
    """Derive a display title from *host*.

    ``my-cool-site.com`` → ``My Cool Site``; ``www.example.com`` → ``Example``.
    Returns an empty string when nothing usable remains.
    """
    host = host.lower()
    if host.startswith("www."):
        host = host[len("www."):]
    name = host.split(".", 1)[0]
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def fallback(url: str) -> MetadataResult:
    """Return minimal metadata for *url* when the page cannot be used."""
    title = title_from_host(parse_url(url).hostname or "").strip()
    return MetadataResult(
        title=title or url,
        description=None,
        icon=f"{origin(url)}/favicon.ico",
        is_fallback=True,
        normalized_url=url,
    )
