"""Metadata extraction: pulls title, description and icon out of raw HTML.

Matching is pattern-based over the markup rather than a DOM walk.  Pages
in the wild are frequently malformed, and only isolated attribute pairs
are needed.  Every lookup has a "no match" result, so extraction never
raises on bad input.
"""

from __future__ import annotations

import html as html_lib
import re
from typing import Dict, Iterable, Optional, Tuple
from urllib.parse import urljoin

from linkmeta.resolver.errors import InvalidURLError
from linkmeta.resolver.models import MetadataResult
from linkmeta.resolver.normalizer import origin, parse_url

TITLE_KEYS = ("og:title", "twitter:title")
DESCRIPTION_KEYS = ("og:description", "twitter:description", "description")
ICON_RELS = ("icon", "shortcut icon", "apple-touch-icon")

# An attribute name must not be the tail of a longer one (``data-name``).
_ATTR = r"(?<![\w-]){name}\s*=\s*"
# Quoted values never cross their closing quote.
_QUOTED_VALUE = r"(?:\"(?P<dq>[^\"]*)\"|'(?P<sq>[^']*)')"

_TITLE_RE = re.compile(r"<title[^>]*>([^<]*)</title>", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _attr_equals(attr: str, values: Iterable[str]) -> str:
    alternatives = "|".join(re.escape(v) for v in values)
    return _ATTR.format(name=attr) + rf"(?:\"(?:{alternatives})\"|'(?:{alternatives})')"


def _attr_value(attr: str) -> str:
    return _ATTR.format(name=attr) + _QUOTED_VALUE


def _tag_patterns(
    tag: str, key_attr: str, value_attr: str
) -> Tuple[re.Pattern[str], re.Pattern[str]]:
    """Return (key-first, value-first) patterns confined to one *tag*."""
    return (
        re.compile(rf"<{tag}\b[^>]*?{key_attr}[^>]*?{value_attr}", re.IGNORECASE),
        re.compile(rf"<{tag}\b[^>]*?{value_attr}[^>]*?{key_attr}", re.IGNORECASE),
    )


def _meta_patterns(key: str) -> Tuple[re.Pattern[str], re.Pattern[str]]:
    return _tag_patterns(
        "meta", _attr_equals("(?:property|name)", (key,)), _attr_value("content")
    )


_META_PATTERNS: Dict[str, Tuple[re.Pattern[str], re.Pattern[str]]] = {
    key: _meta_patterns(key) for key in TITLE_KEYS + DESCRIPTION_KEYS
}
_ICON_PATTERNS = _tag_patterns("link", _attr_equals("rel", ICON_RELS), _attr_value("href"))


def _value(match: re.Match[str]) -> str:
    dq = match.group("dq")
    return dq if dq is not None else match.group("sq")


def _clean(value: Optional[str]) -> Optional[str]:
    """Unescape entities and collapse whitespace; blanks become ``None``."""
    if value is None:
        return None
    value = " ".join(html_lib.unescape(value).split())
    return value or None


def _first_value(html: str, patterns: Iterable[re.Pattern[str]]) -> Optional[str]:
    for pattern in patterns:
        for match in pattern.finditer(html):
            value = _clean(_value(match))
            if value:
                return value
    return None


def _first_of(html: str, keys: Iterable[str]) -> Optional[str]:
    for key in keys:
        value = extract_meta_tag(html, key)
        if value:
            return value
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_meta_tag(html: str, key: str) -> Optional[str]:
    """Return the ``content`` of the first non-empty ``<meta>`` named *key*.

    *key* may sit in a ``property`` or ``name`` attribute, before or after
    ``content``, single- or double-quoted.
    """
    key = key.lower()
    patterns = _META_PATTERNS.get(key) or _meta_patterns(key)
    return _first_value(html, patterns)


def extract_title(html: str) -> Optional[str]:
    """Return the text of the first ``<title>`` element, or ``None``."""
    match = _TITLE_RE.search(html)
    if match:
        return _clean(match.group(1))
    return None


def extract_icon(html: str, base_url: str) -> str:
    """Return an absolute icon URL for the page at *base_url*.

    Uses the earliest ``<link rel="icon|shortcut icon|apple-touch-icon">``
    in the document, defaulting to ``/favicon.ico``.  Anything that does not
    resolve to an absolute ``http(s)`` URL becomes ``<origin>/favicon.ico``.
    """
    matches = [
        m for m in (p.search(html) for p in _ICON_PATTERNS)
        if m and _clean(_value(m))
    ]
    href = "/favicon.ico"
    if matches:
        earliest = min(matches, key=lambda m: m.start())
        href = _clean(_value(earliest)) or href

    try:
        icon = urljoin(base_url, href)
        parse_url(icon)
    except (ValueError, InvalidURLError):
        return f"{origin(base_url)}/favicon.ico"
    return icon


def extract(html: str, base_url: str) -> MetadataResult:
    """Build a :class:`MetadataResult` from *html* fetched from *base_url*.

    Title precedence: ``og:title`` → ``twitter:title`` → ``<title>`` →
    *base_url*.  Description precedence: ``og:description`` →
    ``twitter:description`` → ``description`` → ``None``.
    """
    html = html or ""
    title = _first_of(html, TITLE_KEYS) or extract_title(html) or base_url
    return MetadataResult(
        title=title,
        description=_first_of(html, DESCRIPTION_KEYS),
        icon=extract_icon(html, base_url),
        is_fallback=False,
        normalized_url=base_url,
    )
