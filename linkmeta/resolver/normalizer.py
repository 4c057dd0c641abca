"""URL normalisation: loose human input → well-formed absolute URL.

Users type bare names (``github``) or domains without a scheme
(``example.com``).  :func:`normalize` guesses intent the way a browser
address bar does:

    "github"          → "https://github.com"
    "example.com/a"   → "https://example.com/a"
    "http://intranet" → "http://intranet.com"

The ``.com`` suffix is a heuristic; dot-free internal hostnames cannot be
told apart from shorthand for a ``.com`` domain and are rewritten too.
"""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import SplitResult, urlsplit, urlunsplit

from linkmeta.resolver.errors import InvalidURLError

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_LABEL_RE = re.compile(r"^(?!-)[a-z0-9_-]{1,63}(?<!-)$")
_DEFAULT_PORTS = {"http": 80, "https": 443}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def _is_valid_host(host: str) -> bool:
    """Return ``True`` for an IP literal or a syntactically valid DNS name."""
    if _is_ip_literal(host):
        return True
    if host.endswith("."):
        host = host[:-1]
    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False
    return all(_LABEL_RE.match(label) for label in ascii_host.lower().split("."))


def _append_tld(parts: SplitResult, suffix: str = ".com") -> str:
    """Re-serialise *parts* with *suffix* appended to the host.

    Userinfo, port, path, query and fragment are preserved as typed.
    """
    userinfo, at, hostport = parts.netloc.rpartition("@")
    host, colon, port = hostport.partition(":")
    netloc = f"{userinfo}{at}{host}{suffix}{colon}{port}"
    return urlunsplit(parts._replace(netloc=netloc))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_url(url: str) -> SplitResult:
    """Split *url* and check it is an absolute ``http(s)`` URL with a valid host.

    Raises:
        InvalidURLError: If the scheme, host or port is unusable.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        parts.port  # non-numeric or out-of-range ports raise here
    except ValueError as exc:
        raise InvalidURLError(url, str(exc)) from exc

    if parts.scheme.lower() not in _DEFAULT_PORTS:
        raise InvalidURLError(url, f"unsupported scheme {parts.scheme!r}")
    if not hostname or not _is_valid_host(hostname):
        raise InvalidURLError(url, f"invalid host {hostname!r}")
    return parts


def origin(url: str) -> str:
    """Return ``scheme://host[:port]`` for *url*, omitting the default port."""
    parts = parse_url(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


def normalize(raw: str) -> str:
    """Turn *raw* user input into an absolute ``http(s)`` URL string.

    Already valid absolute URLs come back unchanged (apart from surrounding
    whitespace), so ``normalize(normalize(x)) == normalize(x)``.

    Raises:
        InvalidURLError: If no parseable URL can be built from *raw*.  The
            exception carries the best repaired string in ``normalized_url``.
    """
    url = raw.strip()
    if not _SCHEME_RE.match(url):
        url = f"https://{url}"

    try:
        parts = parse_url(url)
    except InvalidURLError:
        token = _SCHEME_RE.sub("", url, count=1)
        if "." not in token:
            url = f"https://{token}.com"
    else:
        host = parts.hostname or ""
        if "." not in host and not _is_ip_literal(host):
            url = _append_tld(parts)

    parse_url(url)
    return url
