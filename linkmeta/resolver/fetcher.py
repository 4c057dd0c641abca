"""HTTP fetcher with browser impersonation, per-attempt timeout and retries.

Only transport-level failures (DNS, refused connections, timeouts) are
retried.  Any HTTP response, including 4xx/5xx, is returned to the caller
as-is.  Exhausting the retry budget is reported as a failed
:class:`~linkmeta.resolver.models.FetchOutcome`, never raised.
"""

from __future__ import annotations

import time
from typing import Dict, List, Optional

import httpx
import structlog

from linkmeta.config import settings
from linkmeta.resolver.models import FetchOutcome
from linkmeta.resolver.normalizer import origin

logger = structlog.get_logger(__name__)


def browser_headers(url: str) -> Dict[str, str]:
    """Return a desktop-browser header set for a request to *url*."""
    return {
        "User-Agent": settings.user_agent,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "gzip, deflate, br",
        "DNT": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Sec-Fetch-User": "?1",
        "Cache-Control": "max-age=0",
        "Referer": origin(url),
    }


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _read_body(response: httpx.Response, deadline: float) -> bytes:
    """Read at most ``settings.fetch_max_bytes`` of *response* before *deadline*.

    Oversized bodies are truncated; metadata lives in ``<head>``.

    Raises:
        httpx.ReadTimeout: If the attempt's wall-clock deadline passes while
            the body is still arriving.
    """
    limit = settings.fetch_max_bytes
    chunks: List[bytes] = []
    size = 0
    for chunk in response.iter_bytes():
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout(
                "Attempt deadline exceeded while reading body", request=response.request
            )
        chunks.append(chunk[: limit - size])
        size += len(chunks[-1])
        if size >= limit:
            break
    return b"".join(chunks)


def _decode(response: httpx.Response, body: bytes) -> str:
    try:
        return body.decode(response.charset_encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def _attempt(client: httpx.Client, url: str) -> FetchOutcome:
    """One GET, hard-capped at ``settings.fetch_timeout`` seconds of wall time."""
    deadline = time.monotonic() + settings.fetch_timeout
    with client.stream("GET", url, headers=browser_headers(url)) as response:
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout(
                "Attempt deadline exceeded before headers", request=response.request
            )
        body = _read_body(response, deadline)
        return FetchOutcome(
            url=url,
            status_code=response.status_code,
            text=_decode(response, body),
            content_type=response.headers.get("content-type"),
            final_url=str(response.url),
        )


def _get_with_retry(client: httpx.Client, url: str) -> FetchOutcome:
    max_attempts = settings.fetch_max_retries + 1
    start = time.monotonic()
    last_error = "Failed to fetch after retries"

    for attempt in range(max_attempts):
        if attempt:
            delay = attempt * settings.fetch_backoff
            logger.info("fetch_backoff", url=url, attempt=attempt + 1, delay_s=delay)
            time.sleep(delay)

        logger.info("fetch_attempt", url=url, attempt=attempt + 1, max_attempts=max_attempts)
        try:
            outcome = _attempt(client, url)
        except httpx.TransportError as exc:
            last_error = f"{type(exc).__name__}: {exc}"
            logger.warning(
                "fetch_attempt_failed", url=url, attempt=attempt + 1, error=last_error
            )
            continue
        except httpx.RequestError as exc:
            # Redirect loops and undecodable bodies will not improve on retry.
            last_error = f"{type(exc).__name__}: {exc}"
            logger.warning("fetch_aborted", url=url, attempt=attempt + 1, error=last_error)
            return FetchOutcome(
                url=url,
                error=last_error,
                attempts=attempt + 1,
                elapsed_ms=_elapsed_ms(start),
            )

        outcome.attempts = attempt + 1
        outcome.elapsed_ms = _elapsed_ms(start)
        return outcome

    return FetchOutcome(
        url=url,
        error=last_error,
        attempts=max_attempts,
        elapsed_ms=_elapsed_ms(start),
    )


def fetch(url: str, client: Optional[httpx.Client] = None) -> FetchOutcome:
    """Fetch *url* and return a :class:`FetchOutcome`.

    Each attempt is capped at ``settings.fetch_timeout`` seconds of wall time,
    checked as body chunks arrive, and reads at most
    ``settings.fetch_max_bytes`` of body.  Transport
    errors are retried ``settings.fetch_max_retries`` times, sleeping
    ``attempt * settings.fetch_backoff`` seconds before each retry.

    Args:
        url: A normalised absolute URL.
        client: Optional pre-built client.  When omitted a client with the
            configured timeout and redirect following is created and closed
            around the call.
    """
    if client is not None:
        return _get_with_retry(client, url)

    with httpx.Client(
        timeout=settings.fetch_timeout,
        follow_redirects=True,
    ) as own_client:
        return _get_with_retry(own_client, url)
