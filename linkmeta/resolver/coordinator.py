"""Resolution pipeline from raw user input to :class:`MetadataResult`.

``resolve`` sequences the stages:

    normalize → fetch → classify → extract | fallback

Only unusable input raises (:class:`MissingURLError`,
:class:`InvalidURLError`).  Network failures, blocking responses, HTTP
errors and odd markup all end in a valid result.
"""

from __future__ import annotations

import time
from typing import Optional

import httpx
import structlog

from linkmeta.resolver.classifier import classify
from linkmeta.resolver.errors import InvalidURLError, MissingURLError
from linkmeta.resolver.extractor import extract
from linkmeta.resolver.fallback import fallback
from linkmeta.resolver.fetcher import fetch
from linkmeta.resolver.models import Classification, MetadataResult
from linkmeta.resolver.normalizer import normalize

logger = structlog.get_logger(__name__)


def _ms_since(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def resolve(raw: Optional[str], client: Optional[httpx.Client] = None) -> MetadataResult:
    """Resolve *raw* into presentable link metadata.

    Args:
        raw: The string the user typed.  ``None`` and blank strings are
            rejected.
        client: Optional httpx client, forwarded to
            :func:`~linkmeta.resolver.fetcher.fetch`.

    Raises:
        MissingURLError: *raw* is missing or blank.
        InvalidURLError: No parseable URL could be built from *raw*.
    """
    started = time.monotonic()
    log = logger.bind(raw_url=raw)

    if raw is None or not raw.strip():
        log.warning("resolution_rejected", reason="missing_url")
        raise MissingURLError()

    # ------------------------------------------------------------------
    # Normalize
    # ------------------------------------------------------------------
    stage = time.monotonic()
    try:
        url = normalize(raw)
    except InvalidURLError as exc:
        log.warning(
            "resolution_rejected",
            reason="invalid_url",
            normalized_url=exc.normalized_url,
            detail=exc.reason,
        )
        raise
    log = log.bind(normalized_url=url)
    log.info("url_normalized", duration_ms=_ms_since(stage))

    # ------------------------------------------------------------------
    # Fetch + classify
    # ------------------------------------------------------------------
    stage = time.monotonic()
    outcome = fetch(url, client=client)
    verdict = classify(outcome)
    log.info(
        "page_fetched",
        classification=verdict.value,
        status=outcome.status_code,
        content_type=outcome.content_type,
        attempts=outcome.attempts,
        error=outcome.error,
        duration_ms=_ms_since(stage),
    )

    # ------------------------------------------------------------------
    # Extract or fall back
    # ------------------------------------------------------------------
    stage = time.monotonic()
    if verdict is Classification.USABLE:
        result = extract(outcome.text or "", url)
        log.info(
            "metadata_extracted",
            has_description=result.description is not None,
            html_size=len(outcome.text or ""),
            duration_ms=_ms_since(stage),
        )
    else:
        result = fallback(url)
        log.info("metadata_fallback", title=result.title, duration_ms=_ms_since(stage))

    log.info(
        "resolution_completed",
        is_fallback=result.is_fallback,
        total_duration_ms=_ms_since(started),
    )
    return result
