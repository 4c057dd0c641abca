"""Decide whether a fetched page is worth extracting."""

from __future__ import annotations

from linkmeta.resolver.models import Classification, FetchOutcome

BLOCKING_STATUSES = frozenset({403, 429})


def classify(outcome: FetchOutcome) -> Classification:
    """Map *outcome* onto :class:`Classification`.

    ``BLOCKED`` and ``FAILED`` both lead to fallback metadata; they are kept
    apart so the two cases can be logged differently.
    """
    if outcome.failed or outcome.status_code is None:
        return Classification.FAILED
    if outcome.status_code in BLOCKING_STATUSES:
        return Classification.BLOCKED
    if not 200 <= outcome.status_code < 300 or outcome.text is None:
        return Classification.FAILED
    return Classification.USABLE
