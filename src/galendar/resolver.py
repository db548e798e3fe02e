"""Resolve a free-text calendar name to a known calendar ID.

Names are compared as bags of character trigrams. Known IDs are indexed
case-folded while the query keeps the case it was typed in, so a query only
matches on the runs of characters it shares with the lowercased ID.

Example:
    >>> resolve("myCalendar", ["myCale", "notYours"])
    'myCale'
    >>> resolve("", [])
    'primary'
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from galendar.config import DEFAULT_CALENDAR

logger = logging.getLogger(__name__)

NGRAM_SIZE = 3


def ngrams(text: str, size: int = NGRAM_SIZE) -> Counter[str]:
    """Build the bag of length-``size`` substrings of ``text``.

    Whitespace-only windows are skipped. Text too short to hold a window
    stands for itself.
    """
    bag: Counter[str] = Counter()
    for i in range(len(text) - size + 1):
        gram = text[i : i + size]
        if gram.strip():
            bag[gram] += 1

    if not bag and text:
        bag[text] += 1
    return bag


def similarity(a: str, b: str) -> float:
    """Weighted Jaccard similarity of the trigram bags of ``a`` and ``b``.

    Returns:
        A score in [0.0, 1.0]; 0.0 when the strings share no trigram.
    """
    bag_a, bag_b = ngrams(a), ngrams(b)
    union = sum((bag_a | bag_b).values())
    if not union:
        return 0.0
    return sum((bag_a & bag_b).values()) / union


def resolve(query: str, known_identifiers: Sequence[str]) -> str:
    """Pick the known calendar ID closest to ``query``.

    Args:
        query: Calendar name as typed by the user. Empty means the default
            calendar.
        known_identifiers: Calendar IDs in provider order. Ties go to the
            earliest one.

    Returns:
        The chosen ID, "primary" for an empty query, or "" when nothing
        shares a trigram with the query.
    """
    if not query:
        return DEFAULT_CALENDAR

    if query in known_identifiers:
        return query

    best_id = ""
    best_score = 0.0
    for identifier in known_identifiers:
        score = similarity(query, identifier.lower())
        logger.debug(f"Calendar {identifier!r} scored {score:.3f} for {query!r}")
        if score > best_score:
            best_id, best_score = identifier, score

    return best_id


def is_fuzzy_match(query: str, resolved: str) -> bool:
    """Check if a non-empty query resolved to a different ID."""
    return bool(query) and bool(resolved) and query != resolved
