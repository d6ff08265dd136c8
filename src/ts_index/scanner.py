"""
Tolerant tag scanning primitives shared by the index strategies.

Every function takes explicit ``start``/``end`` bounds instead of keeping a
cursor, so a caller narrows the search to a block by passing that block's
offsets. Nothing here validates the markup: a tag that does not have the
expected shape is simply not reported.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterator

from .markers import STATUS_ATTRIBUTE, Marker, TranslationStatus
from .models import LabelMatch, OpeningTag

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _opening_pattern(marker: Marker) -> re.Pattern[str]:
    # A single greedy run after the name; self-closing is read off its tail.
    return re.compile(rf"<{marker.value}(?P<rest>[\s/][^<>]*)?>")


@lru_cache(maxsize=None)
def _closing_pattern(marker: Marker) -> re.Pattern[str]:
    return re.compile(rf"</{marker.value}\s*>")


@lru_cache(maxsize=None)
def _label_body_pattern(marker: Marker) -> re.Pattern[str]:
    return re.compile(rf"(?P<body>[^<]*)</{marker.value}\s*>")


@lru_cache(maxsize=None)
def _status_pattern(status: TranslationStatus) -> re.Pattern[str]:
    return re.compile(
        rf"(?:^|\s){STATUS_ATTRIBUTE}\s*=\s*(?P<quote>[\"']){re.escape(status.value)}(?P=quote)"
    )


def _limit(text: str, end: int | None) -> int:
    return len(text) if end is None else min(end, len(text))


def iter_openings(
    text: str, marker: Marker, start: int = 0, end: int | None = None
) -> Iterator[OpeningTag]:
    """Yield every opening tag for marker within [start, end) in document order."""
    pattern = _opening_pattern(marker)
    for match in pattern.finditer(text, start, _limit(text, end)):
        rest = (match.group("rest") or "").strip()
        self_closing = rest.endswith("/")
        if self_closing:
            rest = rest[:-1].rstrip()
        yield OpeningTag(
            start_char=match.start(),
            end_char=match.end(),
            attributes=rest,
            self_closing=self_closing,
        )


def find_opening(
    text: str, marker: Marker, start: int = 0, end: int | None = None
) -> OpeningTag | None:
    """Return the first opening tag for marker within [start, end), if any."""
    return next(iter_openings(text, marker, start, end), None)


def find_closing(
    text: str, marker: Marker, start: int = 0, end: int | None = None
) -> int | None:
    """Return the offset of the first closing tag for marker within [start, end)."""
    match = _closing_pattern(marker).search(text, start, _limit(text, end))
    return match.start() if match else None


def block_end(
    text: str, marker: Marker, opening: OpeningTag, end: int | None = None
) -> int:
    """
    Return where the block opened by ``opening`` stops.

    The block stops at its closing tag or at the next opening tag of the same
    marker, whichever comes first. When neither exists the block runs to
    ``end`` (or the end of the document), which is a best-effort boundary for
    unterminated input.
    """
    limit = _limit(text, end)
    if opening.self_closing:
        return opening.end_char
    candidates = [limit]
    closing = find_closing(text, marker, opening.end_char, limit)
    if closing is not None:
        candidates.append(closing)
    sibling = find_opening(text, marker, opening.end_char, limit)
    if sibling is not None:
        candidates.append(sibling.start_char)
    return min(candidates)


def find_label(
    text: str, start: int, label: Marker, end: int | None = None
) -> LabelMatch | None:
    """
    Find the first ``label`` element within [start, end) and return its text.

    Only the first opening tag is considered. If it is self-closing, holds
    nested markup, is empty or is never closed inside the bounds, the label is
    treated as absent and None is returned.
    """
    limit = _limit(text, end)
    opening = find_opening(text, label, start, limit)
    if opening is None:
        return None
    if opening.self_closing:
        LOGGER.debug("Empty <%s/> at offset %d", label.value, opening.start_char)
        return None
    match = _label_body_pattern(label).match(text, opening.end_char, limit)
    if match is None:
        LOGGER.debug("Unreadable <%s> at offset %d", label.value, opening.start_char)
        return None
    # Whitespace runs just inside the delimiters are not part of the label.
    body = match.group("body")
    label_text = body.strip()
    if not label_text:
        return None
    text_start = match.start("body") + (len(body) - len(body.lstrip()))
    return LabelMatch(
        text=label_text, start_char=text_start, end_char=text_start + len(label_text)
    )


def has_status(attributes: str, status: TranslationStatus) -> bool:
    """Return True when an attribute block assigns ``status`` to the type attribute."""
    return _status_pattern(status).search(attributes) is not None
