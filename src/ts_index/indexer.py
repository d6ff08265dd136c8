from __future__ import annotations

import logging
from typing import List

from .markers import Marker, TranslationStatus
from .models import ContextEntry, ContextGroup, MessageEntry
from .scanner import block_end, find_label, find_opening, has_status, iter_openings

LOGGER = logging.getLogger(__name__)


def index_contexts(text: str) -> List[ContextEntry]:
    """List every named context with the offset of its opening tag."""
    entries: List[ContextEntry] = []
    for opening in iter_openings(text, Marker.CONTEXT):
        end = block_end(text, Marker.CONTEXT, opening)
        name = find_label(text, opening.end_char, Marker.NAME, end)
        if name is None:
            LOGGER.debug("Skipping unnamed context at offset %d", opening.start_char)
            continue
        entries.append(ContextEntry(name=name.text, offset=opening.start_char))
    LOGGER.debug("Indexed %d contexts", len(entries))
    return entries


def index_messages(text: str) -> List[ContextGroup]:
    """
    Group message sources under the context that physically contains them.

    Each context is searched only up to its own closing tag (or the next
    context when it is unterminated), so messages never leak into a sibling.
    Contexts without a name or without any sourced message are left out.
    """
    groups: List[ContextGroup] = []
    for opening in iter_openings(text, Marker.CONTEXT):
        end = block_end(text, Marker.CONTEXT, opening)
        name = find_label(text, opening.end_char, Marker.NAME, end)
        if name is None:
            LOGGER.debug("Skipping unnamed context at offset %d", opening.start_char)
            continue
        messages = _index_region(text, opening.end_char, end)
        if not messages:
            continue
        groups.append(
            ContextGroup(
                name=name.text, offset=opening.start_char, messages=tuple(messages)
            )
        )
    LOGGER.debug("Indexed %d context groups", len(groups))
    return groups


def index_by_status(
    text: str, status: TranslationStatus | str
) -> List[MessageEntry]:
    """List messages whose translation is marked with ``type="<status>"``."""
    wanted = TranslationStatus(status)
    entries: List[MessageEntry] = []
    for opening in iter_openings(text, Marker.MESSAGE):
        end = block_end(text, Marker.MESSAGE, opening)
        translation = find_opening(text, Marker.TRANSLATION, opening.end_char, end)
        if translation is None or not has_status(translation.attributes, wanted):
            continue
        source = find_label(text, opening.end_char, Marker.SOURCE, end)
        if source is None:
            LOGGER.debug("Skipping message without source at offset %d", opening.start_char)
            continue
        entries.append(MessageEntry(source=source.text, offset=opening.start_char))
    LOGGER.debug("Indexed %d %s messages", len(entries), wanted.value)
    return entries


def count_messages(text: str) -> int:
    """Count every sourced message in the document, whatever context holds it."""
    return len(_index_region(text, 0, len(text)))


def _index_region(text: str, start: int, end: int) -> List[MessageEntry]:
    entries: List[MessageEntry] = []
    for opening in iter_openings(text, Marker.MESSAGE, start, end):
        message_end = block_end(text, Marker.MESSAGE, opening, end)
        source = find_label(text, opening.end_char, Marker.SOURCE, message_end)
        if source is None:
            LOGGER.debug("Skipping message without source at offset %d", opening.start_char)
            continue
        entries.append(MessageEntry(source=source.text, offset=opening.start_char))
    return entries
