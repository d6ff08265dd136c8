from __future__ import annotations

import logging

from .indexer import index_by_status, index_contexts, index_messages
from .markers import IndexStyle, TranslationStatus, parse_index_style
from .models import ContextIndex, Document, IndexResult, MessageIndex, StatusIndex

LOGGER = logging.getLogger(__name__)


def build_index(text: str, style: IndexStyle | str) -> IndexResult:
    """Run the index strategy selected by ``style`` over the catalog text."""
    selected = parse_index_style(style)
    if selected is IndexStyle.GROUP_BY_CONTEXT:
        return ContextIndex(entries=tuple(index_contexts(text)))
    if selected is IndexStyle.FLAT_MESSAGE_LIST:
        return MessageIndex(groups=tuple(index_messages(text)))
    # Every remaining style filters on the translation status it is named after.
    status = TranslationStatus(selected.value)
    return StatusIndex(status=status, entries=tuple(index_by_status(text, status)))


def index_document(doc: Document, style: IndexStyle | str) -> IndexResult:
    """Convenience wrapper that indexes a loaded Document."""
    LOGGER.debug("Indexing %s as %s", doc.doc_id, parse_index_style(style).value)
    return build_index(doc.text, style)
