"""
ts_index package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .config import IndexerConfig, config_from_dict, config_from_yaml, load_config
from .indexer import index_by_status, index_contexts, index_messages
from .markers import IndexStyle, IndexStyleError, Marker, TranslationStatus
from .models import (
    ContextEntry,
    ContextGroup,
    ContextIndex,
    IndexResult,
    MessageEntry,
    MessageIndex,
    StatusIndex,
)
from .scanner import find_label
from .selector import build_index, index_document

__all__ = [
    "IndexerConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "IndexStyle",
    "IndexStyleError",
    "Marker",
    "TranslationStatus",
    "ContextEntry",
    "ContextGroup",
    "ContextIndex",
    "IndexResult",
    "MessageEntry",
    "MessageIndex",
    "StatusIndex",
    "find_label",
    "index_contexts",
    "index_messages",
    "index_by_status",
    "build_index",
    "index_document",
]

__version__ = "0.1.0"
