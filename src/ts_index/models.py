from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .markers import IndexStyle, TranslationStatus


@dataclass(frozen=True, slots=True)
class Document:
    """Represents an input catalog."""

    doc_id: str
    text: str


@dataclass(frozen=True, slots=True)
class OpeningTag:
    """An opening tag located in the document."""

    start_char: int
    end_char: int
    attributes: str = ""
    self_closing: bool = False


@dataclass(frozen=True, slots=True)
class LabelMatch:
    """Stripped label text and its inclusive-exclusive character offsets."""

    text: str
    start_char: int
    end_char: int


@dataclass(frozen=True, slots=True)
class ContextEntry:
    """A named context and the offset of its opening tag."""

    name: str
    offset: int


@dataclass(frozen=True, slots=True)
class MessageEntry:
    """A message source text and the offset of its opening tag."""

    source: str
    offset: int


@dataclass(frozen=True, slots=True)
class ContextGroup:
    """Messages found inside a single context, in document order."""

    name: str
    offset: int
    messages: tuple[MessageEntry, ...]


@dataclass(frozen=True, slots=True)
class ContextIndex:
    """Flat list of contexts."""

    entries: tuple[ContextEntry, ...]
    style: IndexStyle = IndexStyle.GROUP_BY_CONTEXT


@dataclass(frozen=True, slots=True)
class MessageIndex:
    """Messages grouped under their parent context."""

    groups: tuple[ContextGroup, ...]
    style: IndexStyle = IndexStyle.FLAT_MESSAGE_LIST


@dataclass(frozen=True, slots=True)
class StatusIndex:
    """Flat list of messages whose translation carries a given status."""

    status: TranslationStatus
    entries: tuple[MessageEntry, ...]

    @property
    def style(self) -> IndexStyle:
        return IndexStyle(self.status.value)


IndexResult = Union[ContextIndex, MessageIndex, StatusIndex]
