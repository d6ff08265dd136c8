from __future__ import annotations

from enum import Enum


class IndexStyleError(ValueError):
    """Raised when an index style outside the supported set is requested."""

    def __init__(self, value: object) -> None:
        allowed = ", ".join(style.value for style in IndexStyle)
        super().__init__(f"Unknown index style {value!r}; expected one of: {allowed}.")
        self.value = value


class Marker(str, Enum):
    """Element names recognized in a translation catalog."""

    CONTEXT = "context"
    NAME = "name"
    MESSAGE = "message"
    SOURCE = "source"
    TRANSLATION = "translation"


class TranslationStatus(str, Enum):
    """Values of the translation ``type`` attribute that can be filtered on."""

    VANISHED = "vanished"
    UNFINISHED = "unfinished"
    OBSOLETE = "obsolete"


class IndexStyle(str, Enum):
    """Shape of the index produced for a catalog."""

    GROUP_BY_CONTEXT = "group-by-context"
    FLAT_MESSAGE_LIST = "flat-message-list"
    VANISHED = "vanished"
    UNFINISHED = "unfinished"
    OBSOLETE = "obsolete"


STATUS_ATTRIBUTE = "type"


def parse_index_style(value: IndexStyle | str) -> IndexStyle:
    """Coerce a configured value into an IndexStyle, failing on unknown values."""
    if isinstance(value, IndexStyle):
        return value
    if not isinstance(value, str):
        raise IndexStyleError(value)
    normalized = value.lower().strip()
    for style in IndexStyle:
        if style.value == normalized:
            return style
    raise IndexStyleError(value)
