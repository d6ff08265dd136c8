from __future__ import annotations

from bisect import bisect_right
from typing import Iterable, List, Tuple

from .models import ContextGroup

CONTEXT_SEPARATOR = "::"


def line_starts(text: str) -> List[int]:
    """Return the offset at which every line of text begins."""
    starts = [0]
    for idx, char in enumerate(text):
        if char == "\n":
            starts.append(idx + 1)
    return starts


def line_column(
    text: str, offset: int, starts: List[int] | None = None
) -> Tuple[int, int]:
    """
    Convert a character offset into a 1-based (line, column) pair.

    Pass precomputed ``starts`` from line_starts when converting many offsets
    over the same text.
    """
    if offset < 0 or offset > len(text):
        raise ValueError(f"Offset {offset} outside document of length {len(text)}.")
    if starts is None:
        starts = line_starts(text)
    line_idx = bisect_right(starts, offset) - 1
    return line_idx + 1, offset - starts[line_idx] + 1


def flatten_messages(groups: Iterable[ContextGroup]) -> List[Tuple[str, int]]:
    """Render grouped messages as ``Context::source`` labels in document order."""
    flat: List[Tuple[str, int]] = []
    for group in groups:
        for message in group.messages:
            flat.append(
                (f"{group.name}{CONTEXT_SEPARATOR}{message.source}", message.offset)
            )
    return flat
