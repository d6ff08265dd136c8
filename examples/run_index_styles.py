"""
Tiny helper script that prints every index style for a catalog.
Pass the path of a .ts file as the only argument.
"""

from __future__ import annotations

import sys
from pathlib import Path

from ts_index import IndexStyle, build_index
from ts_index.models import ContextIndex, MessageIndex
from ts_index.textutils import flatten_messages


def main() -> None:
    text = Path(sys.argv[1]).read_text(encoding="utf-8")

    for style in IndexStyle:
        result = build_index(text, style)
        print("-" * 40)
        print(style.value)
        if isinstance(result, ContextIndex):
            labels = [(entry.name, entry.offset) for entry in result.entries]
        elif isinstance(result, MessageIndex):
            labels = flatten_messages(result.groups)
        else:
            labels = [(entry.source, entry.offset) for entry in result.entries]
        for label, offset in labels:
            print(f"{offset:>8}  {label}")


if __name__ == "__main__":
    main()
