from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence, Tuple

SAMPLE_CATALOG = """<?xml version="1.0" encoding="utf-8"?>
<!DOCTYPE TS>
<TS version="2.1" language="de_DE">
<context>
    <name>Dialog</name>
    <message>
        <location filename="../dialog.ui" line="14"/>
        <source>OK</source>
        <translation>OK</translation>
    </message>
    <message>
        <location filename="../dialog.ui" line="21"/>
        <source>Cancel</source>
        <translation type="unfinished"></translation>
    </message>
</context>
</TS>
"""


def build_catalog(contexts: Iterable[Tuple[str, Sequence[Tuple[str, str | None]]]]) -> str:
    """
    Build a catalog from (context name, [(source, status), ...]) pairs.

    A status of None writes a plain finished translation.
    """
    parts = ['<?xml version="1.0" encoding="utf-8"?>\n<TS version="2.1">\n']
    for name, messages in contexts:
        parts.append(f"<context>\n    <name>{name}</name>\n")
        for source, status in messages:
            attrs = f' type="{status}"' if status else ""
            parts.append(
                "    <message>\n"
                f"        <source>{source}</source>\n"
                f"        <translation{attrs}>{source}</translation>\n"
                "    </message>\n"
            )
        parts.append("</context>\n")
    parts.append("</TS>\n")
    return "".join(parts)


def write_catalog(path: Path, text: str) -> Path:
    """Write catalog text to disk, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
