from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Tuple, TypedDict

import click
import typer
import yaml

from .config import IndexerConfig, load_config
from .indexer import count_messages, index_by_status, index_contexts
from .markers import IndexStyle, IndexStyleError, TranslationStatus, parse_index_style
from .models import ContextIndex, Document, IndexResult, MessageIndex
from .selector import index_document
from .textutils import flatten_messages, line_column, line_starts

app = typer.Typer(help="Translation catalog index CLI.", no_args_is_help=True)

LOGGER = logging.getLogger(__name__)


@app.callback()
def _configure(
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Index Qt Linguist style translation catalogs."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command()
def index(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    style: str | None = typer.Option(
        None,
        "--style",
        "-s",
        help="Index style (group-by-context, flat-message-list, vanished, unfinished, obsolete).",
    ),
    output_format: str = typer.Option(
        "json",
        "--format",
        "-f",
        click_type=click.Choice(["json", "text"], case_sensitive=False),
        help="Output format.",
    ),
    include_positions: bool | None = typer.Option(
        None,
        "--positions/--no-positions",
        help="Override config include_positions flag.",
    ),
) -> None:
    """Index each catalog and emit the entries with their offsets.

    Offsets are character positions in the file as stored, so CRLF line
    endings count as two characters.
    """
    cfg = _load_cli_config(config)
    if style is not None:
        try:
            cfg.index_style = parse_index_style(style)
        except IndexStyleError as exc:
            raise typer.BadParameter(str(exc), param_hint="--style") from exc
    if include_positions is not None:
        cfg.include_positions = include_positions
    fmt = output_format.lower()

    documents = _load_documents(input_path, cfg)
    results = [(doc, index_document(doc, cfg.index_style)) for doc in documents]
    LOGGER.info("Indexed %d documents as %s", len(results), cfg.index_style.value)

    if fmt == "text":
        for doc, result in results:
            for line in _text_lines(doc, result):
                typer.echo(line)
        return

    payload = {
        "style": cfg.index_style.value,
        "documents": [
            _document_payload(doc, result, cfg.include_positions)
            for doc, result in results
        ],
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def stats(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Summarize context, message and status counts for each catalog."""
    cfg = _load_cli_config(config)
    summary: List[StatsPayload] = []
    for doc in _load_documents(input_path, cfg):
        summary.append(
            {
                "doc_id": doc.doc_id,
                "contexts": len(index_contexts(doc.text)),
                "messages": count_messages(doc.text),
                "statuses": {
                    status.value: len(index_by_status(doc.text, status))
                    for status in TranslationStatus
                },
            }
        )
    typer.echo(json.dumps({"documents": summary}, indent=2))


@app.command()
def styles() -> None:
    """List the accepted index styles."""
    for style in IndexStyle:
        typer.echo(style.value)


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = IndexerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


class EntryPayload(TypedDict, total=False):
    label: str
    offset: int
    line: int
    column: int


class GroupPayload(TypedDict, total=False):
    name: str
    offset: int
    line: int
    column: int
    messages: List[EntryPayload]


class DocumentPayload(TypedDict, total=False):
    doc_id: str
    kind: str
    entries: List[EntryPayload]
    groups: List[GroupPayload]


class StatsPayload(TypedDict):
    doc_id: str
    contexts: int
    messages: int
    statuses: Dict[str, int]


def _load_cli_config(path: Path | None) -> IndexerConfig:
    """Load the config file, reporting a bad style or shape as a CLI error."""
    try:
        return load_config(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _load_documents(input_path: Path, config: IndexerConfig) -> List[Document]:
    """Expand the input path into documents, walking directories in sorted order."""
    if input_path.is_file():
        return [_document_from_file(input_path, input_path.name, config.encoding)]

    suffixes = {ext.lower() for ext in config.extensions}
    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in suffixes
    )
    return [
        _document_from_file(file, str(file.relative_to(input_path)), config.encoding)
        for file in files
    ]


def _document_from_file(path: Path, doc_id: str, encoding: str) -> Document:
    """Read a catalog from disk and wrap it in a Document."""
    try:
        # Keep \r\n intact so offsets index the file as stored on disk.
        with path.open("r", encoding=encoding, newline="") as handle:
            text = handle.read()
    except (UnicodeDecodeError, LookupError) as exc:
        raise typer.BadParameter(f"Unable to decode {path}: {exc}") from exc
    return Document(doc_id=doc_id, text=text)


def _document_payload(
    doc: Document, result: IndexResult, include_positions: bool
) -> DocumentPayload:
    """Serialize one index result so it can be emitted in JSON."""
    starts = line_starts(doc.text) if include_positions else None

    def entry(label: str, offset: int) -> EntryPayload:
        item: EntryPayload = {"label": label, "offset": offset}
        if starts is not None:
            item["line"], item["column"] = line_column(doc.text, offset, starts)
        return item

    if isinstance(result, ContextIndex):
        return {
            "doc_id": doc.doc_id,
            "kind": "contexts",
            "entries": [entry(e.name, e.offset) for e in result.entries],
        }
    if isinstance(result, MessageIndex):
        groups: List[GroupPayload] = []
        for group in result.groups:
            group_item: GroupPayload = {"name": group.name, "offset": group.offset}
            if starts is not None:
                group_item["line"], group_item["column"] = line_column(
                    doc.text, group.offset, starts
                )
            group_item["messages"] = [entry(m.source, m.offset) for m in group.messages]
            groups.append(group_item)
        return {"doc_id": doc.doc_id, "kind": "messages", "groups": groups}
    return {
        "doc_id": doc.doc_id,
        "kind": result.status.value,
        "entries": [entry(e.source, e.offset) for e in result.entries],
    }


def _text_lines(doc: Document, result: IndexResult) -> List[str]:
    """Render one index result as ``doc_id:line:column<TAB>label`` lines."""
    labels: List[Tuple[str, int]]
    if isinstance(result, ContextIndex):
        labels = [(e.name, e.offset) for e in result.entries]
    elif isinstance(result, MessageIndex):
        labels = flatten_messages(result.groups)
    else:
        labels = [(e.source, e.offset) for e in result.entries]
    starts = line_starts(doc.text)
    lines: List[str] = []
    for label, offset in labels:
        line, column = line_column(doc.text, offset, starts)
        lines.append(f"{doc.doc_id}:{line}:{column}\t{label}")
    return lines


if __name__ == "__main__":
    main()
