import json
from pathlib import Path

from typer.testing import CliRunner

from ts_index.cli import app
from tests.utils import SAMPLE_CATALOG, build_catalog, write_catalog

runner = CliRunner()


def test_cli_index_outputs_contexts_by_default(tmp_path: Path):
    """index command defaults to the context list with line/column positions."""
    catalog = write_catalog(tmp_path / "dialog_de.ts", SAMPLE_CATALOG)
    result = runner.invoke(app, ["index", "--input-path", str(catalog)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["style"] == "group-by-context"
    document = payload["documents"][0]
    assert document["doc_id"] == "dialog_de.ts"
    assert document["kind"] == "contexts"
    entry = document["entries"][0]
    assert entry["label"] == "Dialog"
    assert entry["offset"] == SAMPLE_CATALOG.index("<context>")
    assert (entry["line"], entry["column"]) == (4, 1)


def test_cli_index_groups_messages_for_directory(tmp_path: Path):
    """Directories are walked recursively and only catalog files are indexed."""
    corpus = _create_sample_corpus(tmp_path)
    result = runner.invoke(
        app,
        [
            "index",
            "--input-path",
            str(corpus),
            "--style",
            "flat-message-list",
            "--no-positions",
        ],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    doc_ids = [doc["doc_id"] for doc in payload["documents"]]
    assert doc_ids == ["app_de.ts", str(Path("nested") / "app_fr.ts")]
    groups = payload["documents"][0]["groups"]
    assert groups[0]["name"] == "Dialog"
    assert [m["label"] for m in groups[0]["messages"]] == ["OK", "Cancel"]
    assert "line" not in groups[0]["messages"][0]


def test_cli_index_text_format_lists_status_matches(tmp_path: Path):
    catalog = write_catalog(tmp_path / "dialog_de.ts", SAMPLE_CATALOG)
    result = runner.invoke(
        app,
        ["index", "--input-path", str(catalog), "--style", "unfinished", "--format", "text"],
    )
    assert result.exit_code == 0
    lines = result.stdout.strip().splitlines()
    assert lines == ["dialog_de.ts:11:5\tCancel"]


def test_cli_index_text_format_prefixes_context(tmp_path: Path):
    catalog = write_catalog(tmp_path / "dialog_de.ts", SAMPLE_CATALOG)
    result = runner.invoke(
        app,
        ["index", "--input-path", str(catalog), "-s", "flat-message-list", "-f", "text"],
    )
    assert result.exit_code == 0
    labels = [line.split("\t")[1] for line in result.stdout.strip().splitlines()]
    assert labels == ["Dialog::OK", "Dialog::Cancel"]


def test_cli_index_rejects_unknown_style(tmp_path: Path):
    catalog = write_catalog(tmp_path / "dialog_de.ts", SAMPLE_CATALOG)
    result = runner.invoke(app, ["index", "--input-path", str(catalog), "--style", "shiny"])
    assert result.exit_code != 0
    assert "documents" not in result.stdout


def test_cli_index_reads_style_from_config(tmp_path: Path):
    catalog = write_catalog(tmp_path / "dialog_de.ts", SAMPLE_CATALOG)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("index_style: unfinished\n", encoding="utf-8")
    result = runner.invoke(
        app, ["index", "--input-path", str(catalog), "--config", str(config_path)]
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["style"] == "unfinished"
    assert [e["label"] for e in payload["documents"][0]["entries"]] == ["Cancel"]


def test_cli_index_rejects_bad_config_style(tmp_path: Path):
    catalog = write_catalog(tmp_path / "dialog_de.ts", SAMPLE_CATALOG)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("index_style: sideways\n", encoding="utf-8")
    result = runner.invoke(
        app, ["index", "--input-path", str(catalog), "--config", str(config_path)]
    )
    assert result.exit_code != 0


def test_cli_stats_counts_statuses(tmp_path: Path):
    corpus = _create_sample_corpus(tmp_path)
    result = runner.invoke(app, ["stats", "--input-path", str(corpus)])
    assert result.exit_code == 0
    documents = json.loads(result.stdout)["documents"]
    fr = documents[1]
    assert fr["contexts"] == 2
    assert fr["messages"] == 3
    assert fr["statuses"] == {"vanished": 1, "unfinished": 0, "obsolete": 1}


def test_cli_stats_counts_messages_outside_named_contexts(tmp_path: Path):
    """Message totals cover every sourced message, like the status totals do."""
    text = (
        "<context><message><source>orphan</source>"
        '<translation type="unfinished"/></message></context>'
        "<context><name>Main</name><message><source>Quit</source>"
        "<translation>Beenden</translation></message></context>"
    )
    catalog = write_catalog(tmp_path / "partial.ts", text)
    result = runner.invoke(app, ["stats", "--input-path", str(catalog)])
    assert result.exit_code == 0
    document = json.loads(result.stdout)["documents"][0]
    assert document["contexts"] == 1
    assert document["messages"] == 2
    assert document["statuses"]["unfinished"] == 1
    assert sum(document["statuses"].values()) <= document["messages"]


def test_cli_index_offsets_match_crlf_file(tmp_path: Path):
    """Offsets index the file as stored, so CRLF line endings are counted."""
    crlf_text = SAMPLE_CATALOG.replace("\n", "\r\n")
    catalog = tmp_path / "dialog_crlf.ts"
    catalog.write_bytes(crlf_text.encode("utf-8"))
    result = runner.invoke(
        app, ["index", "--input-path", str(catalog), "--style", "unfinished"]
    )
    assert result.exit_code == 0
    entry = json.loads(result.stdout)["documents"][0]["entries"][0]
    raw = catalog.read_bytes().decode("utf-8")
    assert entry["offset"] == raw.index("<message>", raw.index("<message>") + 1)
    assert (entry["line"], entry["column"]) == (11, 5)


def test_cli_styles_lists_every_style():
    result = runner.invoke(app, ["styles"])
    assert result.exit_code == 0
    assert result.stdout.split() == [
        "group-by-context",
        "flat-message-list",
        "vanished",
        "unfinished",
        "obsolete",
    ]


def test_cli_print_config():
    """print-config command dumps the current configuration values."""
    result = runner.invoke(app, ["print-config"])
    assert result.exit_code == 0
    assert "index_style: group-by-context" in result.stdout


def _create_sample_corpus(tmp_path: Path) -> Path:
    """Create a small corpus of catalogs plus a file that must be ignored."""
    corpus_dir = tmp_path / "corpus"
    write_catalog(corpus_dir / "app_de.ts", SAMPLE_CATALOG)
    write_catalog(
        corpus_dir / "nested" / "app_fr.ts",
        build_catalog(
            [
                ("Main", [("Open", "vanished"), ("Save", None)]),
                ("About", [("Version", "obsolete")]),
            ]
        ),
    )
    (corpus_dir / "notes.txt").write_text("<context><name>X</name></context>", encoding="utf-8")
    return corpus_dir
