from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, List, Mapping, MutableMapping

import yaml

from .markers import IndexStyle, parse_index_style

LOGGER = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TS_INDEX_CONFIG"


@dataclass(slots=True)
class IndexerConfig:
    """Configuration options for catalog indexing."""

    index_style: IndexStyle = IndexStyle.GROUP_BY_CONTEXT
    encoding: str = "utf-8"
    extensions: List[str] = field(default_factory=lambda: [".ts"])
    include_positions: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dictionary representation suitable for YAML dumps."""
        return {
            "index_style": self.index_style.value,
            "encoding": self.encoding,
            "extensions": list(self.extensions),
            "include_positions": self.include_positions,
        }


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(IndexerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "index_style" in kwargs:
        kwargs["index_style"] = parse_index_style(kwargs["index_style"])
    if "extensions" in kwargs:
        extensions = kwargs["extensions"]
        if isinstance(extensions, str):
            extensions = [extensions]
        kwargs["extensions"] = [_normalize_extension(ext) for ext in extensions]
    return kwargs


def _normalize_extension(value: str) -> str:
    ext = str(value).strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def config_from_dict(
    data: Mapping[str, Any] | None, base: IndexerConfig | None = None
) -> IndexerConfig:
    """
    Build an IndexerConfig from a dictionary-like input.

    Keys missing from ``data`` keep the values of ``base`` (defaults when
    omitted); unknown keys are ignored.
    """
    merged = (base or IndexerConfig()).to_dict()
    merged.update(_build_kwargs(data or {}))
    return IndexerConfig(**_build_kwargs(merged))


def config_from_yaml(path: str | Path) -> IndexerConfig:
    """Load configuration from a YAML file; an empty file yields the defaults."""
    source = Path(path)
    try:
        parsed = yaml.safe_load(source.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid configuration YAML in {source}: {exc}") from exc
    if parsed is None:
        LOGGER.debug("Configuration %s is empty; using defaults", source)
        return IndexerConfig()
    if not isinstance(parsed, MutableMapping):
        raise ValueError(f"Configuration YAML in {source} must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> IndexerConfig:
    """
    Load configuration from ``path``, else from the file named by the
    TS_INDEX_CONFIG environment variable, else return defaults.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return IndexerConfig()
    return config_from_yaml(path)
