"""YAML/JSON config-file reader backed by ruamel.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ruamel.yaml import YAML


def _new_yaml() -> YAML:
    """Create a fresh safe YAML parser.

    A new instance per call keeps a failed load from leaving shared
    parser state behind (ruamel.yaml's YAML object is stateful).
    """
    return YAML(typ="safe", pure=True)


class YamlDocumentReader:
    """Read a YAML (or JSON, a YAML subset) file into plain Python data."""

    def read_config_file(self, path: Path) -> Any:
        raw = Path(path).read_text(encoding="utf-8")
        return _new_yaml().load(raw)
