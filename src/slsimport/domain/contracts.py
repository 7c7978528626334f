"""Protocols for the host collaborators the import engine delegates to.

The engine never inspects a concrete host; it only talks through these
shapes. Default implementations live in ``slsimport.infrastructure``
and ``slsimport.plugins``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class VariableMatch:
    """One placeholder occurrence: the full token and the variable inside it."""

    match: str
    variable: str


@dataclass(frozen=True)
class Property:
    """One leaf of a document, addressed by its key path."""

    path: tuple[str | int, ...]
    value: Any


class VariableEngine(Protocol):
    """Host placeholder substitution (``${...}``)."""

    variable_syntax: re.Pattern[str]
    options: dict[str, Any] | None

    async def populate(self, options: dict[str, Any] | None) -> None: ...

    async def resolve_placeholders(self, raw: str) -> str: ...

    def extract_matches(self, value: str) -> list[VariableMatch] | None: ...

    def enumerate_properties(self, document: Any) -> list[Property]: ...


class DocumentReader(Protocol):
    """Host configuration-file reader."""

    def read_config_file(self, path: Path) -> Any: ...


class ModuleResolver(Protocol):
    """Host module resolution; raises ``FileNotFoundError`` when unresolvable."""

    def resolve(self, specifier: str, base_dir: Path) -> Path: ...


@runtime_checkable
class PluginLoader(Protocol):
    """Plugin host that loads plugins by name in one call."""

    def load_plugins(self, names: Sequence[str]) -> None: ...


@runtime_checkable
class PluginRegistry(Protocol):
    """Plugin host that resolves names first, then registers instances."""

    def resolve_plugins(self, names: Sequence[str]) -> list[object | None]: ...

    def add_plugin(self, plugin: object, name: str | None = None) -> None: ...


PluginHost = PluginLoader | PluginRegistry
