"""Shared pytest fixtures for slsimport tests."""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable, Generator, Sequence
from pathlib import Path

import pytest
import structlog

from slsimport.config.settings import ImportSettings
from slsimport.infrastructure.loader import FragmentLoader
from slsimport.infrastructure.resolver import PathResolver
from slsimport.infrastructure.variables import SelfReferenceVariables
from slsimport.services.substitution import VariableSubstituter
from slsimport.services.walker import ImportWalker

WriteFile = Callable[[str, str], Path]


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler and level changes made by configure_logging."""
    sls = logging.getLogger("slsimport")
    sls_handlers = sls.handlers[:]
    sls_level = sls.level
    yield
    sls.handlers = sls_handlers
    sls.setLevel(sls_level)
    structlog.reset_defaults()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project root, also the process CWD for the test."""
    root = (tmp_path / "project").resolve()
    root.mkdir()
    monkeypatch.chdir(root)
    monkeypatch.delenv("SLSIMPORT_CONFIG", raising=False)
    return root


@pytest.fixture
def write_file(project: Path) -> WriteFile:
    """Write a dedented file under the project root and return its path."""

    def _write(relative: str, content: str) -> Path:
        path = project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(project: Path) -> ImportSettings:
    return ImportSettings.load(project_root=project)


@pytest.fixture
def make_walker(project: Path) -> Callable[..., ImportWalker]:
    """Build an ImportWalker wired with the default collaborators."""

    def _make(document: dict, **kwargs: object) -> ImportWalker:
        return ImportWalker(
            document,
            resolver=PathResolver(project),
            loader=FragmentLoader(),
            substituter=VariableSubstituter(SelfReferenceVariables(document), project),
            project_root=project,
            **kwargs,
        )

    return _make


class RecordingPluginLoader:
    """Plugin host of the single-call kind."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def load_plugins(self, names: Sequence[str]) -> None:
        self.calls.append(list(names))


class RecordingPluginRegistry:
    """Plugin host of the resolve-then-add kind."""

    def __init__(self, unresolvable: Sequence[str] = ()) -> None:
        self.unresolvable = set(unresolvable)
        self.resolved: list[list[str]] = []
        self.added: list[object] = []
        self.names: list[str | None] = []

    def resolve_plugins(self, names: Sequence[str]) -> list[object | None]:
        self.resolved.append(list(names))
        return [None if name in self.unresolvable else f"<{name}>" for name in names]

    def add_plugin(self, plugin: object, name: str | None = None) -> None:
        self.added.append(plugin)
        self.names.append(name)


@pytest.fixture
def plugin_loader() -> RecordingPluginLoader:
    return RecordingPluginLoader()


@pytest.fixture
def plugin_registry() -> RecordingPluginRegistry:
    return RecordingPluginRegistry(unresolvable=["missing-plugin"])
