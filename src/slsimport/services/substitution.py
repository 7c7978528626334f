"""Path-relative rewriting of loaded fragments.

Two rewrites make a fragment valid from the project root instead of
from its own directory:

- function handlers are prefixed with the fragment's directory;
- ``${dirname}`` placeholders become that directory.

Handlers are rewritten first, then placeholders.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from slsimport.domain.contracts import VariableEngine
from slsimport.domain.documents import set_path
from slsimport.domain.paths import DIRNAME, import_dir, join_posix

logger = logging.getLogger(__name__)


def rewrite_handlers(fragment: dict[str, Any], import_path: Path, project_root: Path) -> None:
    """Make every string ``functions.*.handler`` relative to *project_root*."""
    functions = fragment.get("functions")
    if not isinstance(functions, Mapping):
        return
    directory = import_dir(import_path, project_root)
    for func in functions.values():
        if isinstance(func, dict) and isinstance(func.get("handler"), str):
            func["handler"] = join_posix(directory, func["handler"])


class VariableSubstituter:
    """Placeholder handling around one import.

    Sibling imports share one engine, and its ``options`` are set for the
    duration of a path expansion, so expansions run one at a time.

    Parameters:
        engine: Host variable engine; owns the placeholder syntax.
        project_root: Directory ``${dirname}`` values are relative to.
    """

    def __init__(self, engine: VariableEngine, project_root: Path) -> None:
        self._engine = engine
        self._root = project_root
        self._engine_lock = asyncio.Lock()

    async def expand_path(self, raw_path: str, options: dict[str, Any] | None = None) -> str:
        """Expand placeholders in an import path before it is resolved."""
        async with self._engine_lock:
            await self._engine.populate(options)
            try:
                return await self._engine.resolve_placeholders(raw_path)
            finally:
                self._engine.options = None

    def substitute_dirname(self, fragment: dict[str, Any], import_path: Path) -> int:
        """Replace ``${dirname}`` tokens in *fragment* in place.

        Returns the number of properties rewritten.
        """
        directory = import_dir(import_path, self._root)
        syntax = self._engine.variable_syntax
        rewritten = 0
        for prop in self._engine.enumerate_properties(fragment):
            value = prop.value
            if not isinstance(value, str) or not syntax.search(value):
                continue
            matches = self._engine.extract_matches(value)
            if not isinstance(matches, list):
                continue
            new_value = value
            for match in matches:
                if match.variable == DIRNAME:
                    new_value = new_value.replace(match.match, directory, 1)
            if new_value != value:
                set_path(fragment, prop.path, new_value)
                rewritten += 1
        if rewritten:
            logger.debug("Rewrote %d dirname placeholder(s) in %s", rewritten, import_path)
        return rewritten
