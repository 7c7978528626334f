"""ImportWalker: recursive discovery, preparation, and merge of imports.

Each declaration goes through the same chain::

    expand placeholders -> resolve -> load -> rewrite handlers
        -> substitute ${dirname} -> walk nested imports -> merge

Sibling declarations run concurrently on the event loop. Nested imports
resolve relative to the directory of the fragment declaring them, and
are merged before that fragment.

Merge order:

- ``declaration``: fragments are collected first, then merged
  depth-first in declaration order. Deterministic.
- ``completion``: each fragment merges as soon as its chain finishes,
  so sibling precedence depends on timing.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from slsimport.domain.declarations import ImportDeclaration, read_imports
from slsimport.domain.errors import CycleError, LoadError
from slsimport.domain.merge import merge_into
from slsimport.infrastructure.loader import FragmentLoader
from slsimport.infrastructure.resolver import PathResolver
from slsimport.services.substitution import VariableSubstituter, rewrite_handlers

MergeOrder = Literal["declaration", "completion"]

logger = logging.getLogger(__name__)


@dataclass
class ImportedFragment:
    """A fragment ready to merge, with the file it came from."""

    path: Path
    document: dict[str, Any]
    declaration: ImportDeclaration = field(repr=False)


class ImportWalker:
    """Walk ``custom.import`` declarations and merge them into one root.

    Parameters:
        root_document: Target of every merge, mutated in place.
        resolver: Finds the file behind each declaration.
        loader: Loads resolved files into fragments.
        substituter: Expands import paths and ``${dirname}``.
        project_root: Directory handler paths are made relative to.
        options: Activation options handed to the variable engine.
        merge_order: ``"declaration"`` or ``"completion"``.
        detect_cycles: Raise :class:`CycleError` on self-imports.
        on_merged: Called with each fragment right after it is merged.
    """

    def __init__(
        self,
        root_document: dict[str, Any],
        *,
        resolver: PathResolver,
        loader: FragmentLoader,
        substituter: VariableSubstituter,
        project_root: Path,
        options: dict[str, Any] | None = None,
        merge_order: MergeOrder = "declaration",
        detect_cycles: bool = True,
        on_merged: Callable[[ImportedFragment], None] | None = None,
    ) -> None:
        self._root_document = root_document
        self._resolver = resolver
        self._loader = loader
        self._substituter = substituter
        self._project_root = project_root
        self._options = options
        self._merge_order = merge_order
        self._detect_cycles = detect_cycles
        self._on_merged = on_merged
        self._merged: list[Path] = []

    @property
    def merged(self) -> list[Path]:
        """Resolved paths merged so far, in merge order."""
        return list(self._merged)

    async def process(
        self,
        document: dict[str, Any],
        base_dir: Path,
        *,
        origin: Path | None = None,
    ) -> list[Path]:
        """Import everything *document* declares, resolving from *base_dir*.

        *origin* is the file *document* was read from, when known; it
        seeds cycle detection.

        Returns the merged paths in merge order.
        """
        chain: tuple[Path, ...] = (origin.resolve(),) if origin is not None else ()
        if self._merge_order == "completion":
            await self._walk_merging(document, base_dir, chain)
        else:
            for fragment in await self._collect_all(document, base_dir, chain):
                self._merge(fragment)
        return self.merged

    # ------------------------------------------------------------------
    # Declaration order: collect, then merge
    # ------------------------------------------------------------------

    async def _collect_all(
        self,
        document: dict[str, Any],
        base_dir: Path,
        chain: tuple[Path, ...],
    ) -> list[ImportedFragment]:
        groups = await asyncio.gather(
            *(
                self._collect(declaration, base_dir, chain)
                for declaration in read_imports(document)
            )
        )
        return [fragment for group in groups for fragment in group]

    async def _collect(
        self,
        declaration: ImportDeclaration,
        base_dir: Path,
        chain: tuple[Path, ...],
    ) -> list[ImportedFragment]:
        fragment = await self._prepare(declaration, base_dir, chain)
        nested = await self._collect_all(
            fragment.document, fragment.path.parent, (*chain, fragment.path)
        )
        return [*nested, fragment]

    # ------------------------------------------------------------------
    # Completion order: merge as each chain finishes
    # ------------------------------------------------------------------

    async def _walk_merging(
        self,
        document: dict[str, Any],
        base_dir: Path,
        chain: tuple[Path, ...],
    ) -> None:
        await asyncio.gather(
            *(
                self._import_merging(declaration, base_dir, chain)
                for declaration in read_imports(document)
            )
        )

    async def _import_merging(
        self,
        declaration: ImportDeclaration,
        base_dir: Path,
        chain: tuple[Path, ...],
    ) -> None:
        fragment = await self._prepare(declaration, base_dir, chain)
        await self._walk_merging(fragment.document, fragment.path.parent, (*chain, fragment.path))
        self._merge(fragment)

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    async def _prepare(
        self,
        declaration: ImportDeclaration,
        base_dir: Path,
        chain: tuple[Path, ...],
    ) -> ImportedFragment:
        """Resolve, load, and rewrite one declaration."""
        raw_path = await self._substituter.expand_path(declaration.module, self._options)
        import_path = await self._resolver.resolve(raw_path, base_dir)
        if self._detect_cycles and import_path in chain:
            raise CycleError([*chain, import_path])

        logger.info("Importing %s", import_path)
        document = await self._loader.load(import_path, declaration.inputs)
        try:
            rewrite_handlers(document, import_path, self._project_root)
            self._substituter.substitute_dirname(document, import_path)
        except (KeyError, TypeError, ValueError) as exc:
            raise LoadError(import_path, exc) from exc
        return ImportedFragment(path=import_path, document=document, declaration=declaration)

    def _merge(self, fragment: ImportedFragment) -> None:
        merge_into(self._root_document, fragment.document)
        self._merged.append(fragment.path)
        logger.debug("Merged %s", fragment.path)
        if self._on_merged is not None:
            self._on_merged(fragment)
