"""Import path resolution.

Three strategies are tried, decided by the shape of the raw path:

1. Config extension: literal file under the project root, else a module
   resolved from the importing document's directory.
2. Existing directory: ``serverless.<ext>`` inside it.
3. Anything else: module resolution of ``<path>/serverless.<ext>``.

Every probe failure is swallowed here and reported once, as a
:class:`ResolutionError` listing every attempt.
"""

from __future__ import annotations

import asyncio
import importlib.util
import logging
import os
from pathlib import Path

from slsimport.domain.contracts import ModuleResolver
from slsimport.domain.errors import ResolutionError
from slsimport.domain.paths import config_candidates, has_config_extname, to_posix

logger = logging.getLogger(__name__)

_RELATIVE_PREFIXES = ("./", "../")


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


class PackageModuleResolver:
    """Resolve module specifiers to files, the way a module loader would.

    Relative (``./``, ``../``) and absolute specifiers resolve against
    *base_dir*. Bare specifiers ``pkg/sub/file.yml`` resolve inside the
    installed package ``pkg``.
    """

    def resolve(self, specifier: str, base_dir: Path) -> Path:
        posix = to_posix(specifier)
        if os.path.isabs(specifier) or posix.startswith(_RELATIVE_PREFIXES):
            candidate = (base_dir / specifier).resolve()
            if _is_file(candidate):
                return candidate
            raise FileNotFoundError(f"Cannot find module '{specifier}' from '{base_dir}'")

        top, _, rest = posix.partition("/")
        if rest:
            for location in self._package_locations(top):
                candidate = location / rest
                if _is_file(candidate):
                    return candidate.resolve()
        raise FileNotFoundError(f"Cannot find module '{specifier}' from '{base_dir}'")

    @staticmethod
    def _package_locations(name: str) -> list[Path]:
        """Directories of the installed package *name* (or its ``_`` spelling)."""
        locations: list[Path] = []
        for candidate in dict.fromkeys((name, name.replace("-", "_"))):
            if not candidate.isidentifier():
                continue
            try:
                spec = importlib.util.find_spec(candidate)
            except (ImportError, ValueError):
                continue
            if spec is None or not spec.submodule_search_locations:
                continue
            locations.extend(Path(p) for p in spec.submodule_search_locations)
        return locations


class PathResolver:
    """Turn an expanded import string into one existing absolute file path.

    Parameters:
        project_root: Directory literal paths and directories are probed
            against (the process's real invocation directory by default).
        module_resolver: Resolver used for module-style lookups.
    """

    def __init__(
        self,
        project_root: Path,
        module_resolver: ModuleResolver | None = None,
    ) -> None:
        self._root = project_root
        self._modules = module_resolver or PackageModuleResolver()

    async def resolve(self, raw_path: str, base_dir: Path) -> Path:
        """Resolve *raw_path* declared in a document living in *base_dir*."""
        return await asyncio.to_thread(self.resolve_sync, raw_path, base_dir)

    def resolve_sync(self, raw_path: str, base_dir: Path) -> Path:
        if has_config_extname(raw_path):
            literal = self._root / raw_path
            if _is_file(literal):
                return literal.resolve()
            resolved = self._try_module(raw_path, base_dir)
            if resolved is not None:
                return resolved
            raise ResolutionError(raw_path, "the given file doesn't exist")

        if _is_dir(self._root / raw_path):
            tries = config_candidates(raw_path)
            for possible in tries:
                candidate = self._root / possible
                if _is_file(candidate):
                    return candidate.resolve()
            raise ResolutionError(
                raw_path, "in the given directory no serverless config can be found", tries
            )

        tries = config_candidates(raw_path)
        for possible in tries:
            resolved = self._try_module(possible, base_dir)
            if resolved is not None:
                return resolved
        raise ResolutionError(raw_path, "the given module cannot be resolved", tries)

    def _try_module(self, specifier: str, base_dir: Path) -> Path | None:
        try:
            return self._modules.resolve(specifier, base_dir)
        except (OSError, ImportError, ValueError):
            logger.debug("Module lookup failed for %s from %s", specifier, base_dir)
            return None
