"""Fragment loading: static documents and Python factory modules.

The variant is picked by extension, never by inspecting what a file
exports:

- ``.py``: a factory module. Its ``configure(inputs)`` callable returns
  the fragment (optionally as an awaitable).
- anything else: a static document parsed by the host reader.
"""

from __future__ import annotations

import asyncio
import importlib.util
import inspect
import itertools
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

from slsimport.domain.contracts import DocumentReader
from slsimport.domain.errors import LoadError
from slsimport.domain.paths import FACTORY_EXTNAME
from slsimport.infrastructure.reader import YamlDocumentReader

logger = logging.getLogger(__name__)

DEFAULT_FACTORY_NAME = "configure"

_module_ids = itertools.count()


class FragmentLoader:
    """Load a resolved import into a fresh fragment mapping.

    Parameters:
        reader: Host reader for static documents.
        factory_name: Name of the callable a ``.py`` fragment must define.
    """

    def __init__(
        self,
        reader: DocumentReader | None = None,
        *,
        factory_name: str = DEFAULT_FACTORY_NAME,
    ) -> None:
        self._reader = reader or YamlDocumentReader()
        self._factory_name = factory_name

    async def load(self, path: Path, inputs: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Load *path*; factories receive *inputs* (``{}`` when omitted)."""
        try:
            if path.suffix == FACTORY_EXTNAME:
                document = await self._load_factory(path, dict(inputs or {}))
            else:
                document = await asyncio.to_thread(self._reader.read_config_file, path)
        except LoadError:
            raise
        except Exception as exc:
            raise LoadError(path, exc) from exc

        if document is None:
            return {}
        if not isinstance(document, Mapping):
            raise LoadError(path, f"expected a mapping, got {type(document).__name__}")
        return dict(document)

    async def _load_factory(self, path: Path, inputs: dict[str, Any]) -> Any:
        module = await asyncio.to_thread(self._exec_module, path)
        factory = getattr(module, self._factory_name, None)
        if not callable(factory):
            raise LoadError(path, f"'{self._factory_name}' is not a callable")
        result = factory(inputs)
        if inspect.isawaitable(result):
            result = await result
        return result

    @staticmethod
    def _exec_module(path: Path) -> ModuleType:
        """Execute *path* as a throwaway module; nothing is cached."""
        module_name = f"slsimport_fragment_{path.stem}_{next(_module_ids)}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LoadError(path, "could not create module spec")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        finally:
            sys.modules.pop(module_name, None)
        logger.debug("Executed fragment module %s", path)
        return module
