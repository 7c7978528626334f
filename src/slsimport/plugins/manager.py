"""Plugin resolution and registration.

Plugin names listed under ``plugins`` resolve, in order, to:

1. an entry point of that name in the ``slsimport.plugins`` group;
2. a single-file plugin ``<local_dir>/<name>.py``;
3. an importable module of that name.

Classes carrying hook implementations are instantiated before
registration.
"""

from __future__ import annotations

import importlib
import importlib.metadata
import importlib.util
import inspect
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType

import pluggy

from slsimport.plugins.hookspecs import SlsImportHookSpec

PROJECT_NAME = "slsimport"
DEFAULT_ENTRY_POINT_GROUP = "slsimport.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Resolves plugin names and registers them with pluggy.

    Parameters:
        entry_point_group: Entry point group searched first.
        local_dir: Directory of single-file plugins (``.serverless_plugins``).
    """

    def __init__(
        self,
        *,
        entry_point_group: str = DEFAULT_ENTRY_POINT_GROUP,
        local_dir: Path | None = None,
    ) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SlsImportHookSpec)
        self._group = entry_point_group
        self._local_dir = local_dir

    def resolve_plugins(self, names: Sequence[str]) -> list[object | None]:
        """Resolve each name to a plugin object, or None when it cannot load.

        The result lines up with *names*; pass each name back to
        :meth:`add_plugin` to register the plugin under it.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        return [self._resolve(name) for name in names]

    def add_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a resolved plugin (or any instance) with pluggy."""
        resolved_name = (
            name
            or getattr(plugin, "__name__", None)
            or plugin.__class__.__name__
        )
        if self._pm.has_plugin(resolved_name) or self._pm.is_registered(plugin):
            logger.debug("Plugin already registered: %s", resolved_name)
            return
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _resolve(self, name: str) -> object | None:
        try:
            target = (
                self._from_entry_point(name)
                or self._from_local_dir(name)
                or self._from_module(name)
            )
        except Exception:
            logger.warning("Failed to load plugin %s", name, exc_info=True)
            return None

        if target is None:
            logger.warning("Plugin %s could not be found", name)
            return None

        try:
            plugin = self._instantiate(target)
        except Exception:
            logger.warning("Failed to instantiate plugin %s", name, exc_info=True)
            return None
        return plugin

    def _from_entry_point(self, name: str) -> object | None:
        for entry_point in importlib.metadata.entry_points(group=self._group, name=name):
            logger.debug("Plugin %s found as entry point %s", name, entry_point.value)
            return entry_point.load()
        return None

    def _from_local_dir(self, name: str) -> ModuleType | None:
        """Load ``<local_dir>/<name>.py`` as a module.

        A partially executed module is removed from ``sys.modules``
        before the error propagates.
        """
        if self._local_dir is None:
            return None
        py_file = self._local_dir / f"{name}.py"
        if not py_file.is_file():
            return None

        module_name = f"slsimport_local_plugin_{py_file.stem}"
        spec = importlib.util.spec_from_file_location(module_name, py_file)
        if spec is None or spec.loader is None:
            logger.warning("Could not create module spec for %s", py_file)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            sys.modules.pop(module_name, None)
            raise
        logger.debug("Loaded local plugin %s from %s", name, py_file)
        return module

    @staticmethod
    def _from_module(name: str) -> ModuleType | None:
        try:
            return importlib.import_module(name)
        except ModuleNotFoundError as exc:
            if exc.name == name:
                return None
            raise

    def _instantiate(self, target: object) -> object:
        """Turn a resolved target into the object pluggy registers.

        Classes are instantiated. A module defining a class with hook
        implementations yields an instance of that class; any other
        module is registered as-is.
        """
        if inspect.isclass(target):
            return target()
        if inspect.ismodule(target):
            for _attr_name, obj in inspect.getmembers(target, inspect.isclass):
                if obj.__module__ != target.__name__:
                    continue  # skip imported classes
                if self._has_hook_impls(obj):
                    return obj()
        return target

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("slsimport")`` sets a ``slsimport_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "slsimport_impl", None):
                return True
        return False
