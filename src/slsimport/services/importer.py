"""ConfigImporter: the activation entry point.

Usage::

    importer = ConfigImporter(document, settings=ImportSettings.load())
    result = await importer.activate(options)

or, from synchronous code, ``importer.run(options)``, which also
installs the stderr log handler described by the settings.

Activation snapshots the plugin list, walks every import starting from
the project root, merges the fragments into *document* in place, then
hands newly introduced plugins to the plugin host. A failure anywhere is
logged and re-raised; the document may already hold some fragments.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from slsimport.config.logging import configure_logging
from slsimport.config.settings import ImportSettings
from slsimport.domain.contracts import DocumentReader, ModuleResolver, PluginHost, VariableEngine
from slsimport.infrastructure.loader import FragmentLoader
from slsimport.infrastructure.resolver import PathResolver
from slsimport.infrastructure.service import load_service
from slsimport.infrastructure.variables import SelfReferenceVariables
from slsimport.plugins.manager import PluginManager
from slsimport.services.reconcile import reconcile_plugins, snapshot_plugins
from slsimport.services.result import ActivationResult
from slsimport.services.substitution import VariableSubstituter
from slsimport.services.walker import ImportedFragment, ImportWalker

logger = logging.getLogger(__name__)


class ConfigImporter:
    """Import and merge every fragment a root document declares.

    Parameters:
        document: The root document, mutated in place.
        settings: Activation settings; loaded from the environment when omitted.
        plugins: Plugin host receiving newly imported plugins.
        variables: Variable engine; defaults to one bound to *document*.
        reader: Reader for static fragment files.
        module_resolver: Resolver for module-style imports.
        service_path: File *document* was read from, used for cycle detection.
    """

    def __init__(
        self,
        document: dict[str, Any],
        *,
        settings: ImportSettings | None = None,
        plugins: PluginHost | None = None,
        variables: VariableEngine | None = None,
        reader: DocumentReader | None = None,
        module_resolver: ModuleResolver | None = None,
        service_path: Path | None = None,
    ) -> None:
        self._document = document
        self._settings = settings or ImportSettings.load()
        self._root = self._settings.project_root.resolve()
        self._plugins = plugins or PluginManager(
            entry_point_group=self._settings.plugins.entry_point_group,
            local_dir=self._root / self._settings.plugins.local_dir,
        )
        self._variables = variables or SelfReferenceVariables(document)
        self._loader = FragmentLoader(reader, factory_name=self._settings.fragments.factory_name)
        self._resolver = PathResolver(self._root, module_resolver)
        self._service_path = service_path

    @classmethod
    async def from_project(
        cls,
        project_root: Path | None = None,
        **kwargs: Any,
    ) -> ConfigImporter:
        """Build an importer for the ``serverless.<ext>`` of *project_root*."""
        settings = kwargs.pop("settings", None) or ImportSettings.load(project_root=project_root)
        root = settings.project_root.resolve()
        path, document = await load_service(
            root, FragmentLoader(kwargs.get("reader"), factory_name=settings.fragments.factory_name)
        )
        return cls(document, settings=settings, service_path=path, **kwargs)

    @property
    def document(self) -> dict[str, Any]:
        """The root document being merged into."""
        return self._document

    @property
    def plugins(self) -> PluginHost:
        """The plugin host receiving imported plugins."""
        return self._plugins

    async def activate(self, options: dict[str, Any] | None = None) -> ActivationResult:
        """Run every import, merge the results, and reconcile plugins."""
        baseline = snapshot_plugins(self._document)
        walker = ImportWalker(
            self._document,
            resolver=self._resolver,
            loader=self._loader,
            substituter=VariableSubstituter(self._variables, self._root),
            project_root=self._root,
            options=options,
            merge_order=self._settings.merge_order,
            detect_cycles=self._settings.detect_cycles,
            on_merged=self._notify_imported,
        )
        try:
            merged = await walker.process(self._document, self._root, origin=self._service_path)
            new_plugins = reconcile_plugins(baseline, self._document, self._plugins)
        except Exception as exc:
            logger.error("%s", exc, exc_info=True)
            raise

        result = ActivationResult(
            imported=[str(path) for path in merged],
            new_plugins=new_plugins,
        )
        self._call_hook("post_activate", imported=result.imported, new_plugins=result.new_plugins)
        return result

    def run(self, options: dict[str, Any] | None = None) -> ActivationResult:
        """Synchronous entry point: set up logging from settings, then activate."""
        configure_logging(verbose=self._settings.verbose, log_json=self._settings.log_json)
        return asyncio.run(self.activate(options))

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _notify_imported(self, fragment: ImportedFragment) -> None:
        self._call_hook(
            "post_import",
            import_path=str(fragment.path),
            document=fragment.document,
            inputs=dict(fragment.declaration.inputs),
        )

    def _call_hook(self, hook_name: str, **payload: Any) -> None:
        """Dispatch a hook when the plugin host exposes pluggy hooks.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        hook_fn = getattr(getattr(self._plugins, "hook", None), hook_name, None)
        if hook_fn is None:
            return
        try:
            hook_fn(**payload)
        except Exception:
            logger.warning("Hook %s failed", hook_name, exc_info=True)
