"""Pluggy hook specifications for slsimport activation events."""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("slsimport")
hookimpl = pluggy.HookimplMarker("slsimport")


class SlsImportHookSpec:
    """Hook specifications for the slsimport plugin system."""

    @hookspec
    def post_import(
        self, import_path: str, document: dict[str, Any], inputs: dict[str, Any]
    ) -> None:
        """Called after a fragment has been merged into the root document.

        *inputs* are the declaration inputs the fragment was loaded with.
        """

    @hookspec
    def post_activate(self, imported: list[str], new_plugins: list[str]) -> None:
        """Called once every import is merged and new plugins are registered."""
