"""Plugin reconciliation after all imports have been merged."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from slsimport.domain.contracts import PluginHost, PluginLoader

logger = logging.getLogger(__name__)


def plugin_names(document: Mapping[str, Any]) -> list[str]:
    """Plugin names of *document*.

    ``plugins`` is either a list or a mapping whose ``modules`` key
    holds the list.
    """
    plugins = document.get("plugins")
    if isinstance(plugins, Mapping):
        plugins = plugins.get("modules")
    if not isinstance(plugins, list):
        return []
    return [name for name in plugins if isinstance(name, str)]


def snapshot_plugins(document: Mapping[str, Any]) -> tuple[str, ...]:
    """Immutable plugin baseline, taken before any import runs."""
    return tuple(plugin_names(document))


def new_plugins(baseline: Sequence[str], current: Sequence[str]) -> list[str]:
    """Names in *current* but not in *baseline*, first occurrence order."""
    known = set(baseline)
    added: list[str] = []
    for name in current:
        if name not in known:
            known.add(name)
            added.append(name)
    return added


def reconcile_plugins(
    baseline: Sequence[str],
    document: Mapping[str, Any],
    host: PluginHost,
) -> list[str]:
    """Hand plugins introduced by imports to *host*; return their names."""
    names = new_plugins(baseline, plugin_names(document))
    if names:
        logger.debug("Loading imported plugins: %s", ", ".join(names))

    if isinstance(host, PluginLoader):
        host.load_plugins(names)
    else:
        # resolve_plugins answers one entry per name, in order.
        for name, plugin in zip(names, host.resolve_plugins(names), strict=True):
            if plugin is not None:
                host.add_plugin(plugin, name=name)
    return names
