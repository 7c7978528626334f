"""Tests for plugin reconciliation."""

from __future__ import annotations

from slsimport.services.reconcile import (
    new_plugins,
    plugin_names,
    reconcile_plugins,
    snapshot_plugins,
)


class TestPluginNames:
    def test_list_form(self) -> None:
        assert plugin_names({"plugins": ["a", "b"]}) == ["a", "b"]

    def test_mapping_form(self) -> None:
        doc = {"plugins": {"localPath": "./plugins", "modules": ["a"]}}
        assert plugin_names(doc) == ["a"]

    def test_absent(self) -> None:
        assert plugin_names({}) == []

    def test_snapshot_is_immutable_copy(self) -> None:
        doc = {"plugins": ["a"]}
        baseline = snapshot_plugins(doc)
        doc["plugins"].append("b")
        assert baseline == ("a",)


class TestNewPlugins:
    def test_preserves_order_without_duplicates(self) -> None:
        assert new_plugins(("a",), ["a", "c", "b", "c", "a"]) == ["c", "b"]

    def test_nothing_new(self) -> None:
        assert new_plugins(("a", "b"), ["a", "b"]) == []


class TestReconcilePlugins:
    def test_loader_host(self, plugin_loader) -> None:
        doc = {"plugins": ["base", "imported-one", "base", "imported-two"]}
        names = reconcile_plugins(("base",), doc, plugin_loader)
        assert names == ["imported-one", "imported-two"]
        assert plugin_loader.calls == [["imported-one", "imported-two"]]

    def test_registry_host_skips_unresolved(self, plugin_registry) -> None:
        doc = {"plugins": ["kept", "missing-plugin", "other"]}
        reconcile_plugins((), doc, plugin_registry)
        assert plugin_registry.resolved == [["kept", "missing-plugin", "other"]]
        assert plugin_registry.added == ["<kept>", "<other>"]
        assert plugin_registry.names == ["kept", "other"]

    def test_loader_called_even_when_empty(self, plugin_loader) -> None:
        reconcile_plugins(("a",), {"plugins": ["a"]}, plugin_loader)
        assert plugin_loader.calls == [[]]
