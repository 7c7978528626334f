"""Tests for the deep merge primitive."""

from __future__ import annotations

from slsimport.domain.merge import merge_into


class TestMergeInto:
    def test_mappings_recurse(self) -> None:
        target = {"custom": {"a": 1, "nested": {"x": 1}}}
        merge_into(target, {"custom": {"b": 2, "nested": {"y": 2}}})
        assert target == {"custom": {"a": 1, "b": 2, "nested": {"x": 1, "y": 2}}}

    def test_lists_concatenate(self) -> None:
        target = {"plugins": ["one"]}
        merge_into(target, {"plugins": ["two", "one"]})
        assert target == {"plugins": ["one", "two", "one"]}

    def test_scalars_overwrite(self) -> None:
        target = {"provider": {"stage": "dev", "region": "eu-west-1"}}
        merge_into(target, {"provider": {"stage": "prod"}})
        assert target["provider"] == {"stage": "prod", "region": "eu-west-1"}

    def test_type_mismatch_overwrites(self) -> None:
        target = {"custom": {"value": [1]}}
        merge_into(target, {"custom": {"value": {"k": 1}}})
        assert target["custom"]["value"] == {"k": 1}

    def test_none_overwrites(self) -> None:
        target = {"a": 1}
        merge_into(target, {"a": None})
        assert target == {"a": None}

    def test_mutates_in_place(self) -> None:
        target: dict = {}
        original = target
        merge_into(target, {"functions": {"hello": {"handler": "h.main"}}})
        assert original is target
        assert target["functions"]["hello"]["handler"] == "h.main"
