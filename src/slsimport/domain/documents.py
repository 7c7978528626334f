"""Helpers for walking and addressing plain document trees."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from slsimport.domain.contracts import Property

_MISSING = object()


def iter_leaves(node: Any, prefix: tuple[str | int, ...] = ()) -> Iterator[Property]:
    """Yield every non-container value of *node* with its key path."""
    if isinstance(node, Mapping):
        for key, value in node.items():
            yield from iter_leaves(value, (*prefix, key))
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from iter_leaves(value, (*prefix, index))
    else:
        yield Property(path=prefix, value=node)


def get_path(document: Any, path: tuple[str | int, ...] | list[str], default: Any = None) -> Any:
    """Look up *path* in *document*; *default* when any step is missing."""
    node = document
    for key in path:
        if isinstance(node, Mapping):
            node = node.get(key, _MISSING)
        elif isinstance(node, list) and isinstance(key, int) and -len(node) <= key < len(node):
            node = node[key]
        elif isinstance(node, list) and isinstance(key, str) and key.isdigit():
            index = int(key)
            node = node[index] if index < len(node) else _MISSING
        else:
            return default
        if node is _MISSING:
            return default
    return node


def set_path(document: Any, path: tuple[str | int, ...], value: Any) -> None:
    """Assign *value* at an existing *path* inside *document*."""
    if not path:
        raise ValueError("cannot assign to an empty property path")
    parent = get_path(document, path[:-1], default=_MISSING)
    if parent is _MISSING:
        raise KeyError(path)
    parent[path[-1]] = value
