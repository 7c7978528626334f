"""Deep merge of a fragment into the root document."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any


def merge_into(target: MutableMapping[str, Any], source: MutableMapping[str, Any]) -> None:
    """Deep-merge *source* into *target* in place.

    Mappings merge key by key, lists concatenate (target items first),
    and any other value from *source* replaces the one in *target*.
    """
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, MutableMapping) and isinstance(value, MutableMapping):
            merge_into(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            current.extend(value)
        else:
            target[key] = value
