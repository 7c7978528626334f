"""Default variable engine for ``${...}`` placeholders.

Supported sources:

- ``${self:custom.stage}``: a value of the root document.
- ``${opt:stage}``: an activation option.
- ``${env:HOME}``: an environment variable.

Anything else (``${dirname}`` included) is left in place for whoever
resolves it later.
"""

from __future__ import annotations

import os
import re
from typing import Any

from slsimport.domain.contracts import Property, VariableMatch
from slsimport.domain.documents import get_path, iter_leaves

VARIABLE_SYNTAX = re.compile(r"\$\{\s*([^{}]+?)\s*\}")

# Passes allowed when a resolved value itself contains placeholders.
_MAX_PASSES = 10


class SelfReferenceVariables:
    """Placeholder engine bound to one root document.

    Parameters:
        document: The root document ``${self:...}`` reads from.
    """

    variable_syntax = VARIABLE_SYNTAX

    def __init__(self, document: dict[str, Any]) -> None:
        self._document = document
        self.options: dict[str, Any] | None = None

    async def populate(self, options: dict[str, Any] | None) -> None:
        self.options = dict(options or {})

    async def resolve_placeholders(self, raw: str) -> str:
        value = raw
        for _ in range(_MAX_PASSES):
            expanded = self.variable_syntax.sub(self._replace, value)
            if expanded == value:
                break
            value = expanded
        return value

    def extract_matches(self, value: str) -> list[VariableMatch] | None:
        matches = [
            VariableMatch(match=m.group(0), variable=m.group(1))
            for m in self.variable_syntax.finditer(value)
        ]
        return matches or None

    def enumerate_properties(self, document: Any) -> list[Property]:
        return list(iter_leaves(document))

    def _replace(self, match: re.Match[str]) -> str:
        resolved = self._lookup(match.group(1))
        if resolved is None:
            return match.group(0)
        return str(resolved)

    def _lookup(self, variable: str) -> Any:
        source, sep, address = variable.partition(":")
        if not sep:
            return None
        source = source.strip()
        address = address.strip()
        if source == "self":
            return get_path(self._document, address.split(".")) if address else None
        if source == "opt":
            return (self.options or {}).get(address)
        if source == "env":
            return os.environ.get(address)
        return None
