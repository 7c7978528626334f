"""Import declarations read from ``custom.import``.

A declaration is either a bare string (path or module specifier) or a
mapping ``{module: str, inputs: {...}}``. The field itself holds one
declaration, a list of them, or nothing at all. Empty strings, on
their own or inside the list, declare nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from slsimport.domain.errors import DeclarationError


class ImportDeclaration(BaseModel):
    """One entry of ``custom.import``."""

    model_config = {"frozen": True}

    module: str
    inputs: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def parse(cls, value: Any) -> ImportDeclaration:
        """Build a declaration from a raw string or mapping."""
        if isinstance(value, str) and value:
            return cls(module=value)
        if isinstance(value, Mapping):
            module = value.get("module")
            if not isinstance(module, str) or not module:
                raise DeclarationError(value)
            inputs = value.get("inputs")
            try:
                return cls(module=module, inputs=dict(inputs or {}))
            except (TypeError, ValueError, ValidationError) as exc:
                raise DeclarationError(value) from exc
        raise DeclarationError(value)


def read_imports(document: Mapping[str, Any]) -> list[ImportDeclaration]:
    """Return the declarations of *document*, or ``[]`` when it has none."""
    custom = document.get("custom")
    if not isinstance(custom, Mapping):
        return []
    raw = custom.get("import")
    if isinstance(raw, list):
        return [ImportDeclaration.parse(item) for item in raw if item != ""]
    if isinstance(raw, str) and raw:
        return [ImportDeclaration(module=raw)]
    if isinstance(raw, Mapping):
        return [ImportDeclaration.parse(raw)]
    return []
