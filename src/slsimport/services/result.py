"""ActivationResult: what an import activation hands back to the host."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ActivationResult(BaseModel):
    """Outcome of :meth:`ConfigImporter.activate`.

    Attributes:
        imported: Resolved fragment paths, in the order they were merged.
        new_plugins: Plugin names introduced by the imports, handed to
            the plugin host.
    """

    model_config = {"frozen": True}

    imported: list[str] = Field(default_factory=list)
    new_plugins: list[str] = Field(default_factory=list)
