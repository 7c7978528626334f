"""Exception hierarchy for the import engine.

INVARIANT: Every error raised while walking imports is fatal to the
activation. Nothing here is retried or downgraded to a warning.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any


class ImportConfigError(Exception):
    """Base class for all import-engine failures."""


class DeclarationError(ImportConfigError):
    """An entry of ``custom.import`` is neither a string nor ``{module, inputs}``."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"Invalid import declaration {value!r}: "
            "expected a string or a mapping with a string 'module'"
        )


class ResolutionError(ImportConfigError):
    """No candidate file or module exists for a declared import.

    Attributes:
        raw_path: The import path after placeholder expansion.
        attempted: Every candidate tried, in attempt order.
        reason: Short human description of the failed strategy.
    """

    def __init__(self, raw_path: str, reason: str, attempted: Sequence[str] = ()) -> None:
        self.raw_path = raw_path
        self.reason = reason
        self.attempted = list(attempted)
        message = f"Cannot import {raw_path}: {reason}"
        if self.attempted:
            message += "\nTried: \n - " + "\n - ".join(self.attempted)
        super().__init__(message)


class LoadError(ImportConfigError):
    """A resolved file could not be loaded, parsed, or invoked."""

    def __init__(self, path: Path | str, cause: BaseException | str) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot import {path}\nCause: {cause}")


class CycleError(ImportConfigError):
    """A fragment imports itself, directly or through other fragments."""

    def __init__(self, chain: Sequence[Path]) -> None:
        self.chain = list(chain)
        rendered = "\n -> ".join(str(p) for p in self.chain)
        super().__init__(f"Import cycle detected:\n    {rendered}")
