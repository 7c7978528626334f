"""Locate the ``slsimport.toml`` that tunes an activation.

The file usually sits next to ``serverless.yml``, but a fragment tree
may live below it, so the search climbs from the project root towards
the filesystem root. ``SLSIMPORT_CONFIG`` pins one file and disables the
search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "slsimport.toml"
CONFIG_ENV_VAR = "SLSIMPORT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the settings file governing the project at *start* (default: cwd).

    A ``SLSIMPORT_CONFIG`` that names a missing file yields None rather
    than falling back to the search, so a typo never picks up an
    unrelated file higher up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
