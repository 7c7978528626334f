"""Path rules shared by resolution and rewriting.

All paths written back into a document use forward slashes, whatever
the platform.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path

SERVERLESS = "serverless"
DIRNAME = "dirname"
FACTORY_EXTNAME = ".py"

# Resolution priority order. Tie-breaking depends on this order.
CONFIG_EXTNAMES: tuple[str, ...] = (".yml", ".yaml", FACTORY_EXTNAME)


def has_config_extname(path: str | Path) -> bool:
    """Whether *path* ends with one of :data:`CONFIG_EXTNAMES`."""
    return os.path.splitext(str(path))[1] in CONFIG_EXTNAMES


def config_candidates(base: str) -> list[str]:
    """``<base>/serverless.<ext>`` for each extension, in priority order."""
    return [os.path.join(base, SERVERLESS + ext) for ext in CONFIG_EXTNAMES]


def to_posix(location: str) -> str:
    """Replace the platform separator with ``/``."""
    return location.replace(os.sep, posixpath.sep)


def import_dir(import_path: Path, project_root: Path) -> str:
    """Directory of *import_path* relative to *project_root*, POSIX form.

    The project root itself is ``"."``.
    """
    return to_posix(os.path.relpath(import_path.parent, project_root))


def join_posix(directory: str, location: str) -> str:
    """Join and normalize two POSIX path segments."""
    return posixpath.normpath(posixpath.join(directory, to_posix(location)))
