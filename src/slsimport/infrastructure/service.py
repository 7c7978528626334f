"""Root service document discovery.

Looks for ``serverless.<ext>`` in the project root with the same
extension priority used to resolve imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from slsimport.domain.errors import ResolutionError
from slsimport.domain.paths import config_candidates
from slsimport.infrastructure.loader import FragmentLoader


def find_service_file(project_root: Path) -> Path:
    """Return the root config file of *project_root*.

    Raises:
        ResolutionError: When none of the candidates exists.
    """
    tries = config_candidates(str(project_root))
    for possible in tries:
        candidate = Path(possible)
        if candidate.is_file():
            return candidate
    raise ResolutionError(str(project_root), "no serverless config can be found", tries)


async def load_service(
    project_root: Path,
    loader: FragmentLoader | None = None,
) -> tuple[Path, dict[str, Any]]:
    """Locate and load the root document of *project_root*."""
    path = find_service_file(project_root)
    document = await (loader or FragmentLoader()).load(path)
    return path, document
