"""Search path resolution.

Without explicit search paths every `node_modules` next to a package.json on the
way up from the working directory is used, so workspaces work without config.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .models import PACKAGE_JSON

log = logging.getLogger(__name__)


def _absolute(path: str | Path) -> Path:
    # Lexical only; symlinks are resolved later, per module.
    return Path(os.path.abspath(path))


def find_package_json_path(cwd: str | Path) -> Optional[Path]:
    """Return the nearest package.json at or above cwd, or None."""
    current = _absolute(cwd)
    for directory in (current, *current.parents):
        candidate = directory / PACKAGE_JSON
        if candidate.is_file():
            return candidate
    return None


def find_default_paths(cwd: str | Path) -> list[Path]:
    """Collect workspace `node_modules` directories, nearest first."""
    paths: list[Path] = []
    directory = _absolute(cwd)

    while (package_json := find_package_json_path(directory)) is not None:
        paths.append(package_json.parent / "node_modules")
        parent = package_json.parent.parent
        if parent == package_json.parent:
            # package.json at the filesystem root
            break
        directory = parent

    log.debug("Default search paths for %s: %s", cwd, [str(p) for p in paths])
    return paths


def resolve_search_paths(search_paths: Optional[list[str]], cwd: str | Path) -> list[Path]:
    """Resolve explicit search paths against cwd, or fall back to the defaults."""
    if search_paths:
        return [_absolute(Path(cwd) / search_path) for search_path in search_paths]
    return find_default_paths(cwd)
