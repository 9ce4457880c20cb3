import json
import logging
import os
from collections import deque
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import DescriptorParseError, FilesystemError, ManifestParseError
from .models import (
    MANIFEST_FILENAME,
    PACKAGE_JSON,
    ModuleRevision,
    PackageDescriptor,
    Platform,
    SearchConfig,
    UnimoduleManifest,
)

log = logging.getLogger(__name__)

_Model = TypeVar("_Model", bound=BaseModel)


def _is_ignored(rel_path: PurePosixPath, ignore_paths: Optional[list[str]]) -> bool:
    """Match a directory against ignore globs, by relative path or by name."""
    if not ignore_paths:
        return False
    rel = rel_path.as_posix()
    return any(
        fnmatchcase(rel, pattern) or fnmatchcase(rel_path.name, pattern)
        for pattern in ignore_paths
    )


def find_manifests(search_path: Path, ignore_paths: Optional[list[str]] = None) -> list[Path]:
    """
    Find every unimodule.json below a search path.

    Breadth-first with children sorted by name, so hoisted copies come before
    nested ones and the order never depends on the filesystem. Symlinked
    directories are followed; each real directory is visited once.

    Args:
        search_path: Root to scan. A missing root yields no manifests.
        ignore_paths: Glob patterns of directories to prune.

    Returns:
        Manifest paths in discovery order.
    """
    if not search_path.is_dir():
        log.debug("Skipping missing search path %s", search_path)
        return []

    found: list[Path] = []
    visited: set[str] = set()
    queue: deque[Path] = deque([search_path])

    while queue:
        dir_path = queue.popleft()
        real = os.path.realpath(dir_path)
        if real in visited:
            continue
        visited.add(real)

        try:
            children = sorted(dir_path.iterdir())
        except PermissionError:
            log.warning("Cannot list %s, skipping", dir_path)
            continue

        for child in children:
            if child.name == MANIFEST_FILENAME and child.is_file():
                found.append(child)
            elif child.name.startswith("."):
                # Dot directories (.bin, .cache, .pnpm) are never searched.
                continue
            elif child.is_dir():
                rel = PurePosixPath(child.relative_to(search_path).as_posix())
                if _is_ignored(rel, ignore_paths):
                    log.debug("Ignoring %s", child)
                    continue
                queue.append(child)

    return found


def _load_json_model(
    path: Path,
    model: type[_Model],
    error_cls: type[ManifestParseError] | type[DescriptorParseError],
) -> _Model:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilesystemError(path, e.strerror or str(e)) from e
    try:
        return model.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        raise error_cls(path, f"malformed JSON ({e})") from e
    except ValidationError as e:
        raise error_cls(path, f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}") from e


def load_manifest(module_dir: Path) -> UnimoduleManifest:
    return _load_json_model(module_dir / MANIFEST_FILENAME, UnimoduleManifest, ManifestParseError)


def load_package_descriptor(module_dir: Path) -> PackageDescriptor:
    return _load_json_model(module_dir / PACKAGE_JSON, PackageDescriptor, DescriptorParseError)


def scan_modules(config: SearchConfig, platform: Platform) -> dict[str, list[ModuleRevision]]:
    """
    Collect every revision of every module supporting the platform.

    Revisions are grouped by package name in discovery order, following the
    order of config.search_paths. The same real directory is recorded once per
    name. Any unparsable manifest or package.json aborts the scan.
    """
    exclude = set(config.exclude or [])
    revisions: dict[str, list[ModuleRevision]] = {}

    for search_path in config.search_paths:
        for manifest_path in find_manifests(Path(search_path), config.ignore_paths):
            module_dir = Path(os.path.realpath(manifest_path.parent))
            manifest = load_manifest(module_dir)
            descriptor = load_package_descriptor(module_dir)
            name = descriptor.name

            if name in exclude or not manifest.supports(platform):
                log.debug("Skipping %s @ %s", name, module_dir)
                continue

            module_revisions = revisions.setdefault(name, [])
            if all(r.path != str(module_dir) for r in module_revisions):
                module_revisions.append(ModuleRevision(path=str(module_dir), version=descriptor.version))
                log.debug("Found %s@%s @ %s", name, descriptor.version, module_dir)

    return revisions
