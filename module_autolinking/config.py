"""Autolinking configuration: package.json options and process settings."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .models import CONFIG_KEYS, Platform, SearchConfig
from .paths import find_package_json_path, resolve_search_paths

log = logging.getLogger(__name__)

# Field name -> keys accepted for it in package.json blocks.
_FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "search_paths": ("searchPaths", "search_paths"),
    "ignore_paths": ("ignorePaths", "ignore_paths"),
    "exclude": ("exclude",),
}


@dataclass(frozen=True)
class AutolinkingSettings:
    platform: Platform = Platform.IOS
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AutolinkingSettings":
        """Load CLI defaults from environment variables.

        AUTOLINKING_PLATFORM: default target platform (ios when unset)
        AUTOLINKING_DEBUG: "true" enables debug logging
        """
        raw_platform = os.getenv("AUTOLINKING_PLATFORM", "").strip().lower()
        platform = Platform.IOS
        if raw_platform:
            try:
                platform = Platform(raw_platform)
            except ValueError:
                raise ValueError(
                    f"AUTOLINKING_PLATFORM must be one of "
                    f"{', '.join(p.value for p in Platform)}, got: {raw_platform!r}"
                ) from None
        debug = os.getenv("AUTOLINKING_DEBUG", "false").lower() == "true"
        return cls(platform=platform, debug=debug)


def load_package_config(package_json: Optional[Path]) -> dict[str, Any]:
    """Read the autolinking block from a package.json.

    Missing files, broken JSON and non-object blocks all yield an empty dict.
    """
    if package_json is None:
        return {}
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.debug("Ignoring unreadable %s: %s", package_json, e)
        return {}
    if not isinstance(data, dict):
        return {}

    block = None
    for key in CONFIG_KEYS:
        block = data.get(key)
        if block is not None:
            break
    if not isinstance(block, dict):
        if block is not None:
            log.debug("Ignoring non-object autolinking config in %s", package_json)
        return {}
    return block


def _normalize(source: Any) -> dict[str, list[str]]:
    """Keep only well-formed, non-empty fields of one config source."""
    if isinstance(source, SearchConfig):
        source = source.model_dump()
    if not isinstance(source, dict):
        return {}

    fields: dict[str, list[str]] = {}
    for field, keys in _FIELD_KEYS.items():
        for key in keys:
            value = source.get(key)
            if value and isinstance(value, list) and all(isinstance(v, str) for v in value):
                fields[field] = value
                break
    return fields


def merge_linking_options(
    platform: Platform,
    provided_config: Optional[SearchConfig] = None,
    cwd: str | Path | None = None,
) -> SearchConfig:
    """Merge search options, highest priority first:

    1. options provided by the caller (CLI arguments)
    2. platform-specific options from package.json, e.g. `expoModules.ios`
    3. options from package.json's `expoModules` field

    The search paths of the result are always absolute; without any configured
    paths the workspace defaults are used.
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    base_config = load_package_config(find_package_json_path(cwd))
    platform_config = base_config.get(platform.value)

    sources = [_normalize(provided_config), _normalize(platform_config), _normalize(base_config)]

    def pick(field: str) -> Optional[list[str]]:
        for source in sources:
            if field in source:
                return source[field]
        return None

    search_paths = resolve_search_paths(pick("search_paths"), cwd)
    return SearchConfig(
        search_paths=[str(p) for p in search_paths],
        ignore_paths=pick("ignore_paths"),
        exclude=pick("exclude"),
    )
