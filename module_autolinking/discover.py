import logging
from pathlib import Path
from typing import Optional

from .config import merge_linking_options
from .models import ModuleRevision, Platform, SearchConfig, SearchResult, SearchResults
from .scanner import scan_modules

log = logging.getLogger(__name__)


def reduce_revisions(revisions: dict[str, list[ModuleRevision]]) -> SearchResults:
    """Pick the first revision of each module as canonical, the rest become duplicates."""
    results: SearchResults = {}
    for name, module_revisions in revisions.items():
        if not module_revisions:
            continue
        main, *duplicates = module_revisions
        results[name] = SearchResult(path=main.path, version=main.version, duplicates=duplicates)
    return results


def find_modules(
    platform: Platform,
    provided_config: Optional[SearchConfig] = None,
    cwd: str | Path | None = None,
) -> SearchResults:
    """
    Search for modules to link on a platform.

    1. Merge caller options with the package.json config
    2. Scan every search path for unimodule.json manifests
    3. Reduce revisions per module to a canonical copy plus duplicates

    Args:
        platform: Platform the modules must support.
        provided_config: Options that override package.json.
        cwd: Working directory (default: process cwd).

    Returns:
        Module name -> SearchResult, in discovery order.
    """
    config = merge_linking_options(platform, provided_config, cwd)
    log.debug("Searching %s", config.search_paths)

    results = reduce_revisions(scan_modules(config, platform))
    log.info("Found %d %s modules", len(results), platform.value)
    return results
