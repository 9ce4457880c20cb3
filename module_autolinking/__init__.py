from .config import merge_linking_options
from .discover import find_modules
from .errors import (
    AutolinkingError,
    DescriptorParseError,
    FilesystemError,
    ManifestParseError,
    PlatformNotSupportedError,
)
from .models import ModuleRevision, Platform, SearchConfig, SearchResult
from .platforms import register_resolver, resolve_modules
from .report import verify_search_results

__all__ = [
    "find_modules",
    "merge_linking_options",
    "resolve_modules",
    "register_resolver",
    "verify_search_results",
    "AutolinkingError",
    "DescriptorParseError",
    "FilesystemError",
    "ManifestParseError",
    "PlatformNotSupportedError",
    "ModuleRevision",
    "Platform",
    "SearchConfig",
    "SearchResult",
]
