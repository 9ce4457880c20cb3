"""Platform resolvers: turn search results into per-platform link descriptors."""

import asyncio
import logging

from ..errors import PlatformNotSupportedError
from ..models import ModuleLink, Platform, SearchResults
from .android import AndroidResolver
from .base import PlatformResolver
from .ios import IosResolver

log = logging.getLogger(__name__)

_RESOLVERS: dict[str, PlatformResolver] = {
    Platform.IOS.value: IosResolver(),
    Platform.ANDROID.value: AndroidResolver(),
}


def register_resolver(platform: str, resolver: PlatformResolver) -> None:
    """Add or replace the resolver for a platform."""
    _RESOLVERS[platform] = resolver


def get_resolver(platform: Platform | str) -> PlatformResolver:
    key = platform.value if isinstance(platform, Platform) else platform
    try:
        return _RESOLVERS[key]
    except KeyError:
        raise PlatformNotSupportedError(key, sorted(_RESOLVERS)) from None


async def resolve_modules(platform: Platform | str, results: SearchResults) -> list[ModuleLink]:
    """Resolve every module concurrently; modules without a link are dropped.

    The first resolver failure propagates. Output follows the order of results.
    """
    resolver = get_resolver(platform)
    links = await asyncio.gather(*(
        resolver.resolve_module(name, result)
        for name, result in results.items()
    ))
    resolved = [link for link in links if link is not None]
    log.debug("Resolved %d/%d modules", len(resolved), len(results))
    return resolved


__all__ = [
    "AndroidResolver",
    "IosResolver",
    "PlatformResolver",
    "get_resolver",
    "register_resolver",
    "resolve_modules",
]
