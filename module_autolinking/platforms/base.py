from typing import Optional, Protocol

from ..models import ModuleLink, ModuleRevision


class PlatformResolver(Protocol):
    """Turns the canonical revision of a module into a platform link, or None."""

    async def resolve_module(self, name: str, revision: ModuleRevision) -> Optional[ModuleLink]:
        ...
