import asyncio
import logging
from pathlib import Path
from typing import Optional

from ..models import IosModuleLink, ModuleRevision

log = logging.getLogger(__name__)

# Podspecs usually live in the module's ios/ directory, sometimes at the root.
_PODSPEC_PATTERNS = ("*/*.podspec", "*.podspec")


def find_podspec(module_dir: Path) -> Optional[Path]:
    for pattern in _PODSPEC_PATTERNS:
        matches = sorted(module_dir.glob(pattern))
        if matches:
            return matches[0]
    return None


class IosResolver:
    async def resolve_module(self, name: str, revision: ModuleRevision) -> Optional[IosModuleLink]:
        podspec = await asyncio.to_thread(find_podspec, Path(revision.path))
        if podspec is None:
            log.debug("No podspec for %s @ %s", name, revision.path)
            return None
        return IosModuleLink(
            package_name=name,
            pod_name=podspec.stem,
            path=str(podspec.parent),
        )
