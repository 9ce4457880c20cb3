import asyncio
import logging
import re
from pathlib import Path
from typing import Optional

from ..models import AndroidModuleLink, ModuleRevision

log = logging.getLogger(__name__)

_BUILD_FILES = ("build.gradle", "build.gradle.kts")


def project_name(package_name: str) -> str:
    """Gradle project name for a package.

      "@unimodules/core" → "unimodules-core"
      "expo-camera"      → "expo-camera"
    """
    return re.sub(r"\W+", "-", package_name.removeprefix("@"), flags=re.ASCII)


def _has_android_project(source_dir: Path) -> bool:
    return any((source_dir / name).is_file() for name in _BUILD_FILES)


class AndroidResolver:
    async def resolve_module(self, name: str, revision: ModuleRevision) -> Optional[AndroidModuleLink]:
        source_dir = Path(revision.path) / "android"
        if not await asyncio.to_thread(_has_android_project, source_dir):
            log.debug("No android project for %s @ %s", name, revision.path)
            return None
        return AndroidModuleLink(
            package_name=name,
            project_name=project_name(name),
            source_dir=str(source_dir),
        )
