"""Errors raised while discovering and linking modules."""

from pathlib import Path


class AutolinkingError(Exception):
    """Base class for everything the CLI reports as a failed run."""


class _FileError(AutolinkingError):
    kind = "file"

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid {self.kind} at {self.path}: {reason}")


class ManifestParseError(_FileError):
    kind = "module manifest"


class DescriptorParseError(_FileError):
    kind = "package descriptor"


class FilesystemError(AutolinkingError):
    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        super().__init__(f"Cannot read {self.path}: {reason}")


class PlatformNotSupportedError(AutolinkingError):
    def __init__(self, platform: str, supported: list[str]):
        self.platform = platform
        super().__init__(
            f"Unsupported platform: {platform!r}. "
            f"Valid options: {', '.join(supported)}"
        )
