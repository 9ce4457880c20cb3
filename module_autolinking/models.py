from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MANIFEST_FILENAME = "unimodule.json"
PACKAGE_JSON = "package.json"

# Config block in package.json, newest key first.
CONFIG_KEYS = ("expoModules", "react-native-unimodules")


class Platform(str, Enum):
    IOS = "ios"
    ANDROID = "android"


class SearchConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    search_paths: list[str] = Field(
        default_factory=list,
        alias="searchPaths",
        description="Directories to scan for modules, in priority order",
    )
    ignore_paths: Optional[list[str]] = Field(
        default=None,
        alias="ignorePaths",
        description="Glob patterns, relative to a search path, of directories to skip",
    )
    exclude: Optional[list[str]] = Field(
        default=None,
        description="Package names that must never be linked",
    )


class UnimoduleManifest(BaseModel):
    model_config = ConfigDict(extra="allow")

    platforms: list[str] = Field(
        default_factory=list,
        description="Platforms the native module supports",
    )

    @field_validator("platforms", mode="before")
    @classmethod
    def _null_platforms(cls, value):
        return [] if value is None else value

    def supports(self, platform: Platform) -> bool:
        return platform.value in self.platforms


class PackageDescriptor(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    version: str = ""


class ModuleRevision(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Real absolute path of the module directory")
    version: str = Field(description="Version from the module's package.json")


class SearchResult(ModuleRevision):
    duplicates: list[ModuleRevision] = Field(
        default_factory=list,
        description="Other copies of the module, in discovery order",
    )


SearchResults = dict[str, SearchResult]


class IosModuleLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    package_name: str = Field(alias="packageName")
    pod_name: str = Field(alias="podName")
    path: str = Field(description="Directory containing the podspec")


class AndroidModuleLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    package_name: str = Field(alias="packageName")
    project_name: str = Field(alias="projectName")
    source_dir: str = Field(alias="sourceDir")


ModuleLink = IosModuleLink | AndroidModuleLink
