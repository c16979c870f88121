"""Data models for release-planner.

These Pydantic models represent the core data structures used throughout
the release flow: the workspace snapshot (Package, Project), the untrusted
release spec straight out of the YAML parser (RawReleaseSpecification), and
the validated release spec handed to the resolver (ReleaseSpecification).
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Union

import semver
from pydantic import BaseModel, ConfigDict, Field, model_validator


class BumpKind(str, Enum):
    """The part of a version that a release spec entry asks to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


# Either a relative bump or the exact version to release
VersionSpecifier = Union[BumpKind, semver.Version]


class Package(BaseModel):
    """Metadata for a single package in the project.

    Attributes:
        name: Canonical (PEP 503) package name.
        path: Directory containing the package's pyproject.toml.
        current_version: Version from [project].version.
        dependencies: Map of canonical name → version range from
            [project].dependencies. May name packages outside the project.
        peer_dependencies: Map of canonical name → version range from
            every [project].optional-dependencies group.
        has_changes_since_latest_release: Whether any file in the package
            changed since the tag of its current version.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    path: Path
    current_version: semver.Version
    dependencies: dict[str, str] = Field(default_factory=dict)
    peer_dependencies: dict[str, str] = Field(default_factory=dict)
    has_changes_since_latest_release: bool = False


class Project(BaseModel):
    """Snapshot of the whole project, built once per invocation.

    Attributes:
        directory: Project root directory.
        root_package: Package described by the root pyproject.toml.
        workspace_packages: Map of name → Package for every workspace
            member, in discovery order. Empty for single-package projects.
        is_monorepo: True when workspace members were configured.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    directory: Path
    root_package: Package
    workspace_packages: dict[str, Package] = Field(default_factory=dict)
    is_monorepo: bool = False

    @model_validator(mode="after")
    def _check_package_keys(self) -> Project:
        for key, package in self.workspace_packages.items():
            if key != package.name:
                raise ValueError(
                    f"Workspace package key {key!r} does not match "
                    f"package name {package.name!r}"
                )
        return self

    @property
    def releasable_packages(self) -> dict[str, Package]:
        """Packages a release spec may name.

        The workspace members of a monorepo, or the root package alone when
        the project is a single package.
        """
        if self.is_monorepo:
            return self.workspace_packages
        return {self.root_package.name: self.root_package}


class RawReleaseEntry(BaseModel):
    """One `packages` entry exactly as the user wrote it.

    Attributes:
        name: Key of the entry (normally a package name).
        value: Unvalidated value (None, a string, or anything YAML produced).
        line_number: 1-based line of the entry in the document.
    """

    model_config = ConfigDict(frozen=True)

    name: Any
    value: Any = None
    line_number: int


class RawReleaseSpecification(BaseModel):
    """A parsed but unvalidated release spec.

    Only the validator should look at this; nothing in it can be trusted
    until validate_release_spec() has run.
    """

    model_config = ConfigDict(frozen=True)

    entries: list[RawReleaseEntry] = Field(default_factory=list)
    path: Path


class ReleaseSpecification(BaseModel):
    """A validated release spec.

    Attributes:
        packages: Map of package name → VersionSpecifier for the packages
            being released, in document order.
        path: Path to the release spec file it was read from.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    packages: dict[str, VersionSpecifier] = Field(default_factory=dict)
    path: Path


class VersionBump(BaseModel):
    """Records a version change for a package.

    Attributes:
        old: The version before bumping.
        new: The version after bumping.
    """

    old: str
    new: str
