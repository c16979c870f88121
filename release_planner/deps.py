"""Dependency handling utilities.

Provides functions for parsing PEP 508 dependency strings and rewriting
pyproject.toml files so that released packages carry their new version and
internal workspace dependencies on them are pinned to it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, cast

import semver
from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from .errors import ManifestError
from .models import Project, VersionBump
from .toml import load_pyproject, save_pyproject

log = logging.getLogger(__name__)


def dep_canonical_name(dep_str: str) -> str:
    """Extract the canonical package name from a PEP 508 dependency string.

    Handles version specifiers, extras, and normalizes the name per PEP 503
    (lowercase, hyphens instead of underscores).

    Examples:
        "requests>=2.0" → "requests"
        "My_Package[extra]~=1.0" → "my-package"
    """
    return canonicalize_name(Requirement(dep_str).name)


def dependency_map(dep_strings: Sequence[str], manifest_path: Path) -> dict[str, str]:
    """Turn PEP 508 strings into a map of canonical name → version range.

    The first occurrence of a name wins, so the order of the manifest is
    kept.

    Examples:
        ["requests>=2.0", "pkg-a"] → {"requests": ">=2.0", "pkg-a": ""}

    Raises:
        ManifestError: If a dependency string is not valid PEP 508.
    """
    deps: dict[str, str] = {}
    for dep_str in dep_strings:
        try:
            req = Requirement(dep_str)
        except InvalidRequirement as error:
            raise ManifestError(
                f"Manifest {manifest_path} has an invalid dependency {dep_str!r}: {error}"
            ) from error
        deps.setdefault(canonicalize_name(req.name), str(req.specifier))
    return deps


def pin_dep(dep_str: str, version: str) -> str:
    """Pin a PEP 508 dependency to an exact version.

    Preserves any extras and environment markers specified in the original
    dependency string, but replaces the version specifier with an exact pin.

    Examples:
        pin_dep("requests>=2.0", "2.31.0") → "requests==2.31.0"
        pin_dep("pkg[extra1,extra2]~=1.0", "1.5.0") → "pkg[extra1,extra2]==1.5.0"
    """
    req = Requirement(dep_str)
    # Sort extras alphabetically for consistent output
    extras = f"[{','.join(sorted(req.extras))}]" if req.extras else ""
    marker = f"; {req.marker}" if req.marker else ""
    return f"{req.name}{extras}=={version}{marker}"


def rewrite_pyproject(
    pyproject_path: Path,
    new_version: str | None,
    internal_dep_versions: Mapping[str, str],
) -> None:
    """Update a package's version and pin its internal dependencies.

    This function:
    1. Updates [project].version to new_version (unless it is None)
    2. Pins every dependency named in internal_dep_versions

    Internal deps are pinned in all locations:
    - [project].dependencies
    - [project].optional-dependencies.*
    - [dependency-groups].*

    Uses tomlkit to preserve formatting and comments.

    Args:
        pyproject_path: Path to the pyproject.toml file.
        new_version: New version string to set, or None to keep it.
        internal_dep_versions: Map of package name → version for internal deps.
    """
    doc = load_pyproject(pyproject_path)
    original = doc.as_string()
    # Cast needed because tomlkit types are complex unions
    project = cast(dict[str, Any], doc["project"])
    if new_version is not None:
        project["version"] = new_version

    if internal_dep_versions:
        deps = project.get("dependencies")
        if isinstance(deps, list):
            _pin_dep_list(deps, internal_dep_versions)

        opt_deps = project.get("optional-dependencies")
        if isinstance(opt_deps, dict):
            for group in opt_deps.values():
                if isinstance(group, list):
                    _pin_dep_list(group, internal_dep_versions)

        dep_groups = doc.get("dependency-groups")
        if isinstance(dep_groups, dict):
            for group in dep_groups.values():
                if isinstance(group, list):
                    _pin_dep_list(group, internal_dep_versions)

    if doc.as_string() != original:
        save_pyproject(pyproject_path, doc)


def _pin_dep_list(deps: list, versions: Mapping[str, str]) -> None:
    """Pin internal dependencies in a list, modifying in place.

    Entries that are not PEP 508 strings (e.g. {include-group = "..."}
    tables in dependency groups) are left alone.
    """
    for i, dep_str in enumerate(deps):
        if not isinstance(dep_str, str):
            continue
        name = dep_canonical_name(dep_str)
        if name in versions:
            deps[i] = pin_dep(dep_str, versions[name])


def update_manifests(
    project: Project,
    plan: Mapping[str, semver.Version],
    *,
    logger: logging.Logger | None = None,
) -> dict[str, VersionBump]:
    """Write a resolved release plan into the packages' pyproject.toml.

    Each released package gets its new version. Every releasable package,
    released or not, has its dependencies on released packages pinned to
    their new versions. Running this twice with the same plan leaves the
    files as they were after the first run.

    Args:
        project: The project the plan was resolved against.
        plan: Map of package name → target version.
        logger: Logger for the diagnostic trace.

    Returns:
        Map of package name → VersionBump for every released package.
    """
    logger = logger or log
    new_versions = {name: str(version) for name, version in plan.items()}

    for name, package in project.releasable_packages.items():
        new_version = new_versions.get(name)
        internal_dep_versions = {
            dep: version for dep, version in new_versions.items() if dep != name
        }
        if new_version is None and not internal_dep_versions:
            continue

        pyproject_path = package.path / "pyproject.toml"
        logger.debug("Rewriting %s with version %s", pyproject_path, new_version)
        rewrite_pyproject(pyproject_path, new_version, internal_dep_versions)

    return {
        name: VersionBump(
            old=str(project.releasable_packages[name].current_version), new=new_version
        )
        for name, new_version in new_versions.items()
    }
