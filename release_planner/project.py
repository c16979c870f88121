"""Workspace discovery: build a Project snapshot from pyproject.toml files.

The root pyproject.toml describes the root package. If it declares
[tool.uv.workspace].members (or globs are passed explicitly), every matching
directory with a pyproject.toml becomes a workspace package. A broken
manifest anywhere aborts the whole build: release checks cannot be trusted
on a partial graph.
"""

from __future__ import annotations

import glob
import logging
from collections.abc import Callable, Sequence
from functools import partial
from pathlib import Path

from .deps import dependency_map
from .errors import ManifestError
from .models import Package, Project
from .repo import has_changes_since_tag, release_tag_for
from .toml import (
    get_dependency_strings,
    get_optional_dependency_strings,
    get_project_name,
    get_project_version,
    get_workspace_member_globs,
    load_pyproject,
)
from .versions import parse_version

log = logging.getLogger(__name__)

# (package directory, release tag) → whether the package changed since the tag
ChangedSince = Callable[[Path, str], bool]


def read_package(
    package_dir: Path,
    changed_since: ChangedSince,
    *,
    is_workspace_package: bool = True,
) -> Package:
    """Read a package's pyproject.toml into a Package.

    Args:
        package_dir: Directory holding the pyproject.toml.
        changed_since: Predicate telling whether the package changed since
            the tag of its current version.
        is_workspace_package: Selects the release tag scheme.

    Raises:
        ManifestError: If the manifest is missing, is not valid TOML, lacks
            a name or version, has an invalid version, or lists an invalid
            dependency.
    """
    manifest_path = package_dir / "pyproject.toml"
    doc = load_pyproject(manifest_path)
    name = get_project_name(doc, manifest_path)
    version_str = get_project_version(doc, manifest_path)
    try:
        version = parse_version(version_str)
    except ValueError as error:
        raise ManifestError(
            f'Manifest {manifest_path} has an invalid version "{version_str}" '
            "(must have major, minor, and patch parts, such as 1.2.3)"
        ) from error

    tag = release_tag_for(name, version_str, is_workspace_package=is_workspace_package)
    return Package(
        name=name,
        path=package_dir,
        current_version=version,
        dependencies=dependency_map(get_dependency_strings(doc), manifest_path),
        peer_dependencies=dependency_map(
            get_optional_dependency_strings(doc), manifest_path
        ),
        has_changes_since_latest_release=changed_since(package_dir, tag),
    )


def find_member_dirs(root: Path, member_globs: Sequence[str]) -> list[Path]:
    """Expand workspace member globs into package directories.

    Matches are sorted per glob; directories without a pyproject.toml are
    not packages and are ignored. A directory matched by several globs is
    only returned once.
    """
    member_dirs: list[Path] = []
    for pattern in member_globs:
        for match in sorted(glob.glob(str(root / pattern))):
            p = Path(match)
            if (p / "pyproject.toml").is_file() and p not in member_dirs:
                member_dirs.append(p)
    return member_dirs


def build_project(
    directory: Path,
    member_globs: Sequence[str] | None = None,
    *,
    changed_since: ChangedSince | None = None,
    logger: logging.Logger | None = None,
) -> Project:
    """Scan the project and build its Project snapshot.

    Args:
        directory: Project root (holding the root pyproject.toml).
        member_globs: Workspace member globs. When None they are read from
            [tool.uv.workspace].members; if that is absent too, the project
            is a single package.
        changed_since: Predicate used for has_changes_since_latest_release.
            Defaults to diffing against the package's git release tag.
        logger: Logger for the diagnostic trace.

    Raises:
        ManifestError: If any manifest is invalid or two workspace packages
            share a name.
    """
    logger = logger or log
    root = directory.resolve()
    if changed_since is None:
        changed_since = partial(has_changes_since_tag, root)

    if member_globs is None:
        member_globs = get_workspace_member_globs(load_pyproject(root / "pyproject.toml"))
    is_monorepo = member_globs is not None

    root_package = read_package(root, changed_since, is_workspace_package=False)
    logger.debug("Root package: %s %s", root_package.name, root_package.current_version)

    workspace_packages: dict[str, Package] = {}
    for d in find_member_dirs(root, member_globs or []):
        if d.resolve() == root:
            continue
        package = read_package(d, changed_since)
        if package.name in workspace_packages:
            raise ManifestError(
                f'Workspace package "{package.name}" is defined twice: '
                f"{workspace_packages[package.name].path} and {d}"
            )
        workspace_packages[package.name] = package
        logger.debug(
            "Workspace package: %s %s (%s) changed=%s",
            package.name,
            package.current_version,
            d,
            package.has_changes_since_latest_release,
        )

    return Project(
        directory=root,
        root_package=root_package,
        workspace_packages=workspace_packages,
        is_monorepo=is_monorepo,
    )
