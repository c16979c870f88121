"""TOML reading and writing utilities.

Uses tomlkit to preserve formatting and comments when modifying
pyproject.toml files. This is important for maintaining readable,
diff-friendly files.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from packaging.utils import canonicalize_name
from tomlkit.exceptions import ParseError

from .errors import ManifestError


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file.

    Returns a TOMLDocument that preserves formatting when modified and saved.

    Raises:
        ManifestError: If the file is missing or is not valid TOML.
    """
    try:
        text = path.read_text()
    except FileNotFoundError as error:
        raise ManifestError(f"Could not find manifest {path}") from error
    try:
        return tomlkit.parse(text)
    except ParseError as error:
        raise ManifestError(f"Manifest {path} is not valid TOML: {error}") from error


def save_pyproject(path: Path, doc: tomlkit.TOMLDocument) -> None:
    """Save a TOMLDocument back to disk, preserving original formatting."""
    path.write_text(tomlkit.dumps(doc))


def get_project_name(doc: tomlkit.TOMLDocument, path: Path) -> str:
    """Extract the canonical package name from [project].name.

    Names are normalized per PEP 503 (lowercase, hyphens instead of
    underscores) for consistent comparison.

    Args:
        doc: Parsed pyproject.toml document.
        path: Path of the manifest, used in error messages.

    Raises:
        ManifestError: If [project].name is missing or not a string.
    """
    name = doc.get("project", {}).get("name")
    if not isinstance(name, str) or not name.strip():
        raise ManifestError(f'Manifest {path} must have a "name" in [project]')
    return canonicalize_name(name)


def get_project_version(doc: tomlkit.TOMLDocument, path: Path) -> str:
    """Extract the version string from [project].version.

    Raises:
        ManifestError: If [project].version is missing (e.g. dynamic).
    """
    version = doc.get("project", {}).get("version")
    if not isinstance(version, str):
        raise ManifestError(f'Manifest {path} must have a "version" in [project]')
    return str(version)


def get_dependency_strings(doc: tomlkit.TOMLDocument) -> list[str]:
    """Collect the runtime dependency strings from [project].dependencies."""
    return [str(d) for d in doc.get("project", {}).get("dependencies", [])]


def get_optional_dependency_strings(doc: tomlkit.TOMLDocument) -> list[str]:
    """Collect dependency strings from every [project].optional-dependencies group.

    Extras must be satisfied by whoever installs the package, so they play
    the role of peer dependencies in the release checks.
    """
    deps: list[str] = []
    for group_deps in doc.get("project", {}).get("optional-dependencies", {}).values():
        deps.extend(str(d) for d in group_deps)
    return deps


def get_workspace_member_globs(doc: tomlkit.TOMLDocument) -> list[str] | None:
    """Extract workspace member glob patterns from [tool.uv.workspace].

    These patterns (e.g., "packages/*", "libs/*") define which directories
    contain workspace packages.

    Returns:
        The member globs, or None if the project is not a workspace.
    """
    members = doc.get("tool", {}).get("uv", {}).get("workspace", {}).get("members")
    if not members:
        return None
    return [str(m) for m in members]
