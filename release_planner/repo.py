"""Git queries used to decide which packages changed since their release."""

from __future__ import annotations

from pathlib import Path

from .shell import git


def get_tag_names(repo_dir: Path) -> list[str]:
    """Return every tag in the repository."""
    output = git("tag", "--list", cwd=repo_dir)
    return output.splitlines() if output else []


def release_tag_for(name: str, version: str, *, is_workspace_package: bool) -> str:
    """Return the tag a release of the given package is expected to carry.

    Workspace packages are tagged {name}/v{version}; the root package of a
    single-package project is tagged v{version}.
    """
    if is_workspace_package:
        return f"{name}/v{version}"
    return f"v{version}"


def has_changes_since_tag(repo_dir: Path, package_dir: Path, tag: str) -> bool:
    """Check whether any file under package_dir changed since tag.

    A package whose tag does not exist has never been released at its
    current version, so it counts as changed.

    Args:
        repo_dir: Root of the git repository.
        package_dir: Directory of the package to check.
        tag: Release tag to diff against.
    """
    if tag not in get_tag_names(repo_dir):
        return True

    # Get files changed since the tag, restricted to the package
    changed_files = git(
        "diff",
        "--name-only",
        tag,
        "HEAD",
        "--",
        str(package_dir.relative_to(repo_dir)) if package_dir != repo_dir else ".",
        cwd=repo_dir,
    )
    return bool(changed_files)
