"""Release preparation flow: discover → template → edit → validate → bump.

This module orchestrates the release-planner process:
1. Discover the root package and all workspace packages
2. Write a release spec template listing the changed packages
3. Let the user edit it (in their editor, or between two runs; a spec
   left over from a previous run is validated as it is)
4. Validate the edited spec against the dependency graph
5. Resolve it into target versions
6. Write the new versions into the released packages' pyproject.toml
7. Retitle the "Unreleased" section of their changelogs

The release spec file is only deleted once the manifests are updated, so a
spec the user has to fix survives until the next run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import semver

from .changelog import CHANGELOG_FILENAME, update_changelog
from .deps import update_manifests
from .editor import Editor, wait_for_user_to_edit
from .models import Project
from .project import build_project
from .release_spec import (
    generate_release_spec_template,
    read_release_spec,
    validate_release_spec,
)
from .resolver import resolve_release_plan
from .shell import step

log = logging.getLogger(__name__)

RELEASE_SPEC_FILENAME = "RELEASE_SPEC.yml"


def discover_project(
    project_dir: Path, *, logger: logging.Logger | None = None
) -> Project:
    """Build the Project snapshot and print what was found."""
    step("Discovering packages")

    project = build_project(project_dir, logger=logger)
    root = project.root_package
    if project.is_monorepo:
        print(f"  root: {root.name} {root.current_version}")
    for name, package in project.releasable_packages.items():
        changed = " (changed)" if package.has_changes_since_latest_release else ""
        print(f"  {name} {package.current_version}{changed}")

    return project


def write_release_spec_template(
    project: Project, spec_path: Path, *, is_editor_available: bool
) -> None:
    """Write a fresh release spec template to spec_path."""
    template = generate_release_spec_template(
        project, is_editor_available=is_editor_available
    )
    spec_path.parent.mkdir(parents=True, exist_ok=True)
    spec_path.write_text(template)


def prepare_release(
    project_dir: Path,
    temp_dir: Path,
    *,
    editor: Editor | None,
    reset: bool = False,
    logger: logging.Logger | None = None,
) -> dict[str, semver.Version] | None:
    """Execute the full release preparation flow.

    Args:
        project_dir: Root of the project to release.
        temp_dir: Directory holding the release spec between runs.
        editor: Editor to open the release spec with, or None to let the
            user edit it and re-run.
        reset: If True, discard a release spec left over from a previous
            run and generate a new one.
        logger: Logger for the diagnostic trace.

    Returns:
        Map of package name → released version, or None if the user still
        has to edit the freshly generated release spec.
    """
    logger = logger or log
    project = discover_project(project_dir, logger=logger)
    spec_path = temp_dir / RELEASE_SPEC_FILENAME

    step("Preparing release spec")
    if spec_path.exists() and not reset:
        print(f"  Reusing existing release spec: {spec_path}")
    else:
        write_release_spec_template(
            project, spec_path, is_editor_available=editor is not None
        )
        print(f"  Generated release spec: {spec_path}")
        if editor is None:
            print(
                "  Edit it to choose the packages to release, then re-run this tool."
            )
            return None
        wait_for_user_to_edit(spec_path, editor, logger=logger)

    step("Validating release spec")
    raw = read_release_spec(spec_path)
    spec = validate_release_spec(project, raw, logger=logger)
    plan = resolve_release_plan(project, spec)
    if not plan:
        print("  No packages selected for release")

    step("Updating package versions")
    bumped = update_manifests(project, plan, logger=logger)
    for name, bump in bumped.items():
        print(f"  {name}: {bump.old} → {bump.new}")

    step("Updating changelogs")
    for name, bump in bumped.items():
        package = project.releasable_packages[name]
        if update_changelog(package.path, bump.new, logger=logger):
            print(f"  {name}: {CHANGELOG_FILENAME} → [{bump.new}]")

    spec_path.unlink()
    logger.debug("Removed release spec %s", spec_path)
    return plan
