"""Turn a validated release spec into concrete target versions."""

from __future__ import annotations

import semver

from .models import BumpKind, Project, ReleaseSpecification
from .versions import bump_version


def resolve_release_plan(
    project: Project, spec: ReleaseSpecification
) -> dict[str, semver.Version]:
    """Compute the version each package in the spec will be released as.

    Bump kinds are applied to the package's current version; exact versions
    are used as they are. Performs no I/O.

    Example:
        current 2.3.4 with "major" → 3.0.0, with "9.9.9" → 9.9.9

    Returns:
        Map of package name → target version, in the spec's order.
    """
    plan: dict[str, semver.Version] = {}
    for name, specifier in spec.packages.items():
        if isinstance(specifier, BumpKind):
            current = project.releasable_packages[name].current_version
            plan[name] = bump_version(current, specifier)
        else:
            plan[name] = specifier
    return plan
