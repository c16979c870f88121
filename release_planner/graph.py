"""Dependency graph queries over a project's releasable packages.

Edges run from a package to each package it lists in its dependencies or
peer dependencies. Only edges between releasable packages (the workspace
members, or the root package of a single-package project) are considered;
external packages never take part in release checks. Cycles are allowed.
"""

from __future__ import annotations

from .models import Project


def dependencies_of(project: Project, name: str) -> list[str]:
    """Return the releasable packages that name depends on.

    Dependencies come first, then peer dependencies, each in manifest
    order, without duplicates. A package listing itself is ignored.

    Example:
        If A depends on B and external-lib, and peer-depends on C:
        dependencies_of(project, "a") → ["b", "c"]
    """
    packages = project.releasable_packages
    package = packages[name]
    result: list[str] = []
    for dep in [*package.dependencies, *package.peer_dependencies]:
        if dep in packages and dep != name and dep not in result:
            result.append(dep)
    return result


def dependents_of(project: Project, name: str) -> list[str]:
    """Return the other releasable packages that depend on name.

    Results follow the order of project.releasable_packages.

    Example:
        If B and C both depend on A:
        dependents_of(project, "a") → ["b", "c"]
    """
    return [
        other
        for other, package in project.releasable_packages.items()
        if other != name
        and (name in package.dependencies or name in package.peer_dependencies)
    ]


def changed_packages(project: Project) -> list[str]:
    """Return the releasable packages with changes since their latest release."""
    return [
        name
        for name, package in project.releasable_packages.items()
        if package.has_changes_since_latest_release
    ]
