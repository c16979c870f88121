"""Version parsing, comparison and bumping utilities.

Versions are strict semantic versions ("1.2.3", optionally with pre-release
and build metadata). Unlike pyproject.toml versions in general, incomplete
versions such as "1.2" are rejected so that the release spec cannot silently
guess what the user meant.
"""

from __future__ import annotations

from typing import Any

import semver

from .models import BumpKind


def parse_version(version_str: str) -> semver.Version:
    """Parse a strict semantic version string.

    Raises:
        ValueError: If the string is not a major.minor.patch version.
    """
    return semver.Version.parse(version_str)


def is_valid_version(value: Any) -> bool:
    """Return True if value is a string holding a strict semantic version."""
    return isinstance(value, str) and semver.Version.is_valid(value)


def classify_diff(old: semver.Version, new: semver.Version) -> str | None:
    """Classify the difference between two versions.

    The result is one of "major", "minor", "patch", "premajor", "preminor",
    "prepatch", "prerelease", or None when both versions are equal. The
    order of the arguments does not matter.

    Examples:
        classify_diff(1.2.3, 2.0.0) → "major"
        classify_diff(1.2.3, 1.3.0-rc.1) → "preminor"
        classify_diff(2.0.0-rc.1, 2.0.0) → "major"
        classify_diff(1.2.3-rc.1, 1.2.3) → "patch"
    """
    comparison = old.compare(new)
    if comparison == 0:
        return None

    high, low = (old, new) if comparison > 0 else (new, old)

    if low.prerelease and not high.prerelease:
        # Leaving a pre-release: X.0.0-pre always graduates into a major
        if not low.patch and not low.minor:
            return "major"
        if high.patch:
            return "patch"
        if high.minor:
            return "minor"
        return "major"

    prefix = "pre" if high.prerelease else ""
    if old.major != new.major:
        return prefix + "major"
    if old.minor != new.minor:
        return prefix + "minor"
    if old.patch != new.patch:
        return prefix + "patch"
    return "prerelease"


def bump_version(version: semver.Version, kind: BumpKind) -> semver.Version:
    """Increment one component of a version.

    Lower components are reset to zero and pre-release/build metadata is
    dropped.

    Examples:
        bump_version(2.3.4, major) → 3.0.0
        bump_version(2.3.4, minor) → 2.4.0
        bump_version(2.3.4, patch) → 2.3.5
    """
    if kind is BumpKind.MAJOR:
        return version.bump_major()
    if kind is BumpKind.MINOR:
        return version.bump_minor()
    return version.bump_patch()
