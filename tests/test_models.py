"""Tests for release_planner.models."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest
import semver

from conftest import make_package, make_project
from release_planner.models import (
    BumpKind,
    Project,
    ReleaseSpecification,
    VersionBump,
)


class TestPackage:
    def test_create_with_required_fields(self) -> None:
        pkg = make_package("foo", "1.0.0")
        assert pkg.name == "foo"
        assert pkg.current_version == semver.Version(1, 0, 0)
        assert pkg.has_changes_since_latest_release

    def test_is_frozen(self) -> None:
        pkg = make_package("foo")
        with pytest.raises(pydantic.ValidationError):
            pkg.name = "bar"


class TestProject:
    def test_keys_must_match_names(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="does not match"):
            Project(
                directory=Path("."),
                root_package=make_package("root"),
                workspace_packages={"other": make_package("foo")},
            )

    def test_single_package_project(self) -> None:
        project = Project(directory=Path("."), root_package=make_package("root"))
        assert project.workspace_packages == {}
        assert not project.is_monorepo

    def test_releasable_packages_of_single_package_project(self) -> None:
        root = make_package("root")
        project = Project(directory=Path("."), root_package=root)
        assert project.releasable_packages == {"root": root}

    def test_releasable_packages_of_monorepo(self) -> None:
        project = make_project(make_package("a"), make_package("b"))
        assert list(project.releasable_packages) == ["a", "b"]


class TestReleaseSpecification:
    def test_accepts_bump_kinds_and_versions(self) -> None:
        spec = ReleaseSpecification(
            packages={"a": BumpKind.MINOR, "b": semver.Version(2, 0, 0)},
            path=Path("spec.yml"),
        )
        assert spec.packages["a"] is BumpKind.MINOR
        assert spec.packages["b"] == semver.Version(2, 0, 0)


class TestVersionBump:
    def test_create(self) -> None:
        bump = VersionBump(old="1.0.0", new="1.0.1")
        assert bump.old == "1.0.0"
        assert bump.new == "1.0.1"
