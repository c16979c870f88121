"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import semver
import tomlkit

from release_planner.models import Package, Project


def make_package(
    name: str,
    version: str = "1.0.0",
    *,
    deps: list[str] | None = None,
    peer_deps: list[str] | None = None,
    changed: bool = True,
) -> Package:
    """Build a Package without touching the filesystem."""
    return Package(
        name=name,
        path=Path("packages") / name,
        current_version=semver.Version.parse(version),
        dependencies={dep: ">=1.0" for dep in deps or []},
        peer_dependencies={dep: ">=1.0" for dep in peer_deps or []},
        has_changes_since_latest_release=changed,
    )


def make_project(*packages: Package) -> Project:
    """Build a monorepo Project out of the given workspace packages."""
    return Project(
        directory=Path("."),
        root_package=make_package("monorepo", changed=False),
        workspace_packages={p.name: p for p in packages},
        is_monorepo=True,
    )


@pytest.fixture
def tmp_pyproject(tmp_path: Path) -> Path:
    """Create a temporary pyproject.toml file."""
    content = """\
[project]
name = "test-package"
version = "1.0.0"
dependencies = [
    "requests>=2.0",
    "internal-dep>=1.0",
]

[project.optional-dependencies]
dev = ["pytest>=8.0", "another-internal>=0.5"]

[dependency-groups]
test = ["pytest>=8.0", "group-internal>=0.1"]
"""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(content)
    return pyproject


@pytest.fixture
def sample_toml_doc() -> tomlkit.TOMLDocument:
    """Create a sample TOML document."""
    content = """\
[project]
name = "My_Package"
version = "2.0.0"
dependencies = ["click>=8.0", "pydantic>=2.0"]

[project.optional-dependencies]
dev = ["pytest>=8.0"]
docs = ["sphinx>=7.0"]

[dependency-groups]
test = ["hypothesis>=6.0"]

[tool.uv.workspace]
members = ["packages/*", "libs/*"]
"""
    return tomlkit.parse(content)


WriteWorkspace = Callable[[dict[str, str]], Path]


@pytest.fixture
def write_workspace(tmp_path: Path) -> WriteWorkspace:
    """Return a function that writes a uv workspace under tmp_path.

    The argument maps a member directory name (under packages/) to the body
    of its pyproject.toml [project] table.
    """

    def _write(members: dict[str, str]) -> Path:
        (tmp_path / "pyproject.toml").write_text(
            '[project]\nname = "monorepo"\nversion = "1.0.0"\n\n'
            '[tool.uv.workspace]\nmembers = ["packages/*"]\n'
        )
        for directory, body in members.items():
            package_dir = tmp_path / "packages" / directory
            package_dir.mkdir(parents=True)
            (package_dir / "pyproject.toml").write_text(f"[project]\n{body}\n")
        return tmp_path

    return _write
