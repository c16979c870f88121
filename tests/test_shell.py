"""Tests for release_planner.shell and release_planner.repo."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from release_planner.errors import SubprocessError
from release_planner.repo import get_tag_names, has_changes_since_tag, release_tag_for
from release_planner.shell import git, run_command


class TestRunCommand:
    @patch("release_planner.shell.subprocess.run")
    def test_returns_stripped_stdout(self, mock_run: MagicMock) -> None:
        mock_run.return_value = subprocess.CompletedProcess(
            ["echo"], 0, stdout="  hello\n", stderr=""
        )

        assert run_command("echo", ["hello"], cwd="/repo") == "hello"
        mock_run.assert_called_once_with(
            ["echo", "hello"], cwd="/repo", capture_output=True, text=True, check=True
        )

    @patch("release_planner.shell.subprocess.run")
    def test_non_zero_exit(self, mock_run: MagicMock) -> None:
        failure = subprocess.CalledProcessError(
            128, ["git", "diff"], output="", stderr="fatal: bad revision\n"
        )
        mock_run.side_effect = failure

        with pytest.raises(SubprocessError, match="exit code 128") as exc_info:
            run_command("git", ["diff"])

        error = exc_info.value
        assert error.command == ["git", "diff"]
        assert error.exit_code == 128
        assert error.stderr == "fatal: bad revision"
        assert error.__cause__ is failure

    @patch("release_planner.shell.subprocess.run")
    def test_missing_executable(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = FileNotFoundError("no such file")

        with pytest.raises(SubprocessError, match="Could not run nope") as exc_info:
            run_command("nope")

        assert exc_info.value.exit_code is None

    @patch("release_planner.shell.subprocess.run")
    def test_inherit_stdio(self, mock_run: MagicMock) -> None:
        assert run_command("vim", ["file"], inherit_stdio=True) == ""
        mock_run.assert_called_once_with(["vim", "file"], cwd=None, check=True)


class TestGit:
    @patch("release_planner.shell.run_command")
    def test_runs_git(self, mock_run_command: MagicMock) -> None:
        mock_run_command.return_value = "main"

        assert git("branch", "--show-current", cwd="/repo") == "main"
        mock_run_command.assert_called_once_with(
            "git", ("branch", "--show-current"), cwd="/repo"
        )


class TestReleaseTagFor:
    def test_workspace_package(self) -> None:
        assert release_tag_for("pkg-a", "1.2.3", is_workspace_package=True) == "pkg-a/v1.2.3"

    def test_root_package(self) -> None:
        assert release_tag_for("solo", "1.2.3", is_workspace_package=False) == "v1.2.3"


class TestHasChangesSinceTag:
    @patch("release_planner.repo.git")
    def test_get_tag_names(self, mock_git: MagicMock) -> None:
        mock_git.return_value = "a/v1.0.0\nb/v2.0.0"
        assert get_tag_names(Path("/repo")) == ["a/v1.0.0", "b/v2.0.0"]

    @patch("release_planner.repo.git")
    def test_no_tags(self, mock_git: MagicMock) -> None:
        mock_git.return_value = ""
        assert get_tag_names(Path("/repo")) == []

    @patch("release_planner.repo.git")
    def test_unreleased_version_counts_as_changed(self, mock_git: MagicMock) -> None:
        mock_git.return_value = "a/v0.9.0"

        assert has_changes_since_tag(Path("/repo"), Path("/repo/packages/a"), "a/v1.0.0")
        # Only the tag lookup ran, no diff
        assert mock_git.call_count == 1

    @patch("release_planner.repo.git")
    def test_changed_files(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = ["a/v1.0.0", "packages/a/src/a/core.py"]

        assert has_changes_since_tag(Path("/repo"), Path("/repo/packages/a"), "a/v1.0.0")
        mock_git.assert_called_with(
            "diff", "--name-only", "a/v1.0.0", "HEAD", "--", "packages/a", cwd=Path("/repo")
        )

    @patch("release_planner.repo.git")
    def test_no_changed_files(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = ["a/v1.0.0", ""]

        assert not has_changes_since_tag(
            Path("/repo"), Path("/repo/packages/a"), "a/v1.0.0"
        )

    @patch("release_planner.repo.git")
    def test_root_package_diffs_whole_repo(self, mock_git: MagicMock) -> None:
        mock_git.side_effect = ["v1.0.0", "README.md"]

        assert has_changes_since_tag(Path("/repo"), Path("/repo"), "v1.0.0")
        mock_git.assert_called_with(
            "diff", "--name-only", "v1.0.0", "HEAD", "--", ".", cwd=Path("/repo")
        )

    @patch("release_planner.shell.subprocess.run")
    def test_git_failure_propagates(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = subprocess.CalledProcessError(128, ["git"], stderr="")

        with pytest.raises(SubprocessError):
            has_changes_since_tag(Path("/repo"), Path("/repo/packages/a"), "a/v1.0.0")
