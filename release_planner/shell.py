"""Shell and git utilities.

Provides simple wrappers around subprocess calls for running external
commands and git operations, plus output formatting helpers. Every failure
is raised as SubprocessError so callers only have one exception to handle.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from .errors import SubprocessError


def run_command(
    executable: str,
    args: Sequence[str] = (),
    *,
    cwd: Path | str | None = None,
    inherit_stdio: bool = False,
) -> str:
    """Run an external command and return its stripped stdout.

    Args:
        executable: Program to run (looked up on PATH).
        args: Arguments to pass to the program.
        cwd: Working directory for the command.
        inherit_stdio: If True, the command shares this process's terminal
            (needed for editors) and an empty string is returned.

    Raises:
        SubprocessError: If the command cannot be started or exits non-zero.
    """
    command = [executable, *args]
    try:
        if inherit_stdio:
            subprocess.run(command, cwd=cwd, check=True)
            return ""
        result = subprocess.run(
            command, cwd=cwd, capture_output=True, text=True, check=True
        )
    except subprocess.CalledProcessError as error:
        raise SubprocessError(
            f"Command failed with exit code {error.returncode}: {' '.join(command)}",
            command=command,
            exit_code=error.returncode,
            stderr=(error.stderr or "").strip(),
        ) from error
    except OSError as error:
        raise SubprocessError(
            f"Could not run {executable}: {error}", command=command
        ) from error
    return result.stdout.strip()


def git(*args: str, cwd: Path | str | None = None) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "tag", "--list").
        cwd: Repository to run in; defaults to the current directory.
    """
    return run_command("git", args, cwd=cwd)


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate major phases of the release flow in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
