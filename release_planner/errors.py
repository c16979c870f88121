"""Exceptions raised while preparing a release.

Each failure category the user can hit gets its own exception class so the
CLI can map it to a distinct exit code and message.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .release_spec import ValidationProblem


class ReleasePlannerError(Exception):
    """Base class for all errors raised by release-planner."""


class ManifestError(ReleasePlannerError):
    """A package's pyproject.toml is missing or invalid."""


class EmptyReleaseSetError(ReleasePlannerError):
    """No package has changed since its latest release."""


class MalformedDocumentError(ReleasePlannerError):
    """The edited release spec is not valid YAML or has the wrong shape."""


class ReleaseSpecificationError(ReleasePlannerError):
    """The release spec parsed fine but failed one or more validation rules.

    Attributes:
        problems: Every problem found, in document order.
        path: Path to the release spec file the user should fix.
    """

    def __init__(
        self, message: str, problems: Sequence[ValidationProblem], path: Path
    ) -> None:
        super().__init__(message)
        self.problems = list(problems)
        self.path = path


class SubprocessError(ReleasePlannerError):
    """An external command (git, the editor) failed.

    Attributes:
        command: The command line that was run.
        exit_code: Exit status, or None if the process never started.
        stderr: Captured standard error, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
