"""CLI entry point for release-planner."""

from __future__ import annotations

import logging
import re
import tempfile
from pathlib import Path

import click

from release_planner.editor import determine_editor
from release_planner.errors import (
    EmptyReleaseSetError,
    MalformedDocumentError,
    ManifestError,
    ReleasePlannerError,
    ReleaseSpecificationError,
    SubprocessError,
)
from release_planner.pipeline import prepare_release

# Distinct exit code per failure category (click itself uses 1 and 2)
EXIT_CODES: dict[type[ReleasePlannerError], int] = {
    ManifestError: 3,
    EmptyReleaseSetError: 4,
    MalformedDocumentError: 5,
    ReleaseSpecificationError: 6,
    SubprocessError: 7,
}


class ReleaseFailed(click.ClickException):
    """A release-planner error, reported with its category's exit code."""

    def __init__(self, error: ReleasePlannerError) -> None:
        super().__init__(str(error))
        self.exit_code = next(
            (code for cls, code in EXIT_CODES.items() if isinstance(error, cls)), 1
        )


class ClickEchoHandler(logging.Handler):
    """Write log records to whatever click considers stderr at emit time."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool) -> logging.Logger:
    """Send the package's log records to stderr, leaving the root logger alone."""
    logger = logging.getLogger("release_planner")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    if not any(isinstance(h, ClickEchoHandler) for h in logger.handlers):
        handler = ClickEchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger


def default_temp_directory(project_dir: Path) -> Path:
    """Return a per-project directory under the system temp dir.

    Example:
        /home/me/src/my-repo → /tmp/release-planner/home-me-src-my-repo
    """
    slug = re.sub(r"[^A-Za-z0-9._-]+", "-", str(project_dir.resolve())).strip("-")
    return Path(tempfile.gettempdir()) / "release-planner" / slug


@click.command()
@click.version_option(package_name="release-planner")
@click.option(
    "--project-directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    envvar="RELEASE_PLANNER_PROJECT_DIRECTORY",
    help="Root of the project to release.",
)
@click.option(
    "--temp-directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar="RELEASE_PLANNER_TEMP_DIRECTORY",
    help="Where to keep the release spec between runs. "
    "[default: <system temp>/release-planner/<project>]",
)
@click.option(
    "--reset/--no-reset",
    default=False,
    show_default=True,
    help="Discard a release spec left over from a previous run.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log diagnostic output.")
def cli(
    project_directory: Path,
    temp_directory: Path | None,
    reset: bool,
    verbose: bool,
) -> None:
    """Prepare a release by bumping the versions of the packages you pick."""
    logger = configure_logging(verbose)

    temp_dir = temp_directory or default_temp_directory(project_directory)
    try:
        plan = prepare_release(
            project_directory,
            temp_dir,
            editor=determine_editor(logger=logger),
            reset=reset,
            logger=logger,
        )
    except ReleasePlannerError as error:
        raise ReleaseFailed(error) from error

    if plan is not None:
        click.echo()
        click.echo(f"✓ Prepared release of {len(plan)} package(s).")
