"""Finding and launching the editor used to fill in the release spec."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from .errors import SubprocessError
from .shell import run_command

log = logging.getLogger(__name__)


class Editor(BaseModel):
    """An executable that can edit a file and exits when the user is done.

    Attributes:
        path: Resolved path to the executable.
        args: Arguments placed before the file to edit.
    """

    path: str
    args: list[str] = Field(default_factory=list)


def determine_editor(
    env: Mapping[str, str] | None = None, *, logger: logging.Logger | None = None
) -> Editor | None:
    """Pick the editor to open the release spec with.

    Uses $EDITOR if it is set and resolves to an executable, then falls back
    to VS Code (`code --wait`). Returns None if neither is usable, in which
    case the user edits the file on their own and re-runs the tool.
    """
    logger = logger or log
    env = os.environ if env is None else env

    editor_command = env.get("EDITOR", "").strip()
    if editor_command:
        try:
            executable, *args = shlex.split(editor_command)
        except ValueError as error:
            logger.debug("Could not parse $EDITOR %r: %s", editor_command, error)
        else:
            resolved = shutil.which(executable)
            if resolved:
                return Editor(path=resolved, args=args)
            logger.debug("$EDITOR is set to %r but it could not be found", executable)

    code = shutil.which("code")
    if code:
        return Editor(path=code, args=["--wait"])

    logger.debug("Could not find an editor to use")
    return None


def wait_for_user_to_edit(
    path: Path, editor: Editor, *, logger: logging.Logger | None = None
) -> None:
    """Open path in the editor and block until the editor exits.

    Raises:
        SubprocessError: If the editor fails or exits non-zero (including
            being killed by the user).
    """
    logger = logger or log
    logger.debug("Opening release spec %s with editor %s", path, editor.path)
    print("Waiting for the release spec to be edited...", end="", flush=True)
    try:
        run_command(editor.path, [*editor.args, str(path)], inherit_stdio=True)
    except SubprocessError as error:
        raise SubprocessError(
            "Encountered an error while waiting for the release spec to be edited.",
            command=error.command,
            exit_code=error.exit_code,
            stderr=error.stderr,
        ) from error
    finally:
        # Clear the waiting message
        print("\r\033[K", end="", flush=True)
