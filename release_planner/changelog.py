"""Moving unreleased changelog entries under the version being released."""

from __future__ import annotations

import logging
import re
from pathlib import Path

log = logging.getLogger(__name__)

CHANGELOG_FILENAME = "CHANGELOG.md"

_UNRELEASED_HEADING = re.compile(r"^## \[Unreleased\][ \t]*$", re.IGNORECASE | re.MULTILINE)


def update_changelog(
    package_dir: Path, new_version: str, *, logger: logging.Logger | None = None
) -> bool:
    """Retitle the `## [Unreleased]` section of a package's changelog.

    Only the first such heading is replaced, so running this again after a
    release is a no-op.

    Example:
        "## [Unreleased]" → "## [2.0.0]"

    Returns:
        True if the changelog was rewritten, False if the package has no
        CHANGELOG.md or no unreleased section.
    """
    logger = logger or log
    changelog_path = package_dir / CHANGELOG_FILENAME
    if not changelog_path.is_file():
        logger.debug("No changelog at %s", changelog_path)
        return False

    content = changelog_path.read_text()
    updated, count = _UNRELEASED_HEADING.subn(f"## [{new_version}]", content, count=1)
    if not count:
        logger.debug("No unreleased section in %s", changelog_path)
        return False

    changelog_path.write_text(updated)
    return True
