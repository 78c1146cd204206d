# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Version file handling.

Reads the base version a pre-release is cut from and strips any pre-release
or release-candidate suffix it already carries.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pretag.errors import EmptyVersionFile, MissingVersionFile, VersionFileError

logger = logging.getLogger(__name__)

PRE_MARKER = "-pre."
RC_MARKER = "-rc."


def _strip_marker(version: str, marker: str) -> str:
    index = version.rfind(marker)
    if index == -1:
        return version
    return version[:index]


def strip_suffix(version: str) -> str:
    """Return the base version with any ``-pre.*`` then ``-rc.*`` suffix removed.

    The pre-release marker is checked first, so ``1.0.0-rc.1-pre.2`` reduces
    all the way to ``1.0.0``. Strings without either marker are returned
    unchanged.

    Args:
        version: Raw version string (e.g., '0.6.0-pre.3').

    Returns:
        The base version (e.g., '0.6.0').

    Examples:
        >>> strip_suffix("0.6.0-pre.3")
        '0.6.0'
        >>> strip_suffix("0.6.0-rc.2")
        '0.6.0'
        >>> strip_suffix("0.6.0")
        '0.6.0'
    """
    base = _strip_marker(version, PRE_MARKER)
    base = _strip_marker(base, RC_MARKER)
    if base != version:
        logger.debug("Stripped '%s' to base version '%s'", version, base)
    return base


def read_version(path: Path) -> str:
    """Read and trim the version file.

    Args:
        path: Location of the version file.

    Returns:
        The version string with surrounding whitespace removed.

    Raises:
        MissingVersionFile: If the file does not exist.
        VersionFileError: If the file cannot be read or is not UTF-8.
        EmptyVersionFile: If the file holds only whitespace.
    """
    if not path.is_file():
        raise MissingVersionFile(str(path))

    try:
        version = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise VersionFileError(str(path), str(e)) from e

    if not version:
        raise EmptyVersionFile(str(path))

    logger.debug("Read version '%s' from %s", version, path)
    return version
