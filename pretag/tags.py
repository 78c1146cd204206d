# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Pre-release tag sequencing.

Computes the next ``<base>-pre.N`` tag from the tags a repository already
carries. Everything here is pure: callers fetch the tag names and pass them
in.

References:
    - git-tag --list: https://git-scm.com/docs/git-tag#Documentation/git-tag.txt---list
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from pretag.version import PRE_MARKER, strip_suffix

logger = logging.getLogger(__name__)

# Plain ASCII pre-release number; anything else after the marker counts as 0
NUMBER_PATTERN = re.compile(r"[0-9]+")


def _create_pre_pattern(base: str) -> re.Pattern[str]:
    """Create regex pattern for pre-release tags of a base version.

    Args:
        base: The base version (e.g., '0.6.0').

    Returns:
        Compiled regex matching {base}-pre. followed by at least one digit,
        capturing everything after the '-pre.' marker.
    """
    escaped_base = re.escape(base + PRE_MARKER)
    return re.compile(f"{escaped_base}([0-9].*)", re.DOTALL)


def pre_tag_glob(base: str) -> str:
    """Return the glob used to list candidate tags for a base version.

    Examples:
        >>> pre_tag_glob("0.6.0")
        '0.6.0-pre.*'
    """
    return f"{base}{PRE_MARKER}*"


def format_pre_tag(base: str, number: int) -> str:
    """Build the tag name for pre-release ``number`` of ``base``."""
    return f"{base}{PRE_MARKER}{number}"


def parse_pre_number(tag_name: str, base: str) -> int | None:
    """Extract the pre-release number from a tag.

    A tag whose suffix starts with a digit but is not a plain integer
    (e.g., '0.6.0-pre.3-hotfix') counts as 0 rather than failing.

    Args:
        tag_name: The tag name to parse.
        base: The base version the tag must belong to.

    Returns:
        The pre-release number, or None if the tag is not a pre-release of base.

    Examples:
        >>> parse_pre_number("0.6.0-pre.4", "0.6.0")
        4
        >>> parse_pre_number("0.6.0-pre.4-hotfix", "0.6.0")
        0
        >>> parse_pre_number("0.7.0-pre.1", "0.6.0") is None
        True
    """
    match = _create_pre_pattern(base).fullmatch(tag_name)
    if not match:
        return None

    suffix = match.group(1)
    if NUMBER_PATTERN.fullmatch(suffix):
        return int(suffix)

    logger.warning("Tag '%s' has a non-numeric pre-release suffix, counting it as 0", tag_name)
    return 0


def is_pre_tag(tag_name: str, base: str) -> bool:
    """Check if a tag is a pre-release of the given base version.

    Examples:
        >>> is_pre_tag("0.6.0-pre.0", "0.6.0")
        True
        >>> is_pre_tag("0.6.0-rc.1", "0.6.0")
        False
    """
    return parse_pre_number(tag_name, base) is not None


def find_latest_pre(base: str, tags: Iterable[str]) -> int | None:
    """Find the highest pre-release number among tags of a base version.

    Numbers compare numerically, so 'pre.10' beats 'pre.9'.

    Args:
        base: The base version (e.g., '0.6.0').
        tags: Existing tag names, in any order.

    Returns:
        The highest pre-release number, or None if no pre-release tags exist.

    Examples:
        >>> find_latest_pre("0.6.0", ["0.6.0-pre.9", "0.6.0-pre.10"])
        10
    """
    highest_pre = None

    for tag_name in tags:
        number = parse_pre_number(tag_name, base)
        if number is not None and (highest_pre is None or number > highest_pre):
            highest_pre = number

    return highest_pre


def increment_pre(current_pre: int | None) -> int:
    """Return the next pre-release number.

    Examples:
        >>> increment_pre(None)
        0
        >>> increment_pre(3)
        4
    """
    if current_pre is None:
        return 0
    return current_pre + 1


def compute_next_tag(base: str, tags: Iterable[str]) -> str:
    """Get the next pre-release tag name for a base version.

    Args:
        base: The base version, already stripped of any suffix.
        tags: Existing tag names.

    Returns:
        '{base}-pre.0' if no pre-release exists yet, otherwise
        '{base}-pre.{highest + 1}'.

    Examples:
        >>> compute_next_tag("0.6.0", [])
        '0.6.0-pre.0'
        >>> compute_next_tag("0.6.0", ["0.6.0-pre.0", "0.6.0-pre.1"])
        '0.6.0-pre.2'
    """
    latest_pre = find_latest_pre(base, tags)
    next_pre = increment_pre(latest_pre)
    return format_pre_tag(base, next_pre)


def select_tag(version: str, tags: Iterable[str]) -> str:
    """Pick the tag a run should produce for a version string.

    When the version already names a pre-release that exists as a tag, that
    tag is returned unchanged so the caller sees it exists and does nothing.
    Otherwise the next tag of the base version is computed.

    Args:
        version: The trimmed contents of the version file.
        tags: Existing tag names.

    Returns:
        The tag name to create (or that already exists).

    Examples:
        >>> select_tag("0.6.0-pre.2", ["0.6.0-pre.2"])
        '0.6.0-pre.2'
        >>> select_tag("0.6.0-rc.1", ["0.6.0-pre.2"])
        '0.6.0-pre.3'
    """
    tag_names = list(tags)
    base = strip_suffix(version)

    if version in tag_names and is_pre_tag(version, base):
        logger.debug("Version '%s' already names an existing pre-release tag", version)
        return version

    return compute_next_tag(base, tag_names)
