# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Branch and remote names, and the fully-qualified refs pretag hands to git.

References:
    - git-check-ref-format: https://git-scm.com/docs/git-check-ref-format
"""

from __future__ import annotations

import logging

import git
from git.exc import GitCommandError

logger = logging.getLogger(__name__)


def validate_ref_name(name: str) -> bool:
    """Check that a configured mainline or remote name is usable as a branch name.

    The decision is left to ``git check-ref-format --branch`` so pretag
    accepts exactly the names git itself would, including rules such as no
    ``.lock`` suffix and no leading dash.

    Args:
        name: The MASTER or ORIGIN value to check.

    Returns:
        True if git accepts the name, False otherwise.

    Examples:
        >>> validate_ref_name("release/next")
        True
        >>> validate_ref_name("bad..name")
        False
    """
    if not name:
        logger.warning("Empty ref name provided")
        return False

    try:
        git.Git().check_ref_format("--branch", name)
    except GitCommandError:
        logger.warning("'%s' is not a valid branch or remote name", name)
        return False
    return True


def tag_ref(tag_name: str) -> str:
    """Return the fully-qualified ref of a tag.

    Tags and branches created by pretag share a name, so every ref handed to
    git is spelled out in full.

    Examples:
        >>> tag_ref("0.6.0-pre.0")
        'refs/tags/0.6.0-pre.0'
    """
    return f"refs/tags/{tag_name}"


def branch_ref(branch_name: str) -> str:
    """Return the fully-qualified ref of a local branch.

    Examples:
        >>> branch_ref("0.6.0-pre.0")
        'refs/heads/0.6.0-pre.0'
    """
    return f"refs/heads/{branch_name}"
