# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Version-control collaborator used by the release orchestrator.

``VersionControl`` is the narrow set of git operations a pre-release needs.
``GitRepository`` implements it on top of GitPython, which shells out to the
``git`` executable for each call.

References:
    - GitPython Documentation: https://gitpython.readthedocs.io/
    - git-fetch: https://git-scm.com/docs/git-fetch
    - git-merge --ff-only: https://git-scm.com/docs/git-merge#Documentation/git-merge.txt---ff-only
    - git-show-ref --verify: https://git-scm.com/docs/git-show-ref
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import git
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from pretag.errors import GitOperationError, NonFastForward, PushRejected

logger = logging.getLogger(__name__)


class VersionControl(Protocol):
    """Git operations needed to cut a pre-release."""

    def is_clean(self) -> bool:
        """Return True if there are no unstaged or staged changes to tracked files."""
        ...

    def current_branch(self) -> str:
        """Return the name of the checked-out branch, or ``"HEAD"`` when detached."""
        ...

    def checkout(self, branch: str) -> None:
        """Switch the working tree to ``branch``."""
        ...

    def pull_ff_only(self, remote: str, branch: str) -> None:
        """Fetch ``branch`` from ``remote`` and fast-forward the local branch."""
        ...

    def list_tags(self, pattern: str) -> list[str]:
        """List tag names matching a glob, version-sorted."""
        ...

    def create_tag(self, tag_name: str, message: str) -> None:
        """Create an annotated tag at HEAD."""
        ...

    def create_branch(self, branch: str) -> None:
        """Create a branch at HEAD without checking it out."""
        ...

    def ref_exists(self, ref: str) -> bool:
        """Return True if the fully-qualified ``ref`` exists locally."""
        ...

    def push(self, remote: str, refspecs: list[str]) -> None:
        """Push ``refspecs`` to ``remote``."""
        ...


def _git_message(error: GitCommandError) -> str:
    """Return the most useful line of output from a failed git command."""
    stderr = error.stderr.strip() if isinstance(error.stderr, str) else ""
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:") :].strip().strip("'").strip()
    return stderr or str(error)


class GitRepository:
    """GitPython-backed implementation of ``VersionControl``.

    Args:
        repo_path: Path inside the working tree of a git repository.

    Raises:
        GitOperationError: If the path is not a git working tree.
    """

    def __init__(self, repo_path: str | Path = ".") -> None:
        try:
            self._repo = git.Repo(repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise GitOperationError("open", f"'{repo_path}' is not a git repository") from e

        if self._repo.bare:
            raise GitOperationError("open", f"'{repo_path}' is a bare repository")

        logger.debug("Opened repository at %s", self._repo.working_tree_dir)

    @property
    def root(self) -> Path:
        """Top-level directory of the working tree."""
        return Path(self._repo.working_tree_dir)

    def is_clean(self) -> bool:
        return not self._repo.is_dirty(index=True, working_tree=True, untracked_files=False)

    def current_branch(self) -> str:
        if self._repo.head.is_detached:
            logger.debug("HEAD is detached at %s", self._repo.head.commit.hexsha[:7])
            return "HEAD"
        return self._repo.active_branch.name

    def checkout(self, branch: str) -> None:
        logger.debug("Checking out '%s'", branch)
        try:
            self._repo.git.checkout(branch)
        except GitCommandError as e:
            raise GitOperationError("checkout", _git_message(e)) from e

    def pull_ff_only(self, remote: str, branch: str) -> None:
        logger.debug("Fetching '%s' from '%s'", branch, remote)
        try:
            self._repo.git.fetch(remote, branch)
        except GitCommandError as e:
            raise GitOperationError("fetch", _git_message(e)) from e

        logger.debug("Fast-forwarding to FETCH_HEAD")
        try:
            self._repo.git.merge("--ff-only", "FETCH_HEAD")
        except GitCommandError as e:
            raise NonFastForward(branch, remote, _git_message(e)) from e

    def list_tags(self, pattern: str) -> list[str]:
        try:
            output = self._repo.git.tag("--list", pattern, "--sort=version:refname")
        except GitCommandError as e:
            raise GitOperationError("list_tags", _git_message(e)) from e
        tags = [line.strip() for line in output.splitlines() if line.strip()]
        logger.debug("Found %d tag(s) matching '%s'", len(tags), pattern)
        return tags

    def create_tag(self, tag_name: str, message: str) -> None:
        logger.debug("Creating annotated tag '%s' at %s", tag_name, self._repo.head.commit.hexsha[:7])
        try:
            self._repo.create_tag(tag_name, ref="HEAD", message=message)
        except GitCommandError as e:
            raise GitOperationError("create_tag", _git_message(e)) from e

    def create_branch(self, branch: str) -> None:
        logger.debug("Creating branch '%s' at HEAD", branch)
        try:
            self._repo.git.branch(branch, "HEAD")
        except GitCommandError as e:
            raise GitOperationError("create_branch", _git_message(e)) from e

    def ref_exists(self, ref: str) -> bool:
        try:
            self._repo.git.show_ref("--verify", "--quiet", ref)
        except GitCommandError:
            return False
        return True

    def push(self, remote: str, refspecs: list[str]) -> None:
        logger.debug("Pushing %s to '%s'", ", ".join(refspecs), remote)
        try:
            self._repo.git.push(remote, *refspecs)
        except GitCommandError as e:
            raise PushRejected(remote, refspecs, _git_message(e)) from e
