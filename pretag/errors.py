# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Error types raised while cutting a pre-release.

Every error aborts the run. ``main()`` reports the message and exits with
status 1; there is no rollback and no retry.
"""

from __future__ import annotations


class PretagError(Exception):
    """Base class for all pretag failures."""

    exit_code = 1


class DirtyWorkingTree(PretagError):
    """The working tree or index has uncommitted changes."""

    def __init__(self) -> None:
        super().__init__("Working tree has uncommitted or staged changes; commit or stash them first")


class NonFastForward(PretagError):
    """The mainline branch cannot be fast-forwarded to its remote."""

    def __init__(self, branch: str, remote: str, message: str | None = None) -> None:
        self.branch = branch
        self.remote = remote
        error_msg = f"Cannot fast-forward '{branch}' from '{remote}'"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class MissingVersionFile(PretagError):
    """The version file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Version file '{path}' not found")


class EmptyVersionFile(PretagError):
    """The version file is blank after trimming whitespace."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Version file '{path}' is empty")


class VersionFileError(PretagError):
    """The version file exists but cannot be read as UTF-8 text."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot read version file '{path}': {message}")


class UnsupportedCommand(PretagError):
    """The command line did not name a supported command."""

    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        if tokens:
            super().__init__(f"Unsupported command '{' '.join(tokens)}'")
        else:
            super().__init__("No command given")


class PushRejected(PretagError):
    """The remote refused the push, or could not be reached."""

    def __init__(self, remote: str, refs: list[str], message: str | None = None) -> None:
        self.remote = remote
        self.refs = refs
        error_msg = f"Push of {', '.join(refs)} to '{remote}' failed"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class GitOperationError(PretagError):
    """Any other git command failed."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        self.operation = operation
        error_msg = f"Git operation '{operation}' failed"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)
