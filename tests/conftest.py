"""Shared pytest fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import git
import pytest

from pretag.git_api import VersionControl


@pytest.fixture
def mock_vcs() -> MagicMock:
    """Create a mock VersionControl for unit tests.

    Defaults describe a clean checkout of 'main' with no tags.
    """
    vcs = MagicMock(spec=VersionControl)
    vcs.is_clean.return_value = True
    vcs.current_branch.return_value = "main"
    vcs.list_tags.return_value = []
    vcs.ref_exists.return_value = False
    return vcs


@pytest.fixture
def version_root(tmp_path: Path) -> Path:
    """Directory holding a VERSION file with '0.6.0'."""
    (tmp_path / "VERSION").write_text("0.6.0\n")
    return tmp_path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of configuration defaults."""
    for name in ("MASTER", "ORIGIN", "PRETAG_DEBUG", "PRETAG_DRY_RUN", "GITHUB_OUTPUT"):
        monkeypatch.delenv(name, raising=False)


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> None:
    """Write a file into the working tree and commit it."""
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


def configure_identity(repo: git.Repo) -> None:
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
        config.set_value("tag", "gpgSign", "false")
        config.set_value("commit", "gpgSign", "false")


@pytest.fixture
def git_remote(tmp_path: Path) -> git.Repo:
    """Create a bare repository acting as the 'origin' remote."""
    return git.Repo.init(tmp_path / "remote.git", bare=True)


@pytest.fixture
def git_repo(tmp_path: Path, git_remote: git.Repo) -> git.Repo:
    """Create a real working repository on 'main' that tracks git_remote.

    The initial commit holds a VERSION file with '0.6.0'.
    """
    repo_path = tmp_path / "work"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)
    configure_identity(repo)

    commit_file(repo, "VERSION", "0.6.0\n", "Initial commit")
    repo.git.branch("-M", "main")

    repo.create_remote("origin", git_remote.git_dir)
    repo.git.push("-u", "origin", "main")
    return repo


@pytest.fixture
def other_clone(tmp_path: Path, git_remote: git.Repo, git_repo: git.Repo) -> git.Repo:
    """A second clone of the remote, for pushing commits behind git_repo's back."""
    clone = git.Repo.clone_from(git_remote.git_dir, tmp_path / "other", branch="main")
    configure_identity(clone)
    return clone
