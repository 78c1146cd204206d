# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Release orchestration for pre-release tags.

Drives a single run through a linear state machine:

    IDLE -> CLEAN_CHECKED -> SYNCED -> VERSION_READ -> TAG_COMPUTED
         -> TAG_EXISTS (stop, success)
         -> TAG_CREATED -> BRANCH_CREATED -> PUSHED -> DONE

Any ``PretagError`` moves the run to ERROR and propagates to the caller.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from pretag.errors import DirtyWorkingTree, PretagError
from pretag.refs import branch_ref, tag_ref
from pretag.tags import pre_tag_glob, select_tag
from pretag.version import read_version, strip_suffix

if TYPE_CHECKING:
    from pretag.git_api import VersionControl

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    """Where a run currently is."""

    IDLE = "idle"
    CLEAN_CHECKED = "clean-checked"
    SYNCED = "synced"
    VERSION_READ = "version-read"
    TAG_COMPUTED = "tag-computed"
    TAG_EXISTS = "tag-exists"
    TAG_CREATED = "tag-created"
    BRANCH_CREATED = "branch-created"
    PUSHED = "pushed"
    DONE = "done"
    ERROR = "error"

    @property
    def terminal(self) -> bool:
        return self in (Stage.TAG_EXISTS, Stage.DONE, Stage.ERROR)


@dataclass
class ReleaseConfig:
    """Settings for a run, with the defaults used when nothing is configured."""

    mainline: str = "main"
    remote: str = "origin"
    version_file: str = "VERSION"
    dry_run: bool = False


@dataclass
class ReleaseResult:
    """Outcome of a finished run."""

    stage: Stage
    version: str = ""
    base_version: str = ""
    tag: str = ""
    branch_created: bool = False
    dry_run: bool = False

    @property
    def status(self) -> str:
        if self.stage is Stage.TAG_EXISTS:
            return "exists"
        if self.dry_run:
            return "dry-run"
        if self.stage is Stage.DONE:
            return "created"
        return "failed"


class PreReleaseOrchestrator:
    """Cuts one pre-release tag and its matching branch.

    Args:
        vcs: Version-control collaborator for the repository.
        config: Run settings.
        root: Repository root; a relative version file is resolved against it.
    """

    def __init__(self, vcs: VersionControl, config: ReleaseConfig | None = None, root: Path | None = None) -> None:
        self.vcs = vcs
        self.config = config or ReleaseConfig()
        self.root = root or Path.cwd()
        self.stage = Stage.IDLE
        self.result = ReleaseResult(stage=Stage.IDLE, dry_run=self.config.dry_run)

        self._transitions: dict[Stage, Callable[[], Stage]] = {
            Stage.IDLE: self.check_clean,
            Stage.CLEAN_CHECKED: self.sync_mainline,
            Stage.SYNCED: self.load_version,
            Stage.VERSION_READ: self.compute_tag,
            Stage.TAG_COMPUTED: self.create_tag,
            Stage.TAG_CREATED: self.create_branch,
            Stage.BRANCH_CREATED: self.push,
            Stage.PUSHED: self.finish,
        }

    @property
    def version_path(self) -> Path:
        path = Path(self.config.version_file)
        if path.is_absolute():
            return path
        return self.root / path

    def run(self) -> ReleaseResult:
        """Run every remaining step until a terminal stage is reached.

        Returns:
            The result, with ``stage`` set to TAG_EXISTS or DONE.

        Raises:
            PretagError: On any failure; ``stage`` is left at ERROR.
        """
        while not self.stage.terminal:
            self.step()
        return self.result

    def step(self) -> Stage:
        """Perform the single transition out of the current stage."""
        handler = self._transitions[self.stage]
        try:
            next_stage = handler()
        except PretagError:
            self._advance(Stage.ERROR)
            raise
        return self._advance(next_stage)

    def _advance(self, stage: Stage) -> Stage:
        logger.debug("Stage %s -> %s", self.stage.value, stage.value)
        self.stage = stage
        self.result.stage = stage
        return stage

    def check_clean(self) -> Stage:
        if not self.vcs.is_clean():
            raise DirtyWorkingTree()
        return Stage.CLEAN_CHECKED

    def sync_mainline(self) -> Stage:
        mainline = self.config.mainline
        remote = self.config.remote

        current = self.vcs.current_branch()
        if current != mainline:
            if self.config.dry_run:
                logger.info("[DRY-RUN] Would switch from '%s' to '%s'", current, mainline)
            else:
                logger.info("Switching from '%s' to '%s'", current, mainline)
                self.vcs.checkout(mainline)

        if self.config.dry_run:
            logger.info("[DRY-RUN] Would fast-forward '%s' from '%s'", mainline, remote)
        else:
            self.vcs.pull_ff_only(remote, mainline)
            logger.debug("'%s' is up to date with '%s'", mainline, remote)
        return Stage.SYNCED

    def load_version(self) -> Stage:
        version = read_version(self.version_path)
        self.result.version = version
        self.result.base_version = strip_suffix(version)
        logger.debug("Base version is '%s'", self.result.base_version)
        return Stage.VERSION_READ

    def compute_tag(self) -> Stage:
        tags = self.vcs.list_tags(pre_tag_glob(self.result.base_version))
        tag_name = select_tag(self.result.version, tags)
        self.result.tag = tag_name

        if self.vcs.ref_exists(tag_ref(tag_name)):
            logger.info("Tag '%s' already exists, nothing to do", tag_name)
            return Stage.TAG_EXISTS

        logger.info("Next pre-release tag is '%s'", tag_name)
        return Stage.TAG_COMPUTED

    def create_tag(self) -> Stage:
        tag_name = self.result.tag
        if self.config.dry_run:
            logger.info("[DRY-RUN] Would create tag '%s'", tag_name)
        else:
            self.vcs.create_tag(tag_name, f"pre-release {tag_name}")
            logger.info("Created tag '%s'", tag_name)
        return Stage.TAG_CREATED

    def create_branch(self) -> Stage:
        branch = self.result.tag
        if self.vcs.ref_exists(branch_ref(branch)):
            logger.info("Branch '%s' already exists, not creating it", branch)
        elif self.config.dry_run:
            logger.info("[DRY-RUN] Would create branch '%s'", branch)
        else:
            self.vcs.create_branch(branch)
            self.result.branch_created = True
            logger.info("Created branch '%s'", branch)
        return Stage.BRANCH_CREATED

    def push(self) -> Stage:
        name = self.result.tag
        refspecs = [tag_ref(name), f"{branch_ref(name)}:{branch_ref(name)}"]
        if self.config.dry_run:
            logger.info("[DRY-RUN] Would push %s to '%s'", ", ".join(refspecs), self.config.remote)
        else:
            self.vcs.push(self.config.remote, refspecs)
        return Stage.PUSHED

    def finish(self) -> Stage:
        if self.config.dry_run:
            logger.info("[DRY-RUN] Pre-release '%s' was not created", self.result.tag)
        else:
            logger.info("Pushed pre-release tag and branch '%s' to '%s'", self.result.tag, self.config.remote)
        return Stage.DONE
