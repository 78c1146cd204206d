# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Pre-release tag sequencer - Core modules."""

from pretag.git_api import GitRepository, VersionControl
from pretag.release import PreReleaseOrchestrator, ReleaseConfig, ReleaseResult, Stage
from pretag.tags import compute_next_tag
from pretag.version import strip_suffix

__all__ = [
    "GitRepository",
    "PreReleaseOrchestrator",
    "ReleaseConfig",
    "ReleaseResult",
    "Stage",
    "VersionControl",
    "compute_next_tag",
    "strip_suffix",
]
