# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Main entry point for pretag.

Parses the command line and environment into a ``ReleaseConfig``, opens the
repository and runs the pre-release orchestrator.

References:
    - GitHub Actions Outputs:
      https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/passing-information-between-jobs#setting-an-output-parameter
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field

from pretag.errors import PretagError, UnsupportedCommand
from pretag.git_api import GitRepository
from pretag.refs import validate_ref_name
from pretag.release import PreReleaseOrchestrator, ReleaseConfig, ReleaseResult

logger = logging.getLogger(__name__)

SUPPORTED_COMMANDS = [("version", "pre")]


@dataclass
class CliInputs:
    """Parsed command line and environment."""

    command: list[str]
    debug: bool
    repo: str
    config: ReleaseConfig = field(default_factory=ReleaseConfig)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() == "true"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pretag",
        usage="%(prog)s version pre [options]",
        description="Create the next <version>-pre.N tag and branch from the VERSION file and push them",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables (used as defaults when CLI args not provided):
  MASTER                       Mainline branch name (default: main)
  ORIGIN                       Remote name (default: origin)
  PRETAG_DEBUG                 Enable debug logging (true/false)
  PRETAG_DRY_RUN               Dry-run mode, don't change anything (true/false)

Examples:
  # Tag the next pre-release of the version in ./VERSION
  pretag version pre

  # Use a different mainline and remote
  MASTER=develop ORIGIN=upstream pretag version pre

  # See what would happen
  pretag version pre --dry-run --debug
        """,
    )

    parser.add_argument("command", nargs="*", help="Command to run; only 'version pre' is supported")
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_flag("PRETAG_DEBUG"),
        help="Enable debug logging",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=_env_flag("PRETAG_DRY_RUN"),
        help="Dry-run mode - report what would be done without touching the repository",
    )
    parser.add_argument(
        "--mainline",
        default=os.environ.get("MASTER", "main"),
        help="Branch pre-releases are cut from (default: from MASTER env or 'main')",
    )
    parser.add_argument(
        "--remote",
        default=os.environ.get("ORIGIN", "origin"),
        help="Remote to pull from and push to (default: from ORIGIN env or 'origin')",
    )
    parser.add_argument(
        "--version-file",
        default="VERSION",
        help="Version file, relative to the repository root (default: VERSION)",
    )
    parser.add_argument(
        "--repo",
        default=".",
        help="Path inside the repository to release (default: current directory)",
    )
    return parser


def parse_inputs(args: list[str] | None = None) -> CliInputs:
    """Parse CLI arguments, falling back to environment variables.

    Args:
        args: Argument list. If None, uses sys.argv[1:].

    Returns:
        CliInputs with parsed values.
    """
    parser = build_parser()
    parsed = parser.parse_args(args if args is not None else sys.argv[1:])

    if not validate_ref_name(parsed.mainline):
        logger.error(
            "Invalid mainline branch '%s': rejected by git check-ref-format --branch",
            parsed.mainline,
        )
        sys.exit(1)

    if not validate_ref_name(parsed.remote):
        logger.error(
            "Invalid remote '%s': rejected by git check-ref-format --branch",
            parsed.remote,
        )
        sys.exit(1)

    return CliInputs(
        command=parsed.command,
        debug=parsed.debug,
        repo=parsed.repo,
        config=ReleaseConfig(
            mainline=parsed.mainline,
            remote=parsed.remote,
            version_file=parsed.version_file,
            dry_run=parsed.dry_run,
        ),
    )


def check_command(command: list[str]) -> None:
    """Raise UnsupportedCommand unless the command is ``version pre``."""
    if tuple(command) not in SUPPORTED_COMMANDS:
        raise UnsupportedCommand(command)


def configure_logging(debug: bool) -> None:
    """Configure logging based on debug flag.

    Args:
        debug: If True, enable DEBUG level logging.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def set_outputs(result: ReleaseResult) -> None:
    """Append the result to the GITHUB_OUTPUT file when running in Actions.

    Args:
        result: Finished run.
    """
    output_file = os.environ.get("GITHUB_OUTPUT", "")
    if not output_file:
        logger.debug("GITHUB_OUTPUT not set, outputs will not be written")
        return

    with open(output_file, "a") as f:
        f.write(f"tag={result.tag}\n")
        f.write(f"base-version={result.base_version}\n")
        f.write(f"status={result.status}\n")

    logger.debug("Set outputs: tag=%s, status=%s", result.tag, result.status)


def main(args: list[str] | None = None) -> int:
    """Run pretag and return the process exit code."""
    inputs = parse_inputs(args)
    configure_logging(inputs.debug)

    try:
        check_command(inputs.command)
    except UnsupportedCommand as e:
        build_parser().print_usage(sys.stderr)
        logger.error("%s", e)
        return e.exit_code

    try:
        repo = GitRepository(inputs.repo)
        orchestrator = PreReleaseOrchestrator(repo, inputs.config, root=repo.root)
        result = orchestrator.run()
    except PretagError as e:
        logger.error("%s", e)
        return e.exit_code

    set_outputs(result)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
