"""
md-issues - Two-way sync between GitHub issues and local markdown files.

Commands:
    pull   Fetch remote issues and update local files.
    push   Push local file changes to remote issues.

Environment:
    GITHUB_TOKEN         API token (GH_TOKEN also accepted)
    GITHUB_REPOSITORY    owner/name (defaults to the 'origin' remote)
    GITHUB_API_URL       API base URL (default: https://api.github.com)
    MDISSUES_OPEN_DIR    directory for open issues (default: issues)
    MDISSUES_CLOSED_DIR  directory for closed issues (default: issues/closed)
    MDISSUES_STATE_FILE  pull watermark file (default: .issues-sync-state)
    MDISSUES_TIMEOUT     HTTP timeout in seconds (default: 30)
    MDISSUES_VERBOSE     set to 1 for debug logging
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..adapters.config import EnvironmentConfigProvider
from ..adapters.git import GitChangeDetector, repository_from_remote
from ..adapters.github import GitHubAdapter
from ..application.sync import SyncOrchestrator
from ..core.domain.events import EventBus
from ..core.exceptions import MdIssuesError
from ..core.ports.change_detector import ChangeDetectionError
from .exit_codes import ExitCode
from .output import Console

COMMANDS = ("pull", "push")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging. Per-file progress goes through the Console instead."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdissues",
        description="A tool to two-way sync GitHub issues with local markdown files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "command",
        nargs="?",
        metavar="{pull,push}",
        help="pull: fetch remote issues; push: send local changes",
    )
    return parser


def resolve_repository(
    provider: EnvironmentConfigProvider,
    detector: GitChangeDetector,
) -> None:
    """Fill in the repository from the 'origin' remote when not configured."""
    if provider.get("repository"):
        return

    logger = logging.getLogger("main")
    try:
        url = detector.remote_url()
    except ChangeDetectionError as e:
        logger.debug(f"Could not read the origin remote: {e}")
        return

    repository = repository_from_remote(url)
    if repository:
        provider.set("repository", repository)
    else:
        logger.debug(f"Unrecognized remote URL: {url}")


def main(
    argv: Optional[Sequence[str]] = None,
    root: Optional[Path] = None,
    environ: Optional[dict[str, str]] = None,
    console: Optional[Console] = None,
) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    console = console or Console()

    if args.command not in COMMANDS:
        if args.command:
            console.error(f"Unknown command '{args.command}'")
        parser.print_help()
        return ExitCode.USAGE

    root = Path(root) if root else Path.cwd()
    provider = EnvironmentConfigProvider(root=root, environ=environ)
    setup_logging(provider.get("verbose", False) is True)

    detector = GitChangeDetector(root)
    resolve_repository(provider, detector)

    errors = provider.validate()
    if errors:
        for error in errors:
            console.error(error)
        return ExitCode.CONFIG_ERROR

    config = provider.load()
    repository = config.tracker.repository

    event_bus = EventBus()
    console.attach(event_bus)
    orchestrator = SyncOrchestrator(
        tracker=GitHubAdapter(config.tracker),
        config=config.sync,
        change_detector=detector,
        event_bus=event_bus,
        repository=repository,
    )

    console.header(f"md-issues {args.command}")
    console.info(f"Operating on repository: {repository}")

    try:
        if args.command == "pull":
            result = orchestrator.pull()
        else:
            result = orchestrator.push()
    except MdIssuesError as e:
        console.error(f"Error during {args.command}: {e}")
        return ExitCode.ERROR
    except KeyboardInterrupt:
        console.warning("Interrupted")
        return ExitCode.INTERRUPTED

    console.sync_result(result)
    return ExitCode.SUCCESS


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
