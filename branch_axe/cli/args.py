"""Command-line argument parsing for branch-axe."""

import argparse
from typing import List, Optional

from branch_axe.__version__ import __version__
from branch_axe.constants import MAX_WORKERS, TRACKERS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its list and clean subcommands."""
    parser = argparse.ArgumentParser(
        prog="branch-axe",
        description="Find and delete local branches whose GitHub pull requests were squash-merged",
        epilog="PR lookups use the GitHub CLI (gh) by default. "
        "With --tracker api, set GITHUB_TOKEN instead.",
    )
    parser.add_argument("--version", action="version", version=f"branch-axe {__version__}")
    parser.add_argument(
        "-r", "--repo", default=".", help="Repository path (defaults to current directory)"
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--tracker",
        choices=TRACKERS,
        default="gh",
        help="How to look up pull requests: gh CLI or GitHub REST API (default: gh)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        default=MAX_WORKERS,
        help=f"Maximum concurrent PR lookups (default: {MAX_WORKERS})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        default=60.0,
        help="Time limit for a single PR lookup (default: 60)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    list_parser = subparsers.add_parser(
        "list", help="List local branches that were squash-merged on GitHub"
    )
    list_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show PR numbers and titles"
    )
    list_parser.add_argument(
        "-a", "--all", action="store_true", help="Show every branch grouped by PR status"
    )

    clean_parser = subparsers.add_parser(
        "clean", help="Delete local branches that were squash-merged on GitHub"
    )
    clean_parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without actually deleting",
    )
    clean_parser.add_argument("-f", "--force", action="store_true", help="Skip confirmation prompt")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
