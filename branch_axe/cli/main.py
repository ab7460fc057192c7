"""Command-line entry point for branch-axe"""

import sys
from typing import List, Optional

from rich.console import Console

from branch_axe.cli.args import parse_args
from branch_axe.config import Config
from branch_axe.core import BranchAxe
from branch_axe.exceptions import BranchAxeError
from branch_axe.logging_config import setup_logging

console = Console(stderr=True, highlight=False)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    verbose = getattr(parsed_args, "verbose", False)

    # list --verbose only adds PR details to the output; log level follows --debug
    setup_logging(debug=parsed_args.debug)

    try:
        config = Config(
            repo_path=parsed_args.repo,
            tracker=parsed_args.tracker,
            max_workers=parsed_args.workers,
            timeout=parsed_args.timeout,
            no_color=parsed_args.no_color,
            verbose=verbose,
            debug=parsed_args.debug,
        )
    except ValueError as e:
        console.print(f"Error: {e}", style=None if parsed_args.no_color else "red", markup=False)
        return 1

    if parsed_args.debug:
        console.print("Configuration:", markup=False)
        for key, value in config.to_dict().items():
            if key == "github_token" and value:
                value = "***"
            console.print(f"  {key}: {value}", markup=False)

    axe = None
    try:
        axe = BranchAxe(config)
        axe.validate()

        if parsed_args.command == "list":
            axe.list_branches(show_all=parsed_args.all, verbose=parsed_args.verbose)
        elif parsed_args.command == "clean":
            axe.clean(dry_run=parsed_args.dry_run, force=parsed_args.force)

        return 0
    except KeyboardInterrupt:
        console.print("\nOperation cancelled by user", style=None if config.no_color else "yellow")
        return 1
    except BranchAxeError as e:
        console.print(f"Error: {e}", style=None if config.no_color else "red", markup=False)
        if parsed_args.debug:
            console.print_exception()
        return 1
    finally:
        if axe is not None:
            axe.close()


if __name__ == "__main__":
    sys.exit(main())
