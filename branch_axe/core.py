"""Core functionality for branch-axe"""

from typing import List, Optional, Tuple, Union

from rich.prompt import Confirm

from branch_axe.config import Config
from branch_axe.logging_config import get_logger
from branch_axe.progress import ProgressReporter, RichProgressReporter
from branch_axe.services.branch_service import BranchService
from branch_axe.services.display_service import DisplayService
from branch_axe.services.git_service import GitClient, GitService
from branch_axe.services.github_service import PullRequestTracker, create_tracker

logger = get_logger(__name__)


class BranchAxe:
    """Main class for finding and removing squash-merged branches."""

    def __init__(
        self,
        config: Union[Config, dict],
        git_client: Optional[GitClient] = None,
        tracker: Optional[PullRequestTracker] = None,
        display: Optional[DisplayService] = None,
        reporter: Optional[ProgressReporter] = None,
    ):
        """Initialize BranchAxe.

        Args:
            config: Configuration dict or Config object
            git_client: Git adapter, defaults to GitService
            tracker: PR lookup adapter, defaults to the one selected in config
            display: Output service, defaults to a console DisplayService
            reporter: Progress reporter, defaults to a rich spinner
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        self.repo_path = self.config.repo_path
        self.git_client = git_client or GitService()
        self.tracker = tracker or create_tracker(self.config)
        self.display = display or DisplayService(no_color=self.config.no_color)
        self.reporter = reporter or RichProgressReporter(no_color=self.config.no_color)
        self.branch_service = BranchService(self.git_client, self.tracker, self.config)

        logger.debug(f"Using tracker: {type(self.tracker).__name__}")

    def validate(self) -> None:
        """Make sure the configured path is a git repository.

        Raises:
            InvalidRepositoryError: If it is not
        """
        self.git_client.validate_repository(self.repo_path)

    def list_branches(self, show_all: bool = False, verbose: bool = False) -> None:
        """Print merged branches, or every branch by status when show_all is set."""
        if show_all:
            statuses = self.branch_service.list_all_branch_statuses(self.repo_path, self.reporter)
            self.display.display_statuses(statuses, verbose=verbose)
            return

        merged = self.branch_service.list_merged_branches(self.repo_path, self.reporter)
        if not merged:
            self.display.print_info("No squash-merged branches found.")
            return
        self.display.display_merged(merged, verbose=verbose)

    def clean(self, dry_run: bool = False, force: bool = False) -> Tuple[List[str], List[str]]:
        """Delete merged branches after confirmation.

        Args:
            dry_run: Only show what would be deleted
            force: Skip the confirmation prompt

        Returns:
            Tuple of (deleted, failed) branch names
        """
        merged = self.branch_service.list_merged_branches(self.repo_path, self.reporter)
        if not merged:
            self.display.print_info("No squash-merged branches found to delete.")
            return [], []

        to_delete = sorted(branch.name for branch in merged)
        self.display.display_merged(merged)
        self.display.print_plain()

        if dry_run:
            self.display.print_warning("(Dry run - no branches were deleted)")
            return [], []

        if not force and not self._confirm_deletion():
            self.display.print_warning("Cancelled.")
            return [], []

        deleted, failed = self.branch_service.delete_branches(
            self.repo_path, to_delete, self.reporter
        )

        for branch_name in deleted:
            self.display.print_success(f"Deleted: {branch_name}")
        for branch_name in failed:
            self.display.print_error(f"Failed to delete {branch_name}")

        summary = f"Deleted {len(deleted)} branch(es)"
        if failed:
            summary += f" ({len(failed)} failed)"
        self.display.print_header(summary)

        return deleted, failed

    def _confirm_deletion(self) -> bool:
        """Ask before deleting; a closed stdin counts as "no"."""
        try:
            return Confirm.ask("Delete these branches?", default=False, console=self.display.console)
        except EOFError:
            self.display.print_plain()
            return False

    def close(self) -> None:
        """Release tracker resources."""
        close = getattr(self.tracker, "close", None)
        if close is not None:
            close()
