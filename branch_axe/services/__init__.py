"""Services used by branch-axe."""

from .branch_service import BranchService
from .branch_status_service import BranchStatusService
from .display_service import DisplayService
from .git_service import GitClient, GitService
from .github_service import GhCliTracker, GitHubApiTracker, PullRequestTracker, create_tracker

__all__ = [
    "BranchService",
    "BranchStatusService",
    "DisplayService",
    "GitClient",
    "GitService",
    "GhCliTracker",
    "GitHubApiTracker",
    "PullRequestTracker",
    "create_tracker",
]
