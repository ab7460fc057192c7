"""Custom exceptions for branch-axe"""

from typing import Optional


class BranchAxeError(Exception):
    """Base exception for all branch-axe errors."""
    pass


class GitOperationError(BranchAxeError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class InvalidRepositoryError(GitOperationError):
    """Exception raised when a path is not a usable git repository."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__("open_repository", message=message or f"not a git repository: {path}")


class GitHubAPIError(BranchAxeError):
    """Exception raised when a pull request lookup fails."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"GitHub operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)
