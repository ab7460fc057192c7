"""Git operations service"""
from typing import List, Protocol

import git

from branch_axe.exceptions import GitOperationError, InvalidRepositoryError
from branch_axe.logging_config import get_logger

logger = get_logger(__name__)


class GitClient(Protocol):
    """Version-control operations the branch service depends on."""

    def validate_repository(self, repo_path: str) -> None:
        ...

    def list_local_branches(self, repo_path: str) -> List[str]:
        ...

    def delete_branch(self, repo_path: str, branch_name: str) -> None:
        ...


class GitService:
    """Service for Git operations, always scoped to an explicit repository path."""

    def _get_repo(self, repo_path: str) -> git.Repo:
        """Open the repository at repo_path.

        A fresh repo instance is created per call so the service holds no
        state between operations.

        Raises:
            InvalidRepositoryError: If the path does not hold a usable repository
        """
        try:
            repo = git.Repo(repo_path)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            raise InvalidRepositoryError(repo_path) from e
        if repo.bare:
            repo.close()
            raise InvalidRepositoryError(repo_path, "cannot operate on a bare repository")
        return repo

    def validate_repository(self, repo_path: str) -> None:
        """Check that repo_path is a usable git repository."""
        repo = self._get_repo(repo_path)
        logger.debug(f"Using repository at {repo.working_dir}")
        repo.close()

    def list_local_branches(self, repo_path: str) -> List[str]:
        """Get the short names of all local branches, in the order git lists them."""
        repo = self._get_repo(repo_path)
        try:
            output = repo.git.branch("--format=%(refname:short)")
        except git.GitCommandError as e:
            raise GitOperationError("list_branches", message=str(e)) from e
        finally:
            repo.close()

        branches = [line.strip() for line in output.splitlines()]
        logger.debug(f"Found {len(branches)} local branches")
        return branches

    def delete_branch(self, repo_path: str, branch_name: str) -> None:
        """Force-delete a local branch.

        Squash-merged branches are never recorded as merged in local
        history, so the "not fully merged" check has to be bypassed.
        """
        repo = self._get_repo(repo_path)
        try:
            repo.git.branch("-D", branch_name)
            logger.debug(f"Deleted branch {branch_name}")
        except git.GitCommandError as e:
            raise GitOperationError("delete_branch", branch_name, str(e)) from e
        finally:
            repo.close()
