"""GitHub pull request lookups"""
import json
import subprocess
from threading import Lock
from typing import Dict, List, Optional, Protocol, TYPE_CHECKING, Union
from urllib.parse import urlparse

import git
from github import Auth, Github, GithubException

from branch_axe.constants import GH_PR_FIELDS, STATE_CLOSED, STATE_MERGED, STATE_OPEN
from branch_axe.exceptions import GitHubAPIError
from branch_axe.logging_config import get_logger
from branch_axe.models.branch import RequestInfo

if TYPE_CHECKING:
    from github.PullRequest import PullRequest
    from github.Repository import Repository
    from branch_axe.config import Config

logger = get_logger(__name__)


class PullRequestTracker(Protocol):
    """Looks up the pull request associated with a branch.

    Both methods return None when no pull request exists and raise
    GitHubAPIError only when the lookup itself fails.
    """

    def find_merged_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        ...

    def find_any_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        ...


def parse_github_repo(remote_url: str) -> Optional[str]:
    """Extract "owner/repo" from a GitHub remote URL (SSH or HTTPS)."""
    if "github.com" not in remote_url:
        return None

    if remote_url.startswith("git@"):
        # git@github.com:org/repo.git
        path = remote_url.split("github.com:", 1)[1]
    else:
        # https://github.com/org/repo.git or ssh://git@github.com/org/repo.git
        path = urlparse(remote_url).path.strip("/")

    if path.endswith(".git"):
        path = path[:-4]

    return path or None


class GhCliTracker:
    """Tracker backed by the GitHub CLI (`gh`), which handles authentication itself."""

    def __init__(self, config: Union["Config", dict]):
        self.timeout = config.get("timeout", 60.0)

    def find_merged_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        """Get the merged PR whose head is branch_name, if any."""
        return self._first_request(repo_path, branch_name, "merged")

    def find_any_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        """Get the most recent PR in any state whose head is branch_name, if any."""
        return self._first_request(repo_path, branch_name, "all")

    def _first_request(self, repo_path: str, branch_name: str, state: str) -> Optional[RequestInfo]:
        prs = self._list_requests(repo_path, branch_name, state)
        if not prs:
            return None
        return prs[0]

    def _list_requests(self, repo_path: str, branch_name: str, state: str) -> List[RequestInfo]:
        """Run `gh pr list` in repo_path and parse its JSON output."""
        cmd = [
            "gh", "pr", "list",
            "--state", state,
            "--head", branch_name,
            "--json", GH_PR_FIELDS,
            "--limit", "1",
        ]
        try:
            result = subprocess.run(
                cmd,
                cwd=repo_path,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise GitHubAPIError("pr_list", "gh executable not found") from e
        except subprocess.TimeoutExpired as e:
            raise GitHubAPIError(
                "pr_list", f"timed out after {self.timeout}s for branch '{branch_name}'"
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise GitHubAPIError(
                "pr_list", f"failed to check PR for branch '{branch_name}': {stderr or e}"
            ) from e

        try:
            data = json.loads(result.stdout or "[]")
            return [RequestInfo.from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            raise GitHubAPIError(
                "pr_list", f"failed to parse PR data for branch '{branch_name}': {e}"
            ) from e


class GitHubApiTracker:
    """Tracker backed by the GitHub REST API through PyGithub.

    The GitHub repository is resolved from the `origin` remote of each
    local repository path and cached, since workers look it up concurrently.
    """

    def __init__(self, config: Union["Config", dict]):
        """Initialize the tracker.

        Note: the token is validated by Config before this tracker is built.
        """
        self.github_token = config.get("github_token")
        self.github: Optional[Github] = None
        self._repos: Dict[str, "Repository"] = {}
        self._repo_names: Dict[str, str] = {}
        self._lock = Lock()

    def _get_github(self) -> Github:
        if self.github is None:
            assert self.github_token is not None, "GitHub token must be set"
            self.github = Github(auth=Auth.Token(self.github_token))
        return self.github

    def _get_gh_repo(self, repo_path: str) -> "Repository":
        """Resolve (and cache) the GitHub repository behind a local checkout."""
        with self._lock:
            if repo_path in self._repos:
                return self._repos[repo_path]

            try:
                local = git.Repo(repo_path)
                try:
                    remote_url = local.remotes.origin.url
                finally:
                    local.close()
            except (git.InvalidGitRepositoryError, git.NoSuchPathError, AttributeError) as e:
                raise GitHubAPIError("resolve_repository", f"no origin remote in {repo_path}") from e

            full_name = parse_github_repo(remote_url)
            if not full_name:
                raise GitHubAPIError("resolve_repository", f"not a GitHub remote: {remote_url}")

            try:
                gh_repo = self._get_github().get_repo(full_name)
            except GithubException as e:
                raise GitHubAPIError("resolve_repository", str(e)) from e

            logger.debug(f"[GitHub] Resolved {repo_path} to {full_name}")
            self._repos[repo_path] = gh_repo
            self._repo_names[repo_path] = full_name
            return gh_repo

    def _pulls(self, repo_path: str, branch_name: str, state: str) -> List["PullRequest"]:
        gh_repo = self._get_gh_repo(repo_path)
        owner = self._repo_names[repo_path].split("/")[0]
        try:
            return list(gh_repo.get_pulls(
                state=state,
                head=f"{owner}:{branch_name}",
                sort="created",
                direction="desc",
            ))
        except GithubException as e:
            raise GitHubAPIError("get_pulls", f"branch '{branch_name}': {e}") from e

    @staticmethod
    def _to_request(pr: "PullRequest") -> RequestInfo:
        if pr.merged_at is not None:
            state = STATE_MERGED
        elif pr.state == "open":
            state = STATE_OPEN
        elif pr.state == "closed":
            state = STATE_CLOSED
        else:
            state = str(pr.state).upper()
        return RequestInfo(
            number=pr.number,
            state=state,
            title=pr.title or "",
            is_draft=bool(pr.draft),
        )

    def find_merged_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        """Get the newest merged PR whose head is branch_name, if any."""
        for pr in self._pulls(repo_path, branch_name, "closed"):
            if pr.merged_at is not None:
                return self._to_request(pr)
        return None

    def find_any_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        """Get the newest PR in any state whose head is branch_name, if any."""
        pulls = self._pulls(repo_path, branch_name, "all")
        if not pulls:
            return None
        return self._to_request(pulls[0])

    def close(self) -> None:
        """Close the GitHub API connection to clean up resources."""
        if self.github:
            try:
                self.github.close()
                logger.debug("[GitHub] Closed GitHub API connection")
            except Exception as e:
                logger.debug(f"[GitHub] Error closing GitHub API connection: {e}")
            self.github = None


def create_tracker(config: Union["Config", dict]) -> PullRequestTracker:
    """Build the tracker selected by config.tracker."""
    tracker = config.get("tracker", "gh")
    if tracker == "api":
        return GitHubApiTracker(config)
    return GhCliTracker(config)
