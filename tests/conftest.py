"""Pytest fixtures for branch-axe tests"""
import logging
import tempfile
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, List, Optional

import git
import pytest

from branch_axe.exceptions import GitHubAPIError, GitOperationError
from branch_axe.models.branch import RequestInfo


class FakeGitClient:
    """In-memory git adapter."""

    def __init__(
        self,
        branches: Optional[Iterable[str]] = None,
        list_error: Optional[Exception] = None,
        delete_failures: Iterable[str] = (),
    ):
        self.branches = list(branches or [])
        self.list_error = list_error
        self.delete_failures = set(delete_failures)
        self.list_calls = 0
        self.delete_calls: List[str] = []

    def validate_repository(self, repo_path: str) -> None:
        pass

    def list_local_branches(self, repo_path: str) -> List[str]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.branches)

    def delete_branch(self, repo_path: str, branch_name: str) -> None:
        self.delete_calls.append(branch_name)
        if branch_name in self.delete_failures:
            raise GitOperationError("delete_branch", branch_name, "branch not found")
        if branch_name in self.branches:
            self.branches.remove(branch_name)


class FakeTracker:
    """In-memory PR tracker keyed by branch name."""

    def __init__(
        self,
        requests: Optional[Dict[str, RequestInfo]] = None,
        errors: Iterable[str] = (),
    ):
        self.requests = dict(requests or {})
        self.errors = set(errors)
        self.calls: List[str] = []
        self._lock = Lock()

    def _lookup(self, branch_name: str) -> Optional[RequestInfo]:
        with self._lock:
            self.calls.append(branch_name)
        if branch_name in self.errors:
            raise GitHubAPIError("pr_list", f"failed to check PR for branch '{branch_name}'")
        return self.requests.get(branch_name)

    def find_merged_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        request = self._lookup(branch_name)
        if request is None or request.state != "MERGED":
            return None
        return request

    def find_any_request(self, repo_path: str, branch_name: str) -> Optional[RequestInfo]:
        return self._lookup(branch_name)


class RecordingReporter:
    """Progress reporter that records every notification."""

    def __init__(self):
        self.events: List[tuple] = []
        self._lock = Lock()

    def _record(self, verb: str, msg: str) -> None:
        with self._lock:
            self.events.append((verb, msg))

    def start(self, msg: str) -> None:
        self._record("start", msg)

    def update(self, msg: str) -> None:
        self._record("update", msg)

    def stop(self, msg: str) -> None:
        self._record("stop", msg)

    def stop_with_error(self, msg: str) -> None:
        self._record("stop_with_error", msg)

    def messages(self, verb: str) -> List[str]:
        return [msg for event, msg in self.events if event == verb]


def merged(number: int, title: str = "", draft: bool = False) -> RequestInfo:
    return RequestInfo(number=number, state="MERGED", title=title or f"PR {number}", is_draft=draft)


def opened(number: int, title: str = "", draft: bool = False) -> RequestInfo:
    return RequestInfo(number=number, state="OPEN", title=title or f"PR {number}", is_draft=draft)


def closed(number: int, title: str = "") -> RequestInfo:
    return RequestInfo(number=number, state="CLOSED", title=title or f"PR {number}")


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'repo_path': '.',
        'tracker': 'gh',
        'max_workers': 10,
        'timeout': 5.0,
        'github_token': None,
        'no_color': True,
        'verbose': False,
        'debug': False,
    }


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def scenario_git_client():
    """Branches from the classic main/master/f1/f2/f3 scenario."""
    return FakeGitClient(["main", "master", "f1", "f2", "f3"])


@pytest.fixture
def scenario_tracker():
    """f1 merged, f2 open, f3 without a PR."""
    return FakeTracker({"f1": merged(1, "Feature 1"), "f2": opened(2, "Feature 2")})


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch('-M', 'main')

    # Fake GitHub remote for repository resolution
    repo.create_remote('origin', 'git@github.com:test/test-repo.git')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with unmerged feature branches, one of them squash-merged upstream."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    for name in ("feature/squashed", "feature/in-review"):
        repo.git.checkout('-b', name)
        branch_file = repo_path / f"{name.replace('/', '_')}.txt"
        branch_file.write_text(f"{name} content\n")
        repo.index.add([branch_file.name])
        repo.index.commit(f"Work on {name}")
        repo.git.checkout('main')

    repo.git.branch('master')

    yield repo
