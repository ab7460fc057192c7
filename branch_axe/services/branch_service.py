"""Branch classification and cleanup, orchestrating git and GitHub lookups"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from threading import Lock
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar, TYPE_CHECKING, Union

from branch_axe.constants import MAX_WORKERS, STATUS_ORDER
from branch_axe.exceptions import GitOperationError
from branch_axe.logging_config import get_logger
from branch_axe.models.branch import BranchStatus, ClassifiedBranch
from branch_axe.services.branch_status_service import BranchStatusService

if TYPE_CHECKING:
    from branch_axe.config import Config
    from branch_axe.progress import ProgressReporter
    from branch_axe.services.git_service import GitClient
    from branch_axe.services.github_service import PullRequestTracker

logger = get_logger(__name__)

T = TypeVar("T")


class BranchService:
    """Finds local branches whose pull requests are merged, and deletes them.

    PR lookups fan out over a thread pool of at most ``max_workers``
    threads. Only a failure to list branches is raised to the caller; a
    failed lookup for a single branch counts as "no pull request" and a
    failed deletion is reported in the returned ``failed`` list.
    """

    def __init__(
        self,
        git_client: "GitClient",
        tracker: "PullRequestTracker",
        config: Optional[Union["Config", dict]] = None,
    ):
        self.git_client = git_client
        self.tracker = tracker
        config = config if config is not None else {}
        self.max_workers = config.get("max_workers", MAX_WORKERS)
        self.status_service = BranchStatusService()

    def list_merged_branches(
        self, repo_path: str, reporter: "ProgressReporter"
    ) -> List[ClassifiedBranch]:
        """Get all local branches whose pull request was merged.

        Branches without a merged PR, or whose lookup failed, are left out.
        The result has no particular order.

        Raises:
            GitOperationError: If the local branches could not be listed
        """
        branches = self._discover_branches(repo_path, reporter)
        if not branches:
            return []

        reporter.start(f"Looking for branches to chop ({len(branches)} to check)...")
        results = self._check_branches_parallel(
            repo_path, branches, self._check_merged, reporter
        )
        merged = [result for result in results if result is not None]
        reporter.stop(f"Found {len(merged)} branches ready to axe")

        return merged

    def list_all_branch_statuses(
        self, repo_path: str, reporter: "ProgressReporter"
    ) -> Dict[BranchStatus, List[ClassifiedBranch]]:
        """Get every local branch grouped by PR status.

        All five statuses are always present as keys. Every eligible branch
        lands in exactly one of them.

        Raises:
            GitOperationError: If the local branches could not be listed
        """
        status_map: Dict[BranchStatus, List[ClassifiedBranch]] = {
            status: [] for status in STATUS_ORDER
        }

        branches = self._discover_branches(repo_path, reporter)
        if not branches:
            return status_map

        reporter.start(f"Checking PR status for {len(branches)} branches...")
        results = self._check_branches_parallel(
            repo_path, branches, self._classify_branch, reporter
        )
        for result in results:
            status_map[result.status].append(result)
        reporter.stop(f"Completed status check for {len(branches)} branches")

        return status_map

    def delete_branches(
        self, repo_path: str, branch_names: Sequence[str], reporter: "ProgressReporter"
    ) -> Tuple[List[str], List[str]]:
        """Delete branches one at a time in the given order.

        Returns:
            Tuple of (deleted, failed) branch names, each in input order
        """
        deleted: List[str] = []
        failed: List[str] = []
        total = len(branch_names)

        reporter.start(f"Chopping {total} branches...")
        for i, branch_name in enumerate(branch_names, start=1):
            reporter.update(f"Chopping ({i}/{total}): {branch_name}")

            if not branch_name or self.status_service.is_protected_branch(branch_name):
                logger.warning(f"Refusing to delete protected branch '{branch_name}'")
                failed.append(branch_name)
                continue

            try:
                self.git_client.delete_branch(repo_path, branch_name)
                deleted.append(branch_name)
            except GitOperationError as e:
                logger.debug(f"Failed to delete {branch_name}: {e}")
                failed.append(branch_name)
        reporter.stop(f"Chopped {len(deleted)} branches")

        return deleted, failed

    def _discover_branches(self, repo_path: str, reporter: "ProgressReporter") -> List[str]:
        """List local branches, dropping protected and empty names."""
        reporter.start("Fetching local branches...")
        try:
            branches = self.git_client.list_local_branches(repo_path)
        except GitOperationError as e:
            reporter.stop_with_error(f"Failed to fetch local branches: {e}")
            raise
        reporter.stop(f"Found {len(branches)} local branches")

        filtered = self.status_service.filter_branches(branches)
        logger.debug(f"{len(filtered)} of {len(branches)} branches eligible for checking")
        return filtered

    def _check_merged(self, repo_path: str, branch_name: str) -> Optional[ClassifiedBranch]:
        """Look up a merged PR for one branch; None drops the branch."""
        try:
            request = self.tracker.find_merged_request(repo_path, branch_name)
        except Exception as e:
            logger.debug(f"[GitHub] Error checking merged PR for {branch_name}: {e}")
            return None

        if not self.status_service.is_merged(request):
            return None

        logger.debug(f"[GitHub] Branch {branch_name} has merged PR #{request.number}")
        return ClassifiedBranch(name=branch_name, status=BranchStatus.MERGED, request=request)

    def _classify_branch(self, repo_path: str, branch_name: str) -> ClassifiedBranch:
        """Look up the most recent PR for one branch and classify it."""
        try:
            request = self.tracker.find_any_request(repo_path, branch_name)
        except Exception as e:
            logger.debug(f"[GitHub] Error checking PR status for {branch_name}: {e}")
            request = None

        status = self.status_service.get_branch_status(request)
        return ClassifiedBranch(name=branch_name, status=status, request=request)

    def _check_branches_parallel(
        self,
        repo_path: str,
        branches: List[str],
        check: Callable[[str, str], T],
        reporter: "ProgressReporter",
    ) -> List[T]:
        """Run check once per branch over a bounded thread pool.

        Every branch is submitted before results are drained. Each worker
        bumps the shared counter and reports progress after its lookup.
        """
        total = len(branches)
        num_workers = min(self.max_workers, total)
        processed = 0
        processed_lock = Lock()

        def worker(branch_name: str) -> T:
            nonlocal processed
            result = check(repo_path, branch_name)
            with processed_lock:
                processed += 1
                count = processed
            reporter.update(f"Checking PR status ({count}/{total})")
            return result

        logger.debug(f"Checking {total} branches using {num_workers} workers")

        results: List[T] = []
        interrupted = False
        executor = ThreadPoolExecutor(max_workers=num_workers, thread_name_prefix="pr-check")
        try:
            futures = [executor.submit(worker, branch) for branch in branches]
            for future in as_completed(futures):
                results.append(future.result())
        except KeyboardInterrupt:
            interrupted = True
            logger.debug("Interrupted, cancelling pending PR checks")
            raise
        finally:
            # Pending lookups are dropped on interrupt; in-flight ones run out on their own
            executor.shutdown(wait=not interrupted, cancel_futures=interrupted)

        return results
