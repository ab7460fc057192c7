"""Service for determining branch status from pull request data"""

from typing import Iterable, List, Optional

from branch_axe.constants import PROTECTED_BRANCHES, STATE_CLOSED, STATE_MERGED, STATE_OPEN
from branch_axe.logging_config import get_logger
from branch_axe.models.branch import BranchStatus, RequestInfo

logger = get_logger(__name__)


class BranchStatusService:
    """Classifies branches and decides which ones are eligible at all."""

    def __init__(self, protected_branches: Iterable[str] = PROTECTED_BRANCHES):
        self.protected_branches = frozenset(protected_branches)

    def get_branch_status(self, request: Optional[RequestInfo]) -> BranchStatus:
        """Get the status of a branch from its most relevant pull request."""
        if request is None:
            return BranchStatus.NO_PR

        # Draft wins over whatever state GitHub reports
        if request.is_draft:
            return BranchStatus.DRAFT

        if request.state == STATE_MERGED:
            return BranchStatus.MERGED
        if request.state == STATE_OPEN:
            return BranchStatus.OPEN
        if request.state == STATE_CLOSED:
            return BranchStatus.CLOSED

        logger.debug(f"Unrecognized PR state '{request.state}' on #{request.number}")
        return BranchStatus.NO_PR

    def is_merged(self, request: Optional[RequestInfo]) -> bool:
        """Check if a request counts as merged for cleanup."""
        return self.get_branch_status(request) == BranchStatus.MERGED

    def is_protected_branch(self, branch_name: str) -> bool:
        """Check if a branch is protected."""
        return branch_name in self.protected_branches

    def filter_branches(self, branch_names: Iterable[str]) -> List[str]:
        """Drop protected and empty names, keeping the original order."""
        return [
            name for name in branch_names
            if name and not self.is_protected_branch(name)
        ]
