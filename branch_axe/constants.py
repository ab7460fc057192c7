"""Shared constants for branch-axe."""

from typing import Dict, FrozenSet, Tuple

from branch_axe.models.branch import BranchStatus


# Branch names that are never classified or deleted
PROTECTED_BRANCHES: FrozenSet[str] = frozenset({"main", "master"})

# Upper bound on concurrent PR lookups; the tracking service is rate limited
MAX_WORKERS = 10

TRACKERS: Tuple[str, ...] = ("gh", "api")

# PR states as reported by the tracking service
STATE_MERGED = "MERGED"
STATE_OPEN = "OPEN"
STATE_CLOSED = "CLOSED"

# Fields requested from `gh pr list --json`
GH_PR_FIELDS = "number,state,title,isDraft"


# Display order for the all-statuses listing
STATUS_ORDER: Tuple[BranchStatus, ...] = (
    BranchStatus.MERGED,
    BranchStatus.OPEN,
    BranchStatus.CLOSED,
    BranchStatus.DRAFT,
    BranchStatus.NO_PR,
)

STATUS_HEADERS: Dict[BranchStatus, str] = {
    BranchStatus.MERGED: "Merged",
    BranchStatus.OPEN: "Open",
    BranchStatus.CLOSED: "Closed",
    BranchStatus.DRAFT: "Draft",
    BranchStatus.NO_PR: "No PR",
}

# CLI colors (Rich color names)
STATUS_COLORS: Dict[BranchStatus, str] = {
    BranchStatus.MERGED: "green",
    BranchStatus.OPEN: "blue",
    BranchStatus.CLOSED: "red",
    BranchStatus.DRAFT: "yellow",
    BranchStatus.NO_PR: "dim",
}

# Symbol constants
SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "⚠"
SYMBOL_INFO = "ℹ"
