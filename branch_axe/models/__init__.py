"""Data models for branch-axe."""

from .branch import BranchStatus, ClassifiedBranch, RequestInfo

__all__ = ["BranchStatus", "ClassifiedBranch", "RequestInfo"]
