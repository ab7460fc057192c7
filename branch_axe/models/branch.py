"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class BranchStatus(Enum):
    """PR-derived status of a local branch."""
    MERGED = "merged"
    OPEN = "open"
    CLOSED = "closed"
    DRAFT = "draft"
    NO_PR = "no-pr"


@dataclass(frozen=True)
class RequestInfo:
    """A pull request associated with a branch."""
    number: int
    state: str  # MERGED, OPEN or CLOSED as reported by GitHub
    title: str
    is_draft: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "RequestInfo":
        """Build from a `gh pr list --json number,state,title,isDraft` entry."""
        return cls(
            number=int(data["number"]),
            state=str(data["state"]),
            title=str(data.get("title", "")),
            is_draft=bool(data.get("isDraft", False)),
        )


@dataclass(frozen=True)
class ClassifiedBranch:
    """A local branch together with its PR status."""
    name: str
    status: BranchStatus
    request: Optional[RequestInfo] = None
