"""Display and formatting service for branch information"""
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from branch_axe.constants import (
    STATUS_COLORS,
    STATUS_HEADERS,
    STATUS_ORDER,
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
)
from branch_axe.models.branch import BranchStatus, ClassifiedBranch, RequestInfo


class DisplayService:
    """Writes user-facing output, with or without color."""

    def __init__(self, console: Optional[Console] = None, no_color: bool = False):
        self.no_color = no_color
        self.console = console or Console(no_color=no_color, highlight=False)

    def _style(self, text: str, style: Optional[str]) -> str:
        """Escape text and wrap it in a style tag unless color is off."""
        text = escape(text)
        if self.no_color or not style:
            return text
        return f"[{style}]{text}[/{style}]"

    def _line(self, symbol: str, style: str, msg: str) -> None:
        self.console.print(f"{self._style(symbol, style)} {escape(msg)}")

    def print_success(self, msg: str) -> None:
        self._line(SYMBOL_SUCCESS, "green", msg)

    def print_error(self, msg: str) -> None:
        self._line(SYMBOL_ERROR, "bold red", msg)

    def print_warning(self, msg: str) -> None:
        self._line(SYMBOL_WARNING, "yellow", msg)

    def print_info(self, msg: str) -> None:
        self._line(SYMBOL_INFO, "cyan", msg)

    def print_header(self, msg: str) -> None:
        self.console.print()
        self.console.print(self._style(msg, "bold"))

    def print_branch(self, branch_name: str, style: str = "bold green") -> None:
        self.console.print(f"  {self._style(branch_name, style)}")

    def print_branch_with_pr(
        self, branch_name: str, request: RequestInfo, style: str = "bold green"
    ) -> None:
        """Print a branch followed by its PR number and title."""
        if self.no_color:
            self.console.print(
                f"  {escape(branch_name)} (PR #{request.number}: {escape(request.title)})"
            )
            return
        self.console.print(
            f"  {self._style(branch_name, style)} "
            f"{self._style(f'(PR #{request.number})', 'yellow')} "
            f"{self._style(request.title, 'cyan')}"
        )

    def print_plain(self, msg: str = "") -> None:
        self.console.print(escape(msg))

    def _print_entry(self, branch: ClassifiedBranch, verbose: bool, style: str) -> None:
        if verbose and branch.request is not None:
            self.print_branch_with_pr(branch.name, branch.request, style)
        else:
            self.print_branch(branch.name, style)

    def display_merged(self, branches: List[ClassifiedBranch], verbose: bool = False) -> None:
        """Print the merged branches sorted by name."""
        self.print_header(f"Found {len(branches)} squash-merged branch(es):")
        for branch in sorted(branches, key=lambda b: b.name):
            self._print_entry(branch, verbose, "bold green")

    def display_statuses(
        self, statuses: Dict[BranchStatus, List[ClassifiedBranch]], verbose: bool = False
    ) -> None:
        """Print every branch grouped by status, skipping empty groups."""
        total = sum(len(branches) for branches in statuses.values())
        if total == 0:
            self.print_info("No branches to check.")
            return

        for status in STATUS_ORDER:
            branches = statuses.get(status, [])
            if not branches:
                continue
            self.print_header(f"{STATUS_HEADERS[status]} ({len(branches)}):")
            style = STATUS_COLORS[status]
            for branch in sorted(branches, key=lambda b: b.name):
                self._print_entry(branch, verbose, style)
