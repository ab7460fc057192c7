"""Configuration handling for branch-axe"""

import os
from dataclasses import dataclass
from typing import Optional

from branch_axe.constants import MAX_WORKERS, TRACKERS


@dataclass
class Config:
    """Configuration for branch-axe with validation."""

    # Repository to operate on
    repo_path: str = "."

    # PR lookup backend: "gh" shells out to the GitHub CLI, "api" uses the REST API
    tracker: str = "gh"
    max_workers: int = MAX_WORKERS
    timeout: float = 60.0  # Seconds allowed for a single PR lookup
    github_token: Optional[str] = None

    # Output
    no_color: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_repo_path()
        self._validate_tracker()
        self._validate_max_workers()
        self._validate_timeout()
        self._resolve_github_token()

    def _validate_repo_path(self):
        """Validate repo_path is not empty."""
        if not self.repo_path or not self.repo_path.strip():
            raise ValueError("repo_path cannot be empty")
        self.repo_path = self.repo_path.strip()

    def _validate_tracker(self):
        """Validate tracker is one of allowed values."""
        if self.tracker not in TRACKERS:
            raise ValueError(f"tracker must be one of {list(TRACKERS)}, got '{self.tracker}'")

    def _validate_max_workers(self):
        """Validate max_workers is positive."""
        if self.max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")

    def _validate_timeout(self):
        """Validate timeout is positive."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def _resolve_github_token(self):
        """Fall back to GITHUB_TOKEN; the api tracker cannot work without one."""
        if not self.github_token:
            self.github_token = os.environ.get("GITHUB_TOKEN") or None
        if self.tracker == "api" and not self.github_token:
            raise ValueError(
                "tracker 'api' requires a GitHub token (set GITHUB_TOKEN or github_token)"
            )

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "repo_path": self.repo_path,
            "tracker": self.tracker,
            "max_workers": self.max_workers,
            "timeout": self.timeout,
            "github_token": self.github_token,
            "no_color": self.no_color,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key so services accept either a Config or a dict."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "repo_path",
            "tracker",
            "max_workers",
            "timeout",
            "github_token",
            "no_color",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
