"""Core domain models and exceptions for repo-sync."""

from repo_sync.core.exceptions import (
    CommandError,
    ConfigurationError,
    GitCommandError,
    GuardFailure,
    RepoSyncError,
    ToolNotFoundError,
)
from repo_sync.core.models import CommitSummary, HeadState, SyncResult

__all__ = [
    # Models
    "CommitSummary",
    "HeadState",
    "SyncResult",
    # Exceptions
    "RepoSyncError",
    "ConfigurationError",
    "GuardFailure",
    "ToolNotFoundError",
    "CommandError",
    "GitCommandError",
]
