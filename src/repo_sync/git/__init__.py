"""Git integration module for repo-sync."""

from repo_sync.git.client import GitClient
from repo_sync.git.selection import pick_by_priority, select_default_branch, select_remote

__all__ = ["GitClient", "pick_by_priority", "select_default_branch", "select_remote"]
