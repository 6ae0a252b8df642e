"""Service layer for repo-sync."""

from repo_sync.services.sync import SyncOrchestrator

__all__ = ["SyncOrchestrator"]
