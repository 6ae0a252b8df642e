"""Runtime environment handling for repo-sync."""

from repo_sync.environment.installer import DependencyInstaller
from repo_sync.environment.venv import VirtualEnvironment, run_command

__all__ = ["DependencyInstaller", "VirtualEnvironment", "run_command"]
