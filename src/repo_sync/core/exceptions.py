"""Exceptions raised by repo-sync."""

from typing import Any


class RepoSyncError(Exception):
    """Base exception for repo-sync errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RepoSyncError):
    """Settings are missing or invalid."""


class GuardFailure(RepoSyncError):
    """A sync step cannot proceed safely; the run stops here.

    ``hint`` holds the command the operator can run to recover manually.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.hint = hint


class ToolNotFoundError(GuardFailure):
    """A required executable is not on PATH."""


class CommandError(RepoSyncError):
    """An external command exited with a non-zero status."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        stderr: str = "",
    ) -> None:
        super().__init__(
            f"Command failed ({returncode}): {' '.join(command)}",
            details={"command": command, "returncode": returncode, "stderr": stderr},
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GitCommandError(CommandError):
    """A git command failed."""
