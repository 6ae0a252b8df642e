"""Git command-line wrapper using subprocess."""

import shutil
import subprocess
from pathlib import Path

import structlog

from repo_sync.core.exceptions import GitCommandError
from repo_sync.core.models import CommitSummary, HeadState

logger = structlog.get_logger(__name__)

# Unit separator, never present in author names or subjects
_FIELD_SEP = "\x1f"


class GitClient:
    """Runs git commands against one working copy.

    Uses subprocess + git CLI directly (no gitpython dependency). Every
    method runs exactly one git command; failures surface as
    ``GitCommandError``.
    """

    def __init__(self, repo_path: str | Path, executable: str = "git") -> None:
        self._repo_path = Path(repo_path).resolve()
        self._executable = executable

    @property
    def repo_path(self) -> Path:
        return self._repo_path

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        command = [self._executable, *args]
        logger.debug("git_command", command=" ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=self._repo_path,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise GitCommandError(command, e.returncode, (e.stderr or "").strip()) from e
        except OSError as e:
            # Missing executable or working directory
            raise GitCommandError(command, 127, str(e)) from e
        return result.stdout.strip()

    def is_available(self) -> bool:
        """Check that the git executable can be located."""
        return shutil.which(self._executable) is not None

    def has_metadata_dir(self) -> bool:
        """Check that the working copy carries a ``.git`` entry."""
        return (self._repo_path / ".git").exists()

    # --- Ownership trust ---

    def list_safe_directories(self) -> list[str]:
        """Get the global ``safe.directory`` entries.

        git exits 1 when the key is unset, so any failure reads as empty.
        """
        try:
            output = self._run_git("config", "--global", "--get-all", "safe.directory")
        except GitCommandError:
            return []
        return output.splitlines() if output else []

    def add_safe_directory(self, path: str) -> None:
        self._run_git("config", "--global", "--add", "safe.directory", path)

    # --- Remotes and branches ---

    def list_remotes(self) -> list[str]:
        output = self._run_git("remote")
        return output.splitlines() if output else []

    def add_remote(self, name: str, url: str) -> None:
        self._run_git("remote", "add", name, url)

    def list_remote_branches(self, remote: str) -> list[str]:
        """List branch names advertised by a remote, in the order git reports them."""
        output = self._run_git("ls-remote", "--heads", remote)
        branches = []
        for line in output.splitlines():
            _, _, ref = line.partition("\t")
            if ref.startswith("refs/heads/"):
                branches.append(ref[len("refs/heads/"):])
        return branches

    def list_local_branches(self) -> list[str]:
        output = self._run_git("branch", "--list", "--format=%(refname:short)")
        return output.splitlines() if output else []

    def local_branch_exists(self, branch: str) -> bool:
        return branch in self.list_local_branches()

    def get_head_state(self) -> HeadState:
        """Get the branch HEAD is attached to, or a detached state."""
        try:
            branch = self._run_git("symbolic-ref", "--quiet", "--short", "HEAD")
        except GitCommandError:
            return HeadState(branch=None)
        return HeadState(branch=branch or None)

    def list_untracked_files(self) -> list[str]:
        output = self._run_git("ls-files", "--others", "--exclude-standard")
        return output.splitlines() if output else []

    # --- Updating ---

    def fetch(self, remote: str) -> None:
        self._run_git("fetch", remote)

    def checkout(self, branch: str) -> None:
        self._run_git("checkout", branch)

    def checkout_tracking(self, branch: str, remote: str) -> None:
        """Create a local branch tracking ``remote/branch`` and switch to it."""
        self._run_git("checkout", "-b", branch, "--track", f"{remote}/{branch}")

    def pull(self, remote: str, branch: str) -> None:
        self._run_git("pull", remote, branch)

    def get_last_commit(self) -> CommitSummary:
        """Get hash, author, date and subject of HEAD."""
        fmt = _FIELD_SEP.join(["%H", "%an", "%ad", "%s"])
        output = self._run_git("log", "-1", f"--format={fmt}")
        sha, author, date, subject = output.split(_FIELD_SEP, 3)
        return CommitSummary(sha=sha, author=author, date=date, subject=subject)
