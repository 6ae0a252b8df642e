"""Sync orchestration: bring a working copy and its environment up to date."""

import click
import structlog

from repo_sync.config.settings import Settings
from repo_sync.core.exceptions import CommandError, GitCommandError, GuardFailure, ToolNotFoundError
from repo_sync.core.models import CommitSummary, SyncResult
from repo_sync.environment.installer import DependencyInstaller
from repo_sync.environment.venv import VirtualEnvironment
from repo_sync.git.client import GitClient
from repo_sync.git.selection import select_default_branch, select_remote
from repo_sync.prompts import Prompter

logger = structlog.get_logger(__name__)


def _warn(message: str) -> None:
    click.secho(f"Warning: {message}", fg="yellow", err=True)


class SyncOrchestrator:
    """Runs the sync steps in order, stopping at the first guard that fails.

    Every external command runs exactly once. Fatal conditions raise
    ``GuardFailure``; tolerated ones print a warning and carry on.
    """

    def __init__(
        self,
        settings: Settings,
        git: GitClient,
        prompter: Prompter,
        venv: VirtualEnvironment | None = None,
        installer: DependencyInstaller | None = None,
    ) -> None:
        self._settings = settings
        self._git = git
        self._prompter = prompter
        self._venv = venv or VirtualEnvironment(git.repo_path / settings.venv_dir)
        self._installer = installer or DependencyInstaller(
            self._venv.interpreter,
            fast_installer=settings.fast_installer,
        )

    def run(self) -> SyncResult:
        self.check_git_available()
        self.register_safe_directory()
        self.check_repository()

        remote = self.resolve_remote()
        untracked = self.report_untracked_files()
        branches = self.list_remote_branches(remote)
        default_branch = select_default_branch(
            branches, self._settings.branch_priority, self._prompter
        )
        click.echo(f"Default branch: {default_branch}")

        head = self._git.get_head_state()
        self.fetch(remote)
        target, switched = self.reconcile(remote, default_branch, head.branch)
        self.pull(remote, target)

        env = self.prepare_environment()
        refreshed = self.refresh_dependencies(env)

        commit = self.report_status()
        click.secho("Update complete.", fg="green")
        return SyncResult(
            remote=remote,
            default_branch=default_branch,
            synced_branch=target,
            switched=switched,
            untracked_files=untracked,
            dependencies_refreshed=refreshed,
            commit=commit,
        )

    # --- Repository checks ---

    def check_git_available(self) -> None:
        if not self._git.is_available():
            raise ToolNotFoundError(
                f"'{self._settings.git_executable}' was not found on PATH",
                hint="Install git and run the update again.",
            )

    def register_safe_directory(self) -> None:
        """Add the repository to git's safe.directory list unless it is there."""
        path = self._git.repo_path.as_posix()
        if path in self._git.list_safe_directories():
            logger.debug("safe_directory_present", path=path)
            return
        try:
            self._git.add_safe_directory(path)
        except GitCommandError as e:
            logger.warning("safe_directory_add_failed", path=path, stderr=e.stderr)
            _warn(
                f"could not mark {path} as a safe directory; run "
                f"'git config --global --add safe.directory {path}' if git refuses to work here"
            )
            return
        logger.info("safe_directory_added", path=path)

    def check_repository(self) -> None:
        if not self._git.has_metadata_dir():
            raise GuardFailure(
                f"{self._git.repo_path} is not a git repository",
                hint="Run the update from the root of the cloned repository.",
            )

    def resolve_remote(self) -> str:
        remotes = self._git.list_remotes()
        if remotes:
            remote = select_remote(remotes, self._settings.primary_remote, self._prompter)
            click.echo(f"Using remote: {remote}")
            return remote

        name = self._settings.primary_remote
        url = self._settings.upstream_url
        if not url:
            raise GuardFailure(
                "No remote configured and no upstream URL set",
                hint=f"git remote add {name} <url>, or set REPO_SYNC_UPSTREAM_URL",
            )
        if not self._prompter.confirm(f"No remote configured. Add '{name}' -> {url}?"):
            raise GuardFailure(
                "No remote to sync from",
                hint=f"git remote add {name} {url}",
            )
        try:
            self._git.add_remote(name, url)
        except GitCommandError as e:
            raise GuardFailure(
                f"Could not add remote '{name}'",
                hint=f"git remote add {name} {url}",
                details=e.details,
            ) from e
        logger.info("remote_added", remote=name, url=url)
        return name

    def report_untracked_files(self) -> list[str]:
        try:
            untracked = self._git.list_untracked_files()
        except GitCommandError as e:
            logger.warning("untracked_listing_failed", stderr=e.stderr)
            return []
        if untracked:
            click.echo("Untracked files (left untouched):")
            for path in untracked:
                click.echo(f"  {path}")
        return untracked

    def list_remote_branches(self, remote: str) -> list[str]:
        try:
            branches = self._git.list_remote_branches(remote)
        except GitCommandError as e:
            raise GuardFailure(
                f"Could not list branches of '{remote}'",
                hint=f"git ls-remote --heads {remote}",
                details=e.details,
            ) from e
        if not branches:
            raise GuardFailure(
                f"Remote '{remote}' has no branches",
                hint=f"git ls-remote --heads {remote}",
            )
        return branches

    # --- Updating ---

    def fetch(self, remote: str) -> None:
        click.echo(f"Fetching from {remote}...")
        try:
            self._git.fetch(remote)
        except GitCommandError as e:
            raise GuardFailure(
                f"Fetch from '{remote}' failed", hint=f"git fetch {remote}", details=e.details
            ) from e

    def reconcile(self, remote: str, default_branch: str, current: str | None) -> tuple[str, bool]:
        """Put HEAD on the branch to sync.

        Returns the branch that will be pulled and whether a checkout
        happened.
        """
        if current is None:
            click.echo(f"HEAD is detached; switching to {default_branch}.")
            self.switch_to(remote, default_branch)
            return default_branch, True

        if current == default_branch:
            return current, False

        if self._prompter.confirm(
            f"You are on '{current}', not '{default_branch}'. Switch to '{default_branch}'?"
        ):
            self.switch_to(remote, default_branch)
            return default_branch, True

        logger.info("staying_on_branch", branch=current)
        click.echo(f"Staying on {current}.")
        return current, False

    def switch_to(self, remote: str, branch: str) -> None:
        try:
            if self._git.local_branch_exists(branch):
                self._git.checkout(branch)
            else:
                self._git.checkout_tracking(branch, remote)
        except GitCommandError as e:
            raise GuardFailure(
                f"Could not switch to '{branch}'",
                hint=f"git checkout {branch}",
                details=e.details,
            ) from e
        logger.info("switched_branch", branch=branch)

    def pull(self, remote: str, branch: str) -> None:
        click.echo(f"Pulling {remote}/{branch}...")
        try:
            self._git.pull(remote, branch)
        except GitCommandError as e:
            raise GuardFailure(
                f"Pull of {remote}/{branch} failed; resolve the conflict manually",
                hint=f"git pull {remote} {branch}",
                details=e.details,
            ) from e

    # --- Runtime environment ---

    def prepare_environment(self) -> dict[str, str] | None:
        """Validate the interpreter and return the activated environment.

        Returns ``None`` when there is no activation script; callers then
        use the interpreter path directly.
        """
        venv = self._venv
        if not venv.has_interpreter():
            raise GuardFailure(
                f"No interpreter at {venv.interpreter}",
                hint=f"python{self._settings.required_python} -m venv {venv.root}",
            )
        try:
            version = venv.python_version()
        except CommandError as e:
            raise GuardFailure(
                f"Could not run {venv.interpreter}", details=e.details
            ) from e
        required = self._settings.required_python
        if version != required:
            raise GuardFailure(
                f"Environment uses Python {version}, {required} is required",
                hint=f"Recreate {venv.root} with Python {required}.",
                details={"found": version, "required": required},
            )

        if not venv.has_activation_script():
            _warn(f"no activation script at {venv.activation_script}; using the interpreter directly")
            return None
        logger.info("environment_activated", venv=str(venv.root))
        return venv.activated_env()

    def refresh_dependencies(self, env: dict[str, str] | None) -> bool:
        manifest = self._git.repo_path / self._settings.manifest_file
        if not manifest.exists():
            _warn(f"{manifest.name} not found; skipping dependency update")
            return False
        click.echo(f"Updating dependencies from {manifest.name}...")
        try:
            tool = self._installer.refresh(manifest, env=env)
        except CommandError as e:
            raise GuardFailure(
                "Dependency update failed",
                hint=f"{self._venv.interpreter} -m pip install --upgrade -r {manifest}",
                details=e.details,
            ) from e
        logger.info("dependencies_refreshed", tool=tool)
        return True

    # --- Report ---

    def report_status(self) -> CommitSummary:
        try:
            commit = self._git.get_last_commit()
        except GitCommandError as e:
            raise GuardFailure("Could not read the latest commit", details=e.details) from e
        click.echo(f"Commit:  {commit.sha}")
        click.echo(f"Author:  {commit.author}")
        click.echo(f"Date:    {commit.date}")
        click.echo(f"Message: {commit.subject}")
        return commit
