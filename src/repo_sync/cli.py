"""CLI for repo-sync."""

import sys
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from repo_sync.config.logging import configure_logging
from repo_sync.core.exceptions import (
    CommandError,
    ConfigurationError,
    GitCommandError,
    GuardFailure,
    RepoSyncError,
)

logger = structlog.get_logger(__name__)


def _load_settings(verbose: bool):
    """Load settings and configure logging from them.

    Validation problems become a ConfigurationError.
    """
    from repo_sync.config.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(log_level="DEBUG" if verbose else "INFO")
        raise ConfigurationError(f"Invalid settings: {e}") from e
    configure_logging(log_level="DEBUG" if verbose else settings.log_level)
    return settings


def _resolve_repo_path(repo_path: str) -> Path:
    path = Path(repo_path).resolve()
    if not path.is_dir():
        raise GuardFailure(
            f"Path does not exist: {path}",
            hint="Run the update from the root of the cloned repository.",
        )
    return path


def _fail(error: RepoSyncError) -> None:
    """Report a fatal error and exit with status 1."""
    click.secho(f"Error: {error.message}", fg="red", err=True)
    if isinstance(error, GuardFailure) and error.hint:
        click.echo(f"  To fix: {error.hint}", err=True)
    stderr = error.details.get("stderr")
    if stderr:
        click.echo(f"  {stderr}", err=True)
    logger.debug("run_failed", error=type(error).__name__, details=error.details)
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """repo-sync: update a local installation from its upstream repository."""
    ctx.obj = {"verbose": verbose}


@cli.command()
@click.argument("repo_path", default=".")
@click.pass_context
def sync(ctx: click.Context, repo_path: str) -> None:
    """Pull upstream changes and refresh dependencies.

    Fetches and merges the upstream default branch, then upgrades the
    packages listed in the manifest inside the project's virtual
    environment.
    """
    from repo_sync.git.client import GitClient
    from repo_sync.prompts import ClickPrompter
    from repo_sync.services.sync import SyncOrchestrator

    try:
        settings = _load_settings(ctx.obj["verbose"])
        git = GitClient(_resolve_repo_path(repo_path), executable=settings.git_executable)
        orchestrator = SyncOrchestrator(settings, git, ClickPrompter())
        orchestrator.run()
    except RepoSyncError as e:
        _fail(e)


@cli.command()
@click.argument("repo_path", default=".")
@click.pass_context
def status(ctx: click.Context, repo_path: str) -> None:
    """Show repository and environment state without changing anything."""
    from repo_sync.environment.venv import VirtualEnvironment
    from repo_sync.git.client import GitClient

    try:
        settings = _load_settings(ctx.obj["verbose"])
        path = _resolve_repo_path(repo_path)
    except RepoSyncError as e:
        _fail(e)
        return

    git = GitClient(path, executable=settings.git_executable)
    venv = VirtualEnvironment(git.repo_path / settings.venv_dir)

    click.echo("repo-sync Status")
    click.echo(f"  Repository:  {git.repo_path}")
    if not git.is_available():
        click.echo(f"  Git:         '{settings.git_executable}' not found")
        sys.exit(1)
    if not git.has_metadata_dir():
        click.echo("  Git:         not a repository")
        sys.exit(1)

    try:
        remotes = git.list_remotes()
        head = git.get_head_state()
        commit = git.get_last_commit()
    except GitCommandError as e:
        _fail(e)
        return

    click.echo(f"  Remotes:     {', '.join(remotes) or '(none)'}")
    click.echo(f"  Branch:      {'(detached)' if head.detached else head.branch}")
    click.echo(f"  Commit:      {commit.short_sha} {commit.subject}")

    if venv.has_interpreter():
        try:
            version = venv.python_version()
        except CommandError:
            version = "unknown"
        marker = "" if version == settings.required_python else f" (need {settings.required_python})"
        click.echo(f"  Interpreter: {venv.interpreter} [{version}]{marker}")
    else:
        click.echo(f"  Interpreter: missing ({venv.interpreter})")

    manifest = git.repo_path / settings.manifest_file
    click.echo(f"  Manifest:    {manifest.name} {'present' if manifest.exists() else 'missing'}")


if __name__ == "__main__":
    cli()
