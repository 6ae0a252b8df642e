"""Pytest configuration and fixtures."""

import subprocess
from pathlib import Path

import pytest
import structlog

from repo_sync.config.settings import get_settings
from tests.helpers import run_git


@pytest.fixture(autouse=True)
def isolated_git_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point git's global config at a scratch file for every test."""
    global_config = tmp_path / "gitconfig"
    global_config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@test.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@test.com")
    return global_config


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def upstream_repo(tmp_path: Path) -> Path:
    """Create a bare upstream repository with one commit on ``main``."""
    seed = tmp_path / "seed"
    seed.mkdir()
    run_git(seed, "init", "-b", "main")
    (seed / "README.md").write_text("# Upstream\n")
    (seed / "requirements.txt").write_text("click\n")
    run_git(seed, "add", ".")
    run_git(seed, "commit", "-m", "Initial commit")

    bare = tmp_path / "upstream.git"
    subprocess.run(
        ["git", "clone", "--bare", str(seed), str(bare)],
        capture_output=True,
        check=True,
    )
    return bare


@pytest.fixture
def working_copy(tmp_path: Path, upstream_repo: Path) -> Path:
    """Clone the upstream repository into a working copy."""
    clone = tmp_path / "clone"
    subprocess.run(
        ["git", "clone", str(upstream_repo), str(clone)],
        capture_output=True,
        check=True,
    )
    return clone


@pytest.fixture
def push_upstream_commit(tmp_path: Path, upstream_repo: Path):
    """Return a helper that adds a commit to the upstream ``main`` branch."""

    def _push(filename: str, content: str, message: str) -> None:
        other = tmp_path / "other"
        if not other.exists():
            subprocess.run(
                ["git", "clone", str(upstream_repo), str(other)],
                capture_output=True,
                check=True,
            )
        (other / filename).write_text(content)
        run_git(other, "add", filename)
        run_git(other, "commit", "-m", message)
        run_git(other, "push", "origin", "main")

    return _push
