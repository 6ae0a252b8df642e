"""Dependency refresh through uv or pip."""

import shutil
from pathlib import Path

import structlog

from repo_sync.environment.venv import run_command

logger = structlog.get_logger(__name__)


class DependencyInstaller:
    """Installs and upgrades the packages listed in a manifest file.

    Prefers the fast installer (``uv``) when it is on PATH and falls back
    to pip inside the virtual environment otherwise.
    """

    def __init__(self, interpreter: str | Path, fast_installer: str = "uv") -> None:
        self._interpreter = str(interpreter)
        self._fast_installer = fast_installer

    def fast_installer_path(self, env: dict[str, str] | None = None) -> str | None:
        path = env.get("PATH") if env else None
        return shutil.which(self._fast_installer, path=path)

    def refresh(self, manifest: str | Path, env: dict[str, str] | None = None) -> str:
        """Upgrade everything in ``manifest``; returns the tool that did it."""
        manifest = str(manifest)
        fast = self.fast_installer_path(env)
        if fast:
            logger.info("installing_with_fast_installer", tool=fast, manifest=manifest)
            run_command(
                [fast, "pip", "install", "--upgrade", "--python", self._interpreter, "-r", manifest],
                env=env,
            )
            return self._fast_installer

        logger.info("installing_with_pip", interpreter=self._interpreter, manifest=manifest)
        run_command(
            [self._interpreter, "-m", "pip", "install", "--upgrade", "pip"],
            env=env,
        )
        run_command(
            [self._interpreter, "-m", "pip", "install", "--upgrade", "-r", manifest],
            env=env,
        )
        return "pip"
