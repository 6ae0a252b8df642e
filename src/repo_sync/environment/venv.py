"""Virtual environment inspection and activation."""

import os
import subprocess
import sys
from pathlib import Path

import structlog

from repo_sync.core.exceptions import CommandError

logger = structlog.get_logger(__name__)

_VERSION_SCRIPT = "import sys; print('%d.%d' % sys.version_info[:2])"


def run_command(command: list[str], env: dict[str, str] | None = None) -> str:
    """Run an external command once and return its stdout."""
    logger.debug("command", command=" ".join(command))
    try:
        result = subprocess.run(
            command,
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise CommandError(command, e.returncode, (e.stderr or "").strip()) from e
    except FileNotFoundError as e:
        raise CommandError(command, 127, str(e)) from e
    return result.stdout.strip()


class VirtualEnvironment:
    """A virtual environment living at a fixed path inside the repository."""

    def __init__(self, root: str | Path, windows: bool | None = None) -> None:
        self._root = Path(root)
        self._windows = sys.platform == "win32" if windows is None else windows

    @property
    def root(self) -> Path:
        return self._root

    @property
    def bin_dir(self) -> Path:
        return self._root / ("Scripts" if self._windows else "bin")

    @property
    def interpreter(self) -> Path:
        return self.bin_dir / ("python.exe" if self._windows else "python")

    @property
    def activation_script(self) -> Path:
        return self.bin_dir / ("activate.bat" if self._windows else "activate")

    def has_interpreter(self) -> bool:
        return self.interpreter.exists()

    def has_activation_script(self) -> bool:
        return self.activation_script.exists()

    def python_version(self) -> str:
        """Ask the interpreter for its ``major.minor`` version."""
        return run_command([str(self.interpreter), "-c", _VERSION_SCRIPT])

    def activated_env(self, base: dict[str, str] | None = None) -> dict[str, str]:
        """Build the process environment the activation script would produce.

        A child process cannot change its parent's environment, so the
        effect of ``activate`` is applied to the environment handed to
        later commands instead.
        """
        env = dict(os.environ if base is None else base)
        env["VIRTUAL_ENV"] = str(self._root.resolve())
        env["PATH"] = os.pathsep.join(
            part for part in (str(self.bin_dir.resolve()), env.get("PATH", "")) if part
        )
        env.pop("PYTHONHOME", None)
        return env
