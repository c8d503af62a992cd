"""Dependency installation.

Runs the package manager inside the new project.  Installation is a
best-effort step: every failure is reported back as an ``InstallResult``
carrying a warning instead of being raised.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from pydantic import BaseModel, Field

from .utils import run_command


class InstallResult(BaseModel):
    """Outcome of a dependency installation attempt."""

    success: bool
    returncode: int | None = Field(default=None, description="None if the process never started")
    warning: str = Field(default="", description="Why the install failed")
    stderr: str = Field(default="")


class DependencyInstaller:
    """Install a project's declared dependencies with an external package manager.

    Args:
        command: Program and arguments, e.g. ``["npm", "install"]``.
        timeout: Seconds before the install is killed; ``None`` waits forever.
    """

    def __init__(self, command: list[str], timeout: int | None = None) -> None:
        self.command = list(command)
        self.timeout = timeout

    @property
    def display(self) -> str:
        return shlex.join(self.command)

    async def install(self, project_path: Path) -> InstallResult:
        """Run the install command with *project_path* as its working directory."""
        try:
            returncode, _stdout, stderr = await run_command(
                self.command, cwd=project_path, timeout=self.timeout
            )
        except FileNotFoundError:
            return InstallResult(
                success=False,
                warning=f"'{self.command[0]}' was not found. Is it installed and in PATH?",
            )
        except PermissionError:
            return InstallResult(
                success=False,
                warning=f"Permission denied executing '{self.command[0]}'",
            )
        except OSError as exc:
            return InstallResult(success=False, warning=f"Could not run '{self.display}': {exc}")

        if returncode == -1 and self.timeout is not None:
            return InstallResult(
                success=False,
                returncode=returncode,
                warning=f"'{self.display}' timed out after {self.timeout}s",
                stderr=stderr,
            )
        if returncode != 0:
            return InstallResult(
                success=False,
                returncode=returncode,
                warning=f"'{self.display}' exited with code {returncode}",
                stderr=stderr,
            )
        return InstallResult(success=True, returncode=0)
