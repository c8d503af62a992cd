"""Project creation orchestrator.

Drives a single run through its steps::

    START -> NAME_RESOLVED -> MATERIALIZED -> CUSTOMIZED
          -> INSTALLED | INSTALL_FAILED -> REPORTED -> DONE

Copying and configuring are fatal steps: their errors move the run to
``ABORTED`` and propagate to the caller.  Dependency installation is
best-effort and only changes what gets printed.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .config import Config
from .customizer import customize_project
from .errors import CreateAppError, TargetExistsError
from .installer import DependencyInstaller, InstallResult
from .materializer import TargetScope, ensure_target_available, materialize, target_exists
from .naming import ProjectName
from .reporter import Reporter


class CreateState(str, Enum):
    """States a project creation run moves through."""

    START = "start"
    NAME_RESOLVED = "name_resolved"
    MATERIALIZED = "materialized"
    CUSTOMIZED = "customized"
    INSTALLED = "installed"
    INSTALL_FAILED = "install_failed"
    REPORTED = "reported"
    DONE = "done"
    ABORTED = "aborted"


class CreateResult(BaseModel):
    """Record of a project creation run."""

    project_name: str
    project_path: Path
    state: CreateState = CreateState.START
    history: list[CreateState] = Field(default_factory=lambda: [CreateState.START])
    install_result: InstallResult | None = None
    error: str = ""

    @property
    def success(self) -> bool:
        return self.state is CreateState.DONE

    def advance(self, state: CreateState) -> None:
        self.state = state
        self.history.append(state)

    def abort(self, exc: CreateAppError) -> None:
        self.error = exc.message
        self.advance(CreateState.ABORTED)


class ProjectCreator:
    """Create a new IC project from the bundled template.

    Attributes:
        config: Run configuration.
        reporter: Console output for progress and the final summary.
        installer: Best-effort dependency installer.
        result: Record of the most recent run, kept when it aborts.
    """

    def __init__(
        self,
        config: Config,
        reporter: Reporter | None = None,
        installer: DependencyInstaller | None = None,
    ) -> None:
        self.config = config
        self.reporter = reporter or Reporter()
        self.installer = installer or DependencyInstaller(
            config.install_command, timeout=config.install_timeout
        )
        self.result: CreateResult | None = None

    def target_path(self, name: ProjectName, cwd: Path | None = None) -> Path:
        """Absolute path of the project directory for *name*."""
        return (cwd or Path.cwd()).resolve() / name.value

    async def run(self, name: ProjectName, cwd: Path | None = None) -> CreateResult:
        """Create the project *name* under *cwd* (the current directory by default).

        Raises:
            TargetExistsError: If the project directory already exists.
            CreateAppError: If copying or configuring the project fails.
        """
        target = self.target_path(name, cwd)
        result = CreateResult(project_name=name.value, project_path=target)
        self.result = result
        result.advance(CreateState.NAME_RESOLVED)

        try:
            ensure_target_available(target)
        except TargetExistsError as exc:
            result.abort(exc)
            raise

        self.reporter.creating(target)

        scope = TargetScope(target, cleanup=self.config.cleanup_on_failure)
        try:
            with scope:
                await self._copy_template(scope)
                result.advance(CreateState.MATERIALIZED)

                await self._configure(target, name)
                result.advance(CreateState.CUSTOMIZED)
                scope.commit()
        except TargetExistsError as exc:
            result.abort(exc)
            raise
        except CreateAppError as exc:
            result.abort(exc)
            if not scope.cleaned_up and target_exists(target):
                self.reporter.partial_left(target)
            raise

        install = await self._install(target)
        result.install_result = install
        if install.success:
            result.advance(CreateState.INSTALLED)
        else:
            self.reporter.manual_install_hint(name.value, self.installer.display, install.stderr)
            result.advance(CreateState.INSTALL_FAILED)

        self.reporter.success(name.value)
        result.advance(CreateState.REPORTED)
        result.advance(CreateState.DONE)
        return result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _copy_template(self, scope: TargetScope) -> None:
        with self.reporter.spinner("Copying template files..."):
            try:
                await materialize(self.config.template_dir, scope.path, scope)
            except CreateAppError:
                self.reporter.fail("Failed to copy template files")
                raise
        self.reporter.succeed("Template files copied")

    async def _configure(self, target: Path, name: ProjectName) -> None:
        with self.reporter.spinner("Updating project configuration..."):
            try:
                await customize_project(target, name, self.config)
            except CreateAppError:
                self.reporter.fail("Failed to update project configuration")
                raise
        self.reporter.succeed("Project configuration updated")

    async def _install(self, target: Path) -> InstallResult:
        with self.reporter.spinner("Installing dependencies..."):
            install = await self.installer.install(target)
        if install.success:
            self.reporter.succeed("Dependencies installed")
        else:
            self.reporter.fail("Failed to install dependencies")
            self.reporter.warning(install.warning)
        return install
