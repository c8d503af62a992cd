"""Exception taxonomy for create-ic-app.

Every fatal failure derives from :class:`CreateAppError` and carries the name
of the step that raised it.  Dependency installation never raises; see
:class:`create_ic_app.installer.InstallResult`.
"""

from __future__ import annotations

from pathlib import Path


class CreateAppError(Exception):
    """Raised when a project creation step fails irrecoverably."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        self.message = message
        super().__init__(message)


class ProjectNameError(ValueError):
    """Raised when a candidate project name is empty or malformed."""


class OperationCancelled(Exception):
    """Raised when the user aborts the interactive prompt."""


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------


class TargetExistsError(CreateAppError):
    """The target path already exists; nothing has been written."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__("copy", f'Directory "{path.name}" already exists!')


class CopyError(CreateAppError):
    """Copying the template tree failed part-way through."""

    def __init__(self, message: str) -> None:
        super().__init__("copy", message)


# ---------------------------------------------------------------------------
# Customization
# ---------------------------------------------------------------------------


class MetadataParseError(CreateAppError):
    """The copied metadata file is missing or is not a JSON object."""

    def __init__(self, message: str) -> None:
        super().__init__("configure", message)


class MetadataWriteError(CreateAppError):
    """The updated metadata file could not be written back."""

    def __init__(self, message: str) -> None:
        super().__init__("configure", message)


class EnvFileError(CreateAppError):
    """The environment file could not be derived from its example."""

    def __init__(self, message: str) -> None:
        super().__init__("configure", message)
