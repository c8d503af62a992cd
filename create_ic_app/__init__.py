"""create-ic-app -- scaffold Internet Computer applications.

Copies the bundled IC template into a new directory, names the project,
provisions its ``.env`` file and installs its npm dependencies.

Quick usage::

    import asyncio
    from create_ic_app import Config, ProjectCreator, ProjectName

    creator = ProjectCreator(Config())
    result = asyncio.run(creator.run(ProjectName.parse("my-ic-app")))
"""

__version__ = "1.0.0"

from create_ic_app.config import Config
from create_ic_app.errors import (
    CopyError,
    CreateAppError,
    EnvFileError,
    MetadataParseError,
    MetadataWriteError,
    OperationCancelled,
    ProjectNameError,
    TargetExistsError,
)
from create_ic_app.installer import DependencyInstaller, InstallResult
from create_ic_app.naming import ProjectName
from create_ic_app.pipeline import CreateResult, CreateState, ProjectCreator

__all__ = [
    "__version__",
    "Config",
    "CopyError",
    "CreateAppError",
    "CreateResult",
    "CreateState",
    "DependencyInstaller",
    "EnvFileError",
    "InstallResult",
    "MetadataParseError",
    "MetadataWriteError",
    "OperationCancelled",
    "ProjectCreator",
    "ProjectName",
    "ProjectNameError",
    "TargetExistsError",
]
