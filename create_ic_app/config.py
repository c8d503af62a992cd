"""create-ic-app configuration.

Centralised, typed configuration for a project creation run.  Settings use a
Pydantic v2 model so they are validated at construction time and can be built
from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "template"

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global create-ic-app configuration.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and then passed to the creation pipeline.
    """

    template_dir: Path = Field(default=_BUNDLED_TEMPLATE_DIR)
    metadata_file: str = Field(default="package.json")
    env_example_file: str = Field(default=".env.example")
    env_file: str = Field(default=".env")
    description_template: str = Field(
        default="An Internet Computer application - {{ name }}",
        description="Jinja2 template for the metadata description; exposes ``name``",
    )
    install_command: list[str] = Field(default_factory=lambda: ["npm", "install"])
    install_timeout: int | None = Field(
        default=None, ge=1, description="Install timeout in seconds; None waits forever"
    )
    default_project_name: str = Field(default="my-ic-app")

    # Apply the interactive name pattern to names given on the command line too.
    strict_argument_names: bool = Field(default=False)
    # Remove a half-created project directory when a fatal step fails.
    cleanup_on_failure: bool = Field(default=True)

    @field_validator("install_command")
    @classmethod
    def _command_not_empty(cls, value: list[str]) -> list[str]:
        if not value or not value[0]:
            raise ValueError("install_command must name an executable")
        return value

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def metadata_path(self, target: Path) -> Path:
        """Path to the metadata file inside a project."""
        return target / self.metadata_file

    def env_example_path(self, target: Path) -> Path:
        """Path to the example environment file inside a project."""
        return target / self.env_example_file

    def env_path(self, target: Path) -> Path:
        """Path to the environment file provisioned inside a project."""
        return target / self.env_file

    @property
    def install_command_display(self) -> str:
        """The install command as the user would type it."""
        return shlex.join(self.install_command)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CREATE_IC_APP_TEMPLATE_DIR, CREATE_IC_APP_INSTALL_COMMAND,
            CREATE_IC_APP_INSTALL_TIMEOUT, CREATE_IC_APP_STRICT_NAMES,
            CREATE_IC_APP_KEEP_PARTIAL.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_IC_APP_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["CREATE_IC_APP_TEMPLATE_DIR"])
        if os.environ.get("CREATE_IC_APP_INSTALL_COMMAND"):
            kwargs["install_command"] = shlex.split(os.environ["CREATE_IC_APP_INSTALL_COMMAND"])
        if os.environ.get("CREATE_IC_APP_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["CREATE_IC_APP_INSTALL_TIMEOUT"])
        if os.environ.get("CREATE_IC_APP_STRICT_NAMES"):
            kwargs["strict_argument_names"] = (
                os.environ["CREATE_IC_APP_STRICT_NAMES"].strip().lower() in _TRUTHY
            )
        if os.environ.get("CREATE_IC_APP_KEEP_PARTIAL"):
            kwargs["cleanup_on_failure"] = (
                os.environ["CREATE_IC_APP_KEEP_PARTIAL"].strip().lower() not in _TRUTHY
            )
        return cls(**kwargs)
