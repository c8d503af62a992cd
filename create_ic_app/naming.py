"""Project name validation.

``ProjectName.parse`` is the one constructor used by both the command-line
argument path and the interactive prompt, so every name flows through the
same checks.  The character pattern is applied strictly when prompting and,
depending on configuration, relaxed for names passed on the command line.
"""

from __future__ import annotations

import re
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field
from rich.prompt import Prompt

from .errors import OperationCancelled, ProjectNameError
from .utils import console, print_error

NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

EMPTY_NAME_MESSAGE = "Project name is required"
INVALID_NAME_MESSAGE = (
    "Project name can only contain letters, numbers, hyphens, and underscores"
)


def validate_project_name(value: str, *, strict: bool = True) -> str | None:
    """Return an error message for *value*, or ``None`` when it is acceptable."""
    if not value:
        return EMPTY_NAME_MESSAGE
    if strict and not NAME_PATTERN.fullmatch(value):
        return INVALID_NAME_MESSAGE
    return None


class ProjectName(BaseModel):
    """A validated project name, used for the target directory and metadata."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., min_length=1)

    @classmethod
    def parse(cls, raw: str | None, *, strict: bool = True) -> "ProjectName":
        """Build a ``ProjectName`` from user input.

        Args:
            raw: The candidate name, used verbatim.
            strict: Enforce ``NAME_PATTERN`` in addition to rejecting empty input.

        Raises:
            ProjectNameError: If the name is rejected.
        """
        error = validate_project_name(raw or "", strict=strict)
        if error:
            raise ProjectNameError(error)
        return cls(value=raw)

    def __str__(self) -> str:
        return self.value


def prompt_project_name(
    default: str,
    ask: Callable[..., str] | None = None,
) -> ProjectName:
    """Interactively ask for a project name until a valid one is entered.

    Args:
        default: Suggestion accepted when the user just presses Enter.
        ask: Prompt callable with the ``rich.prompt.Prompt.ask`` signature.

    Raises:
        OperationCancelled: If the user interrupts the prompt (Ctrl-C / EOF).
    """
    ask = ask or Prompt.ask
    while True:
        try:
            answer = ask(
                "[cyan]?[/cyan] What would you like to name your IC app?",
                default=default,
                console=console,
            )
        except (KeyboardInterrupt, EOFError) as exc:
            raise OperationCancelled() from exc

        try:
            return ProjectName.parse(answer or "", strict=True)
        except ProjectNameError as exc:
            print_error(str(exc))
