"""Command line interface for create-ic-app.

Usage::

    create-ic-app [project-name]
    python -m create_ic_app my-ic-app

Exit code 0 means the project was created, even when dependencies had to be
left for a manual install.  Exit code 1 means the run was cancelled or a
fatal step failed.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Callable, Sequence

from rich.markup import escape

from . import __version__
from .config import Config
from .errors import CreateAppError, OperationCancelled, ProjectNameError, TargetExistsError
from .naming import ProjectName, prompt_project_name
from .pipeline import ProjectCreator
from .reporter import Reporter
from .utils import console, print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-ic-app",
        description="Create Internet Computer applications with zero configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-ic-app\n"
            "  create-ic-app my-ic-app\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        metavar="project-name",
        help="name of the project to create (prompted for when omitted)",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="show tracebacks and package manager output on failure",
    )
    return parser


def resolve_project_name(
    raw: str | None,
    config: Config,
    ask: Callable[..., str] | None = None,
) -> ProjectName:
    """Turn the command-line argument, or an interactive answer, into a ``ProjectName``."""
    if not raw:
        return prompt_project_name(config.default_project_name, ask=ask)
    return ProjectName.parse(raw, strict=config.strict_argument_names)


def main(
    argv: Sequence[str] | None = None,
    *,
    config: Config | None = None,
    ask: Callable[..., str] | None = None,
) -> int:
    """CLI entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    reporter = Reporter(verbose=args.verbose)

    if config is None:
        try:
            config = Config.from_env()
        except ValueError as exc:
            print_error(f"Invalid configuration: {escape(str(exc))}")
            return 1

    reporter.welcome()

    try:
        name = resolve_project_name(args.project_name, config, ask=ask)
    except OperationCancelled:
        reporter.cancelled()
        return 1
    except ProjectNameError as exc:
        print_error(f"❌ {escape(str(exc))}")
        return 1

    creator = ProjectCreator(config, reporter)
    try:
        asyncio.run(creator.run(name))
    except KeyboardInterrupt:
        reporter.cancelled()
        return 1
    except TargetExistsError:
        reporter.target_exists(name.value)
        return 1
    except CreateAppError as exc:
        reporter.failure(exc.message)
        if args.verbose:
            console.print_exception()
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
