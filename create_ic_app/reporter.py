"""Console reporting for project creation.

Purely observational: prints the welcome banner, a spinner and a result line
per step, warnings, and the final usage summary.  Nothing here returns a
value the pipeline depends on.
"""

from __future__ import annotations

import shlex
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import utils

WHAT_YOU_GET = [
    "Internet Computer backend (Motoko)",
    "React frontend with TypeScript",
    "DFX configuration ready",
    "Deployment scripts included",
    "Environment variables configured (.env)",
    "Everything ready to deploy",
]

QUICK_COMMAND_WIDTH = 21

QUICK_COMMANDS = [
    ("./deploy.sh", "Deploy to local IC replica"),
    ("./deploy-ic.sh", "Deploy to IC mainnet"),
    ("npm run dev", "Start development server"),
    ("cat README.md", "Full documentation"),
]


class Reporter:
    """Human-readable progress and result output.

    Args:
        console: Rich console to write to.  Defaults to the shared console.
        verbose: Also print captured diagnostics such as package manager stderr.
    """

    def __init__(self, console: Console | None = None, *, verbose: bool = False) -> None:
        self.console = console or utils.console
        self.verbose = verbose

    # -- Banner ------------------------------------------------------------

    def welcome(self) -> None:
        self.console.print("[bold cyan]🚀 Welcome to Create IC App![/bold cyan]")
        self.console.print("[dim]Making IC development as easy as React development[/dim]\n")

    def creating(self, target_path: Path) -> None:
        self.console.print(
            f"\n[blue]📁 Creating IC app in [bold]{escape(str(target_path))}[/bold][/blue]"
        )

    # -- Steps -------------------------------------------------------------

    @contextmanager
    def spinner(self, text: str) -> Iterator[None]:
        """Show a spinner with *text* while the enclosed step runs."""
        with self.console.status(text, spinner="dots"):
            yield

    def succeed(self, text: str) -> None:
        self.console.print(f"[green]✔[/green] {text}")

    def fail(self, text: str) -> None:
        self.console.print(f"[red]✖[/red] {text}")

    # -- Warnings and errors -----------------------------------------------

    def manual_install_hint(self, project_name: str, install_command: str, stderr: str = "") -> None:
        """Tell the user how to install dependencies themselves."""
        if self.verbose and stderr:
            self.console.print(f"[dim]{escape(stderr)}[/dim]")
        self.console.print(
            "\n[yellow]⚠️  You can install dependencies manually by running:[/yellow]"
        )
        self.console.print(
            f"[dim]   cd {escape(shlex.quote(project_name))} && {escape(install_command)}[/dim]"
        )

    def warning(self, message: str) -> None:
        utils.print_warning(escape(message), out=self.console)

    def target_exists(self, project_name: str) -> None:
        utils.print_error(
            f'\n❌ Directory "{escape(project_name)}" already exists!', out=self.console
        )
        self.console.print(
            "[dim]Please choose a different name or remove the existing directory.[/dim]\n"
        )

    def cancelled(self) -> None:
        utils.print_error("\n❌ Operation cancelled", out=self.console)

    def failure(self, message: str) -> None:
        utils.print_error(f"\n❌ Failed to create IC app: {escape(message)}", out=self.console)

    def partial_left(self, target_path: Path) -> None:
        self.console.print(
            f"[dim]Partially created files were left in {escape(str(target_path))}; "
            "remove the directory before retrying.[/dim]"
        )

    # -- Final summary -----------------------------------------------------

    def success(self, project_name: str) -> None:
        """Print the final usage summary for a newly created project."""
        name = escape(project_name)
        print_line = self.console.print

        utils.print_success(f"\n🎉 Successfully created IC app: {name}", out=self.console)
        print_line("\n[cyan]📋 Get started with these commands:[/cyan]\n")
        print_line(f"[dim]   cd[/dim] [blue]{escape(shlex.quote(project_name))}[/blue]")
        print_line("[dim]   ./deploy.sh[/dim]")
        print_line()

        print_line("[white]📚 What you get:[/white]")
        for item in WHAT_YOU_GET:
            print_line(f"[dim]   ✓ {item}[/dim]")
        print_line()

        print_line("[white]🚀 Quick commands:[/white]")
        for command, description in QUICK_COMMANDS:
            print_line(f"[dim]   {command.ljust(QUICK_COMMAND_WIDTH)}- {description}[/dim]")
        print_line()

        print_line("[green]Happy coding! 🎯[/green]")
        print_line("[dim]Made with ❤️  for the IC community[/dim]")
