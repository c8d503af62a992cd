"""Shared pytest fixtures for the create-ic-app test suite.

Provides reusable fixtures for:
- A throw-away template tree (with and without ``.env.example``)
- ``Config`` objects pointing at that tree
- Install commands built from the running interpreter
- A Reporter writing to an in-memory console
"""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import pytest
from rich.console import Console

from create_ic_app.config import Config
from create_ic_app.reporter import Reporter


SAMPLE_PACKAGE_JSON = {
    "name": "template",
    "version": "0.1.0",
    "description": "A template",
    "private": True,
    "scripts": {"dev": "vite", "build": "vite build"},
    "dependencies": {"react": "^18.3.1"},
}

ENV_EXAMPLE = "DFX_NETWORK=local\nCANISTER_ID_BACKEND=\n"

INSTALL_OK = [sys.executable, "-c", "pass"]
INSTALL_FAIL = [
    sys.executable, "-c", "import sys; sys.stderr.write('npm ERR! network\\n'); sys.exit(1)"
]
INSTALL_MISSING = ["nonexistent-package-manager-12345-xyz", "install"]


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------


def write_template(root: Path, package_json: dict | str | None = None, env_example: bool = True) -> Path:
    """Create a small template tree under *root* and return it."""
    root.mkdir(parents=True, exist_ok=True)
    if package_json is None:
        package_json = SAMPLE_PACKAGE_JSON
    if isinstance(package_json, dict):
        package_json = json.dumps(package_json, indent=2) + "\n"
    (root / "package.json").write_text(package_json, encoding="utf-8")
    (root / "README.md").write_text("# IC App\n", encoding="utf-8")
    (root / "deploy.sh").write_text("#!/usr/bin/env bash\ndfx deploy\n", encoding="utf-8")
    backend = root / "src" / "backend"
    backend.mkdir(parents=True)
    (backend / "main.mo").write_text("actor {};\n", encoding="utf-8")
    if env_example:
        (root / ".env.example").write_text(ENV_EXAMPLE, encoding="utf-8")
    return root


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Template tree with package.json, nested sources and a .env.example."""
    return write_template(tmp_path / "template")


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Directory that plays the role of the user's current working directory."""
    path = tmp_path / "work"
    path.mkdir()
    return path


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def config(template_dir: Path) -> Config:
    """Config using the throw-away template and an install that succeeds."""
    return Config(template_dir=template_dir, install_command=INSTALL_OK)


# ---------------------------------------------------------------------------
# Output capture
# ---------------------------------------------------------------------------


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> Reporter:
    """Reporter writing plain text to ``output``."""
    console = Console(file=output, force_terminal=False, color_system=None, width=400)
    return Reporter(console)
