"""Project customization.

Rewrites the ``name`` and ``description`` fields of the copied
``package.json`` and provisions ``.env`` from ``.env.example``.  Every other
metadata field, and its position in the document, is left untouched.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from .config import Config
from .errors import EnvFileError, MetadataParseError, MetadataWriteError
from .naming import ProjectName
from .utils import load_json, save_json

_env = Environment(undefined=StrictUndefined)


def render_description(template: str, name: ProjectName | str) -> str:
    """Render the description template with the project ``name``."""
    try:
        return _env.from_string(template).render(name=str(name))
    except TemplateError as exc:
        raise MetadataWriteError(f"Invalid description template: {exc}") from exc


def apply_metadata(
    metadata: dict[str, Any], name: ProjectName | str, description_template: str
) -> dict[str, Any]:
    """Return a copy of *metadata* with ``name`` and ``description`` rewritten.

    ``description`` is only rewritten when the field is already present; no new
    fields are ever added.
    """
    updated = dict(metadata)
    updated["name"] = str(name)
    if "description" in updated:
        updated["description"] = render_description(description_template, name)
    return updated


async def update_metadata(
    metadata_path: Path, name: ProjectName | str, description_template: str
) -> dict[str, Any]:
    """Load, update and persist the metadata file at *metadata_path*.

    Raises:
        MetadataParseError: If the file is missing, not JSON, or not a JSON object.
        MetadataWriteError: If the updated document cannot be written.
    """
    try:
        metadata = await asyncio.to_thread(load_json, metadata_path)
    except FileNotFoundError as exc:
        raise MetadataParseError(f"{metadata_path.name} not found in project") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MetadataParseError(f"{metadata_path.name} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise MetadataParseError(f"Could not read {metadata_path.name}: {exc}") from exc

    if not isinstance(metadata, dict):
        raise MetadataParseError(f"{metadata_path.name} must contain a JSON object")

    updated = apply_metadata(metadata, name, description_template)
    try:
        await save_json(updated, metadata_path)
    except OSError as exc:
        raise MetadataWriteError(f"Could not write {metadata_path.name}: {exc}") from exc
    return updated


async def provision_env_file(example_path: Path, env_path: Path) -> Path | None:
    """Copy *example_path* to *env_path* byte for byte, if the example exists.

    An existing *env_path* is overwritten.

    Returns:
        The environment file path, or ``None`` when there is no example.
    """
    if not example_path.is_file():
        return None
    try:
        await asyncio.to_thread(shutil.copyfile, example_path, env_path)
    except OSError as exc:
        raise EnvFileError(f"Could not create {env_path.name}: {exc}") from exc
    return env_path


async def customize_project(target: Path, name: ProjectName, config: Config) -> dict[str, Any]:
    """Apply every per-project customization to the copied template at *target*.

    Returns:
        The updated metadata document.
    """
    metadata = await update_metadata(
        config.metadata_path(target), name, config.description_template
    )
    await provision_env_file(config.env_example_path(target), config.env_path(target))
    return metadata
