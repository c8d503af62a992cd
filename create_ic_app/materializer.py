"""Template materialization.

Copies the bundled template tree into a new project directory and provides
``TargetScope``, which owns the new directory until the run commits and
removes it again if a fatal step fails first.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from types import TracebackType

from .errors import CopyError, TargetExistsError


def target_exists(path: Path) -> bool:
    """Return ``True`` if anything (file, directory or dangling link) is at *path*."""
    return path.exists() or path.is_symlink()


def ensure_target_available(path: Path) -> None:
    """Raise :class:`TargetExistsError` if *path* is already taken.

    This is a plain pre-check; it is not atomic with the copy that follows.
    """
    if target_exists(path):
        raise TargetExistsError(path)


async def materialize(
    template_root: Path, target_path: Path, scope: TargetScope | None = None
) -> Path:
    """Copy *template_root* recursively to *target_path*.

    Directory structure, file contents and hidden files are preserved.  When
    a *scope* is given it is marked as owning *target_path* once the copy has
    created the directory.

    Returns:
        The target path.

    Raises:
        TargetExistsError: If *target_path* exists before the copy starts, or
            appears between the pre-check and the copy.
        CopyError: If the template is missing or any I/O error interrupts the copy.
    """
    ensure_target_available(target_path)
    if not template_root.is_dir():
        raise CopyError(f"Template directory not found: {template_root}")

    owned = True
    try:
        await asyncio.to_thread(shutil.copytree, template_root, target_path, symlinks=True)
    except FileExistsError as exc:
        # copytree only raises this directly when the top-level target exists.
        owned = False
        raise TargetExistsError(target_path) from exc
    except OSError as exc:
        raise CopyError(f"Failed to copy template files: {exc}") from exc
    finally:
        if scope is not None:
            scope.created = owned
    return target_path


class TargetScope:
    """Ownership of a not-yet-existing project directory.

    Entering the scope checks that the target is free.  Leaving it with an
    exception before :meth:`commit` removes whatever the scope created at the
    target, unless *cleanup* is ``False``.  A path the scope never created
    (``created`` is ``False``) is left alone.
    """

    def __init__(self, path: Path, *, cleanup: bool = True) -> None:
        self.path = path
        self.cleanup = cleanup
        self.created = False
        self.committed = False
        self.cleaned_up = False

    def commit(self) -> None:
        """Mark the project as complete; the directory is kept from now on."""
        self.committed = True

    def __enter__(self) -> "TargetScope":
        ensure_target_available(self.path)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is None or self.committed or not self.cleanup or not self.created:
            return False
        if self.path.is_dir() and not self.path.is_symlink():
            shutil.rmtree(self.path, ignore_errors=True)
        elif target_exists(self.path):
            self.path.unlink(missing_ok=True)
        self.cleaned_up = not target_exists(self.path)
        return False
