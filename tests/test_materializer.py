"""Unit tests for template materialization (create_ic_app.materializer).

Tests cover:
- materialize copies nested and hidden files
- materialize refuses an existing file or directory without touching it
- materialize reports a missing template as CopyError
- materialize reports a target that appears mid-copy as TargetExistsError
- TargetScope cleanup of directories it created, commit, and opt-out
"""

from __future__ import annotations

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from create_ic_app.errors import CopyError, TargetExistsError
from create_ic_app.materializer import TargetScope, materialize, target_exists

pytestmark = pytest.mark.unit


class TestMaterialize:
    async def test_copies_full_tree(self, template_dir: Path, workdir: Path):
        target = workdir / "demo-app"
        result = await materialize(template_dir, target)

        assert result == target
        assert (target / "package.json").read_bytes() == (template_dir / "package.json").read_bytes()
        assert (target / "src" / "backend" / "main.mo").is_file()
        assert (target / "deploy.sh").is_file()

    async def test_copies_hidden_files(self, template_dir: Path, workdir: Path):
        target = workdir / "demo-app"
        await materialize(template_dir, target)
        assert (target / ".env.example").read_text() == (template_dir / ".env.example").read_text()

    async def test_existing_directory_rejected_untouched(self, template_dir: Path, workdir: Path):
        target = workdir / "demo-app"
        target.mkdir()
        (target / "keep.txt").write_text("mine")

        with pytest.raises(TargetExistsError) as exc_info:
            await materialize(template_dir, target)

        assert exc_info.value.path == target
        assert "demo-app" in str(exc_info.value)
        assert [p.name for p in target.iterdir()] == ["keep.txt"]

    async def test_existing_file_rejected(self, template_dir: Path, workdir: Path):
        target = workdir / "demo-app"
        target.write_text("not a directory")

        with pytest.raises(TargetExistsError):
            await materialize(template_dir, target)
        assert target.read_text() == "not a directory"

    async def test_missing_template(self, tmp_path: Path, workdir: Path):
        with pytest.raises(CopyError, match="Template directory not found"):
            await materialize(tmp_path / "nope", workdir / "demo-app")
        assert not (workdir / "demo-app").exists()

    async def test_io_error_becomes_copy_error(self, template_dir: Path, workdir: Path):
        with patch("create_ic_app.materializer.shutil.copytree", side_effect=OSError("disk full")):
            with pytest.raises(CopyError, match="disk full"):
                await materialize(template_dir, workdir / "demo-app")


class TestTargetExists:
    def test_missing(self, tmp_path: Path):
        assert target_exists(tmp_path / "missing") is False

    def test_dangling_symlink_counts(self, tmp_path: Path):
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "missing")
        assert target_exists(link) is True


class TestTargetScope:
    def test_enter_rejects_existing(self, tmp_path: Path):
        with pytest.raises(TargetExistsError):
            with TargetScope(tmp_path):
                pass

    async def test_failure_removes_copied_directory(self, template_dir: Path, tmp_path: Path):
        target = tmp_path / "demo-app"
        scope = TargetScope(target)
        with pytest.raises(RuntimeError):
            with scope:
                await materialize(template_dir, target, scope)
                raise RuntimeError("boom")

        assert scope.created is True
        assert not target.exists()
        assert scope.cleaned_up is True

    async def test_failed_copy_is_removed(self, template_dir: Path, tmp_path: Path):
        target = tmp_path / "demo-app"

        def half_copy(src, dst, *args, **kwargs):
            Path(dst).mkdir()
            (Path(dst) / "half.txt").write_text("x")
            raise OSError("disk full")

        scope = TargetScope(target)
        with patch("create_ic_app.materializer.shutil.copytree", side_effect=half_copy):
            with pytest.raises(CopyError):
                with scope:
                    await materialize(template_dir, target, scope)

        assert not target.exists()
        assert scope.cleaned_up is True

    async def test_directory_appearing_during_copy_is_not_removed(self, template_dir: Path, tmp_path: Path):
        target = tmp_path / "demo-app"
        real_copytree = shutil.copytree

        def racing_copytree(src, dst, *args, **kwargs):
            Path(dst).mkdir()
            (Path(dst) / "theirs.txt").write_text("other process")
            return real_copytree(src, dst, *args, **kwargs)

        scope = TargetScope(target)
        with patch("create_ic_app.materializer.shutil.copytree", side_effect=racing_copytree):
            with pytest.raises(TargetExistsError):
                with scope:
                    await materialize(template_dir, target, scope)

        assert scope.created is False
        assert scope.cleaned_up is False
        assert [p.name for p in target.iterdir()] == ["theirs.txt"]

    def test_unowned_path_is_left_alone(self, tmp_path: Path):
        target = tmp_path / "demo-app"
        scope = TargetScope(target)
        with pytest.raises(RuntimeError):
            with scope:
                target.mkdir()
                raise RuntimeError("boom")

        assert target.is_dir()
        assert scope.cleaned_up is False

    async def test_commit_keeps_directory_even_on_later_error(self, template_dir: Path, tmp_path: Path):
        target = tmp_path / "demo-app"
        with pytest.raises(RuntimeError):
            with TargetScope(target) as scope:
                await materialize(template_dir, target, scope)
                scope.commit()
                raise RuntimeError("after commit")

        assert target.is_dir()

    async def test_success_keeps_directory(self, template_dir: Path, tmp_path: Path):
        target = tmp_path / "demo-app"
        with TargetScope(target) as scope:
            await materialize(template_dir, target, scope)
        assert target.is_dir()

    async def test_cleanup_disabled_leaves_partial(self, template_dir: Path, tmp_path: Path):
        target = tmp_path / "demo-app"
        scope = TargetScope(target, cleanup=False)
        with pytest.raises(RuntimeError):
            with scope:
                await materialize(template_dir, target, scope)
                raise RuntimeError("boom")

        assert target.is_dir()
        assert scope.cleaned_up is False
