"""Tests for FileManager backups and output handling."""

import re

import pytest

from managers.file_manager import FileManager

BACKUP_NAME = re.compile(r"^ci\.yml\.\d{8}-\d{6}(-\d{2})?\.bak$")


@pytest.fixture
def manager():
    return FileManager()


@pytest.fixture
def existing(tmp_path):
    path = tmp_path / "ci.yml"
    path.write_text("original\n")
    return path


class TestBackups:
    """Test backup naming and collisions."""

    def test_backup_of_missing_file(self, manager, tmp_path):
        assert manager.create_backup_if_exists(tmp_path / "missing.yml") is None

    def test_timestamped_backup(self, manager, existing):
        backup = manager.create_backup_if_exists(existing)

        assert backup is not None
        assert BACKUP_NAME.match(existing.parent.joinpath(backup).name)
        assert open(backup).read() == "original\n"
        assert existing.exists()

    def test_collision_gets_counter(self, manager, existing):
        first = manager.create_backup_with_suffix(existing, "20240101-120000")
        second = manager.create_backup_with_suffix(existing, "20240101-120000")
        third = manager.create_backup_with_suffix(existing, "20240101-120000")

        assert first.endswith("ci.yml.20240101-120000.bak")
        assert second.endswith("ci.yml.20240101-120000-01.bak")
        assert third.endswith("ci.yml.20240101-120000-02.bak")


class TestHandleOutputFile:
    """Test preparing an output path."""

    def test_new_file(self, manager, tmp_path):
        result = manager.handle_output_file(tmp_path / "new.yml", overwrite=False)
        assert result.should_proceed
        assert not result.backup_created
        assert result.backup_path is None

    def test_existing_without_overwrite(self, manager, existing):
        result = manager.handle_output_file(existing, overwrite=False)
        assert not result.should_proceed
        assert not result.backup_created

    def test_existing_with_overwrite(self, manager, existing):
        result = manager.handle_output_file(existing, overwrite=True)
        assert result.should_proceed
        assert result.backup_created
        assert result.backup_path is not None


class TestDirectories:
    def test_ensure_parent_directory(self, manager, tmp_path):
        target = tmp_path / "a" / "b" / "c.yml"
        manager.ensure_parent_directory(target)
        assert target.parent.is_dir()

    def test_file_exists(self, manager, existing, tmp_path):
        assert manager.file_exists(existing)
        assert not manager.file_exists(tmp_path)
        assert not manager.file_exists(None)
