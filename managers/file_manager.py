"""
File Manager
============

Manages file system operations around output files: directories,
existence checks and timestamped backups before an overwrite.
Follows SRP: Only handles file system utilities.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from core.settings import BACKUP_EXTENSION, BACKUP_TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class BackupResult:
    """
    Outcome of preparing an output path for writing.

    Attributes:
        should_proceed: Whether the caller may write to the path
        backup_created: Whether an existing file was copied aside
        backup_path: Path of the backup, None when none was made
    """

    should_proceed: bool
    backup_created: bool = False
    backup_path: Optional[str] = None


class FileManager:
    """
    Manager responsible for file system operations.

    Follows SRP: Only handles file operations.
    """

    def ensure_directory(self, directory: PathLike) -> None:
        """
        Ensure directory exists, create if necessary.

        Args:
            directory: Directory path
        """
        if directory:
            os.makedirs(directory, exist_ok=True)

    def ensure_parent_directory(self, filepath: PathLike) -> None:
        """Create the directory that will hold filepath."""
        self.ensure_directory(os.path.dirname(os.path.abspath(filepath)))

    def file_exists(self, filepath: Optional[PathLike]) -> bool:
        """
        Check if file exists.

        Args:
            filepath: Path to file

        Returns:
            True if file exists
        """
        if not filepath:
            return False
        return os.path.exists(filepath) and os.path.isfile(filepath)

    def create_backup_if_exists(self, filepath: PathLike) -> Optional[str]:
        """
        Copy an existing file to a timestamped backup next to it.

        The backup is named "<file name>.<YYYYMMDD-HHMMSS>.bak". When that
        name is taken, a counter is appended: ".<stamp>-01.bak", "-02", ...

        Args:
            filepath: File to back up

        Returns:
            Backup path, or None if filepath doesn't exist
        """
        stamp = datetime.now().strftime(BACKUP_TIMESTAMP_FORMAT)
        return self.create_backup_with_suffix(filepath, stamp)

    def create_backup_with_suffix(self, filepath: PathLike, suffix: str) -> Optional[str]:
        """
        Copy an existing file to "<file name>.<suffix>.bak".

        Args:
            filepath: File to back up
            suffix: Label placed before the .bak extension

        Returns:
            Backup path, or None if filepath doesn't exist
        """
        if not self.file_exists(filepath):
            return None

        source = Path(filepath)
        backup = source.with_name(f"{source.name}.{suffix}{BACKUP_EXTENSION}")
        counter = 1
        while backup.exists():
            backup = source.with_name(
                f"{source.name}.{suffix}-{counter:02d}{BACKUP_EXTENSION}"
            )
            counter += 1

        shutil.copy2(source, backup)
        logger.info("Backed up %s to %s", source, backup)
        return str(backup)

    def handle_output_file(self, filepath: PathLike, overwrite: bool) -> BackupResult:
        """
        Prepare an output path for writing.

        A missing file needs nothing. An existing file is backed up when
        overwrite is allowed; otherwise the caller must not write.

        Args:
            filepath: Intended output path
            overwrite: Whether replacing an existing file is allowed

        Returns:
            BackupResult
        """
        if not self.file_exists(filepath):
            return BackupResult(should_proceed=True)

        if not overwrite:
            return BackupResult(should_proceed=False)

        backup_path = self.create_backup_if_exists(filepath)
        return BackupResult(
            should_proceed=True,
            backup_created=backup_path is not None,
            backup_path=backup_path,
        )
