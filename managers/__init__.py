"""
Managers Package
================

Coordination layer for NMYAML.

Managers:
- FileManager: File system operations and output backups
"""

from .file_manager import BackupResult, FileManager

__all__ = [
    'BackupResult',
    'FileManager',
]
