"""
Export Service
==============

Handles all file export operations following Single Responsibility Principle.
Only handles file writing: converted YAML and JSON validation reports.
"""

import os
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from core.models import ValidationResult, ValidationSummary
from core.settings import OUTPUT_ENCODING, REPORT_FILE_PATTERN, REPORT_TIMESTAMP_FORMAT
from managers.file_manager import FileManager

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ExportService:
    """
    Service responsible for writing results to files.

    Follows SRP: Only handles export operations.
    """

    def __init__(self, file_manager: Optional[FileManager] = None):
        """
        Initialize export service.

        Args:
            file_manager: File system helper (dependency injection)
        """
        self.file_manager = file_manager or FileManager()

    def write_text(self, filepath: PathLike, content: str) -> str:
        """
        Write text to a file, creating its directory when needed.

        Args:
            filepath: Destination path
            content: Text to write

        Returns:
            Path written
        """
        self.file_manager.ensure_parent_directory(filepath)
        with open(filepath, "w", encoding=OUTPUT_ENCODING, newline="\n") as f:
            f.write(content)
        return str(filepath)

    def build_report(
        self,
        results: List[ValidationResult],
        summary: ValidationSummary,
        source_path: PathLike,
    ) -> Dict[str, Any]:
        """
        Build the JSON-ready report structure.

        Args:
            results: Validation findings
            summary: Summary over the same findings
            source_path: File that was validated

        Returns:
            Report dictionary
        """
        return {
            "file": str(source_path),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "summary": summary.to_dict(),
            "results": [result.to_dict() for result in results],
        }

    def export_validation_report(
        self,
        results: List[ValidationResult],
        summary: ValidationSummary,
        source_path: PathLike,
        directory: PathLike = ".",
    ) -> str:
        """
        Write a validation report named validation-report-<timestamp>.json.

        Args:
            results: Validation findings
            summary: Summary over the same findings
            source_path: File that was validated
            directory: Directory for the report (default: current)

        Returns:
            Path to exported report
        """
        self.file_manager.ensure_directory(directory)

        timestamp = datetime.now().strftime(REPORT_TIMESTAMP_FORMAT)
        filename = os.path.join(directory, REPORT_FILE_PATTERN.format(timestamp=timestamp))

        report = self.build_report(results, summary, source_path)
        with open(filename, "w", encoding=OUTPUT_ENCODING) as f:
            json.dump(report, f, indent=2, ensure_ascii=False, default=str)

        logger.info("Validation report written to %s", filename)
        return filename
