"""
Validation Service
==================

Orchestrates validation workflow following Single Responsibility Principle.
Only handles validation orchestration: picking validators, draining their
result sequences and timing the run.
"""

import logging
import os
import time
from datetime import timedelta
from typing import AsyncIterable, Dict, List, Optional, Tuple

from core.errors import UnsupportedFileTypeError
from core.models import ValidationResult, ValidationSeverity, ValidationSummary
from core.settings import SUPPORTED_XML_EXTENSIONS, SUPPORTED_YAML_EXTENSIONS
from validators.github_actions_validator import GitHubActionsValidator
from validators.xml_validator import XmlValidator
from validators.yaml_validator import YamlValidator

logger = logging.getLogger(__name__)

Outcome = Tuple[List[ValidationResult], ValidationSummary]


async def materialize_with_summary(
    results: AsyncIterable[ValidationResult],
) -> Outcome:
    """
    Drain a result sequence once, timing how long it takes.

    Args:
        results: Lazy validator output

    Returns:
        (results list, summary over that list)
    """
    started = time.perf_counter()
    collected = [result async for result in results]
    elapsed = timedelta(seconds=time.perf_counter() - started)
    return collected, ValidationSummary.from_results(collected, elapsed)


class ValidationService:
    """
    Service responsible for orchestrating validation process.

    Follows SRP: Only handles validation logic.
    """

    def __init__(
        self,
        xml_validator: Optional[XmlValidator] = None,
        yaml_validator: Optional[YamlValidator] = None,
        workflow_validator: Optional[GitHubActionsValidator] = None,
    ):
        """
        Initialize validation service.

        Args:
            xml_validator: XML validator (dependency injection)
            yaml_validator: YAML validator (dependency injection)
            workflow_validator: GitHub Actions validator (dependency injection)
        """
        self.xml_validator = xml_validator or XmlValidator.instance()
        self.yaml_validator = yaml_validator or YamlValidator.instance()
        self.workflow_validator = workflow_validator or GitHubActionsValidator.instance()

    async def validate_xml(
        self, xml_path: str, schema_path: Optional[str] = None
    ) -> Outcome:
        """
        Validate an XML file, optionally against an XSD schema.

        Args:
            xml_path: XML file to validate
            schema_path: Optional XSD schema

        Returns:
            (results, summary)
        """
        logger.debug("Validating XML %s (schema: %s)", xml_path, schema_path)
        return await materialize_with_summary(
            self.xml_validator.validate_xml(xml_path, schema_path)
        )

    async def validate_yaml(self, yaml_path: str, github_actions: bool = False) -> Outcome:
        """
        Validate YAML syntax, then optionally GitHub Actions structure.

        Structure checks only run when the syntax check found no errors.

        Args:
            yaml_path: YAML file to validate
            github_actions: Also run workflow structure checks

        Returns:
            (results, summary)
        """
        logger.debug("Validating YAML %s (github actions: %s)", yaml_path, github_actions)
        started = time.perf_counter()
        results, summary = await materialize_with_summary(
            self.yaml_validator.validate_yaml(yaml_path)
        )

        if github_actions and summary.is_valid:
            with open(yaml_path, "r", encoding="utf-8") as f:
                content = f.read()
            workflow_results, _ = await materialize_with_summary(
                self.workflow_validator.validate_workflow_content(content)
            )
            results.extend(workflow_results)

        elapsed = timedelta(seconds=time.perf_counter() - started)
        return results, ValidationSummary.from_results(results, elapsed)

    async def validate_file(
        self,
        file_path: str,
        schema_path: Optional[str] = None,
        github_actions: bool = False,
    ) -> Outcome:
        """
        Validate a file, choosing the validator by extension.

        Args:
            file_path: .xml, .yml or .yaml file
            schema_path: XSD schema, used for XML files only
            github_actions: Workflow structure checks, YAML files only

        Returns:
            (results, summary)

        Raises:
            UnsupportedFileTypeError: For any other extension
        """
        extension = os.path.splitext(file_path)[1].lower()
        if extension in SUPPORTED_XML_EXTENSIONS:
            return await self.validate_xml(file_path, schema_path)
        if extension in SUPPORTED_YAML_EXTENSIONS:
            return await self.validate_yaml(file_path, github_actions)
        raise UnsupportedFileTypeError(extension)

    def is_valid(self, summary: ValidationSummary) -> bool:
        """
        Check if a summary indicates a valid file.

        Args:
            summary: Summary from one of the validate_* methods

        Returns:
            True if no errors were found
        """
        return summary.is_valid

    def get_error_summary(self, results: List[ValidationResult]) -> str:
        """
        Get human-readable error summary.

        Args:
            results: Findings from one of the validate_* methods

        Returns:
            Error summary string, e.g. "Syntax: 1 error(s); XSD: 1 error(s)"
        """
        counts: Dict[str, int] = {}
        for result in results:
            if result.severity is ValidationSeverity.ERROR:
                counts[result.type] = counts.get(result.type, 0) + 1

        if not counts:
            return "No errors"
        return "; ".join(f"{kind}: {count} error(s)" for kind, count in counts.items())
