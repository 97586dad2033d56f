"""
yaml_validator.py

YAML syntax validation.

Pipeline for one document:
1. File exists (skipped when content is passed directly)
2. Syntax check with PyYAML, reporting position and the offending line
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional, Tuple

import yaml

from core.models import ValidationResult, ValidationSeverity
from .validation_pipeline import AsyncValidationPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YamlValidationParams:
    """
    Input for YamlValidator.

    Attributes:
        yaml_path: Path to the YAML file (ignored when content is set)
        content: YAML text to validate instead of reading yaml_path
    """

    yaml_path: str
    content: Optional[str] = None

    @classmethod
    def from_content(cls, content: str) -> "YamlValidationParams":
        return cls(yaml_path="content", content=content)


def get_context_line(yaml_content: str, line_number: int) -> str:
    """
    Return the 1-based line from yaml_content, without a trailing CR.

    Returns an empty string when the line number is out of range.
    """
    if line_number <= 0 or not yaml_content:
        return ""

    lines = yaml_content.split("\n")
    if line_number > len(lines):
        return ""

    return lines[line_number - 1].rstrip("\r")


def describe_marked_error(error: yaml.MarkedYAMLError) -> Tuple[str, int]:
    """
    Extract (message, start_line) from a PyYAML error.

    The span starts at the context mark (where the enclosing construct
    began) when present, otherwise at the problem mark, and ends at the
    problem mark. Marks are 0-based in PyYAML; reported values are 1-based.
    """
    problem = error.problem or error.context or "invalid YAML"
    start_mark = error.context_mark or error.problem_mark
    end_mark = error.problem_mark or error.context_mark

    message = f"YAML syntax error: {problem}"
    if start_mark is None:
        return message, 0

    line, column = start_mark.line + 1, start_mark.column + 1
    end_line, end_column = end_mark.line + 1, end_mark.column + 1

    message += f" (Line {line}, Column {column}"
    if end_line != line or end_column != column:
        message += f" to Line {end_line}, Column {end_column}"
    message += ")"
    return message, line


class YamlValidator(AsyncValidationPipeline[YamlValidationParams]):
    """Validates YAML files or YAML text."""

    _instance: Optional["YamlValidator"] = None

    @classmethod
    def instance(cls) -> "YamlValidator":
        """Shared stateless validator."""
        if cls.__dict__.get("_instance") is None:
            cls._instance = cls()
        return cls._instance

    def validate_yaml(self, yaml_path: str) -> AsyncIterator[ValidationResult]:
        """Validate the syntax of a YAML file."""
        return self.validate(YamlValidationParams(yaml_path))

    def validate_yaml_content(self, yaml_content: str) -> AsyncIterator[ValidationResult]:
        """Validate the syntax of YAML text directly."""
        return self.validate(YamlValidationParams.from_content(yaml_content))

    async def _validations(
        self, params: YamlValidationParams
    ) -> AsyncIterator[Optional[ValidationResult]]:
        if params.content is not None:
            yield self._validate_syntax(params.content, source="content")
            return

        file_error = self._validate_file_exists(params.yaml_path, "YAML")
        yield file_error
        if file_error is not None:
            return

        try:
            content = await asyncio.to_thread(
                Path(params.yaml_path).read_text, encoding="utf-8"
            )
        except (OSError, UnicodeDecodeError) as e:
            yield ValidationResult(
                "Exception",
                ValidationSeverity.ERROR,
                f"Error reading YAML file: {e}",
                0,
                "",
            )
            return

        yield self._validate_syntax(content, source="file")

    def _validate_syntax(self, yaml_content: str, source: str) -> Optional[ValidationResult]:
        if not yaml_content or not yaml_content.strip():
            return ValidationResult(
                "Syntax", ValidationSeverity.ERROR, f"YAML {source} is empty", 0, ""
            )

        try:
            # Drain every document in the stream
            for _ in yaml.safe_load_all(yaml_content):
                pass
            return None
        except yaml.MarkedYAMLError as e:
            message, line = describe_marked_error(e)
            return ValidationResult(
                "Syntax",
                ValidationSeverity.ERROR,
                message,
                line,
                get_context_line(yaml_content, line),
            )
        except yaml.YAMLError as e:
            return ValidationResult(
                "Syntax", ValidationSeverity.ERROR, f"YAML syntax error: {e}", 0, ""
            )
        except Exception as e:
            return ValidationResult(
                "Exception",
                ValidationSeverity.ERROR,
                f"Error reading YAML content: {e}",
                0,
                "",
            )


def validate_yaml(yaml_path: str) -> AsyncIterator[ValidationResult]:
    return YamlValidator.instance().validate_yaml(yaml_path)


def validate_yaml_content(yaml_content: str) -> AsyncIterator[ValidationResult]:
    return YamlValidator.instance().validate_yaml_content(yaml_content)
