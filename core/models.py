"""
Models
======

Value types shared by validators, services and the CLI:
- ValidationSeverity / ValidationResult: a single validation finding
- ValidationSummary: aggregate counts over a sequence of findings
- ConversionOptions / TransformationResult: input and outcome of one conversion
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class ValidationSeverity(Enum):
    """Ordinal classification of a finding. Only ERROR fails validation."""

    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationResult:
    """
    A single validation failure.

    A check that passes returns None instead of a ValidationResult, so a
    result object always describes a problem.

    Attributes:
        type: Category tag ("Input", "File", "Syntax", "Schema", "XSD",
            "Exception", "Structure")
        severity: Info, Warning or Error
        message: Human readable description
        line_number: 1-based line number, 0 when unknown
        context: Optional payload, e.g. the offending source line
    """

    type: str
    severity: ValidationSeverity
    message: str
    line_number: int = 0
    context: Optional[Any] = None

    def __str__(self) -> str:
        return f"[{self.severity}] Line {self.line_number}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "severity": str(self.severity),
            "message": self.message,
            "lineNumber": self.line_number,
            "context": self.context,
        }


@dataclass(frozen=True)
class ValidationSummary:
    """Counts by severity for one drained sequence of results."""

    total_issues: int
    errors: int
    warnings: int
    info: int
    is_valid: bool
    duration: timedelta

    @classmethod
    def from_results(
        cls, results: Iterable[ValidationResult], duration: timedelta
    ) -> "ValidationSummary":
        """
        Build a summary by draining results once.

        Args:
            results: Validation results (failures only)
            duration: Elapsed time of the validation run

        Returns:
            ValidationSummary
        """
        errors = warnings = info = 0
        for result in results:
            if result.severity is ValidationSeverity.ERROR:
                errors += 1
            elif result.severity is ValidationSeverity.WARNING:
                warnings += 1
            elif result.severity is ValidationSeverity.INFO:
                info += 1

        return cls(
            total_issues=errors + warnings + info,
            errors=errors,
            warnings=warnings,
            info=info,
            is_valid=errors == 0,
            duration=duration,
        )

    @property
    def duration_ms(self) -> float:
        return self.duration / timedelta(milliseconds=1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalIssues": self.total_issues,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
            "isValid": self.is_valid,
            "duration": self.duration_ms,
        }


@dataclass(frozen=True)
class ConversionOptions:
    """Configuration for one XML to YAML conversion run."""

    input_path: str
    output_path: str
    xsd_schema_path: Optional[str] = None
    xslt_path: Optional[str] = None
    skip_xml_validation: bool = False
    skip_yaml_validation: bool = False
    force_overwrite: bool = False
    detailed_output: bool = False


@dataclass(frozen=True)
class TransformationResult:
    """
    Outcome of a conversion run.

    xml_validation / yaml_validation are None when the stage was skipped
    or never reached.
    """

    success: bool
    output_path: Optional[str]
    xml_validation: Optional[ValidationSummary]
    yaml_validation: Optional[ValidationSummary]
    error_message: Optional[str]
    duration: timedelta
