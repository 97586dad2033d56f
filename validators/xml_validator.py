"""
xml_validator.py

XML syntax validation and optional XSD schema validation.

Pipeline for one document:
1. Path checks (skipped when content is passed directly)
2. Syntax check with lxml
3. Schema path checks (only when a schema path is given)
4. Schema load with xmlschema
5. Schema validation, reporting the first violation only
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional, Tuple, Union

import xmlschema
from lxml import etree

from core.models import ValidationResult, ValidationSeverity
from .validation_pipeline import AsyncValidationPipeline

logger = logging.getLogger(__name__)

XmlText = Union[str, bytes]


@dataclass(frozen=True)
class XmlValidationParams:
    """
    Input for XmlValidator.

    Attributes:
        xml_path: Path to the XML file (ignored when content is set)
        xsd_path: Optional XSD schema path
        content: XML text to validate instead of reading xml_path
    """

    xml_path: Optional[str]
    xsd_path: Optional[str] = None
    content: Optional[XmlText] = None


def _make_parser() -> etree.XMLParser:
    # No network access and no entity expansion while checking untrusted input
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


def _as_bytes(xml_content: XmlText) -> bytes:
    if isinstance(xml_content, str):
        return xml_content.encode("utf-8")
    return xml_content


class XmlValidator(AsyncValidationPipeline[XmlValidationParams]):
    """Validates XML files or XML text, optionally against an XSD schema."""

    _instance: Optional["XmlValidator"] = None

    @classmethod
    def instance(cls) -> "XmlValidator":
        """Shared stateless validator."""
        if cls.__dict__.get("_instance") is None:
            cls._instance = cls()
        return cls._instance

    def validate_xml(
        self, xml_path: Optional[str], xsd_path: Optional[str] = None
    ) -> AsyncIterator[ValidationResult]:
        """Validate an XML file, optionally against an XSD schema."""
        return self.validate(XmlValidationParams(xml_path, xsd_path))

    def validate_xml_content(
        self, xml_content: XmlText, xsd_path: Optional[str] = None
    ) -> AsyncIterator[ValidationResult]:
        """Validate XML text directly instead of reading it from a file."""
        return self.validate(
            XmlValidationParams("content", xsd_path, content=xml_content)
        )

    async def _validations(
        self, params: XmlValidationParams
    ) -> AsyncIterator[Optional[ValidationResult]]:
        xml_content = params.content

        # Step 1: Path checks and file read; a failure here stops file access
        if xml_content is None:
            path_error = self._validate_path(params.xml_path, "XML")
            yield path_error
            if path_error is None:
                xml_content, read_error = await self._read_xml_file(params.xml_path)
                yield read_error

        # Step 2: Syntax
        syntax_error = None
        if xml_content is not None:
            syntax_error = self._validate_syntax(xml_content)
            yield syntax_error

        # Step 3: Schema path (optional)
        xsd_error = self._validate_xsd_path(params.xsd_path)
        yield xsd_error

        if (
            xml_content is None
            or syntax_error is not None
            or xsd_error is not None
            or params.xsd_path is None
        ):
            return

        # Step 4: Schema load
        schema, load_error = self._load_schema(params.xsd_path)
        yield load_error

        # Step 5: Schema validation
        if schema is not None:
            yield self._validate_against_schema(xml_content, schema)

    # ==========================================================================
    # Input & file path validation
    # ==========================================================================
    def _validate_xsd_path(self, xsd_path: Optional[str]) -> Optional[ValidationResult]:
        if xsd_path is None:
            return None  # schema validation is optional
        return self._validate_path(xsd_path, "XSD schema")

    async def _read_xml_file(
        self, xml_path: str
    ) -> Tuple[Optional[bytes], Optional[ValidationResult]]:
        try:
            data = await asyncio.to_thread(Path(xml_path).read_bytes)
            return data, None
        except OSError as e:
            return None, ValidationResult(
                "Exception",
                ValidationSeverity.ERROR,
                f"Error reading XML file: {e}",
                0,
                "",
            )

    # ==========================================================================
    # Syntax
    # ==========================================================================
    def _validate_syntax(self, xml_content: XmlText) -> Optional[ValidationResult]:
        try:
            etree.fromstring(_as_bytes(xml_content), _make_parser())
            return None
        except etree.XMLSyntaxError as e:
            return ValidationResult(
                "Syntax",
                ValidationSeverity.ERROR,
                f"XML syntax error: {e}",
                e.lineno or 0,
                "",
            )
        except Exception as e:
            return ValidationResult(
                "Exception",
                ValidationSeverity.ERROR,
                f"Error reading XML file: {e}",
                0,
                "",
            )

    # ==========================================================================
    # Schema
    # ==========================================================================
    def _load_schema(
        self, xsd_path: str
    ) -> Tuple[Optional[xmlschema.XMLSchema], Optional[ValidationResult]]:
        try:
            schema = xmlschema.XMLSchema(xsd_path)
        except Exception as e:
            logger.debug("Could not load XSD schema %s: %s", xsd_path, e)
            return None, ValidationResult(
                "Schema",
                ValidationSeverity.ERROR,
                f"Error loading XSD schema: {e}",
                0,
                "",
            )

        if schema is None:
            return None, ValidationResult(
                "Schema", ValidationSeverity.ERROR, "Failed to load XSD schema", 0, ""
            )
        return schema, None

    def _validate_against_schema(
        self, xml_content: XmlText, schema: xmlschema.XMLSchema
    ) -> Optional[ValidationResult]:
        violation: Optional[ValidationResult] = None
        try:
            document = etree.ElementTree(
                etree.fromstring(_as_bytes(xml_content), _make_parser())
            )
            for error in schema.iter_errors(document):
                # Only the first violation is reported
                violation = self._violation_to_result(error)
                break
            return violation
        except Exception as e:
            if violation is not None:
                return violation
            return ValidationResult(
                "Exception",
                ValidationSeverity.ERROR,
                f"XML validation failed: {e}",
                0,
                "",
            )

    @staticmethod
    def _violation_to_result(error: xmlschema.XMLSchemaValidationError) -> ValidationResult:
        reason = getattr(error, "reason", None) or getattr(error, "message", None) or str(error)
        path = getattr(error, "path", None)
        message = f"At {path}: {reason}" if path else reason
        line = getattr(error, "sourceline", None)
        return ValidationResult(
            "XSD",
            ValidationSeverity.ERROR,
            message,
            line if isinstance(line, int) else 0,
            "",
        )


def validate_xml(
    xml_path: Optional[str], xsd_path: Optional[str] = None
) -> AsyncIterator[ValidationResult]:
    return XmlValidator.instance().validate_xml(xml_path, xsd_path)


def validate_xml_content(
    xml_content: XmlText, xsd_path: Optional[str] = None
) -> AsyncIterator[ValidationResult]:
    return XmlValidator.instance().validate_xml_content(xml_content, xsd_path)
