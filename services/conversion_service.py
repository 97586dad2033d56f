"""
Conversion Service
==================

End-to-end XML to YAML conversion:

1. Check the input XML and the stylesheet exist
2. Validate the XML against an XSD schema (optional)
3. Transform with XSLT and write the output
4. Validate the produced YAML (optional, never aborts)

Failures come back as a TransformationResult; convert() does not raise.
"""

import asyncio
import logging
import time
from datetime import timedelta
from typing import Optional

from core.models import ConversionOptions, TransformationResult, ValidationSummary
from managers.file_manager import FileManager
from services.transformation_service import TransformationService, default_xslt_path
from services.validation_service import ValidationService

logger = logging.getLogger(__name__)

XML_VALIDATION_FAILED = "XML validation failed. Fix errors before transformation."


class ConversionService:
    """
    Service responsible for running a complete conversion.

    Follows SRP: Only orchestrates; validation and transformation are
    delegated to their services.
    """

    def __init__(
        self,
        validation_service: Optional[ValidationService] = None,
        transformation_service: Optional[TransformationService] = None,
        file_manager: Optional[FileManager] = None,
    ):
        """
        Initialize conversion service.

        Args:
            validation_service: Validation orchestration (dependency injection)
            transformation_service: XSLT transformation (dependency injection)
            file_manager: File system helper (dependency injection)
        """
        self.validation_service = validation_service or ValidationService()
        self.transformation_service = transformation_service or TransformationService()
        self.file_manager = file_manager or FileManager()

    async def convert(self, options: ConversionOptions) -> TransformationResult:
        """
        Convert options.input_path to YAML at options.output_path.

        Args:
            options: Conversion configuration

        Returns:
            TransformationResult; success is False only when the input is
            missing, XML validation found errors, or an exception occurred
        """
        started = time.perf_counter()
        xml_summary: Optional[ValidationSummary] = None
        yaml_summary: Optional[ValidationSummary] = None

        def finish(success: bool, error_message: Optional[str] = None) -> TransformationResult:
            return TransformationResult(
                success=success,
                output_path=options.output_path if success else None,
                xml_validation=xml_summary,
                yaml_validation=yaml_summary,
                error_message=error_message,
                duration=timedelta(seconds=time.perf_counter() - started),
            )

        try:
            if not self.file_manager.file_exists(options.input_path):
                return finish(False, f"Input XML file not found: {options.input_path}")

            xslt_path = options.xslt_path or str(default_xslt_path())
            if not self.file_manager.file_exists(xslt_path):
                return finish(False, f"XSLT transform file not found: {xslt_path}")

            # Step 1: XML validation
            if not options.skip_xml_validation and options.xsd_schema_path:
                logger.info("Step 1: Validating XML against schema %s", options.xsd_schema_path)
                results, xml_summary = await self.validation_service.validate_xml(
                    options.input_path, options.xsd_schema_path
                )
                if not self.validation_service.is_valid(xml_summary):
                    for result in results:
                        logger.info("XML: %s", result)
                    return finish(False, XML_VALIDATION_FAILED)
                logger.info("XML validation passed")

            # Step 2: Transformation
            logger.info("Step 2: Transforming %s -> %s", options.input_path, options.output_path)
            await asyncio.to_thread(
                self.transformation_service.transform_to_file,
                options.input_path,
                xslt_path,
                options.output_path,
            )

            # Step 3: YAML validation
            if not options.skip_yaml_validation and self.file_manager.file_exists(
                options.output_path
            ):
                logger.info("Step 3: Validating generated YAML")
                results, yaml_summary = await self.validation_service.validate_yaml(
                    options.output_path
                )
                if not self.validation_service.is_valid(yaml_summary):
                    logger.info(
                        "Generated YAML has %d error(s): %s",
                        yaml_summary.errors,
                        self.validation_service.get_error_summary(results),
                    )

            return finish(True)

        except Exception as e:
            logger.debug("Conversion failed", exc_info=True)
            return finish(False, str(e) or type(e).__name__)


async def convert(options: ConversionOptions) -> TransformationResult:
    return await ConversionService().convert(options)
