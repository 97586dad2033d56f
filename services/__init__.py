"""
Services Package
================

Business logic layer for NMYAML.

Services:
- TransformationService: XSLT transformation and YAML cleanup
- ConversionService: End-to-end conversion workflow
- ValidationService: Validation workflow
- FormatService: YAML formatting
- ExportService: File export operations
"""

from .export_service import ExportService
from .transformation_service import TransformationService
from .validation_service import ValidationService
from .conversion_service import ConversionService
from .format_service import FormatService

__all__ = [
    'TransformationService',
    'ConversionService',
    'ValidationService',
    'FormatService',
    'ExportService',
]
