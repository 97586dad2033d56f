"""
validation_pipeline.py

Generic driver for multi-stage validation.

A concrete validator lists its checks in `_validations()` as an async
generator, yielding one outcome per check: None when the check passed, a
ValidationResult when it failed. `validate()` runs those checks in order and
yields only the failures, so callers see a lazy sequence of problems:

    async for result in XmlValidator.instance().validate(params):
        print(result)

Checks run strictly in declared order. A check that depends on an earlier
failing check must yield nothing (or None) rather than its own error.
"""

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from typing import AsyncIterable, AsyncIterator, Generic, List, Optional, TypeVar

from core.models import ValidationResult, ValidationSeverity

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncValidationPipeline(ABC, Generic[T]):
    """Runs an ordered set of checks and yields only the failures."""

    async def validate(self, item: T) -> AsyncIterator[ValidationResult]:
        """
        Validate an item.

        Args:
            item: The item to validate

        Yields:
            ValidationResult for every failed check, in check order
        """
        async for outcome in self._validations(item):
            if outcome is not None:
                logger.debug("%s: %s", type(self).__name__, outcome)
                yield outcome
            # Let other tasks run between checks
            await asyncio.sleep(0)

    @abstractmethod
    def _validations(self, item: T) -> AsyncIterator[Optional[ValidationResult]]:
        """
        Perform the checks for one item.

        Implementations are async generators. Yield None for a passed check
        and a ValidationResult for a failed one.
        """

    def _validate_file_exists(
        self, path: str, description: str
    ) -> Optional[ValidationResult]:
        """Return a File error when no file exists at path."""
        if os.path.isfile(path):
            return None
        return ValidationResult(
            "File", ValidationSeverity.ERROR, f"{description} file not found"
        )

    def _validate_path(
        self, path: Optional[str], description: str
    ) -> Optional[ValidationResult]:
        """
        Check a caller supplied path: not null, not empty, not blank, exists.

        Args:
            path: Path to check
            description: Label used in messages, e.g. "XML" or "XSD schema"

        Returns:
            None when the path points at an existing file, else the error
        """
        if path is None:
            return ValidationResult(
                "Input", ValidationSeverity.ERROR, f"{description} path cannot be null"
            )
        if len(path) == 0:
            return ValidationResult(
                "Input", ValidationSeverity.ERROR, f"{description} path cannot be empty"
            )
        if not path.strip():
            return ValidationResult(
                "Input", ValidationSeverity.ERROR, f"{description} path cannot be blank"
            )
        return self._validate_file_exists(path, description)


async def collect(results: AsyncIterable[ValidationResult]) -> List[ValidationResult]:
    """Materialize a result sequence into a list."""
    return [result async for result in results]
