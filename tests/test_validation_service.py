"""Tests for validation orchestration."""

from datetime import timedelta

import pytest

from core.errors import UnsupportedFileTypeError
from core.models import ValidationResult, ValidationSeverity, ValidationSummary
from services.validation_service import ValidationService, materialize_with_summary


async def _results(*severities):
    for severity in severities:
        yield ValidationResult("Test", severity, str(severity))


@pytest.fixture
def service():
    return ValidationService()


class TestMaterialize:
    @pytest.mark.asyncio
    async def test_counts_by_severity(self):
        results, summary = await materialize_with_summary(
            _results(
                ValidationSeverity.ERROR,
                ValidationSeverity.WARNING,
                ValidationSeverity.WARNING,
                ValidationSeverity.INFO,
            )
        )

        assert len(results) == 4
        assert (summary.errors, summary.warnings, summary.info) == (1, 2, 1)
        assert summary.total_issues == 4
        assert not summary.is_valid
        assert summary.duration >= timedelta(0)

    @pytest.mark.asyncio
    async def test_warnings_only_is_valid(self):
        _, summary = await materialize_with_summary(_results(ValidationSeverity.WARNING))
        assert summary.is_valid


class TestValidateFile:
    """Test dispatch by file extension."""

    @pytest.mark.asyncio
    async def test_xml_file(self, service, simple_xml, simple_xsd):
        results, summary = await service.validate_file(str(simple_xml), str(simple_xsd))
        assert results == []
        assert summary.is_valid

    @pytest.mark.asyncio
    async def test_yaml_file(self, service, valid_yaml):
        results, _ = await service.validate_file(str(valid_yaml))
        assert results == []

    @pytest.mark.asyncio
    async def test_yaml_file_with_github_actions(self, service, tmp_path):
        path = tmp_path / "ci.yaml"
        path.write_text("on: push\njobs:\n  a:\n    runs-on: ubuntu-latest\n    steps:\n      - run: x\n")

        results, summary = await service.validate_file(str(path), github_actions=True)

        assert [r.message for r in results] == ["Missing top-level key 'name'"]
        assert summary.warnings == 1
        assert summary.is_valid

    @pytest.mark.asyncio
    async def test_structure_checks_skipped_on_syntax_error(self, service, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("name: [\n")

        results, _ = await service.validate_file(str(path), github_actions=True)

        assert [r.type for r in results] == ["Syntax"]

    @pytest.mark.asyncio
    async def test_extension_is_case_insensitive(self, service, tmp_path):
        path = tmp_path / "CI.YML"
        path.write_text("a: 1\n")
        results, _ = await service.validate_file(str(path))
        assert results == []

    @pytest.mark.asyncio
    async def test_unsupported_extension(self, service, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        with pytest.raises(UnsupportedFileTypeError, match="Unsupported file type: .txt"):
            await service.validate_file(str(path))


class TestErrorSummary:
    def test_no_errors(self, service):
        assert service.get_error_summary([]) == "No errors"

    def test_groups_by_type(self, service):
        results = [
            ValidationResult("Syntax", ValidationSeverity.ERROR, "a"),
            ValidationResult("XSD", ValidationSeverity.ERROR, "b"),
            ValidationResult("XSD", ValidationSeverity.ERROR, "c"),
            ValidationResult("Structure", ValidationSeverity.WARNING, "d"),
        ]
        assert service.get_error_summary(results) == "Syntax: 1 error(s); XSD: 2 error(s)"

    def test_is_valid(self, service):
        summary = ValidationSummary.from_results([], timedelta(0))
        assert service.is_valid(summary)
