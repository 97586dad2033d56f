#!/usr/bin/env python3
"""
NMYAML - CLI Entry Point
========================

Command-line interface for converting XML workflow definitions to
GitHub Actions YAML. This file stays thin and delegates the work to services.

Architecture:
- Services: Business logic (transformation, conversion, validation, formatting, export)
- Managers: File operations and output backups
- CLI: User interface (parsing, formatting)
- Core: Models, settings and shared vocabulary
- Validators: Async validation pipelines

Usage:
    python NMYAML_CLI.py convert workflow.xml ci.yml --schema github-actions-schema.xsd
    python NMYAML_CLI.py validate ci.yml --github-actions -d
    python NMYAML_CLI.py yaml format ci.yml --dry-run
"""

import asyncio
import logging
import sys
import traceback
from typing import Any, List, Optional

# Service layer
from services import (
    ConversionService,
    ExportService,
    FormatService,
    TransformationService,
    ValidationService,
)
from services.transformation_service import default_xslt_path

# Manager layer
from managers import FileManager

# CLI layer
from cli import CommandParser, OutputFormatter

from core.errors import NMYAMLError
from core.models import ConversionOptions
from core.settings import DEFAULT_XSD_SCHEMA_FILE, OUTPUT_ENCODING


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def prepare_output(output_path: str, force: bool, formatter: OutputFormatter) -> bool:
    """
    Make sure output_path may be written.

    Without --force an existing file needs confirmation; once confirmed it
    is backed up before being overwritten.

    Returns:
        False if the user declined
    """
    file_manager = FileManager()
    if file_manager.file_exists(output_path) and not force:
        if not formatter.confirm(f"Output file exists: {output_path}. Overwrite?"):
            formatter.print_warning("Operation cancelled.")
            return False

    backup = file_manager.handle_output_file(output_path, overwrite=True)
    if backup.backup_created:
        formatter.print_info(f"Backup created: {backup.backup_path}")
    file_manager.ensure_parent_directory(output_path)
    return True


# ==============================================================================
# COMMANDS
# ==============================================================================
async def transform_command(args: Any, formatter: OutputFormatter) -> int:
    """
    Validate XML against the default schema, transform, then validate YAML.

    Args:
        args: Parsed arguments
        formatter: Console output

    Returns:
        Exit code
    """
    validation_service = ValidationService()

    if not FileManager().file_exists(args.input):
        formatter.print_error(f"Input file not found: {args.input}")
        return 1

    if not prepare_output(args.output, args.force, formatter):
        return 0

    # Step 1: XML validation against the default schema when it is available
    if DEFAULT_XSD_SCHEMA_FILE.is_file():
        if args.verbose:
            formatter.print_info(f"Using XSD schema: {DEFAULT_XSD_SCHEMA_FILE}")
        results, summary = await validation_service.validate_xml(
            args.input, str(DEFAULT_XSD_SCHEMA_FILE)
        )
        if not validation_service.is_valid(summary):
            formatter.print_error(f"XML validation failed with {summary.errors} errors")
            formatter.display_results(results, summary, args.verbose)
            return 1
        formatter.print_success("XML validation passed")
    elif args.verbose:
        formatter.print_info("No default XSD schema found, skipping XML validation")

    # Step 2: Transformation
    xslt_path = args.xslt or str(default_xslt_path())
    if args.verbose:
        formatter.print_info(f"Using XSLT: {xslt_path}")
    await asyncio.to_thread(
        TransformationService().transform_to_file, args.input, xslt_path, args.output
    )
    formatter.print_success(f"Transformed {args.input} -> {args.output}")

    # Step 3: YAML validation
    results, summary = await validation_service.validate_yaml(args.output)
    formatter.print_header("YAML Validation Results")
    formatter.display_results(results, summary, args.verbose)
    formatter.print_final_status(summary, "YAML validation")
    return 0 if validation_service.is_valid(summary) else 1


async def validate_command(args: Any, formatter: OutputFormatter) -> int:
    """
    Validate an XML or YAML file, chosen by extension.

    Args:
        args: Parsed arguments
        formatter: Console output

    Returns:
        Exit code
    """
    if not FileManager().file_exists(args.file):
        formatter.print_error(f"File not found: {args.file}")
        return 1

    if args.verbose:
        formatter.print_info(f"Validating: {args.file}")
        if args.schema:
            formatter.print_info(f"Using XSD schema: {args.schema}")

    validation_service = ValidationService()
    try:
        results, summary = await validation_service.validate_file(
            args.file, args.schema, args.github_actions
        )
    except NMYAMLError as e:
        formatter.print_error(str(e))
        formatter.print_warning("Supported extensions: .xml, .yml, .yaml")
        return 1

    kind = "XML" if args.file.lower().endswith(".xml") else "YAML"
    formatter.print_header(f"{kind} Validation Results")
    formatter.display_results(results, summary, args.detailed)
    formatter.print_final_status(summary)
    return 0 if validation_service.is_valid(summary) else 1


async def convert_command(args: Any, formatter: OutputFormatter) -> int:
    """
    Run the complete conversion workflow.

    Args:
        args: Parsed arguments
        formatter: Console output

    Returns:
        Exit code
    """
    if FileManager().file_exists(args.input) and not prepare_output(
        args.output, args.force, formatter
    ):
        return 0

    schema_path = args.schema
    if schema_path is None and DEFAULT_XSD_SCHEMA_FILE.is_file():
        schema_path = str(DEFAULT_XSD_SCHEMA_FILE)

    options = ConversionOptions(
        input_path=args.input,
        output_path=args.output,
        xsd_schema_path=schema_path,
        xslt_path=args.xslt,
        skip_xml_validation=args.skip_xml_validation,
        skip_yaml_validation=args.skip_yaml_validation,
        force_overwrite=args.force,
        detailed_output=args.detailed,
    )

    if args.verbose:
        formatter.print_info("Conversion Configuration:")
        print(f"  Input:  {options.input_path}")
        print(f"  Output: {options.output_path}")
        print(f"  Schema: {options.xsd_schema_path}")
        print(f"  XSLT:   {options.xslt_path}")

    result = await ConversionService().convert(options)

    if result.success:
        formatter.print_success("Conversion completed successfully!")
        formatter.print_info(f"Output file: {result.output_path}")
        print(f"Duration: {result.duration.total_seconds() * 1000:.0f}ms")
    else:
        formatter.print_error("Conversion failed!")
        if result.error_message:
            formatter.print_error(result.error_message)

    if options.detailed_output:
        if result.xml_validation is not None:
            formatter.print_header("XML Validation Summary")
            formatter.display_summary(result.xml_validation)
        if result.yaml_validation is not None:
            formatter.print_header("YAML Validation Summary")
            formatter.display_summary(result.yaml_validation)

    return 0 if result.success else 1


async def schema_validate_command(args: Any, formatter: OutputFormatter) -> int:
    """Validate an XML file against an XSD schema."""
    if args.verbose:
        formatter.print_info(f"Validating {args.xml_file} against {args.schema_file}")

    validation_service = ValidationService()
    results, summary = await validation_service.validate_xml(args.xml_file, args.schema_file)
    formatter.print_header("Schema Validation Results")
    formatter.display_results(results, summary, args.detailed)
    formatter.print_final_status(summary, "Schema validation")
    return 0 if validation_service.is_valid(summary) else 1


async def yaml_validate_command(args: Any, formatter: OutputFormatter) -> int:
    """Validate YAML syntax, optionally GitHub Actions structure, and export a report."""
    if not FileManager().file_exists(args.yaml_file):
        formatter.print_error(f"YAML file not found: {args.yaml_file}")
        return 1

    if args.verbose:
        formatter.print_info(f"Validating YAML: {args.yaml_file}")
        if args.github_actions:
            formatter.print_info("Using GitHub Actions specific validation")

    validation_service = ValidationService()
    results, summary = await validation_service.validate_yaml(
        args.yaml_file, args.github_actions
    )
    formatter.print_header("YAML Validation Results")
    formatter.display_results(results, summary, args.detailed)

    if args.export_report:
        report_path = ExportService().export_validation_report(results, summary, args.yaml_file)
        formatter.print_info(f"Validation report exported to: {report_path}")

    formatter.print_final_status(summary, "YAML validation")
    return 0 if validation_service.is_valid(summary) else 1


def yaml_format_command(args: Any, formatter: OutputFormatter) -> int:
    """Format a YAML file in place, to --output, or preview with --dry-run."""
    if not FileManager().file_exists(args.yaml_file):
        formatter.print_error(f"YAML file not found: {args.yaml_file}")
        return 1

    output_path = args.output or args.yaml_file
    if args.verbose:
        formatter.print_info(f"Formatting YAML: {args.yaml_file}")
        formatter.print_info(f"Output: {output_path}")
        formatter.print_info(f"Indent size: {args.indent}")

    with open(args.yaml_file, "r", encoding=OUTPUT_ENCODING) as f:
        original = f.read()

    format_service = FormatService()
    formatted = format_service.format_yaml(original, args.indent)

    if args.dry_run:
        formatter.print_info("Dry run - showing changes that would be made:")
        changes = format_service.diff_lines(original, formatted)
        if not changes:
            formatter.print_success("No changes needed - file is already properly formatted")
            return 0
        formatter.print_warning("File would be changed")
        if args.verbose:
            formatter.print_diff(changes)
        return 0

    ExportService().write_text(output_path, formatted)
    formatter.print_success("YAML file formatted successfully")
    if output_path != args.yaml_file:
        formatter.print_info(f"Formatted file saved to: {output_path}")
    return 0


COMMANDS = {
    "transform": transform_command,
    "validate": validate_command,
    "convert": convert_command,
    "schema_validate": schema_validate_command,
    "yaml_validate": yaml_validate_command,
    "yaml_format": yaml_format_command,
}


def run(args: Any, formatter: OutputFormatter) -> int:
    """Dispatch parsed arguments to their command."""
    command = COMMANDS[args.handler]
    if asyncio.iscoroutinefunction(command):
        return asyncio.run(command(args, formatter))
    return command(args, formatter)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    # Parse arguments
    parser = CommandParser()
    args = parser.parse_args(argv)
    formatter = OutputFormatter(use_color=not args.no_color)
    configure_logging(args.verbose)

    # Validate arguments
    error = parser.validate_args(args)
    if error:
        formatter.print_error(error)
        return 1

    # Execute command
    try:
        return run(args, formatter)
    except KeyboardInterrupt:
        formatter.print_warning("Operation cancelled by user")
        return 130
    except Exception as e:
        formatter.print_error(str(e) or type(e).__name__)
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
