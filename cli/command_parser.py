"""
Command Parser
==============

Handles CLI argument parsing.
Follows SRP: Only handles command-line argument parsing.
"""

import argparse
from typing import Any, List, Optional

from core.settings import DEFAULT_INDENT


class CommandParser:
    """
    Parser for command-line arguments.

    Follows SRP: Only handles argument parsing.
    """

    def __init__(self):
        """Initialize command parser."""
        self.parser = self._create_parser()

    def _create_common_parser(self) -> argparse.ArgumentParser:
        """Options accepted by every command."""
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable verbose output"
        )
        common.add_argument(
            "--no-color",
            action="store_true",
            help="Disable colored output"
        )
        return common

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all commands.

        Returns:
            Configured ArgumentParser
        """
        common = self._create_common_parser()

        parser = argparse.ArgumentParser(
            prog="nmyaml",
            description="Convert XML workflow definitions to GitHub Actions YAML",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Convert with schema validation
  nmyaml convert workflow.xml .github/workflows/ci.yml --schema github-actions-schema.xsd

  # Validate a workflow file
  nmyaml yaml validate ci.yml --github-actions --detailed

  # Preview formatting changes
  nmyaml yaml format ci.yml --dry-run -v
            """
        )
        commands = parser.add_subparsers(dest="command", metavar="COMMAND")
        commands.required = True

        # transform
        transform = commands.add_parser(
            "transform", aliases=["t"], parents=[common],
            help="Transform XML workflow to YAML"
        )
        transform.add_argument("input", metavar="INPUT", help="Input XML file path")
        transform.add_argument("output", metavar="OUTPUT", help="Output YAML file path")
        transform.add_argument("--xslt", help="Custom XSLT transform file path")
        transform.add_argument(
            "-f", "--force",
            action="store_true",
            help="Force overwrite existing output file"
        )
        transform.set_defaults(handler="transform")

        # validate
        validate = commands.add_parser(
            "validate", aliases=["v"], parents=[common],
            help="Validate XML against XSD schema or YAML syntax"
        )
        validate.add_argument("file", metavar="FILE", help="File to validate")
        validate.add_argument("-s", "--schema", help="XSD schema file path (for XML validation)")
        validate.add_argument(
            "-d", "--detailed",
            action="store_true",
            help="Show detailed validation results"
        )
        validate.add_argument(
            "--github-actions",
            action="store_true",
            help="Enable GitHub Actions specific validation"
        )
        validate.set_defaults(handler="validate")

        # convert
        convert = commands.add_parser(
            "convert", aliases=["c"], parents=[common],
            help="Complete XML-to-YAML conversion with validation"
        )
        convert.add_argument("input", metavar="INPUT", help="Input XML file path")
        convert.add_argument("output", metavar="OUTPUT", help="Output YAML file path")
        convert.add_argument("--schema", help="XSD schema file path for XML validation")
        convert.add_argument("--xslt", help="Custom XSLT transform file path")
        convert.add_argument(
            "--skip-xml-validation",
            action="store_true",
            help="Skip XML schema validation"
        )
        convert.add_argument(
            "--skip-yaml-validation",
            action="store_true",
            help="Skip YAML syntax validation"
        )
        convert.add_argument(
            "-f", "--force",
            action="store_true",
            help="Force overwrite existing output file"
        )
        convert.add_argument(
            "-d", "--detailed",
            action="store_true",
            help="Show detailed validation results"
        )
        convert.set_defaults(handler="convert")

        # schema validate
        schema = commands.add_parser("schema", help="Schema operations")
        schema_commands = schema.add_subparsers(dest="schema_command", metavar="COMMAND")
        schema_commands.required = True
        schema_validate = schema_commands.add_parser(
            "validate", aliases=["v"], parents=[common],
            help="Validate XML against XSD schema"
        )
        schema_validate.add_argument("xml_file", metavar="XML_FILE", help="XML file to validate")
        schema_validate.add_argument("schema_file", metavar="SCHEMA_FILE", help="XSD schema file")
        schema_validate.add_argument(
            "-d", "--detailed",
            action="store_true",
            help="Show detailed validation results"
        )
        schema_validate.set_defaults(handler="schema_validate")

        # yaml validate / yaml format
        yaml_parser = commands.add_parser("yaml", help="YAML operations")
        yaml_commands = yaml_parser.add_subparsers(dest="yaml_command", metavar="COMMAND")
        yaml_commands.required = True

        yaml_validate = yaml_commands.add_parser(
            "validate", aliases=["v"], parents=[common],
            help="Validate YAML syntax and GitHub Actions structure"
        )
        yaml_validate.add_argument("yaml_file", metavar="YAML_FILE", help="YAML file to validate")
        yaml_validate.add_argument(
            "-d", "--detailed",
            action="store_true",
            help="Show detailed validation results"
        )
        yaml_validate.add_argument(
            "--github-actions",
            action="store_true",
            help="Enable GitHub Actions specific validation"
        )
        yaml_validate.add_argument(
            "-e", "--export-report",
            action="store_true",
            help="Export validation report to JSON file"
        )
        yaml_validate.set_defaults(handler="yaml_validate")

        yaml_format = yaml_commands.add_parser(
            "format", aliases=["f"], parents=[common],
            help="Format and clean YAML files"
        )
        yaml_format.add_argument("yaml_file", metavar="YAML_FILE", help="YAML file to format")
        yaml_format.add_argument("-o", "--output", help="Output file path (default: overwrite input)")
        yaml_format.add_argument(
            "--indent",
            type=int,
            default=DEFAULT_INDENT,
            help=f"Indentation size (default: {DEFAULT_INDENT})"
        )
        yaml_format.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be changed without modifying files"
        )
        yaml_format.set_defaults(handler="yaml_format")

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> Any:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def validate_args(self, args: Any) -> Optional[str]:
        """
        Validate parsed arguments.

        Args:
            args: Parsed arguments namespace

        Returns:
            Error message, or None if arguments are valid
        """
        if getattr(args, "handler", None) == "yaml_format" and not 2 <= args.indent <= 9:
            return "--indent must be between 2 and 9"
        return None
