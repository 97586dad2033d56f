"""
Output Formatter
================

Handles console output formatting.
Follows SRP: Only handles output formatting.
"""

import os
import sys
from itertools import groupby
from typing import Iterable, List, Optional, Tuple

from core.models import ValidationResult, ValidationSeverity, ValidationSummary
from core.settings import CONSOLE_WIDTH

# ANSI escape codes
RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"

SEVERITY_COLORS = {
    ValidationSeverity.ERROR: RED,
    ValidationSeverity.WARNING: YELLOW,
    ValidationSeverity.INFO: BLUE,
}


class OutputFormatter:
    """
    Formatter for console output.

    Follows SRP: Only handles output formatting.
    """

    def __init__(self, use_color: bool = True):
        """
        Initialize formatter.

        Args:
            use_color: Emit ANSI colors (always off when NO_COLOR is set)
        """
        self.use_color = use_color and "NO_COLOR" not in os.environ

    def colorize(self, text: str, *codes: str) -> str:
        if not self.use_color or not codes:
            return text
        return "".join(codes) + text + RESET

    def print_header(self, title: str) -> None:
        """
        Print formatted header.

        Args:
            title: Header title
        """
        print("\n" + "=" * CONSOLE_WIDTH)
        print(f" {self.colorize(title, BOLD)}")
        print("=" * CONSOLE_WIDTH)

    def print_error(self, message: str) -> None:
        """
        Print error message.

        Args:
            message: Error message
        """
        print(self.colorize(f"ERROR: {message}", RED), file=sys.stderr)

    def print_warning(self, message: str) -> None:
        """
        Print warning message.

        Args:
            message: Warning message
        """
        print(self.colorize(f"WARNING: {message}", YELLOW), file=sys.stderr)

    def print_success(self, message: str) -> None:
        """
        Print success message.

        Args:
            message: Success message
        """
        print(self.colorize(f"✓ {message}", GREEN))

    def print_info(self, message: str) -> None:
        """
        Print info message.

        Args:
            message: Info message
        """
        print(self.colorize(f"ℹ {message}", BLUE))

    # ==========================================================================
    # Validation results
    # ==========================================================================
    def _print_table(self, rows: List[Tuple[str, str]], headers: Tuple[str, str]) -> None:
        width = max(len(label) for label, _ in rows + [headers])
        print(f"  {headers[0]:<{width}}  {headers[1]}")
        print("  " + "-" * (width + 2 + max(len(v) for _, v in rows + [headers])))
        for label, value in rows:
            print(f"  {label:<{width}}  {value}")

    def display_results(
        self,
        results: Iterable[ValidationResult],
        summary: ValidationSummary,
        detailed: bool = False,
    ) -> None:
        """
        Print the issue counts, and every issue when detailed is set.

        Detailed issues are grouped by type (in first-seen order) and sorted
        by line number within a group.

        Args:
            results: Validation findings
            summary: Summary over the same findings
            detailed: Print each issue with its context line
        """
        results = list(results)
        self._print_table(
            [
                ("Total Issues", str(summary.total_issues)),
                ("Errors", str(summary.errors)),
                ("Warnings", str(summary.warnings)),
                ("Info", str(summary.info)),
                ("Duration", f"{summary.duration_ms:.0f}ms"),
            ],
            ("Category", "Count"),
        )

        if not detailed or not results:
            return

        print()
        print(self.colorize(" Detailed Issues ".center(CONSOLE_WIDTH, "-"), YELLOW))

        type_order = {}
        for result in results:
            type_order.setdefault(result.type, len(type_order))
        ordered = sorted(results, key=lambda r: (type_order[r.type], r.line_number))

        for result_type, group in groupby(ordered, key=lambda r: r.type):
            print()
            print(self.colorize(result_type, BOLD))
            for result in group:
                color = SEVERITY_COLORS.get(result.severity)
                print("  " + self.colorize(f"Line {result.line_number}: {result.message}", color))
                if result.context:
                    print("    " + self.colorize(str(result.context), DIM))

    def display_summary(self, summary: ValidationSummary) -> None:
        """
        Print a compact summary; zero counts are left out.

        Args:
            summary: Validation summary
        """
        rows = [("Total Issues", str(summary.total_issues))]
        if summary.errors:
            rows.append(("Errors", str(summary.errors)))
        if summary.warnings:
            rows.append(("Warnings", str(summary.warnings)))
        if summary.info:
            rows.append(("Info", str(summary.info)))
        rows.append(("Valid", "Yes" if summary.is_valid else "No"))
        rows.append(("Duration", f"{summary.duration_ms:.0f}ms"))
        self._print_table(rows, ("Metric", "Count"))

    def print_final_status(self, summary: ValidationSummary, subject: str = "Validation") -> None:
        """Print the closing pass/fail line for a validation run."""
        print()
        if summary.errors:
            print(self.colorize(f"✗ Validation failed with {summary.errors} errors", RED))
        elif summary.warnings:
            print(self.colorize(f"⚠ Validation passed with {summary.warnings} warnings", YELLOW))
        else:
            self.print_success(f"{subject} passed successfully")

    def print_diff(self, changes: List[Tuple[str, str]]) -> None:
        """Print (-/+, line) pairs, removals red and additions green."""
        print(self.colorize("--- Original", DIM))
        print(self.colorize("+++ Formatted", DIM))
        for marker, line in changes:
            print(self.colorize(f"{marker} {line}", RED if marker == "-" else GREEN))

    def confirm(self, question: str, default: bool = False) -> bool:
        """
        Ask a yes/no question on the console.

        Returns:
            The answer; default on empty input or end of input
        """
        suffix = " [Y/n] " if default else " [y/N] "
        try:
            answer = input(question + suffix).strip().lower()
        except EOFError:
            return default
        if not answer:
            return default
        return answer in ("y", "yes")
