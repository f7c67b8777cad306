"""Terminal reporter with rich output formatting.

Gap records always go to stdout as plain text; this reporter renders
diagnostics (errors, warnings, threshold failures) on stderr and the
optional per-file summary table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from covgap.analysis.summary import percent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from covgap.models.coverage import Counts, FileCoverage
    from covgap.models.gaps import AnalysisResult, CoverageSummary

console = Console(stderr=True)

_HIGH_COVERAGE = 80.0
_MEDIUM_COVERAGE = 50.0
_MAX_FILE_PATH_LENGTH = 60


def _coverage_color(percentage: float) -> str:
    """Return a Rich color name for a coverage percentage."""
    if percentage >= _HIGH_COVERAGE:
        return "green"
    if percentage >= _MEDIUM_COVERAGE:
        return "yellow"
    return "red"


def _truncate_path(path: str) -> str:
    if len(path) <= _MAX_FILE_PATH_LENGTH:
        return path
    return "..." + path[-(_MAX_FILE_PATH_LENGTH - 3) :]


class CLIReporter:
    """Rich terminal output reporter for analysis diagnostics."""

    def __init__(self, output: Console | None = None) -> None:
        """Initialize the CLI reporter.

        Args:
            output: Console to render to; defaults to the shared stderr console.
        """
        self.console = output or console

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    def print_diagnostics(self, result: AnalysisResult, *, show_warnings: bool = True) -> None:
        """Print excluded files and, optionally, data warnings."""
        for error in result.errors:
            self.print_error(f"Excluded {error.path}: {error.message}")
        if show_warnings:
            for warning in result.warnings:
                self.print_warning(str(warning))

    def print_threshold_failures(self, failures: Sequence[str]) -> None:
        """Print every unmet coverage threshold."""
        for failure in failures:
            self.print_error(failure)

    def print_coverage_summary(
        self,
        files: Sequence[FileCoverage],
        summary: CoverageSummary,
    ) -> None:
        """Print a per-file coverage table with an overall row."""
        table = Table(title="Coverage Summary", title_style="bold cyan")
        table.add_column("File", style="bold")
        table.add_column("Lines", justify="right")
        table.add_column("Regions", justify="right")
        table.add_column("Branches", justify="right")
        table.add_column("Functions", justify="right")

        for file in files:
            totals = file.totals
            table.add_row(
                _truncate_path(file.path),
                self._cell(totals.lines),
                self._cell(totals.regions),
                self._cell(totals.branches),
                self._cell(totals.functions),
            )

        table.add_section()
        table.add_row(
            "[bold]Overall[/bold]",
            self._percent_cell(summary.lines_percent, bold=True),
            self._percent_cell(summary.regions_percent, bold=True),
            self._percent_cell(summary.branches_percent, bold=True),
            self._percent_cell(summary.functions_percent, bold=True),
        )
        self.console.print(table)

    def _cell(self, counts: Counts) -> str:
        return self._percent_cell(percent(counts))

    def _percent_cell(self, value: float, *, bold: bool = False) -> str:
        style = f"bold {_coverage_color(value)}" if bold else _coverage_color(value)
        return f"[{style}]{value:.1f}%[/{style}]"


# Singleton instance for easy import
reporter = CLIReporter()
