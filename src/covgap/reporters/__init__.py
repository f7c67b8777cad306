"""Output reporters for analysis results."""

from covgap.reporters.json_reporter import JSONReporter
from covgap.reporters.terminal import CLIReporter, reporter
from covgap.reporters.text import format_gap, format_result, format_summary

__all__ = [
    "CLIReporter",
    "JSONReporter",
    "format_gap",
    "format_result",
    "format_summary",
    "reporter",
]
