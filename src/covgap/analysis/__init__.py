"""Coverage gap analysis core."""

from covgap.analysis.engine import analyze, analyze_file, merge_gaps, validate_file
from covgap.analysis.lines import LineVerdict, collapse_lines, resolve_line_verdicts
from covgap.analysis.regions import select_region_gaps
from covgap.analysis.summary import percent, summarize

__all__ = [
    "LineVerdict",
    "analyze",
    "analyze_file",
    "collapse_lines",
    "merge_gaps",
    "percent",
    "resolve_line_verdicts",
    "select_region_gaps",
    "summarize",
    "validate_file",
]
