"""Compact text output for coverage gaps.

One record per line, files in input order, followed by one summary line::

    src/lib.rs:7-9 UNCOVERED
    src/lib.rs:42:3-42:18 REGION hits:0
    src/lib.rs:50:5 BRANCH true:5 false:0
    Lines: 92.3% | Regions: 88.1% | Branches: 75.0% | Functions: 100.0%
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from covgap.models.gaps import UncoveredBranch, UncoveredLineRange, UncoveredRegion

if TYPE_CHECKING:
    from covgap.models.gaps import AnalysisResult, CoverageSummary, GapRecord


def format_percent(value: float) -> str:
    """Format a percentage with exactly one decimal place."""
    return f"{value:.1f}%"


def format_gap(gap: GapRecord) -> str:
    """Render a single gap record."""
    if isinstance(gap, UncoveredLineRange):
        if gap.start_line == gap.end_line:
            return f"{gap.file}:{gap.start_line} UNCOVERED"
        return f"{gap.file}:{gap.start_line}-{gap.end_line} UNCOVERED"
    if isinstance(gap, UncoveredRegion):
        return (
            f"{gap.file}:{gap.start_line}:{gap.start_col}-{gap.end_line}:{gap.end_col} "
            "REGION hits:0"
        )
    if isinstance(gap, UncoveredBranch):
        return f"{gap.file}:{gap.line}:{gap.col} BRANCH true:{gap.true_count} false:{gap.false_count}"
    assert_never(gap)


def format_summary(summary: CoverageSummary) -> str:
    """Render the summary line."""
    return (
        f"Lines: {format_percent(summary.lines_percent)} | "
        f"Regions: {format_percent(summary.regions_percent)} | "
        f"Branches: {format_percent(summary.branches_percent)} | "
        f"Functions: {format_percent(summary.functions_percent)}"
    )


def format_result(result: AnalysisResult) -> str:
    """Render every gap followed by the summary line, newline-terminated."""
    lines = [format_gap(gap) for gap in result.gaps]
    lines.append(format_summary(result.summary))
    return "\n".join(lines) + "\n"
