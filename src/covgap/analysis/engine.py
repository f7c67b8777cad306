"""Coverage gap analysis over a whole report.

Each file is analyzed independently:

1. Validate the file's segments, regions and branches.
2. Resolve per-line verdicts from the segment sweep.
3. Collapse uncovered lines into ranges.
4. Extract zero-hit regions, suppressing those the line ranges already report.
5. Extract one-sided branches.
6. Merge the three gap streams into one deterministic order.

A file with malformed data is excluded and reported as a ``FileError``; the
remaining files are still analyzed. The summary is computed from the
input-trusted totals of the files that were analyzed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from covgap.analysis.branches import check_branch_lines, extract_branch_gaps
from covgap.analysis.lines import collapse_lines, resolve_line_verdicts, uncovered_lines
from covgap.analysis.regions import extract_region_gaps
from covgap.analysis.summary import summarize
from covgap.errors import MalformedInputError
from covgap.models.gaps import (
    AnalysisResult,
    AnalysisWarning,
    FileError,
    FileGaps,
    GapRecord,
    UncoveredLineRange,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covgap.models.coverage import CoverageReport, FileCoverage, Totals

logger = logging.getLogger(__name__)


# ── Validation ───────────────────────────────────────────────────


def _check_position(path: str, what: str, line: int, col: int) -> None:
    if line < 1 or col < 1:
        raise MalformedInputError(path, f"{what} has non-positive position {line}:{col}")


def validate_file(file: FileCoverage) -> None:
    """Raise ``MalformedInputError`` if *file* cannot be analyzed.

    Checks that every position is 1-based, that segments are sorted, that
    counts are non-negative, and that no region ends before it starts.
    """
    previous: tuple[int, int] | None = None
    for segment in file.segments:
        _check_position(file.path, "segment", segment.line, segment.col)
        if segment.count < 0:
            raise MalformedInputError(
                file.path, f"segment at {segment.line}:{segment.col} has negative count"
            )
        if previous is not None and segment.position < previous:
            raise MalformedInputError(
                file.path,
                f"segment at {segment.line}:{segment.col} is out of order "
                f"(after {previous[0]}:{previous[1]})",
            )
        previous = segment.position

    for function in file.functions:
        for region in function.regions:
            _check_position(file.path, f"region in {function.name}", *region.start)
            _check_position(file.path, f"region in {function.name}", *region.end)
            if region.end < region.start:
                raise MalformedInputError(
                    file.path,
                    f"region in {function.name} ends at {region.line_end}:{region.col_end} "
                    f"before it starts at {region.line_start}:{region.col_start}",
                )
            if region.count < 0:
                raise MalformedInputError(
                    file.path, f"region in {function.name} has negative count"
                )

    for branch in file.branches:
        _check_position(file.path, "branch", branch.line, branch.col)
        if branch.true_count < 0 or branch.false_count < 0:
            raise MalformedInputError(
                file.path, f"branch at {branch.line}:{branch.col} has negative count"
            )


# ── Per-file analysis ────────────────────────────────────────────


def merge_gaps(*streams: Iterable[GapRecord]) -> tuple[GapRecord, ...]:
    """Merge gap streams ordered by line, then kind, then column."""
    return tuple(sorted((gap for stream in streams for gap in stream), key=_sort_key))


def _sort_key(gap: GapRecord) -> tuple[int, int, int, int, int]:
    return gap.sort_key


def analyze_file(file: FileCoverage) -> tuple[FileGaps, list[AnalysisWarning]]:
    """Analyze one file.

    Returns:
        The file's ordered gaps and any data-consistency warnings.

    Raises:
        MalformedInputError: If the file's data is structurally invalid.
    """
    validate_file(file)

    verdicts = resolve_line_verdicts(file.segments)
    line_ranges = [
        UncoveredLineRange(file=file.path, start_line=start, end_line=end)
        for start, end in collapse_lines(uncovered_lines(verdicts))
    ]
    region_gaps = extract_region_gaps(file.path, file.functions, verdicts)
    branch_gaps = extract_branch_gaps(file.path, file.branches)
    segment_lines = {segment.line for segment in file.segments}
    warnings = check_branch_lines(file.path, file.branches, verdicts, segment_lines)

    gaps = merge_gaps(line_ranges, region_gaps, branch_gaps)
    logger.debug(
        "%s: %d line range(s), %d region(s), %d branch(es)",
        file.path,
        len(line_ranges),
        len(region_gaps),
        len(branch_gaps),
    )
    return FileGaps(path=file.path, gaps=gaps), warnings


# ── Report analysis ──────────────────────────────────────────────


def analyze(report: CoverageReport) -> AnalysisResult:
    """Analyze every file of *report* and summarize the analyzed totals."""
    files: list[FileGaps] = []
    errors: list[FileError] = []
    warnings: list[AnalysisWarning] = []
    analyzed_totals: list[Totals] = []

    for file in report.files:
        try:
            file_gaps, file_warnings = analyze_file(file)
        except MalformedInputError as e:
            logger.warning("Skipping %s: %s", e.path, e.message)
            errors.append(FileError(path=e.path, message=e.message))
            continue

        for warning in file_warnings:
            logger.warning("%s", warning)
        warnings.extend(file_warnings)
        analyzed_totals.append(file.totals)
        if file_gaps.gaps:
            files.append(file_gaps)

    if not report.files:
        logger.info("Coverage report contains no files")

    return AnalysisResult(
        files=tuple(files),
        summary=summarize(analyzed_totals),
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
