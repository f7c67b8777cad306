"""One-sided branch detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from covgap.analysis.lines import LineVerdict
from covgap.models.gaps import AnalysisWarning, UncoveredBranch

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping

    from covgap.models.coverage import Branch


def is_branch_gap(branch: Branch) -> bool:
    """Return True when either direction of *branch* was never taken."""
    return branch.true_count == 0 or branch.false_count == 0


def extract_branch_gaps(path: str, branches: Iterable[Branch]) -> list[UncoveredBranch]:
    """Return a gap for every branch with a zero-count side, counts verbatim."""
    return [
        UncoveredBranch(
            file=path,
            line=branch.line,
            col=branch.col,
            true_count=branch.true_count,
            false_count=branch.false_count,
        )
        for branch in branches
        if is_branch_gap(branch)
    ]


def check_branch_lines(
    path: str,
    branches: Iterable[Branch],
    verdicts: Mapping[int, LineVerdict],
    segment_lines: Collection[int],
) -> list[AnalysisWarning]:
    """Warn about branches sitting on lines that no segment maps.

    A line counts as mapped when the sweep gave it code (covered or
    uncovered) or when a segment starts on it, such as the opening line of
    a skipped region.
    """
    return [
        AnalysisWarning(
            path=path,
            message=f"branch at {branch.line}:{branch.col} references a line with no segment data",
        )
        for branch in branches
        if branch.line not in segment_lines
        and verdicts.get(branch.line, LineVerdict.NO_CODE) is LineVerdict.NO_CODE
    ]
