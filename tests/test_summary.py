"""Tests for totals aggregation and percentage rounding (analysis/summary.py)."""

from __future__ import annotations

import pytest

from covgap.analysis.summary import aggregate_totals, percent, summarize
from covgap.models.coverage import Counts, Totals


@pytest.mark.parametrize(
    ("covered", "total", "expected"),
    [
        (1, 3, 33.3),
        (2, 3, 66.7),
        (1, 8, 12.5),
        (12, 13, 92.3),
        (37, 42, 88.1),
        (3, 4, 75.0),
        (5, 5, 100.0),
        (0, 7, 0.0),
        (0, 0, 100.0),
    ],
)
def test_percent(covered: int, total: int, expected: float) -> None:
    assert percent(Counts(covered=covered, total=total)) == expected


def test_percent_rounds_half_up() -> None:
    # 1/16 = 6.25, 5/16 = 31.25; binary rounding would give 6.2 and 31.2
    assert percent(Counts(covered=1, total=16)) == 6.3
    assert percent(Counts(covered=5, total=16)) == 31.3


def test_aggregate_sums_each_category() -> None:
    first = Totals(lines=Counts(3, 4), regions=Counts(1, 2), functions=Counts(1, 1))
    second = Totals(lines=Counts(5, 6), branches=Counts(2, 4), functions=Counts(0, 1))
    combined = aggregate_totals([first, second])
    assert combined == Totals(
        lines=Counts(8, 10),
        regions=Counts(1, 2),
        branches=Counts(2, 4),
        functions=Counts(1, 2),
    )


def test_aggregate_nothing() -> None:
    assert aggregate_totals([]) == Totals()


class TestSummarize:
    def test_empty_report_is_fully_covered(self) -> None:
        summary = summarize([])
        assert summary.lines_percent == 100.0
        assert summary.regions_percent == 100.0
        assert summary.branches_percent == 100.0
        assert summary.functions_percent == 100.0

    def test_uses_summed_counts_not_averaged_percentages(self) -> None:
        small = Totals(lines=Counts(1, 1))
        large = Totals(lines=Counts(0, 9))
        # averaging 100% and 0% would give 50%
        assert summarize([small, large]).lines_percent == 10.0

    def test_keeps_combined_totals(self) -> None:
        summary = summarize([Totals(regions=Counts(37, 42))])
        assert summary.totals.regions == Counts(37, 42)
        assert summary.regions_percent == 88.1
