"""Tests for zero-hit region extraction (analysis/regions.py)."""

from __future__ import annotations

from covgap.analysis.lines import LineVerdict
from covgap.analysis.regions import extract_region_gaps, merge_code_regions, select_region_gaps
from covgap.models.coverage import Function, Region, RegionKind
from covgap.models.gaps import UncoveredRegion


def _region(
    line: int,
    col: int,
    end_line: int,
    end_col: int,
    count: int,
    kind: RegionKind = RegionKind.CODE,
) -> Region:
    return Region(
        line_start=line,
        col_start=col,
        line_end=end_line,
        col_end=end_col,
        count=count,
        kind=kind,
    )


class TestSelectRegionGaps:
    def test_no_zero_count_region(self) -> None:
        regions = (_region(3, 1, 3, 9, 2), _region(3, 10, 3, 20, 1))
        assert select_region_gaps(LineVerdict.COVERED, regions) == []

    def test_lone_zero_region_on_uncovered_line_is_suppressed(self) -> None:
        regions = (_region(3, 1, 5, 2, 0),)
        assert select_region_gaps(LineVerdict.UNCOVERED, regions) == []

    def test_lone_zero_region_on_covered_line_is_reported(self) -> None:
        zero = _region(3, 14, 3, 30, 0)
        assert select_region_gaps(LineVerdict.COVERED, (zero,)) == [zero]

    def test_multi_region_line_reports_every_zero_region(self) -> None:
        first = _region(3, 5, 3, 9, 0)
        second = _region(3, 12, 3, 20, 0)
        regions = (first, _region(3, 1, 3, 30, 4), second)
        assert select_region_gaps(LineVerdict.COVERED, regions) == [first, second]

    def test_multi_region_uncovered_line_still_reports(self) -> None:
        regions = (_region(8, 1, 8, 4, 0), _region(8, 6, 8, 9, 0))
        assert select_region_gaps(LineVerdict.UNCOVERED, regions) == list(regions)

    def test_single_zero_region_beside_hit_region_on_uncovered_line(self) -> None:
        regions = (_region(8, 1, 8, 4, 0), _region(8, 6, 8, 9, 3))
        assert select_region_gaps(LineVerdict.UNCOVERED, regions) == []

    def test_single_zero_region_beside_hit_region_on_covered_line(self) -> None:
        zero = _region(8, 1, 8, 4, 0)
        regions = (zero, _region(8, 6, 8, 9, 3))
        assert select_region_gaps(LineVerdict.COVERED, regions) == [zero]

    def test_unmapped_line_with_lone_region(self) -> None:
        assert select_region_gaps(None, (_region(3, 1, 3, 2, 0),)) == []


class TestMergeCodeRegions:
    def test_instantiations_keep_highest_count(self) -> None:
        functions = [
            Function(name="f<i32>", regions=(_region(2, 1, 4, 2, 0),)),
            Function(name="f<u8>", regions=(_region(2, 1, 4, 2, 6),)),
        ]
        merged = merge_code_regions(functions)
        assert merged == [_region(2, 1, 4, 2, 6)]

    def test_non_code_regions_are_dropped(self) -> None:
        functions = [
            Function(
                name="f",
                regions=(
                    _region(1, 1, 9, 2, 1),
                    _region(3, 5, 3, 12, 0, RegionKind.EXPANSION),
                    _region(4, 1, 5, 1, 0, RegionKind.SKIPPED),
                    _region(6, 2, 7, 1, 0, RegionKind.GAP),
                ),
            )
        ]
        assert merge_code_regions(functions) == [_region(1, 1, 9, 2, 1)]

    def test_sorted_by_position(self) -> None:
        functions = [
            Function(name="b", regions=(_region(9, 1, 9, 5, 1),)),
            Function(name="a", regions=(_region(2, 4, 2, 8, 1), _region(2, 1, 3, 1, 1))),
        ]
        starts = [r.start for r in merge_code_regions(functions)]
        assert starts == [(2, 1), (2, 4), (9, 1)]


class TestExtractRegionGaps:
    def test_reports_partial_line_region(self) -> None:
        functions = [
            Function(
                name="f",
                regions=(
                    _region(1, 10, 9, 2, 3),
                    _region(4, 3, 4, 18, 0),
                    _region(4, 20, 4, 30, 3),
                ),
            )
        ]
        verdicts = {line: LineVerdict.COVERED for line in range(1, 10)}
        assert extract_region_gaps("src/f.c", functions, verdicts) == [
            UncoveredRegion(file="src/f.c", start_line=4, start_col=3, end_line=4, end_col=18),
        ]

    def test_uncovered_block_is_left_to_line_ranges(self) -> None:
        functions = [Function(name="f", regions=(_region(1, 10, 9, 2, 3), _region(5, 1, 7, 1, 0)))]
        verdicts = {line: LineVerdict.COVERED for line in range(1, 10)}
        verdicts.update({5: LineVerdict.UNCOVERED, 6: LineVerdict.UNCOVERED})
        assert extract_region_gaps("src/f.c", functions, verdicts) == []

    def test_no_functions(self) -> None:
        assert extract_region_gaps("src/f.c", [], {1: LineVerdict.COVERED}) == []
