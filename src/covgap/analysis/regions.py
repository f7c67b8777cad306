"""Zero-execution region detection with line-level suppression."""

from __future__ import annotations

from itertools import groupby
from operator import attrgetter
from typing import TYPE_CHECKING

from covgap.analysis.lines import LineVerdict
from covgap.models.coverage import RegionKind
from covgap.models.gaps import UncoveredRegion

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from covgap.models.coverage import Function, Region

_MULTI_REGION_LINE = 2


def merge_code_regions(functions: Iterable[Function]) -> list[Region]:
    """Collect code regions of all functions, ordered by position.

    The same span can be mapped by several instantiations of one generic
    function; those collapse into one region carrying the highest count.
    Expansion, skipped and gap regions are left out.
    """
    merged: dict[tuple[tuple[int, int], tuple[int, int]], Region] = {}
    for function in functions:
        for region in function.regions:
            if region.kind is not RegionKind.CODE:
                continue
            key = (region.start, region.end)
            existing = merged.get(key)
            if existing is None or region.count > existing.count:
                merged[key] = region
    return sorted(merged.values(), key=lambda r: (r.start, r.end))


def select_region_gaps(
    verdict: LineVerdict | None,
    regions_on_line: Sequence[Region],
) -> list[Region]:
    """Decide which zero-count regions on one line deserve their own entry.

    Args:
        verdict: The line verdict for the regions' start line, if mapped.
        regions_on_line: Code regions starting on that line.

    Returns:
        The zero-count regions to report. A line holding exactly one
        zero-count region and verdicted uncovered reports nothing here, even
        when a nonzero region also starts on it.
    """
    zero_hit = [region for region in regions_on_line if region.count == 0]
    if not zero_hit:
        return []
    if len(zero_hit) == 1 and verdict is LineVerdict.UNCOVERED:
        return []
    if len(regions_on_line) >= _MULTI_REGION_LINE:
        return zero_hit
    if verdict is LineVerdict.COVERED:
        return zero_hit
    return []


def extract_region_gaps(
    path: str,
    functions: Iterable[Function],
    verdicts: Mapping[int, LineVerdict],
) -> list[UncoveredRegion]:
    """Return the region gaps for one file, ordered by start position."""
    gaps: list[UncoveredRegion] = []
    regions = merge_code_regions(functions)
    for line, group in groupby(regions, key=attrgetter("line_start")):
        gaps.extend(
            UncoveredRegion(
                file=path,
                start_line=region.line_start,
                start_col=region.col_start,
                end_line=region.line_end,
                end_col=region.col_end,
            )
            for region in select_region_gaps(verdicts.get(line), tuple(group))
        )
    return gaps
