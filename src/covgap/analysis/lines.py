"""Per-line coverage verdicts and uncovered line ranges.

Segments form a sweep: each segment with a count sets the active count from
its position until the next segment. A line's verdict is decided by every
span active on it: the span wrapped in from earlier lines (unless a segment
at column 1 replaces it) plus every span starting on the line.
"""

from __future__ import annotations

from enum import Enum
from itertools import groupby
from operator import attrgetter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from covgap.models.coverage import Segment


class LineVerdict(Enum):
    """Line-level coverage verdict."""

    COVERED = "covered"
    UNCOVERED = "uncovered"
    NO_CODE = "no_code"


def _carries_count(segment: Segment) -> bool:
    # Gap regions never contribute to a verdict.
    return segment.has_count and not segment.is_gap_region


def _opens_skipped_region(line_segments: Sequence[Segment]) -> bool:
    first = line_segments[0] if line_segments else None
    return first is not None and first.is_region_entry and not first.has_count


def line_verdict(line_segments: Sequence[Segment], wrapped: Segment | None) -> LineVerdict:
    """Decide the verdict for one line.

    Args:
        line_segments: Segments starting on the line, in column order.
        wrapped: The last segment of an earlier line, still active when the
            line begins, or None.

    Returns:
        COVERED if any active span has a nonzero count, UNCOVERED if spans
        are active but all are zero, NO_CODE otherwise.
    """
    if _opens_skipped_region(line_segments):
        return LineVerdict.NO_CODE

    active = [seg for seg in line_segments if _carries_count(seg)]
    # A segment at column 1 supersedes the wrapped span before any code on the line.
    superseded = bool(line_segments) and line_segments[0].col == 1
    if wrapped is not None and _carries_count(wrapped) and not superseded:
        active.append(wrapped)

    if not active:
        return LineVerdict.NO_CODE
    if any(seg.count > 0 for seg in active):
        return LineVerdict.COVERED
    return LineVerdict.UNCOVERED


def _sweep(
    by_line: Mapping[int, tuple[Segment, ...]],
    first_line: int,
    last_line: int,
) -> Iterator[tuple[int, LineVerdict]]:
    wrapped: Segment | None = None
    for line in range(first_line, last_line + 1):
        line_segments = by_line.get(line, ())
        yield line, line_verdict(line_segments, wrapped)
        if line_segments:
            wrapped = line_segments[-1]


def resolve_line_verdicts(segments: Sequence[Segment]) -> dict[int, LineVerdict]:
    """Map every line between the first and last segment to a verdict.

    Args:
        segments: One file's segments, sorted by ``(line, col)``.

    Returns:
        Line number to verdict. Lines outside the segment span are absent.
    """
    if not segments:
        return {}
    by_line = {
        line: tuple(group) for line, group in groupby(segments, key=attrgetter("line"))
    }
    return dict(_sweep(by_line, segments[0].line, segments[-1].line))


def uncovered_lines(verdicts: Mapping[int, LineVerdict]) -> list[int]:
    """Return the sorted line numbers verdicted UNCOVERED."""
    return sorted(line for line, verdict in verdicts.items() if verdict is LineVerdict.UNCOVERED)


def collapse_lines(lines: Iterable[int]) -> list[tuple[int, int]]:
    """Collapse sorted, distinct line numbers into closed ``(start, end)`` ranges.

    >>> collapse_lines([3, 4, 5, 9, 10, 14])
    [(3, 5), (9, 10), (14, 14)]
    """
    ranges: list[tuple[int, int]] = []
    for line in lines:
        if ranges and line == ranges[-1][1] + 1:
            ranges[-1] = (ranges[-1][0], line)
        else:
            ranges.append((line, line))
    return ranges
