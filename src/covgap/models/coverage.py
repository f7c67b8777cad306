"""Coverage data model shared by the adapter and the analysis core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RegionKind(Enum):
    """Kind of a mapped source region, numbered as in the llvm-cov export."""

    CODE = 0
    EXPANSION = 1
    SKIPPED = 2
    GAP = 3


@dataclass(frozen=True)
class Segment:
    """A position where the active execution count changes."""

    line: int
    """Line number (1-based)."""

    col: int
    """Column number (1-based)."""

    count: int
    """Execution count from this position onward."""

    has_count: bool
    """False when the segment carries no data (distinct from an explicit zero)."""

    is_region_entry: bool
    """True when this segment opens a new region."""

    is_gap_region: bool = False
    """True for gap regions inserted over non-code areas."""

    @property
    def position(self) -> tuple[int, int]:
        """Return ``(line, col)``."""
        return (self.line, self.col)


@dataclass(frozen=True)
class Region:
    """A mapped source span with its own execution count."""

    line_start: int
    col_start: int
    line_end: int
    col_end: int
    count: int
    kind: RegionKind = RegionKind.CODE

    @property
    def start(self) -> tuple[int, int]:
        """Return the ``(line, col)`` start position."""
        return (self.line_start, self.col_start)

    @property
    def end(self) -> tuple[int, int]:
        """Return the ``(line, col)`` end position."""
        return (self.line_end, self.col_end)


@dataclass(frozen=True)
class Function:
    """A function and the regions it maps inside one file."""

    name: str
    regions: tuple[Region, ...] = ()


@dataclass(frozen=True)
class Branch:
    """A decision point with independent true/false counters."""

    line: int
    col: int
    true_count: int
    false_count: int
    line_end: int = 0
    col_end: int = 0


@dataclass(frozen=True)
class Counts:
    """Covered/total pair for one coverage category."""

    covered: int = 0
    total: int = 0

    def __add__(self, other: Counts) -> Counts:
        return Counts(covered=self.covered + other.covered, total=self.total + other.total)


@dataclass(frozen=True)
class Totals:
    """Covered/total counters for every coverage category."""

    lines: Counts = field(default_factory=Counts)
    regions: Counts = field(default_factory=Counts)
    branches: Counts = field(default_factory=Counts)
    functions: Counts = field(default_factory=Counts)

    def __add__(self, other: Totals) -> Totals:
        return Totals(
            lines=self.lines + other.lines,
            regions=self.regions + other.regions,
            branches=self.branches + other.branches,
            functions=self.functions + other.functions,
        )


@dataclass(frozen=True)
class FileCoverage:
    """Coverage data for a single source file."""

    path: str
    """File path as it appears in the coverage data, used verbatim."""

    segments: tuple[Segment, ...] = ()
    """Segments ordered ascending by ``(line, col)``."""

    functions: tuple[Function, ...] = ()
    """Functions with regions mapped into this file."""

    branches: tuple[Branch, ...] = ()
    """Branch counters recorded for this file."""

    totals: Totals = field(default_factory=Totals)
    """Input-trusted per-file totals."""


@dataclass(frozen=True)
class CoverageReport:
    """A complete coverage report.

    File order is the order of the input and is preserved in every output.
    """

    files: tuple[FileCoverage, ...] = ()
    """Per-file coverage in input order."""

    totals: Totals = field(default_factory=Totals)
    """Report-wide totals as recorded by the exporting tool."""

    version: str = ""
    """Export format version (informational)."""
