"""Gap records and analysis results.

A ``GapRecord`` is one of exactly three variants. Records only live for the
duration of one analysis and are handed straight to a reporter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, TypeAlias

from covgap.models.coverage import Totals

# Tie-break rank when two gaps start on the same line.
_RANK_LINE_RANGE = 0
_RANK_REGION = 1
_RANK_BRANCH = 2


@dataclass(frozen=True)
class UncoveredLineRange:
    """One or more consecutive lines that never executed."""

    kind_rank: ClassVar[int] = _RANK_LINE_RANGE

    file: str
    start_line: int
    end_line: int

    @property
    def sort_key(self) -> tuple[int, int, int, int, int]:
        """Return the ordering key used by the gap merger."""
        return (self.start_line, self.kind_rank, 0, self.end_line, 0)


@dataclass(frozen=True)
class UncoveredRegion:
    """A zero-hit sub-line region worth reporting on its own."""

    kind_rank: ClassVar[int] = _RANK_REGION

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @property
    def sort_key(self) -> tuple[int, int, int, int, int]:
        """Return the ordering key used by the gap merger."""
        return (self.start_line, self.kind_rank, self.start_col, self.end_line, self.end_col)


@dataclass(frozen=True)
class UncoveredBranch:
    """A branch where at least one direction was never taken."""

    kind_rank: ClassVar[int] = _RANK_BRANCH

    file: str
    line: int
    col: int
    true_count: int
    false_count: int

    @property
    def sort_key(self) -> tuple[int, int, int, int, int]:
        """Return the ordering key used by the gap merger."""
        return (self.line, self.kind_rank, self.col, 0, 0)


GapRecord: TypeAlias = UncoveredLineRange | UncoveredRegion | UncoveredBranch


@dataclass(frozen=True)
class FileGaps:
    """Ordered gaps for one file."""

    path: str
    gaps: tuple[GapRecord, ...] = ()


@dataclass(frozen=True)
class FileError:
    """A file excluded from analysis because its data is malformed."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class AnalysisWarning:
    """A non-fatal inconsistency noticed while analyzing a file."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class CoverageSummary:
    """Report-wide totals and their rounded percentages."""

    totals: Totals = field(default_factory=Totals)
    lines_percent: float = 100.0
    regions_percent: float = 100.0
    branches_percent: float = 100.0
    functions_percent: float = 100.0


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one analysis pass produces."""

    files: tuple[FileGaps, ...] = ()
    """Files that have at least one gap, in input order."""

    summary: CoverageSummary = field(default_factory=CoverageSummary)
    """Aggregate percentages over every successfully analyzed file."""

    errors: tuple[FileError, ...] = ()
    """Files excluded because of malformed data."""

    warnings: tuple[AnalysisWarning, ...] = ()
    """Non-fatal data inconsistencies."""

    @property
    def gaps(self) -> list[GapRecord]:
        """Return every gap across all files, in output order."""
        return [gap for file_gaps in self.files for gap in file_gaps.gaps]

    @property
    def ok(self) -> bool:
        """Return True when no file was excluded."""
        return not self.errors
