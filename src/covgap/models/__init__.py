"""Data models for coverage input and gap analysis output."""

from covgap.models.coverage import (
    Branch,
    Counts,
    CoverageReport,
    FileCoverage,
    Function,
    Region,
    RegionKind,
    Segment,
    Totals,
)
from covgap.models.gaps import (
    AnalysisResult,
    AnalysisWarning,
    CoverageSummary,
    FileError,
    FileGaps,
    GapRecord,
    UncoveredBranch,
    UncoveredLineRange,
    UncoveredRegion,
)

__all__ = [
    "AnalysisResult",
    "AnalysisWarning",
    "Branch",
    "Counts",
    "CoverageReport",
    "CoverageSummary",
    "FileCoverage",
    "FileError",
    "FileGaps",
    "Function",
    "GapRecord",
    "Region",
    "RegionKind",
    "Segment",
    "Totals",
    "UncoveredBranch",
    "UncoveredLineRange",
    "UncoveredRegion",
]
