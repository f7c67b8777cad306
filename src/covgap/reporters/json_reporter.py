"""JSON reporter for structured gap reports.

Produces machine-readable JSON output for downstream tooling from an
analysis result.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, assert_never

from covgap.models.gaps import UncoveredBranch, UncoveredLineRange, UncoveredRegion

if TYPE_CHECKING:
    from pathlib import Path

    from covgap.models.coverage import Counts
    from covgap.models.gaps import AnalysisResult, CoverageSummary, GapRecord

logger = logging.getLogger(__name__)


class JSONReporter:
    """Generate structured JSON reports from analysis results.

    Serializes per-file gaps, the coverage summary, excluded files and
    warnings into a single JSON document.
    """

    def generate(self, output_path: Path, result: AnalysisResult) -> Path:
        """Write a JSON report file.

        Args:
            output_path: Path to write the JSON file.
            result: The analysis result to serialize.

        Returns:
            The path to the generated JSON file.
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.generate_string(result) + "\n", encoding="utf-8")
        logger.info("JSON report written to %s", output_path)
        return output_path

    def generate_string(self, result: AnalysisResult) -> str:
        """Return the JSON report as a string."""
        return json.dumps(_build_report(result), indent=2, ensure_ascii=False)


def _build_report(result: AnalysisResult) -> dict[str, Any]:
    """Build the JSON report structure."""
    return {
        "tool": "covgap",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "files": [
            {
                "path": file_gaps.path,
                "gaps": [_serialize_gap(gap) for gap in file_gaps.gaps],
            }
            for file_gaps in result.files
        ],
        "summary": _serialize_summary(result.summary),
        "errors": [{"path": e.path, "message": e.message} for e in result.errors],
        "warnings": [{"path": w.path, "message": w.message} for w in result.warnings],
    }


def _serialize_gap(gap: GapRecord) -> dict[str, Any]:
    """Serialize one gap record into a JSON-compatible dict."""
    if isinstance(gap, UncoveredLineRange):
        return {"kind": "lines", "start_line": gap.start_line, "end_line": gap.end_line}
    if isinstance(gap, UncoveredRegion):
        return {
            "kind": "region",
            "start_line": gap.start_line,
            "start_col": gap.start_col,
            "end_line": gap.end_line,
            "end_col": gap.end_col,
        }
    if isinstance(gap, UncoveredBranch):
        return {
            "kind": "branch",
            "line": gap.line,
            "col": gap.col,
            "true_count": gap.true_count,
            "false_count": gap.false_count,
        }
    assert_never(gap)


def _serialize_counts(counts: Counts, percent: float) -> dict[str, Any]:
    return {"covered": counts.covered, "total": counts.total, "percent": percent}


def _serialize_summary(summary: CoverageSummary) -> dict[str, Any]:
    """Serialize a ``CoverageSummary`` into a JSON-compatible dict."""
    totals = summary.totals
    return {
        "lines": _serialize_counts(totals.lines, summary.lines_percent),
        "regions": _serialize_counts(totals.regions, summary.regions_percent),
        "branches": _serialize_counts(totals.branches, summary.branches_percent),
        "functions": _serialize_counts(totals.functions, summary.functions_percent),
    }
