"""llvm-cov export adapter.

Parses ``llvm.coverage.json.export`` documents (as written by
``llvm-cov export`` or ``cargo llvm-cov --json``) into the unified
CoverageReport. Versions 2.0.1 and 3.1.0 are supported; they differ in
whether segments carry the gap-region flag.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from covgap.errors import CoverageParseError
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

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────

_EXPORT_TYPE = "llvm.coverage.json.export"
_SUPPORTED_VERSIONS = frozenset({"2.0.1", "3.1.0"})
_LLVM_COV_JSON_NAMES = ["coverage.json", "coverage-export.json", "llvm-cov.json"]

# Segment: [line, col, count, has_count, is_region_entry, is_gap_region?]
_SEGMENT_LEN_V2 = 5
_SEGMENT_LEN_V3 = 6

# Region: [line_start, col_start, line_end, col_end, count, file_id, expanded_file_id, kind]
_REGION_MIN_LEN = 8

# Branch: [line_start, col_start, line_end, col_end, true_count, false_count, ...]
_BRANCH_MIN_LEN = 6

_SUMMARY_KEYS = ("lines", "regions", "branches", "functions")


# ── Adapter ──────────────────────────────────────────────────────


class LlvmCovAdapter:
    """Adapter for llvm-cov JSON export data."""

    @property
    def name(self) -> str:
        return "llvm-cov"

    def find_export(self, directory: Path) -> Path | None:
        """Return the first well-known export file inside *directory*, if any."""
        for name in _LLVM_COV_JSON_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        return None

    def parse_coverage_file(self, coverage_file: Path) -> CoverageReport:
        """Parse an export file into a CoverageReport.

        Raises:
            CoverageParseError: If the file cannot be read or is not a valid export.
        """
        try:
            content = coverage_file.read_text(encoding="utf-8")
        except OSError as e:
            raise CoverageParseError(f"failed to read {coverage_file}: {e}") from e
        return self.parse_string(content)

    def parse_string(self, content: str) -> CoverageReport:
        """Parse export JSON text into a CoverageReport.

        Raises:
            CoverageParseError: If the text is not valid JSON or not an llvm-cov export.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise CoverageParseError(f"failed to parse coverage JSON: {e}") from e
        return self.parse_export(data)

    def parse_export(self, data: Any) -> CoverageReport:
        """Convert an already-decoded export document into a CoverageReport."""
        if not isinstance(data, dict):
            raise CoverageParseError("coverage export must be a JSON object")

        export_type = data.get("type")
        if export_type != _EXPORT_TYPE:
            raise CoverageParseError(
                f"unsupported export type {export_type!r} (expected {_EXPORT_TYPE!r})"
            )
        version = str(data.get("version", ""))
        if version not in _SUPPORTED_VERSIONS:
            logger.warning("Untested llvm-cov export version %r, parsing anyway", version)

        data_list = data.get("data")
        if not isinstance(data_list, list):
            raise CoverageParseError("coverage export has no 'data' list")
        if not data_list:
            logger.info("Coverage export contains no data entries")
            return CoverageReport(version=version)
        if len(data_list) > 1:
            logger.warning(
                "Coverage export has %d data entries; only the first is analyzed",
                len(data_list),
            )

        export_block = data_list[0]
        if not isinstance(export_block, dict):
            raise CoverageParseError("coverage export data entry must be an object")
        return self._report_from_block(export_block, version)

    # ── Block parsing ─────────────────────────────────────────────

    def _report_from_block(self, block: dict[str, Any], version: str) -> CoverageReport:
        files_raw = _list_field(block, "files", "export")
        paths = [self._file_name(file_info) for file_info in files_raw]
        functions = self._functions_by_file(_list_field(block, "functions", "export"), set(paths))

        files = tuple(
            self._file_coverage(path, file_info, functions.get(path, []))
            for path, file_info in zip(paths, files_raw, strict=True)
        )
        totals = self._totals(block.get("totals") or {}, "totals")
        logger.debug("Parsed %d file(s) from llvm-cov export %s", len(files), version)
        return CoverageReport(files=files, totals=totals, version=version)

    def _file_name(self, file_info: Any) -> str:
        if not isinstance(file_info, dict) or not isinstance(file_info.get("filename"), str):
            raise CoverageParseError("every file entry needs a 'filename' string")
        return file_info["filename"]

    def _file_coverage(
        self,
        path: str,
        file_info: dict[str, Any],
        functions: list[Function],
    ) -> FileCoverage:
        segments = _list_field(file_info, "segments", path)
        branches = _list_field(file_info, "branches", path)
        return FileCoverage(
            path=path,
            segments=tuple(self._segment(seg, path) for seg in segments),
            functions=tuple(functions),
            branches=tuple(self._branch(br, path) for br in branches),
            totals=self._totals(file_info.get("summary") or {}, path),
        )

    def _functions_by_file(
        self,
        functions_raw: list[Any],
        known_paths: set[str],
    ) -> dict[str, list[Function]]:
        """Split every function's regions across the files they map into."""
        by_file: dict[str, list[Function]] = {}
        for func in functions_raw:
            if not isinstance(func, dict):
                raise CoverageParseError("every function entry must be an object")
            name = str(func.get("name", ""))
            filenames = _list_field(func, "filenames", name)
            regions_by_path: dict[str, list[Region]] = {}
            for raw in _list_field(func, "regions", name):
                region, file_id = self._region(raw, name)
                if region is None:
                    continue
                if not 0 <= file_id < len(filenames):
                    logger.debug("Region in %s references unknown file id %d", name, file_id)
                    continue
                regions_by_path.setdefault(filenames[file_id], []).append(region)

            for path, regions in regions_by_path.items():
                if path in known_paths:
                    by_file.setdefault(path, []).append(Function(name=name, regions=tuple(regions)))
        return by_file

    # ── Array records ─────────────────────────────────────────────

    def _segment(self, raw: Any, path: str) -> Segment:
        if not isinstance(raw, list) or len(raw) not in (_SEGMENT_LEN_V2, _SEGMENT_LEN_V3):
            raise CoverageParseError(f"{path}: malformed segment {raw!r}")
        line, col, count = _ints(raw[:3], f"{path}: malformed segment {raw!r}")
        return Segment(
            line=line,
            col=col,
            count=count,
            has_count=bool(raw[3]),
            is_region_entry=bool(raw[4]),
            is_gap_region=bool(raw[5]) if len(raw) == _SEGMENT_LEN_V3 else False,
        )

    def _region(self, raw: Any, function_name: str) -> tuple[Region | None, int]:
        if not isinstance(raw, list) or len(raw) < _REGION_MIN_LEN:
            raise CoverageParseError(f"{function_name}: malformed region {raw!r}")
        line_start, col_start, line_end, col_end, count, file_id, _, kind_value = _ints(
            raw[:_REGION_MIN_LEN], f"{function_name}: malformed region {raw!r}"
        )

        try:
            kind = RegionKind(kind_value)
        except ValueError:
            logger.debug("Ignoring region of kind %d in %s", kind_value, function_name)
            return None, file_id

        region = Region(
            line_start=line_start,
            col_start=col_start,
            line_end=line_end,
            col_end=col_end,
            count=count,
            kind=kind,
        )
        return region, file_id

    def _branch(self, raw: Any, path: str) -> Branch:
        if not isinstance(raw, list) or len(raw) < _BRANCH_MIN_LEN:
            raise CoverageParseError(f"{path}: malformed branch {raw!r}")
        line_start, col_start, line_end, col_end, true_count, false_count = _ints(
            raw[:_BRANCH_MIN_LEN], f"{path}: malformed branch {raw!r}"
        )
        return Branch(
            line=line_start,
            col=col_start,
            true_count=true_count,
            false_count=false_count,
            line_end=line_end,
            col_end=col_end,
        )

    def _totals(self, summary: Any, where: str) -> Totals:
        if not isinstance(summary, dict):
            raise CoverageParseError(f"{where}: summary must be an object")
        counts: dict[str, Counts] = {}
        for key in _SUMMARY_KEYS:
            entry = summary.get(key)
            if entry is None:
                counts[key] = Counts()
                continue
            if not isinstance(entry, dict):
                raise CoverageParseError(f"{where}: summary.{key} must be an object")
            covered, total = _ints(
                [entry.get("covered", 0), entry.get("count", 0)],
                f"{where}: malformed summary.{key}",
            )
            counts[key] = Counts(covered=covered, total=total)
        return Totals(**counts)


def _list_field(container: dict[str, Any], key: str, where: str) -> list[Any]:
    """Return ``container[key]`` as a list; a missing or null field is empty."""
    value = container.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise CoverageParseError(f"{where}: '{key}' must be a list")
    return value


def _ints(values: list[Any], error: str) -> list[int]:
    """Return *values* unchanged if every one is a JSON integer."""
    # bool is an int subclass but never a valid count or position
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        raise CoverageParseError(error)
    return values
