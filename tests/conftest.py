"""Shared fixtures: small llvm-cov export documents."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from pathlib import Path


def _summary(lines: tuple[int, int], regions: tuple[int, int], branches: tuple[int, int],
             functions: tuple[int, int]) -> dict[str, Any]:
    def entry(covered: int, count: int) -> dict[str, Any]:
        pct = covered * 100 / count if count else 0.0
        return {"count": count, "covered": covered, "percent": pct}

    return {
        "lines": entry(*lines),
        "regions": entry(*regions),
        "branches": entry(*branches),
        "functions": entry(*functions),
    }


@pytest.fixture
def lib_rs_export() -> dict[str, Any]:
    """Export for ``src/lib.rs`` with one gap of every kind.

    Lines 7-9 never run, line 42 holds a zero-hit and a hit region, and the
    branch at 50:5 only ever took its true side. The summary counts are
    hand-written to render a fixed summary line and do not match what the
    segments map.
    """
    return {
        "type": "llvm.coverage.json.export",
        "version": "3.1.0",
        "data": [
            {
                "files": [
                    {
                        "filename": "src/lib.rs",
                        "segments": [
                            [1, 30, 5, True, True, False],
                            [7, 1, 0, True, True, False],
                            [10, 1, 5, True, False, False],
                            [42, 3, 0, True, True, False],
                            [42, 18, 5, True, False, False],
                            [42, 20, 5, True, True, False],
                            [42, 30, 5, True, False, False],
                            [60, 2, 0, False, False, False],
                        ],
                        "branches": [[50, 5, 50, 10, 5, 0, 0, 0, 4]],
                        "summary": _summary((12, 13), (37, 42), (3, 4), (5, 5)),
                    }
                ],
                "functions": [
                    {
                        "name": "lib::run",
                        "count": 5,
                        "filenames": ["src/lib.rs"],
                        "regions": [
                            [1, 30, 60, 2, 5, 0, 0, 0],
                            [7, 1, 10, 1, 0, 0, 0, 0],
                            [42, 3, 42, 18, 0, 0, 0, 0],
                            [42, 20, 42, 30, 5, 0, 0, 0],
                        ],
                        "branches": [],
                    }
                ],
                "totals": _summary((12, 13), (37, 42), (3, 4), (5, 5)),
            }
        ],
    }


@pytest.fixture
def covered_export() -> dict[str, Any]:
    """A fully covered 2.0.1 export with two files and no branch data."""
    return {
        "type": "llvm.coverage.json.export",
        "version": "2.0.1",
        "data": [
            {
                "files": [
                    {
                        "filename": "src/a.c",
                        "segments": [[1, 12, 3, 1, 1], [4, 2, 0, 0, 0]],
                        "summary": _summary((4, 4), (1, 1), (0, 0), (1, 1)),
                    },
                    {
                        "filename": "src/b.c",
                        "segments": [[2, 10, 1, 1, 1], [3, 2, 0, 0, 0]],
                        "summary": _summary((2, 2), (1, 1), (0, 0), (1, 1)),
                    },
                ],
                "functions": [
                    {"name": "a", "filenames": ["src/a.c"], "regions": [[1, 12, 4, 2, 3, 0, 0, 0]]},
                    {"name": "b", "filenames": ["src/b.c"], "regions": [[2, 10, 3, 2, 1, 0, 0, 0]]},
                ],
                "totals": _summary((6, 6), (2, 2), (0, 0), (2, 2)),
            }
        ],
    }


@pytest.fixture
def lib_rs_file(tmp_path: Path, lib_rs_export: dict[str, Any]) -> Path:
    """Write the ``src/lib.rs`` export to ``coverage.json``."""
    path = tmp_path / "coverage.json"
    path.write_text(json.dumps(lib_rs_export), encoding="utf-8")
    return path
