"""Aggregate totals and rounded coverage percentages.

Percentages are rounded half-up to one decimal place using decimal
arithmetic, so ``2/3`` gives ``66.7`` and ``1/8`` gives ``12.5``. A category
with nothing to cover reports ``100.0``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from functools import reduce
from operator import add
from typing import TYPE_CHECKING

from covgap.models.coverage import Totals
from covgap.models.gaps import CoverageSummary

if TYPE_CHECKING:
    from collections.abc import Iterable

    from covgap.models.coverage import Counts

_FULL_COVERAGE = 100.0
_ONE_DECIMAL = Decimal("0.1")


def percent(counts: Counts) -> float:
    """Return ``covered / total * 100`` rounded half-up to one decimal."""
    if counts.total == 0:
        return _FULL_COVERAGE
    ratio = Decimal(counts.covered) * 100 / Decimal(counts.total)
    return float(ratio.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def aggregate_totals(totals: Iterable[Totals]) -> Totals:
    """Sum per-file totals into one report-wide ``Totals``."""
    return reduce(add, totals, Totals())


def summarize(totals: Iterable[Totals]) -> CoverageSummary:
    """Build the coverage summary from per-file totals."""
    combined = aggregate_totals(totals)
    return CoverageSummary(
        totals=combined,
        lines_percent=percent(combined.lines),
        regions_percent=percent(combined.regions),
        branches_percent=percent(combined.branches),
        functions_percent=percent(combined.functions),
    )
