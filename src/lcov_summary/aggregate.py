"""Reduce a CoverageDocument to its CoverageSummary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lcov_summary.models import CoverageSummary

if TYPE_CHECKING:
    from lcov_summary.models import CoverageDocument


def summarize(document: CoverageDocument) -> CoverageSummary:
    """Sum line and function counters over every file in *document*.

    Branch counters are parsed but deliberately left out of the totals.
    """
    return CoverageSummary(
        total_lines_found=sum(f.lines_found for f in document.files),
        total_lines_hit=sum(f.lines_hit for f in document.files),
        total_functions_found=sum(f.functions_found for f in document.files),
        total_functions_hit=sum(f.functions_hit for f in document.files),
    )
