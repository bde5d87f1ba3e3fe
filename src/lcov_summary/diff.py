"""Compare two coverage runs.

``diff_summaries`` compares document totals. ``diff_documents`` compares
file by file:

- Files are matched on the exact ``SF:`` path string; no suffix or
  normalized matching is attempted.
- Repeated sections for one path inside a document are summed first.
- A file present on one side only is diffed against an all-zero file and
  reported as ``ADDED`` or ``REMOVED``; its percentage delta is NaN.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lcov_summary.models import (
    FileCoverage,
    FileDiff,
    FileDiffStatus,
    MetricDiff,
    SummaryDiff,
    percentage,
)

if TYPE_CHECKING:
    from lcov_summary.models import CoverageDocument, CoverageSummary

logger = logging.getLogger(__name__)


def _metric_diff(base_hit: int, base_found: int, other_hit: int, other_found: int) -> MetricDiff:
    # NaN on either side propagates through the subtraction.
    return MetricDiff(
        hit_delta=other_hit - base_hit,
        found_delta=other_found - base_found,
        percentage_delta=percentage(other_hit, other_found) - percentage(base_hit, base_found),
    )


def diff_summaries(base: CoverageSummary, other: CoverageSummary) -> SummaryDiff:
    """Return the signed change from *base* to *other*.

    Negative deltas are regressions. Nothing is clamped or rounded.
    """
    return SummaryDiff(
        lines=_metric_diff(
            base.total_lines_hit,
            base.total_lines_found,
            other.total_lines_hit,
            other.total_lines_found,
        ),
        functions=_metric_diff(
            base.total_functions_hit,
            base.total_functions_found,
            other.total_functions_hit,
            other.total_functions_found,
        ),
    )


def _merge(first: FileCoverage, second: FileCoverage) -> FileCoverage:
    return FileCoverage(
        path=first.path,
        function_hits={**first.function_hits, **second.function_hits},
        functions_found=first.functions_found + second.functions_found,
        functions_hit=first.functions_hit + second.functions_hit,
        lines_found=first.lines_found + second.lines_found,
        lines_hit=first.lines_hit + second.lines_hit,
        branches_found=first.branches_found + second.branches_found,
        branches_hit=first.branches_hit + second.branches_hit,
    )


def files_by_path(document: CoverageDocument) -> dict[str, FileCoverage]:
    """Index a document's files by path, summing repeated sections."""
    by_path: dict[str, FileCoverage] = {}
    for file in document.files:
        existing = by_path.get(file.path)
        if existing is None:
            by_path[file.path] = file
        else:
            logger.debug("Merging repeated section for %s in %s", file.path, document.name)
            by_path[file.path] = _merge(existing, file)
    return by_path


def diff_files(path: str, base: FileCoverage | None, other: FileCoverage | None) -> FileDiff:
    """Diff one file; a missing side counts as an empty file."""
    if base is None and other is None:
        raise ValueError(f"No coverage for {path} on either side")

    if base is None:
        status = FileDiffStatus.ADDED
    elif other is None:
        status = FileDiffStatus.REMOVED
    else:
        status = FileDiffStatus.CHANGED

    base = base or FileCoverage(path=path)
    other = other or FileCoverage(path=path)
    lines = _metric_diff(base.lines_hit, base.lines_found, other.lines_hit, other.lines_found)
    functions = _metric_diff(
        base.functions_hit, base.functions_found, other.functions_hit, other.functions_found
    )
    if status is FileDiffStatus.CHANGED and lines.is_zero and functions.is_zero:
        status = FileDiffStatus.UNCHANGED
    return FileDiff(path=path, status=status, lines=lines, functions=functions)


def diff_documents(base: CoverageDocument, other: CoverageDocument) -> list[FileDiff]:
    """Diff two documents file by file.

    Results follow *base* order, then files that only *other* contains.
    """
    base_files = files_by_path(base)
    other_files = files_by_path(other)

    diffs = [diff_files(path, file, other_files.get(path)) for path, file in base_files.items()]
    diffs.extend(
        diff_files(path, None, file)
        for path, file in other_files.items()
        if path not in base_files
    )
    return diffs
