"""Coverage document, summary, and diff models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


def percentage(hit: int, found: int) -> float:
    """Return ``hit / found * 100``, or NaN when nothing was found."""
    if found == 0:
        return math.nan
    return hit / found * 100.0


def is_undefined(value: float) -> bool:
    """Return True if *value* is the undefined (NaN) percentage."""
    return math.isnan(value)


@dataclass(frozen=True)
class FileCoverage:
    """Coverage counters for one ``SF:`` section of an LCOV file."""

    path: str
    """Source file path, verbatim from the ``SF:`` record."""

    function_hits: dict[str, int] = field(default_factory=dict)
    """Hit count per declared function symbol name."""

    functions_found: int = 0
    functions_hit: int = 0
    lines_found: int = 0
    lines_hit: int = 0
    branches_found: int = 0
    branches_hit: int = 0

    @property
    def lines_percentage(self) -> float:
        """Return line coverage percentage (NaN when no lines were found)."""
        return percentage(self.lines_hit, self.lines_found)

    @property
    def functions_percentage(self) -> float:
        """Return function coverage percentage (NaN when no functions were found)."""
        return percentage(self.functions_hit, self.functions_found)


@dataclass(frozen=True)
class CoverageDocument:
    """A parsed LCOV file.

    Files are kept in the order their ``SF:`` records appeared.
    """

    name: str
    """Source identifier, usually the input file path."""

    files: tuple[FileCoverage, ...] = ()


@dataclass(frozen=True)
class CoverageSummary:
    """Totals across every file section of a document.

    Branch counters are intentionally not aggregated.
    """

    total_lines_found: int = 0
    total_lines_hit: int = 0
    total_functions_found: int = 0
    total_functions_hit: int = 0

    @property
    def lines_percentage(self) -> float:
        """Return overall line coverage percentage (NaN when no lines were found)."""
        return percentage(self.total_lines_hit, self.total_lines_found)

    @property
    def functions_percentage(self) -> float:
        """Return overall function coverage percentage (NaN when no functions were found)."""
        return percentage(self.total_functions_hit, self.total_functions_found)


@dataclass(frozen=True)
class MetricDiff:
    """Signed change of one metric from a base run to another run."""

    hit_delta: int
    found_delta: int
    percentage_delta: float
    """Percentage point change; NaN if either side was undefined."""

    @property
    def is_zero(self) -> bool:
        """Return True if neither counter changed."""
        return self.hit_delta == 0 and self.found_delta == 0


@dataclass(frozen=True)
class SummaryDiff:
    """Deltas between two coverage summaries."""

    lines: MetricDiff
    functions: MetricDiff


class FileDiffStatus(Enum):
    """How a file changed between two coverage documents."""

    ADDED = "added"  # Only in the other document
    REMOVED = "removed"  # Only in the base document
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class FileDiff:
    """Per-file deltas between two coverage documents."""

    path: str
    status: FileDiffStatus
    lines: MetricDiff
    functions: MetricDiff
