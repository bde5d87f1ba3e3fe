"""lcov-summary: summarize and compare LCOV coverage files."""

from lcov_summary.aggregate import summarize
from lcov_summary.diff import diff_documents, diff_summaries
from lcov_summary.errors import (
    ConfigError,
    CoverageFileError,
    LcovSummaryError,
    ParseError,
    UndeclaredFunctionError,
)
from lcov_summary.models import (
    CoverageDocument,
    CoverageSummary,
    FileCoverage,
    FileDiff,
    FileDiffStatus,
    MetricDiff,
    SummaryDiff,
    is_undefined,
)
from lcov_summary.parsing import OrphanPolicy, load_lcov, parse_lcov

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "CoverageDocument",
    "CoverageFileError",
    "CoverageSummary",
    "FileCoverage",
    "FileDiff",
    "FileDiffStatus",
    "LcovSummaryError",
    "MetricDiff",
    "OrphanPolicy",
    "ParseError",
    "SummaryDiff",
    "UndeclaredFunctionError",
    "__version__",
    "diff_documents",
    "diff_summaries",
    "is_undefined",
    "load_lcov",
    "parse_lcov",
    "summarize",
]
