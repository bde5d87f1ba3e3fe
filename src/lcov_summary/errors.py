"""Exception hierarchy for lcov-summary."""

from __future__ import annotations

from pathlib import Path


class LcovSummaryError(Exception):
    """Base exception for all lcov-summary errors."""


class CoverageFileError(LcovSummaryError):
    """Raised when a coverage file cannot be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read coverage file {self.path}: {reason}")


class ParseError(LcovSummaryError, ValueError):
    """Raised when a line carries a known tag but a malformed payload."""

    def __init__(self, tag: str, line: str, *, source: str, line_number: int) -> None:
        self.tag = tag
        self.line = line
        self.source = source
        self.line_number = line_number
        super().__init__(f"{source}:{line_number}: malformed {tag} record: {line!r}")


class UndeclaredFunctionError(LcovSummaryError, LookupError):
    """Raised when an FNDA record names a function with no prior FN record."""

    def __init__(self, name: str, *, source: str = "<string>", line_number: int = 0) -> None:
        self.name = name
        self.source = source
        self.line_number = line_number
        super().__init__(
            f"{source}:{line_number}: hit count for undeclared function {name!r}"
        )


class ConfigError(LcovSummaryError):
    """Raised when ``.lcov-summary.yml`` cannot be loaded or is invalid."""
