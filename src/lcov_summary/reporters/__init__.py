"""Reporters for rendering coverage results."""

from __future__ import annotations

from lcov_summary.reporters.terminal import CoverageReporter

__all__ = [
    "CoverageReporter",
]
