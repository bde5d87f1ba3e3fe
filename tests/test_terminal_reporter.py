"""Tests for the terminal (Rich) reporter."""

from __future__ import annotations

import math
from unittest.mock import MagicMock

import pytest
from rich.console import Console
from rich.table import Table

from lcov_summary.aggregate import summarize
from lcov_summary.config import DisplayConfig, ThresholdConfig
from lcov_summary.diff import diff_documents, diff_summaries
from lcov_summary.models import CoverageDocument, FileCoverage
from lcov_summary.parsing import parse_lcov
from lcov_summary.reporters.terminal import (
    CoverageReporter,
    display_path,
    format_count_delta,
    format_percentage,
    format_percentage_delta,
    percentage_color,
    percentage_delta_color,
)

_BASE = """SF:/home/dev/proj/src/lib.rs
FNF:4
FNH:2
LF:20
LH:10
BRF:6
BRH:3
end_of_record
SF:/home/dev/proj/src/empty.rs
end_of_record
"""

_HEAD = """SF:/home/dev/proj/src/lib.rs
FNF:4
FNH:3
LF:20
LH:15
end_of_record
SF:/home/dev/proj/src/new.rs
LF:5
LH:5
end_of_record
"""

# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def recording_reporter() -> CoverageReporter:
    """Return a CoverageReporter printing to a wide recording console."""
    r = CoverageReporter()
    r.console = Console(record=True, width=200, color_system=None)
    r.err_console = Console(record=True, width=200, color_system=None)
    return r


@pytest.fixture
def mock_reporter() -> CoverageReporter:
    """Return a CoverageReporter with a mocked console."""
    r = CoverageReporter()
    r.console = MagicMock()
    return r


def _output(reporter: CoverageReporter) -> str:
    return reporter.console.export_text()


# ── Helper function tests ───────────────────────────────────────


class TestFormatPercentage:
    def test_two_decimals(self) -> None:
        assert format_percentage(75.0) == "75.00%"
        assert format_percentage(100 / 3) == "33.33%"

    def test_undefined(self) -> None:
        assert format_percentage(math.nan) == "n/a"


class TestPercentageColor:
    def test_bands(self) -> None:
        assert percentage_color(69.99, 70.0, 80.0) == "red"
        assert percentage_color(70.0, 70.0, 80.0) == "yellow"
        assert percentage_color(79.99, 70.0, 80.0) == "yellow"
        assert percentage_color(80.0, 70.0, 80.0) == "green"

    def test_undefined_is_dim(self) -> None:
        assert percentage_color(math.nan, 70.0, 80.0) == "dim"


class TestDeltaFormatting:
    def test_count_delta(self) -> None:
        assert format_count_delta(5) == "+ 5"
        assert format_count_delta(-3) == "- 3"
        assert format_count_delta(0) == ""

    def test_percentage_delta(self) -> None:
        assert format_percentage_delta(25.0) == "+ 25.00%"
        assert format_percentage_delta(-1.5) == "- 1.50%"
        assert format_percentage_delta(0.0) == "= 0.00%"
        assert format_percentage_delta(-0.0) == "= 0.00%"

    def test_percentage_delta_undefined_does_not_raise(self) -> None:
        assert format_percentage_delta(math.nan) == "n/a"
        assert percentage_delta_color(math.nan) == "dim"

    def test_percentage_delta_colors(self) -> None:
        assert percentage_delta_color(1.0) == "green"
        assert percentage_delta_color(-1.0) == "red"
        assert percentage_delta_color(0.0) == "yellow"


class TestDisplayPath:
    def test_trims_before_anchor(self) -> None:
        assert display_path("/home/me/proj/src/iface/mod.rs") == "src/iface/mod.rs"

    def test_first_anchor_wins(self) -> None:
        assert display_path("/a/src/b/src/c.rs") == "src/b/src/c.rs"

    def test_no_anchor_unchanged(self) -> None:
        assert display_path("/opt/lib/x.c") == "/opt/lib/x.c"

    def test_empty_anchor_disables(self) -> None:
        assert display_path("/home/src/x.c", "") == "/home/src/x.c"

    def test_custom_anchor_without_slash(self) -> None:
        assert display_path("/work/crates/a/lib.rs", "crates") == "crates/a/lib.rs"


# ── CoverageReporter tests ──────────────────────────────────────


class TestPrintDocument:
    def test_prints_a_table(self, mock_reporter: CoverageReporter) -> None:
        document = parse_lcov(_BASE, "base.info")
        mock_reporter.print_document(document, summarize(document))

        mock_reporter.console.print.assert_called_once()
        table = mock_reporter.console.print.call_args[0][0]
        assert isinstance(table, Table)
        assert table.row_count == 3

    def test_rows_and_total(self, recording_reporter: CoverageReporter) -> None:
        document = parse_lcov(_BASE, "base.info")
        recording_reporter.print_document(document, summarize(document))

        out = _output(recording_reporter)
        assert "src/lib.rs" in out
        assert "/home/dev" not in out
        assert "50.00%" in out
        assert "base.info" in out
        # The empty section renders as undefined instead of raising.
        assert "n/a" in out
        assert "Branches" not in out

    def test_branch_columns(self, recording_reporter: CoverageReporter) -> None:
        recording_reporter.display = DisplayConfig(show_branches=True)
        document = parse_lcov(_BASE, "base.info")
        recording_reporter.print_document(document, summarize(document))

        out = _output(recording_reporter)
        assert "Branches Hit" in out
        assert "Branches Total" in out

    def test_custom_thresholds_used(self) -> None:
        reporter = CoverageReporter(thresholds=ThresholdConfig(low=10.0, mid=20.0))
        assert reporter._percentage_cell(50.0) == "[green]50.00%[/green]"
        assert reporter._percentage_cell(50.0, bold=True) == "[bold green]50.00%[/bold green]"


class TestPrintSummary:
    def test_total_only(self, recording_reporter: CoverageReporter) -> None:
        document = parse_lcov(_BASE, "base.info")
        recording_reporter.print_summary(document, summarize(document))

        out = _output(recording_reporter)
        assert "base.info" in out
        assert "lib.rs" not in out
        assert "50.00%" in out

    def test_empty_document(self, recording_reporter: CoverageReporter) -> None:
        document = CoverageDocument(name="empty.info")
        recording_reporter.print_summary(document, summarize(document))
        assert "n/a" in _output(recording_reporter)


class TestPrintSummaryDiff:
    def test_diff_row(self, recording_reporter: CoverageReporter) -> None:
        base = parse_lcov(_BASE, "base.info")
        head = parse_lcov(_HEAD, "head.info")
        base_summary, head_summary = summarize(base), summarize(head)

        recording_reporter.print_summary_diff(
            base, base_summary, head, head_summary, diff_summaries(base_summary, head_summary)
        )

        out = _output(recording_reporter)
        assert "base.info" in out
        assert "head.info" in out
        assert "diff" in out
        # Lines: 10/20 -> 20/25
        assert "+ 10" in out
        assert "+ 5" in out
        assert "+ 30.00%" in out
        # Functions: 2/4 -> 3/4
        assert "+ 25.00%" in out

    def test_reflexive_undefined_diff_renders(self, recording_reporter: CoverageReporter) -> None:
        document = CoverageDocument(name="empty.info", files=(FileCoverage(path="/a"),))
        summary = summarize(document)

        recording_reporter.print_summary_diff(
            document, summary, document, summary, diff_summaries(summary, summary)
        )

        assert "n/a" in _output(recording_reporter)


class TestPrintFileDiff:
    def test_changed_added_removed(self, recording_reporter: CoverageReporter) -> None:
        diffs = diff_documents(parse_lcov(_BASE), parse_lcov(_HEAD))
        recording_reporter.print_file_diff(diffs)

        out = _output(recording_reporter)
        assert "src/lib.rs" in out
        assert "changed" in out
        assert "src/empty.rs" in out
        assert "removed" in out
        assert "src/new.rs" in out
        assert "added" in out

    def test_unchanged_hidden_by_default(self, recording_reporter: CoverageReporter) -> None:
        document = parse_lcov(_HEAD)
        recording_reporter.print_file_diff(diff_documents(document, document))
        assert "No per-file coverage changes" in _output(recording_reporter)

    def test_include_unchanged(self, recording_reporter: CoverageReporter) -> None:
        document = parse_lcov(_HEAD)
        recording_reporter.print_file_diff(
            diff_documents(document, document), include_unchanged=True
        )
        out = _output(recording_reporter)
        assert "unchanged" in out
        assert "= 0.00%" in out


class TestMessages:
    def test_error_goes_to_err_console(self, recording_reporter: CoverageReporter) -> None:
        recording_reporter.print_error("boom")
        assert "boom" in recording_reporter.err_console.export_text()
        assert _output(recording_reporter) == ""

    def test_warning(self, recording_reporter: CoverageReporter) -> None:
        recording_reporter.print_warning("careful")
        assert "careful" in recording_reporter.err_console.export_text()
