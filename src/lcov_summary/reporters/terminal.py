"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lcov_summary.config import DisplayConfig, ThresholdConfig
from lcov_summary.models import FileDiffStatus, is_undefined

if TYPE_CHECKING:
    from lcov_summary.models import (
        CoverageDocument,
        CoverageSummary,
        FileCoverage,
        FileDiff,
        MetricDiff,
        SummaryDiff,
    )

console = Console()
err_console = Console(stderr=True)

_UNDEFINED = "n/a"

_STATUS_STYLES = {
    FileDiffStatus.ADDED: "green",
    FileDiffStatus.REMOVED: "red",
    FileDiffStatus.CHANGED: "yellow",
    FileDiffStatus.UNCHANGED: "dim",
}


def format_percentage(value: float) -> str:
    """Format a percentage with two decimals, or ``n/a`` when undefined."""
    if is_undefined(value):
        return _UNDEFINED
    return f"{value:.2f}%"


def percentage_color(value: float, low: float, mid: float) -> str:
    """Return a Rich color name for a coverage percentage."""
    if is_undefined(value):
        return "dim"
    if value < low:
        return "red"
    if value < mid:
        return "yellow"
    return "green"


def format_count_delta(delta: int) -> str:
    """Format a signed count change; no change renders as an empty string."""
    if delta > 0:
        return f"+ {delta}"
    if delta < 0:
        return f"- {abs(delta)}"
    return ""


def format_percentage_delta(delta: float) -> str:
    """Format a signed percentage-point change as ``+ 1.00%``/``- 1.00%``/``= 0.00%``."""
    if is_undefined(delta):
        return _UNDEFINED
    if delta > 0:
        return f"+ {delta:.2f}%"
    if delta < 0:
        return f"- {abs(delta):.2f}%"
    return f"= {0.0:.2f}%"


def percentage_delta_color(delta: float) -> str:
    """Return a Rich color name for a percentage-point change."""
    if is_undefined(delta):
        return "dim"
    if delta > 0:
        return "green"
    if delta < 0:
        return "red"
    return "yellow"


def display_path(path: str, anchor: str = "/src") -> str:
    """Shorten *path* to start at the first *anchor* segment.

    ``/home/me/project/src/lib.rs`` becomes ``src/lib.rs``. Paths without
    the anchor, or an empty anchor, are returned unchanged.
    """
    if not anchor:
        return path
    index = path.find(anchor)
    if index < 0:
        return path
    return path[index + 1 :] if anchor.startswith("/") else path[index:]


class CoverageReporter:
    """Rich terminal renderer for coverage documents, summaries, and diffs."""

    def __init__(
        self,
        thresholds: ThresholdConfig | None = None,
        display: DisplayConfig | None = None,
    ) -> None:
        """Initialize the reporter with coloring thresholds and display settings."""
        self.console = console
        self.err_console = err_console
        self.thresholds = thresholds or ThresholdConfig()
        self.display = display or DisplayConfig()

    # ── Messages ───────────────────────────────────────────────────────

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        self.err_console.print(
            f"[red]✗[/red] {escape(message)}", highlight=False, soft_wrap=True
        )

    def print_warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        self.err_console.print(
            f"[yellow]⚠[/yellow] {escape(message)}", highlight=False, soft_wrap=True
        )

    # ── Cell helpers ───────────────────────────────────────────────────

    def _percentage_cell(self, value: float, *, bold: bool = False) -> str:
        color = percentage_color(value, self.thresholds.low, self.thresholds.mid)
        style = f"bold {color}" if bold else color
        return f"[{style}]{format_percentage(value)}[/{style}]"

    @staticmethod
    def _delta_cell(delta: float) -> str:
        color = percentage_delta_color(delta)
        return f"[{color}]{format_percentage_delta(delta)}[/{color}]"

    def _new_table(self, first_column: str, *, branches: bool = False) -> Table:
        table = Table(title_style="bold cyan", show_edge=False)
        table.add_column(first_column, style="bold")
        for group in ("Lines", "Functions"):
            table.add_column(f"{group} Hit", justify="right")
            table.add_column(f"{group} Total", justify="right")
            table.add_column(f"{group} H/T", justify="right")
        if branches:
            table.add_column("Branches Hit", justify="right")
            table.add_column("Branches Total", justify="right")
        return table

    def _summary_cells(self, summary: CoverageSummary, *, bold: bool = False) -> list[str]:
        return [
            str(summary.total_lines_hit),
            str(summary.total_lines_found),
            self._percentage_cell(summary.lines_percentage, bold=bold),
            str(summary.total_functions_hit),
            str(summary.total_functions_found),
            self._percentage_cell(summary.functions_percentage, bold=bold),
        ]

    def _file_cells(self, file: FileCoverage) -> list[str]:
        cells = [
            str(file.lines_hit),
            str(file.lines_found),
            self._percentage_cell(file.lines_percentage),
            str(file.functions_hit),
            str(file.functions_found),
            self._percentage_cell(file.functions_percentage),
        ]
        if self.display.show_branches:
            cells.extend([str(file.branches_hit), str(file.branches_found)])
        return cells

    def _diff_cells(self, lines: MetricDiff, functions: MetricDiff) -> list[str]:
        return [
            format_count_delta(lines.hit_delta),
            format_count_delta(lines.found_delta),
            self._delta_cell(lines.percentage_delta),
            format_count_delta(functions.hit_delta),
            format_count_delta(functions.found_delta),
            self._delta_cell(functions.percentage_delta),
        ]

    # ── Reports ────────────────────────────────────────────────────────

    def print_document(self, document: CoverageDocument, summary: CoverageSummary) -> None:
        """Print one row per file followed by the document total."""
        show_branches = self.display.show_branches
        table = self._new_table("File", branches=show_branches)

        for file in document.files:
            table.add_row(
                escape(display_path(file.path, self.display.path_anchor)),
                *self._file_cells(file),
            )

        total_cells = self._summary_cells(summary, bold=True)
        if show_branches:
            # Branch totals are not aggregated.
            total_cells.extend(["", ""])
        table.add_section()
        table.add_row(f"[bold]{escape(document.name)}[/bold]", *total_cells)

        self.console.print(table)

    def print_summary(self, document: CoverageDocument, summary: CoverageSummary) -> None:
        """Print only the document total."""
        table = self._new_table("")
        table.add_row(escape(document.name), *self._summary_cells(summary))
        self.console.print(table)

    def print_summary_diff(
        self,
        base: CoverageDocument,
        base_summary: CoverageSummary,
        other: CoverageDocument,
        other_summary: CoverageSummary,
        diff: SummaryDiff,
    ) -> None:
        """Print both document totals and the signed change between them."""
        table = self._new_table("")
        table.add_row(escape(base.name), *self._summary_cells(base_summary))
        table.add_row(escape(other.name), *self._summary_cells(other_summary))
        table.add_section()
        table.add_row("diff", *self._diff_cells(diff.lines, diff.functions))
        self.console.print(table)

    def print_file_diff(self, diffs: list[FileDiff], *, include_unchanged: bool = False) -> None:
        """Print per-file changes between two documents."""
        shown = [d for d in diffs if include_unchanged or d.status is not FileDiffStatus.UNCHANGED]
        if not shown:
            self.console.print("[dim]No per-file coverage changes[/dim]")
            return

        table = self._new_table("File")
        table.add_column("Status", justify="center")
        for file_diff in shown:
            style = _STATUS_STYLES[file_diff.status]
            table.add_row(
                escape(display_path(file_diff.path, self.display.path_anchor)),
                *self._diff_cells(file_diff.lines, file_diff.functions),
                f"[{style}]{file_diff.status.value}[/{style}]",
            )
        self.console.print(table)
