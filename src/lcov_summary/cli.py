"""lcov-summary CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from lcov_summary import __version__
from lcov_summary.aggregate import summarize
from lcov_summary.config import load_config, validate_config
from lcov_summary.diff import diff_documents, diff_summaries
from lcov_summary.errors import LcovSummaryError
from lcov_summary.parsing import OrphanPolicy, load_lcov
from lcov_summary.reporters.terminal import CoverageReporter

logger = logging.getLogger(__name__)


def _configure_logging(*, verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@click.command()
@click.argument("lcov_file", type=click.Path(path_type=Path))
@click.option("-s", "--summary", is_flag=True, help="Only show the summary.")
@click.option(
    "-d",
    "--diff",
    "diff_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Second LCOV file to compare against LCOV_FILE.",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to .lcov-summary.yml (defaults to the current directory).",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on hit counts for undeclared functions instead of skipping them.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="lcov-summary")
def cli(
    lcov_file: Path,
    diff_file: Path | None,
    config_path: Path | None,
    *,
    summary: bool,
    strict: bool,
    verbose: bool,
) -> None:
    """Summarize an LCOV coverage file, optionally comparing it to another.

    Example:
      lcov-summary coverage.info
      lcov-summary --summary --diff new.info old.info
    """
    _configure_logging(verbose=verbose)
    reporter = CoverageReporter()

    try:
        config = load_config(config_path)
    except LcovSummaryError as e:
        reporter.print_error(str(e))
        raise SystemExit(1) from e

    errors = validate_config(config)
    if errors:
        for error in errors:
            reporter.print_error(error)
        raise SystemExit(1)

    reporter.thresholds = config.thresholds
    reporter.display = config.display
    orphan_policy = OrphanPolicy.ABORT if strict else config.orphan_policy
    logger.debug("Using orphan policy %s", orphan_policy.value)

    # All inputs are parsed before anything is rendered.
    try:
        document = load_lcov(lcov_file, orphan_policy=orphan_policy)
        other = (
            load_lcov(diff_file, orphan_policy=orphan_policy) if diff_file is not None else None
        )
    except LcovSummaryError as e:
        reporter.print_error(str(e))
        raise SystemExit(1) from e

    for parsed in (document, other):
        if parsed is not None and not parsed.files:
            reporter.print_warning(f"No SF records found in {parsed.name}")

    document_summary = summarize(document)

    if other is None:
        if summary:
            reporter.print_summary(document, document_summary)
        else:
            reporter.print_document(document, document_summary)
        return

    other_summary = summarize(other)
    totals_diff = diff_summaries(document_summary, other_summary)
    if not summary:
        reporter.print_file_diff(diff_documents(document, other))
    reporter.print_summary_diff(document, document_summary, other, other_summary, totals_diff)


def main() -> None:
    """Console-script entry point."""
    cli()
