"""Fold a stream of LCOV records into a CoverageDocument."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from lcov_summary.errors import CoverageFileError, UndeclaredFunctionError
from lcov_summary.models import CoverageDocument, FileCoverage
from lcov_summary.parsing.records import (
    Counter,
    FunctionDecl,
    FunctionHit,
    Record,
    SourceFile,
    parse_record,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class OrphanPolicy(Enum):
    """What to do with an FNDA record for an undeclared function."""

    SKIP = "skip"  # Log a warning and drop the record
    ABORT = "abort"  # Fail the whole file


@dataclass(frozen=True)
class BuildState:
    """Closed file sections plus the open section records apply to.

    The open section is always the most recently opened one, so it is held
    apart from the closed sections rather than indexed into them.
    """

    closed: tuple[FileCoverage, ...] = ()
    current: FileCoverage | None = None

    @property
    def files(self) -> tuple[FileCoverage, ...]:
        """Return every section seen so far, in ``SF:`` order."""
        if self.current is None:
            return self.closed
        return (*self.closed, self.current)


def apply_record(state: BuildState, record: Record) -> BuildState:
    """Apply one record to *state* and return the new state.

    Raises:
        UndeclaredFunctionError: If *record* is a hit count for a function not
            declared earlier in the current section.
    """
    if isinstance(record, SourceFile):
        return BuildState(state.files, FileCoverage(path=record.path))

    current = state.current
    if current is None:
        logger.debug("Dropping %r outside of any SF section", record)
        return state

    if isinstance(record, FunctionDecl):
        # Re-declaration resets the hit count.
        hits = {**current.function_hits, record.name: 0}
        return BuildState(state.closed, dataclasses.replace(current, function_hits=hits))

    if isinstance(record, FunctionHit):
        if record.name not in current.function_hits:
            raise UndeclaredFunctionError(record.name)
        hits = {**current.function_hits, record.name: record.count}
        return BuildState(state.closed, dataclasses.replace(current, function_hits=hits))

    if isinstance(record, Counter):
        updated = dataclasses.replace(current, **{record.kind.value: record.value})
        return BuildState(state.closed, updated)

    return state


def build_document(
    name: str,
    lines: Iterable[str],
    *,
    orphan_policy: OrphanPolicy = OrphanPolicy.SKIP,
) -> CoverageDocument:
    """Build a CoverageDocument from LCOV lines, strictly in order.

    Args:
        name: Source identifier stored on the document and used in errors.
        lines: The lines of one LCOV input.
        orphan_policy: How to treat FNDA records for undeclared functions.

    Raises:
        ParseError: If a recognized record has a malformed numeric field.
        UndeclaredFunctionError: On an orphan FNDA record under ``ABORT``.
    """
    state = BuildState()
    for line_number, line in enumerate(lines, start=1):
        record = parse_record(line, source=name, line_number=line_number)
        if record is None:
            continue
        try:
            state = apply_record(state, record)
        except UndeclaredFunctionError as e:
            if orphan_policy is OrphanPolicy.ABORT:
                raise UndeclaredFunctionError(
                    e.name, source=name, line_number=line_number
                ) from e
            logger.warning(
                "%s:%d: skipping hit count for undeclared function %r",
                name,
                line_number,
                e.name,
            )

    logger.debug("Parsed %d file section(s) from %s", len(state.files), name)
    return CoverageDocument(name=name, files=state.files)


def parse_lcov(
    text: str,
    name: str = "<string>",
    *,
    orphan_policy: OrphanPolicy = OrphanPolicy.SKIP,
) -> CoverageDocument:
    """Parse LCOV text into a CoverageDocument."""
    return build_document(name, text.splitlines(), orphan_policy=orphan_policy)


def load_lcov(
    path: str | Path,
    *,
    orphan_policy: OrphanPolicy = OrphanPolicy.SKIP,
) -> CoverageDocument:
    """Read and parse an LCOV file.

    Raises:
        CoverageFileError: If the file cannot be read or decoded.
        ParseError: If a recognized record is malformed.
        UndeclaredFunctionError: On an orphan FNDA record under ``ABORT``.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CoverageFileError(path, str(e)) from e
    return parse_lcov(text, str(path), orphan_policy=orphan_policy)
