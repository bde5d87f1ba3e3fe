"""Tokenizer for single LCOV record lines.

Each line is classified by the tag before its first colon. Lines whose tag
is not modelled here (``TN``, ``DA``, ``BRDA``, ``end_of_record`` ...) parse
to ``None`` and are ignored by the document builder.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from lcov_summary.errors import ParseError

# ── Constants ────────────────────────────────────────────────────

# LCOV record keys
_LCOV_SF = "SF"
_LCOV_FN = "FN"
_LCOV_FNDA = "FNDA"

_UINT_RE = re.compile(r"\d+")


class CounterKind(Enum):
    """Scalar LCOV counters, valued by the FileCoverage field they set."""

    FUNCTIONS_FOUND = "functions_found"
    FUNCTIONS_HIT = "functions_hit"
    LINES_FOUND = "lines_found"
    LINES_HIT = "lines_hit"
    BRANCHES_FOUND = "branches_found"
    BRANCHES_HIT = "branches_hit"


# Branch totals are BRF/BRH; BF/BH are not LCOV tags.
_COUNTER_TAGS: dict[str, CounterKind] = {
    "FNF": CounterKind.FUNCTIONS_FOUND,
    "FNH": CounterKind.FUNCTIONS_HIT,
    "LF": CounterKind.LINES_FOUND,
    "LH": CounterKind.LINES_HIT,
    "BRF": CounterKind.BRANCHES_FOUND,
    "BRH": CounterKind.BRANCHES_HIT,
}


# ── Records ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class SourceFile:
    """``SF:<path>`` opens a new file section."""

    path: str


@dataclass(frozen=True)
class FunctionDecl:
    """``FN:<line>,<name>`` declares a function."""

    line_number: int
    name: str


@dataclass(frozen=True)
class FunctionHit:
    """``FNDA:<count>,<name>`` gives a declared function's hit count."""

    count: int
    name: str


@dataclass(frozen=True)
class Counter:
    """One of the scalar summary records (``FNF``, ``LF``, ``BRH`` ...)."""

    kind: CounterKind
    value: int


Record = SourceFile | FunctionDecl | FunctionHit | Counter


# ── Parsing ──────────────────────────────────────────────────────


def _parse_uint(text: str) -> int | None:
    text = text.strip()
    if not _UINT_RE.fullmatch(text):
        return None
    return int(text)


def _parse_number_and_name(value: str) -> tuple[int, str] | None:
    """Split ``<int>,<name>`` on the first comma; names may contain commas."""
    number_text, sep, name = value.partition(",")
    if not sep:
        return None
    number = _parse_uint(number_text)
    if number is None:
        return None
    return number, name


def parse_record(line: str, *, source: str = "<string>", line_number: int = 0) -> Record | None:
    """Parse one LCOV line into a typed record.

    Args:
        line: A single line of LCOV text, without its line terminator.
        source: Name of the input, used in error messages.
        line_number: 1-based position of *line* in *source*.

    Returns:
        The parsed record, or None if the line's tag is not recognized.

    Raises:
        ParseError: If the tag is recognized but its numeric field is malformed.
    """
    tag, sep, value = line.partition(":")
    if not sep:
        return None

    if tag == _LCOV_SF:
        return SourceFile(value)

    if tag in (_LCOV_FN, _LCOV_FNDA):
        parsed = _parse_number_and_name(value)
        if parsed is None:
            raise ParseError(f"{tag}:", line, source=source, line_number=line_number)
        number, name = parsed
        if tag == _LCOV_FN:
            return FunctionDecl(number, name)
        return FunctionHit(number, name)

    kind = _COUNTER_TAGS.get(tag)
    if kind is None:
        return None
    count = _parse_uint(value)
    if count is None:
        raise ParseError(f"{tag}:", line, source=source, line_number=line_number)
    return Counter(kind, count)
