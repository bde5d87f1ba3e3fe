"""LCOV record parsing and document building."""

from lcov_summary.parsing.builder import (
    BuildState,
    OrphanPolicy,
    apply_record,
    build_document,
    load_lcov,
    parse_lcov,
)
from lcov_summary.parsing.records import (
    Counter,
    CounterKind,
    FunctionDecl,
    FunctionHit,
    Record,
    SourceFile,
    parse_record,
)

__all__ = [
    "BuildState",
    "Counter",
    "CounterKind",
    "FunctionDecl",
    "FunctionHit",
    "OrphanPolicy",
    "Record",
    "SourceFile",
    "apply_record",
    "build_document",
    "load_lcov",
    "parse_lcov",
    "parse_record",
]
