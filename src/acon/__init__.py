"""ACON — reader and writer for the Awk-Compatible Object Notation."""

from .values import (
    Empty,
    Value,
    VArray,
    VString,
    VTable,
    _Empty,
)
from .errors import (
    AconError,
    DuplicateKey,
    ErrorKind,
    ExcessiveClosingDelimiter,
    InternalInvariantViolation,
    TypeMismatch,
    UnterminatedNesting,
    WrongClosingDelimiterKind,
)
from .getter import apply_getter, resolve_path
from .reader import load, parse, parse_lines
from .writer import dump, dumps
from .repl import AconRepl

__all__ = [
    "parse",
    "parse_lines",
    "load",
    "dump",
    "dumps",
    "apply_getter",
    "resolve_path",
    "Empty",
    "Value",
    "VArray",
    "VString",
    "VTable",
    "AconError",
    "ErrorKind",
    "DuplicateKey",
    "ExcessiveClosingDelimiter",
    "InternalInvariantViolation",
    "UnterminatedNesting",
    "WrongClosingDelimiterKind",
    "TypeMismatch",
    "AconRepl",
]
