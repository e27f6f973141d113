"""Writer: renders a VTable back into ACON text."""

from __future__ import annotations

from typing import IO

from .errors import TypeMismatch
from .reader import (
    CLOSE_ARRAY,
    CLOSE_TABLE,
    DELIMITERS,
    OPEN_ARRAY,
    OPEN_TABLE,
)
from .values import Value, VArray, VString, VTable


def dumps(table: VTable, indent: str = "\t") -> str:
    """Render *table* as ACON text.

    Entries are written in the table's sorted key order, nested blocks
    are indented by one *indent* per level. Parsing the result yields a
    tree equal to *table*.
    """
    if not isinstance(table, VTable):
        raise TypeMismatch("table", table)
    out: list[str] = []
    _write_table_body(table, 0, indent, out)
    return "".join(line + "\n" for line in out)


def dump(table: VTable, fp: IO[str], indent: str = "\t") -> None:
    fp.write(dumps(table, indent))


# ---------------------------------------------------------------------------
# Block writers
# ---------------------------------------------------------------------------

def _write_table_body(table: VTable, depth: int, indent: str, out: list[str]) -> None:
    pad = indent * depth
    for key, value in table.items():
        if isinstance(value, VString):
            _check_key(key)
            _check_text(value.value)
            out.append(f"{pad}{key} {value.value}".rstrip())
        else:
            if key:
                _check_key(key)
            _write_block(key, value, depth, indent, out)


def _write_block(name: str, value: Value, depth: int, indent: str, out: list[str]) -> None:
    pad = indent * depth
    if isinstance(value, VTable):
        out.append(f"{pad}{OPEN_TABLE} {name}".rstrip())
        _write_table_body(value, depth + 1, indent, out)
        out.append(f"{pad}{CLOSE_TABLE}")
    elif isinstance(value, VArray):
        out.append(f"{pad}{OPEN_ARRAY} {name}".rstrip())
        for item in value.items:
            _write_element(item, depth + 1, indent, out)
        out.append(f"{pad}{CLOSE_ARRAY}")
    else:
        raise TypeMismatch("table or array", value)


def _write_element(value: Value, depth: int, indent: str, out: list[str]) -> None:
    if isinstance(value, VString):
        _check_text(value.value)
        words = value.value.split()
        if words and words[0] in DELIMITERS:
            raise ValueError(f"array element starts with a delimiter: {value.value!r}")
        # Blank elements are written as truly empty lines.
        out.append(f"{indent * depth}{value.value}" if value.value else "")
        return

    # A named frame closed inside an array is stored as a one-entry table.
    if isinstance(value, VTable) and len(value) == 1:
        (name, inner), = value.entries.items()
        if name and not isinstance(inner, VString):
            _check_key(name)
            _write_block(name, inner, depth, indent, out)
            return

    _write_block("", value, depth, indent, out)


# ---------------------------------------------------------------------------
# Representability checks
# ---------------------------------------------------------------------------

def _check_key(key: str) -> None:
    if not key or key.split() != [key] or key in DELIMITERS:
        raise ValueError(f"key cannot be written as ACON: {key!r}")


def _check_text(text: str) -> None:
    if "\n" in text or "\r" in text:
        raise ValueError(f"value spans multiple lines: {text!r}")
    if " ".join(text.split()) != text:
        raise ValueError(f"value is not whitespace-normalised: {text!r}")
