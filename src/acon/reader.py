"""Reader layer: turns ACON text into a VTable, one line at a time.

The reader is a stack machine. The stack starts with an unnamed table
for the document root; ``{`` and ``[`` push a frame, ``}`` and ``]`` pop
one and merge it into its parent, and ``$`` merges every frame above the
root at once. Any other line becomes an entry of the frame on top.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import IO, Iterable

from .errors import (
    AconError,
    DuplicateKey,
    ExcessiveClosingDelimiter,
    InternalInvariantViolation,
    UnterminatedNesting,
    WrongClosingDelimiterKind,
)
from .values import Value, VArray, VString, VTable

logger = logging.getLogger(__name__)

OPEN_TABLE = "{"
CLOSE_TABLE = "}"
OPEN_ARRAY = "["
CLOSE_ARRAY = "]"
CLOSE_ALL = "$"

DELIMITERS = frozenset({OPEN_TABLE, CLOSE_TABLE, OPEN_ARRAY, CLOSE_ARRAY, CLOSE_ALL})


@dataclass(slots=True)
class Node:
    """An open table or array on the parse stack."""

    name: str
    value: Value
    opened_on: int = 0


# ---------------------------------------------------------------------------
# Line splitting
# ---------------------------------------------------------------------------

def split_lines(text: str) -> list[str]:
    """Split *text* on ``\\n``, dropping one trailing ``\\r`` per line.

    A trailing newline does not produce an extra empty line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


# ---------------------------------------------------------------------------
# Stack operations
# ---------------------------------------------------------------------------

def _merge(node: Node, parent: Node, line: int) -> None:
    """Attach a closed frame to the frame below it."""
    target = parent.value
    if isinstance(target, VArray):
        if node.name:
            target.append(VTable({node.name: node.value}))
        else:
            target.append(node.value)
    elif isinstance(target, VTable):
        if node.name in target:
            raise DuplicateKey(node.name, line)
        target.insert(node.name, node.value)
    else:
        raise InternalInvariantViolation("string frame on the stack", line)


def _close(word: str, stack: list[Node], line: int) -> None:
    top = stack.pop()
    if isinstance(top.value, VArray):
        if word != CLOSE_ARRAY:
            raise WrongClosingDelimiterKind(CLOSE_ARRAY, word, line)
    elif isinstance(top.value, VTable):
        if word != CLOSE_TABLE:
            raise WrongClosingDelimiterKind(CLOSE_TABLE, word, line)
    else:
        raise InternalInvariantViolation("string frame on the stack", line)

    if not stack:
        raise ExcessiveClosingDelimiter(line)
    logger.debug("line %d: close %r", line, top.name)
    _merge(top, stack[-1], line)


def _close_all(stack: list[Node], line: int) -> None:
    logger.debug("line %d: close %d open frame(s)", line, len(stack) - 1)
    while len(stack) > 1:
        top = stack.pop()
        _merge(top, stack[-1], line)


def _add_entry(words: list[str], top: Node, line: int) -> None:
    target = top.value
    if isinstance(target, VArray):
        target.append(VString(" ".join(words)))
    elif isinstance(target, VTable):
        if not words:
            return
        key = words[0]
        if key in target:
            raise DuplicateKey(key, line)
        target.insert(key, VString(" ".join(words[1:])))
    else:
        raise InternalInvariantViolation("string frame on the stack", line)


def _finish(stack: list[Node]) -> VTable:
    if len(stack) > 1:
        top = stack[-1]
        nesting = "array" if isinstance(top.value, VArray) else "table"
        raise UnterminatedNesting(nesting, top.name, top.opened_on)
    if not stack:
        raise InternalInvariantViolation("empty stack at end of input")
    root = stack[0].value
    if not isinstance(root, VTable):
        raise InternalInvariantViolation("root frame is not a table")
    return root


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_lines(lines: Iterable[str]) -> VTable:
    """Parse an iterable of ACON lines into the root :class:`VTable`.

    Raises an :class:`~acon.errors.AconError` subclass on the first
    structural error; no partial tree is returned.
    """
    stack: list[Node] = [Node(name="", value=VTable())]
    number = 0

    try:
        for number, raw in enumerate(lines, 1):
            words = raw.split()
            first = words[0] if words else None

            if first == OPEN_TABLE or first == OPEN_ARRAY:
                name = words[1] if len(words) > 1 else ""
                value: Value = VTable() if first == OPEN_TABLE else VArray()
                stack.append(Node(name=name, value=value, opened_on=number))
                logger.debug("line %d: open %s %r", number, first, name)
                continue

            if first == CLOSE_TABLE or first == CLOSE_ARRAY:
                _close(first, stack, number)
                continue

            if first == CLOSE_ALL:
                _close_all(stack, number)
                continue

            _add_entry(words, stack[-1], number)

        return _finish(stack)
    except AconError as exc:
        logger.debug("parse failed after %d line(s): %r", number, exc)
        raise


def parse(text: str) -> VTable:
    """Parse ACON *text* and return the root table.

    Example::

        doc = parse("{ t\\n k v\\n}")
        doc.path("t.k")   # → VString("v")
    """
    return parse_lines(split_lines(text))


def load(fp: IO[str]) -> VTable:
    """Parse ACON from an open text stream."""
    return parse_lines(fp)
