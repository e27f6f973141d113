"""AconRepl — interactive shell for building and querying ACON documents.

Also provides the ``acon-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import sys
from typing import IO

from .errors import AconError, DuplicateKey
from .reader import parse
from .values import Value, VArray, VString, VTable, _Empty
from .writer import dumps


# ---------------------------------------------------------------------------
# AconRepl class (programmatic use)
# ---------------------------------------------------------------------------

class AconRepl:
    """Stateful session that accumulates top-level entries across calls.

    Usage::

        repl = AconRepl()
        repl.eval("{ server\\n host example.org\\n}")
        repl.query("server.host")   # → VString("example.org")

        repl.doc          # the accumulated VTable
        repl.reset()      # clear state
    """

    def __init__(self) -> None:
        self.doc = VTable()

    def eval(self, text: str) -> list[str]:
        """Parse *text* and merge its top-level entries into the session.

        Returns the merged keys in sorted order. Nothing is merged when
        *text* fails to parse or one of its keys is already present.
        """
        parsed = parse(text)
        for key in parsed:
            if key in self.doc:
                raise DuplicateKey(key)
        for key, value in parsed.items():
            self.doc.insert(key, value)
        return parsed.keys()

    def query(self, dotted: str) -> Value | _Empty:
        return self.doc.path(dotted)

    def reset(self) -> None:
        """Clear the accumulated document."""
        self.doc = VTable()


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value | _Empty) -> str:
    """Format a single value for compact one-line display."""
    if isinstance(value, VString):
        return f'"{value.value}"'
    if isinstance(value, VArray):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VTable):
        return "{" + ", ".join(f"{k}: {_fmt_inline(v)}" for k, v in value.items()) + "}"
    return repr(value)


def _fmt_inspect(value: Value | _Empty) -> str:
    """Pretty-print a value for inspect() / i()."""
    if isinstance(value, _Empty):
        return "Empty"

    if isinstance(value, VTable):
        if not len(value):
            return "VTable {}"
        width = max(len(k) for k in value)
        lines = ["VTable {"]
        for k, v in value.items():
            lines.append(f"  {k:<{width}}: {_fmt_inline(v)}")
        lines.append("}")
        return "\n".join(lines)

    if isinstance(value, VArray):
        lines = ["VArray ["]
        for i, v in enumerate(value.items):
            lines.append(f"  {i}: {_fmt_inline(v)}")
        lines.append("]")
        return "\n".join(lines)

    return _fmt_inline(value)


def _show_keys(repl: AconRepl, dest: IO[str]) -> None:
    """Print the top-level keys of the session document."""
    if not len(repl.doc):
        print("  (document is empty)", file=dest)
        return
    for key in repl.doc:
        print(f"  {key or '(unnamed)'}", file=dest)


def _load_file(repl: AconRepl, filepath: str, dest: IO[str]) -> None:
    try:
        with open(filepath, encoding="utf-8") as fh:
            keys = repl.eval(fh.read())
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
        return
    except AconError as exc:
        print(f"Error: {exc.reason}", file=dest)
        return
    print(f"  loaded {len(keys)} key(s) from {filepath}", file=dest)


def _process_line(repl: AconRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":keys":
        _show_keys(repl, dest)
        return True

    if line == ":dump":
        print(dumps(repl.doc), end="", file=dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    # ── inspect() / i() ───────────────────────────────────────────────────
    for prefix in ("inspect(", "i("):
        if line.startswith(prefix) and line.endswith(")"):
            expr = line[len(prefix):-1].strip()
            print(_fmt_inspect(repl.query(expr)), file=dest)
            return True

    # ── ? path ────────────────────────────────────────────────────────────
    if line.startswith("? "):
        result = repl.query(line[2:].strip())
        if isinstance(result, VString):
            print(str(result), file=dest)
        else:
            print(_fmt_inline(result), file=dest)
        return True

    # ── Load file ─────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        _load_file(repl, line[4:].strip(), dest)
        return True

    # ── Single-line ACON entry ────────────────────────────────────────────
    try:
        repl.eval(line)
    except AconError as exc:
        print(f"Error: {exc.reason}", file=dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Interactive ACON shell (``acon-repl`` / ``python -m acon.repl``)."""
    repl = AconRepl()
    dest: IO[str] = sys.stdout

    print("ACON REPL  (:q to quit  |  :keys  :dump  :reset  |  ? <path>  inspect(<path>)  ?<< <file>)")

    while True:
        try:
            line = input("ACON> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not _process_line(repl, line, dest):
            break


if __name__ == "__main__":
    main()
