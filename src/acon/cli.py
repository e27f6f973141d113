"""``acon`` command: validate, query and reformat ACON files.

Exit status follows the usual validator convention: 0 on success, 1 when
the input is malformed or the requested path does not exist, 2 for usage
and I/O errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO

from .errors import AconError
from .reader import load
from .values import VString, VTable, _Empty
from .writer import dumps

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="acon", description="ACON validator and formatter")
    ap.add_argument("file", help="ACON file to read, or - for stdin")
    ap.add_argument("--path", metavar="DOTTED", help="print the value at this dot-path")
    ap.add_argument("--format", action="store_true", help="print the document in canonical form")
    ap.add_argument("--indent", type=int, default=0, metavar="N",
                    help="indent nested blocks with N spaces instead of a tab")
    ap.add_argument("-q", "--quiet", action="store_true", help="print nothing on success")
    ap.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return ap


def _read(path: str, stdin: IO[str]):
    if path == "-":
        return load(stdin)
    with open(path, encoding="utf-8") as fh:
        return load(fh)


def run(
    argv: list[str],
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
    stdin: IO[str] | None = None,
) -> int:
    """Run the command with *argv* and return the exit status."""
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    stdin = stdin or sys.stdin

    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
    )

    try:
        doc = _read(args.file, stdin)
    except OSError as exc:
        print(f"Error reading '{args.file}': {exc}", file=stderr)
        return 2
    except AconError as exc:
        print(f"{exc.kind.name}: {exc.reason}", file=stderr)
        return 1

    if args.path is not None:
        value = doc.path(args.path)
        if isinstance(value, _Empty):
            print(f"Path not found: {args.path}", file=stderr)
            return 1
        if isinstance(value, VString):
            print(value.value, file=stdout)
        else:
            # Print the subtree as a document rooted at its last path segment.
            key = args.path.rsplit(".", 1)[-1]
            print(dumps(VTable({key: value}), _indent(args.indent)), end="", file=stdout)
        return 0

    if args.format:
        print(dumps(doc, _indent(args.indent)), end="", file=stdout)
        return 0

    logger.debug("%s: %d top-level key(s)", args.file, len(doc))
    if not args.quiet:
        print("OK", file=stdout)
    return 0


def _indent(spaces: int) -> str:
    return " " * spaces if spaces > 0 else "\t"


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
