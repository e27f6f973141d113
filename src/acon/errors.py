"""Error types raised by the ACON reader and value accessors."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    ExcessiveClosingDelimiter = "excessive-closing-delimiter"
    DuplicateKey = "duplicate-key"
    WrongClosingDelimiterKind = "wrong-closing-delimiter-kind"
    UnterminatedNesting = "unterminated-nesting"
    InternalInvariantViolation = "internal-invariant-violation"


class AconError(Exception):
    """Base class for structural errors found while reading ACON text.

    Every error is plain data: a ``kind``, the 1-based ``line`` where it
    was detected (``None`` for end-of-input conditions) and a few
    kind-specific fields. ``reason`` renders it as prose.
    """

    kind: ErrorKind
    template = ""

    def __init__(self, line: int | None = None) -> None:
        self.line = line
        super().__init__(self.reason)

    def _details(self) -> dict[str, object]:
        return {}

    @property
    def reason(self) -> str:
        text = self.template.format(**self._details())
        if self.line is None:
            return text[0].upper() + text[1:]
        return f"On line {self.line}, {text}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AconError):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.line == other.line
            and self._details() == other._details()
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.line))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self._details().items())
        sep = ", " if fields else ""
        return f"{type(self).__name__}(line={self.line!r}{sep}{fields})"


class ExcessiveClosingDelimiter(AconError):
    kind = ErrorKind.ExcessiveClosingDelimiter
    template = (
        "there's a closing delimiter that has no matching opening delimiter. "
        "Note that all delimiters must be the first word on a line to count "
        "as such. The only delimiters are {{, }}, [, ], and $."
    )


class DuplicateKey(AconError):
    kind = ErrorKind.DuplicateKey
    template = "the key '{key}' is already present in the table."

    def __init__(self, key: str, line: int | None = None) -> None:
        self.key = key
        super().__init__(line)

    def _details(self) -> dict[str, object]:
        return {"key": self.key}


class WrongClosingDelimiterKind(AconError):
    kind = ErrorKind.WrongClosingDelimiterKind
    template = (
        "the closing delimiter {found} did not match the {nesting} closing "
        "delimiter {expected}. Make sure all delimiters match up in the input."
    )

    def __init__(self, expected: str, found: str, line: int | None = None) -> None:
        self.expected = expected
        self.found = found
        super().__init__(line)

    def _details(self) -> dict[str, object]:
        return {
            "expected": self.expected,
            "found": self.found,
            "nesting": "array" if self.expected == "]" else "table",
        }


class UnterminatedNesting(AconError):
    kind = ErrorKind.UnterminatedNesting
    template = (
        "the input ended inside an unterminated {nesting} {label}opened on "
        "line {opened_on}. Try appending a '{closer}' to the input to see if "
        "this solves the issue."
    )

    def __init__(
        self,
        nesting: str,
        name: str = "",
        opened_on: int | None = None,
        line: int | None = None,
    ) -> None:
        self.nesting = nesting
        self.name = name
        self.opened_on = opened_on
        super().__init__(line)

    def _details(self) -> dict[str, object]:
        return {
            "nesting": self.nesting,
            "label": f"'{self.name}' " if self.name else "",
            "opened_on": self.opened_on,
            "closer": "]" if self.nesting == "array" else "}",
        }


class InternalInvariantViolation(AconError):
    kind = ErrorKind.InternalInvariantViolation
    template = (
        "the parse stack reached an impossible state ({detail}). This is a "
        "bug in the parser, please report it along with the input."
    )

    def __init__(self, detail: str, line: int | None = None) -> None:
        self.detail = detail
        super().__init__(line)

    def _details(self) -> dict[str, object]:
        return {"detail": self.detail}


class TypeMismatch(TypeError):
    """Raised when a value is asserted to be a variant it is not.

    This signals a programming error in the caller and is not part of
    the :class:`AconError` hierarchy.
    """

    def __init__(self, expected: str, value: object) -> None:
        self.expected = expected
        self.value = value
        super().__init__(f"Value is not a {expected}: {value!r}")
