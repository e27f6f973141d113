"""Value types for ACON documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from .errors import TypeMismatch


class _Empty:
    """Singleton returned when a key or path cannot be resolved."""

    _instance: "_Empty | None" = None

    def __new__(cls) -> "_Empty":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Empty"

    def __bool__(self) -> bool:
        return False


Empty = _Empty()


class _Navigable:
    """Accessors shared by all three value variants."""

    __slots__ = ()

    # -- Type-asserting accessors ---------------------------------------

    def as_array(self) -> "VArray":
        if not isinstance(self, VArray):
            raise TypeMismatch("array", self)
        return self

    def as_string(self) -> "VString":
        if not isinstance(self, VString):
            raise TypeMismatch("string", self)
        return self

    def as_table(self) -> "VTable":
        if not isinstance(self, VTable):
            raise TypeMismatch("table", self)
        return self

    # -- Lookup ---------------------------------------------------------

    def get(self, key: str) -> "Value | _Empty":
        from .getter import apply_getter
        return apply_getter(self, key)

    def path(self, dotted: str) -> "Value | _Empty":
        from .getter import resolve_path
        return resolve_path(self, dotted)

    # Values are returned by reference, so the mutable forms hand back the
    # same live objects; they mark call sites that edit the tree in place.
    get_mut = get
    path_mut = path


@dataclass(frozen=True, slots=True)
class VString(_Navigable):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class VArray(_Navigable):
    items: list["Value"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def append(self, value: "Value") -> None:
        self.items.append(value)


@dataclass(slots=True)
class VTable(_Navigable):
    """Key → value mapping that always iterates in sorted key order."""

    entries: dict[str, "Value"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __getitem__(self, key: str) -> "Value":
        return self.entries[key]

    def __setitem__(self, key: str, value: "Value") -> None:
        self.entries[key] = value

    def keys(self) -> list[str]:
        return sorted(self.entries)

    def values(self) -> list["Value"]:
        return [self.entries[k] for k in self.keys()]

    def items(self) -> list[tuple[str, "Value"]]:
        return [(k, self.entries[k]) for k in self.keys()]

    def insert(self, key: str, value: "Value") -> None:
        """Add a new entry; an existing key is never overwritten."""
        if key in self.entries:
            raise KeyError(key)
        self.entries[key] = value


Value = Union[VArray, VString, VTable]
