"""Structured value model for EDN records.

Scalars map onto Python builtins where one fits:

    nil     -> None
    boolean -> bool
    string  -> str
    integer -> int
    float   -> float (decimal.Decimal for the ``M`` suffix)

Everything else gets a small immutable class below. All values are hashable
so collections can be used as map keys and set members.

Equality, hashing and ordering all go through ``canonical_key``, which puts
the variant first. ``1``, ``true`` and ``1.0`` are three different values,
and so are ``(1)`` and ``[1]``. Maps and sets keep their contents sorted in
canonical order:

    nil < boolean < string < char < symbol < keyword < integer < float
        < list < vector < map < set < tagged
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class Keyword:
    """A keyword such as ``:name`` or ``:ns/name``; ``name`` excludes the colon."""

    name: str


@dataclass(frozen=True)
class Symbol:
    name: str


@dataclass(frozen=True)
class Char:
    value: str


@dataclass(frozen=True, eq=False)
class Tagged:
    """A tagged element ``#tag value``; ``tag`` excludes the ``#``."""

    tag: str
    value: Any

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Tagged):
            return canonical_key(self) == canonical_key(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(canonical_key(self))


class _Sequence(tuple):
    def __eq__(self, other: object) -> bool:
        if isinstance(other, _Sequence):
            return canonical_key(self) == canonical_key(other)
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        return hash(canonical_key(self))


class EdnList(_Sequence):
    """Ordered ``( ... )`` sequence."""

    def __repr__(self) -> str:
        return f"EdnList({list(self)!r})"


class Vector(_Sequence):
    """Ordered ``[ ... ]`` sequence."""

    def __repr__(self) -> str:
        return f"Vector({list(self)!r})"


class Map(Mapping):
    """Immutable map; iterates its keys in canonical order."""

    __slots__ = ("_entries", "_key")

    def __init__(self, pairs: Iterable[tuple[Any, Any]] = ()) -> None:
        entries: dict[tuple, tuple[Any, Any]] = {}
        for key, value in pairs:
            # Later duplicates replace earlier ones
            entries[canonical_key(key)] = (key, value)
        self._entries = dict(sorted(entries.items(), key=lambda item: item[0]))
        self._key: tuple | None = None

    def __getitem__(self, key: Any) -> Any:
        try:
            return self._entries[canonical_key(key)][1]
        except TypeError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def canonical(self) -> tuple:
        if self._key is None:
            self._key = tuple((k, canonical_key(v)) for k, (_, v) in self._entries.items())
        return self._key

    def __hash__(self) -> int:
        return hash(self.canonical())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Map):
            return self.canonical() == other.canonical()
        return NotImplemented

    def __repr__(self) -> str:
        return f"Map({list(self.items())!r})"


class EdnSet:
    """Immutable set; iterates its members in canonical order."""

    __slots__ = ("_members",)

    def __init__(self, members: Iterable[Any] = ()) -> None:
        unique = {canonical_key(member): member for member in members}
        self._members = dict(sorted(unique.items(), key=lambda item: item[0]))

    def __iter__(self) -> Iterator[Any]:
        return iter(self._members.values())

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, item: object) -> bool:
        try:
            return canonical_key(item) in self._members
        except TypeError:
            return False

    def canonical(self) -> tuple:
        return tuple(self._members)

    def __hash__(self) -> int:
        return hash(self.canonical())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EdnSet):
            return self.canonical() == other.canonical()
        return NotImplemented

    def __repr__(self) -> str:
        return f"EdnSet({list(self)!r})"


def canonical_key(value: Any) -> tuple:
    """Return a hashable, totally ordered key: variant rank, then contents.

    Raises:
        TypeError: If ``value`` is not a structured value.
    """
    if value is None:
        return (0,)
    if isinstance(value, bool):
        return (1, value)
    if isinstance(value, str):
        return (2, value)
    if isinstance(value, Char):
        return (3, value.value)
    if isinstance(value, Symbol):
        return (4, value.name)
    if isinstance(value, Keyword):
        return (5, value.name)
    if isinstance(value, int):
        return (6, value)
    if isinstance(value, (float, Decimal)):
        return (7, value)
    if isinstance(value, EdnList):
        return (8, tuple(canonical_key(item) for item in value))
    if isinstance(value, Vector):
        return (9, tuple(canonical_key(item) for item in value))
    if isinstance(value, Map):
        return (10, value.canonical())
    if isinstance(value, EdnSet):
        return (11, value.canonical())
    if isinstance(value, Tagged):
        return (12, value.tag, canonical_key(value.value))
    raise TypeError(f"Unsupported value type: {type(value)}")


Value = Union[
    None, bool, str, Char, Symbol, Keyword, int, float, Decimal,
    EdnList, Vector, Map, EdnSet, Tagged,
]
