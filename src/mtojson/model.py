"""Data model for mtojson trees: type tags, entries, objects and arrays."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from .errors import TreeError

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
UINT_MAX = 2**64 - 1


# ---------------------------------------------------------------------------
# TypeTag
# ---------------------------------------------------------------------------

class TypeTag(Enum):
    ARRAY = auto()
    BOOLEAN = auto()
    INTEGER = auto()
    OBJECT = auto()
    STRING = auto()
    UINTEGER = auto()
    VALUE = auto()  # raw fragment, emitted verbatim


SCALAR_TAGS = frozenset({TypeTag.BOOLEAN, TypeTag.INTEGER, TypeTag.UINTEGER})


# ---------------------------------------------------------------------------
# Raw fragment
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Raw:
    """Text emitted exactly as given: no quotes, no escaping, no checks.

    Whatever is inside ends up in the output as-is, so a ``Raw`` can break
    the JSON validity of the whole document. Only build one from text you
    already know to be the fragment you want.
    """

    text: str | bytes


# ---------------------------------------------------------------------------
# Array payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScalarBlock:
    """Contiguous block of booleans or integers, indexed directly."""

    values: Sequence[int]


@dataclass(frozen=True, slots=True)
class RefSequence:
    """One reference per element: strings, raw fragments, arrays or objects."""

    refs: Sequence[object]


ArrayPayload = Union[ScalarBlock, RefSequence, None]


# ---------------------------------------------------------------------------
# Entry / JsonObject / JsonArray
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Entry:
    key: str | bytes
    value: object
    type: TypeTag

    def __post_init__(self) -> None:
        if not isinstance(self.key, (str, bytes)):
            raise TreeError(f"entry key must be str or bytes, got {type(self.key).__name__}")
        if not isinstance(self.type, TypeTag):
            raise TreeError(f"entry {self.key!r}: unknown type tag {self.type!r}")
        if self.type == TypeTag.OBJECT and is_entry_list(self.value):
            object.__setattr__(self, "value", as_object(self.value))
        check_value(self.type, self.value, where=f"entry {self.key!r}")

    # -- Convenience constructors ---------------------------------------

    @classmethod
    def string(cls, key: str | bytes, value: str | bytes) -> Entry:
        return cls(key, value, TypeTag.STRING)

    @classmethod
    def boolean(cls, key: str | bytes, value: bool) -> Entry:
        return cls(key, value, TypeTag.BOOLEAN)

    @classmethod
    def integer(cls, key: str | bytes, value: int) -> Entry:
        return cls(key, value, TypeTag.INTEGER)

    @classmethod
    def uinteger(cls, key: str | bytes, value: int) -> Entry:
        return cls(key, value, TypeTag.UINTEGER)

    @classmethod
    def raw(cls, key: str | bytes, text: str | bytes) -> Entry:
        return cls(key, Raw(text), TypeTag.VALUE)

    @classmethod
    def object(cls, key: str | bytes, entries: Sequence[Entry]) -> Entry:
        return cls(key, JsonObject(entries), TypeTag.OBJECT)

    @classmethod
    def array(cls, key: str | bytes, array: JsonArray) -> Entry:
        return cls(key, array, TypeTag.ARRAY)


@dataclass(frozen=True, slots=True)
class JsonObject:
    """Ordered, possibly empty sequence of entries.

    Keys are neither deduplicated nor sorted. Nodes are frozen once built;
    the sequences handed to them must not be changed afterwards either.
    """

    entries: Sequence[Entry] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


@dataclass(frozen=True, slots=True)
class JsonArray:
    """Homogeneous array: every element is rendered with ``type``.

    ``count`` defaults to the size of the payload and may be smaller than
    it; a count of 0 renders ``[]`` whatever the payload is.
    """

    type: TypeTag
    payload: ArrayPayload = None
    count: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, TypeTag):
            raise TreeError(f"array: unknown element type tag {self.type!r}")
        stored = self._stored()
        if self.count is None:
            object.__setattr__(self, "count", stored)
        if not isinstance(self.count, int) or isinstance(self.count, bool):
            raise TreeError(f"array count must be an int, got {self.count!r}")
        if self.count < 0 or self.count > stored:
            raise TreeError(f"array count {self.count} does not match {stored} stored elements")
        for i in range(self.count):
            check_value(self.type, self.element(i), where=f"array element {i}")

    @classmethod
    def of(cls, type: TypeTag, values: Sequence[object]) -> JsonArray:
        """Build an array, choosing the payload variant from *type*."""
        if type in SCALAR_TAGS:
            return cls(type, ScalarBlock(values))
        return cls(type, RefSequence(values))

    def _stored(self) -> int:
        if self.payload is None:
            return 0
        if self.type in SCALAR_TAGS:
            if not isinstance(self.payload, ScalarBlock):
                raise TreeError(f"array of {self.type.name} needs a ScalarBlock payload")
            return len(self.payload.values)
        if not isinstance(self.payload, RefSequence):
            raise TreeError(f"array of {self.type.name} needs a RefSequence payload")
        return len(self.payload.refs)

    def element(self, index: int) -> object:
        if self.type in SCALAR_TAGS:
            return self.payload.values[index]
        return self.payload.refs[index]

    def __len__(self) -> int:
        return self.count


Tree = Union[JsonObject, Sequence[Entry]]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def is_entry_list(value: object) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(e, Entry) for e in value)


def as_object(value: object) -> JsonObject:
    """Return *value* as a JsonObject; a plain list of entries is wrapped."""
    if isinstance(value, JsonObject):
        return value
    if is_entry_list(value):
        return JsonObject(value)
    raise TreeError(f"expected a JsonObject or a list of entries, got {type(value).__name__}")


def check_value(tag: TypeTag, value: object, where: str = "value") -> None:
    """Raise TreeError unless *value* has the shape *tag* asks for."""
    if tag == TypeTag.BOOLEAN:
        ok = isinstance(value, bool)
    elif tag == TypeTag.INTEGER:
        ok = isinstance(value, int) and not isinstance(value, bool)
        if ok and not INT_MIN <= value <= INT_MAX:
            raise TreeError(f"{where}: {value} does not fit a signed 64-bit integer")
    elif tag == TypeTag.UINTEGER:
        ok = isinstance(value, int) and not isinstance(value, bool)
        if ok and not 0 <= value <= UINT_MAX:
            raise TreeError(f"{where}: {value} does not fit an unsigned 64-bit integer")
    elif tag == TypeTag.STRING:
        ok = isinstance(value, (str, bytes))
    elif tag == TypeTag.VALUE:
        ok = isinstance(value, Raw)
    elif tag == TypeTag.OBJECT:
        ok = isinstance(value, JsonObject) or is_entry_list(value)
    else:
        ok = isinstance(value, JsonArray)
    if not ok:
        raise TreeError(f"{where}: {type(value).__name__} is not a valid {tag.name} value")
