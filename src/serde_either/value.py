"""Value: a self-describing tree of decoded data, independent of any target type.

A Value is built once per decode call, inspected for its shape, then replayed
into whichever typed decoder the shape selects.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar


class Value(ABC):
    """Abstract base class for every decoded value shape."""

    __slots__ = ()

    @abstractmethod
    def into_python(self) -> object:
        """Replay the value as plain Python data for a typed decoder."""


@dataclass(frozen=True, slots=True)
class Bool(Value):
    """A boolean."""

    value: bool

    def __post_init__(self) -> None:
        """Reject non-boolean payloads."""
        if not isinstance(self.value, bool):
            msg = "Bool.value must be a bool."
            raise TypeError(msg)

    def into_python(self) -> bool:
        """Return the boolean."""
        return self.value


@dataclass(frozen=True, slots=True)
class _Integer(Value):
    value: int

    minimum: ClassVar[int]
    maximum: ClassVar[int]

    def __post_init__(self) -> None:
        """Reject non-integers (including booleans) and out-of-range values."""
        name = type(self).__name__
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            msg = f"{name}.value must be an int."
            raise TypeError(msg)
        if not self.minimum <= self.value <= self.maximum:
            msg = f"{name}.value must be between {self.minimum} and {self.maximum}, got {self.value}."
            raise ValueError(msg)

    @property
    def signed(self) -> bool:
        """Whether the integer width admits negative values."""
        return self.minimum < 0

    def into_python(self) -> int:
        """Return the integer."""
        return self.value


class U8(_Integer):
    """An 8-bit unsigned integer."""

    __slots__ = ()
    minimum = 0
    maximum = 2**8 - 1


class U16(_Integer):
    """A 16-bit unsigned integer."""

    __slots__ = ()
    minimum = 0
    maximum = 2**16 - 1


class U32(_Integer):
    """A 32-bit unsigned integer."""

    __slots__ = ()
    minimum = 0
    maximum = 2**32 - 1


class U64(_Integer):
    """A 64-bit unsigned integer."""

    __slots__ = ()
    minimum = 0
    maximum = 2**64 - 1


class I8(_Integer):
    """An 8-bit signed integer."""

    __slots__ = ()
    minimum = -(2**7)
    maximum = 2**7 - 1


class I16(_Integer):
    """A 16-bit signed integer."""

    __slots__ = ()
    minimum = -(2**15)
    maximum = 2**15 - 1


class I32(_Integer):
    """A 32-bit signed integer."""

    __slots__ = ()
    minimum = -(2**31)
    maximum = 2**31 - 1


class I64(_Integer):
    """A 64-bit signed integer."""

    __slots__ = ()
    minimum = -(2**63)
    maximum = 2**63 - 1


@dataclass(frozen=True, slots=True)
class _Float(Value):
    value: float

    def __post_init__(self) -> None:
        """Normalize ints to float and reject everything else (including booleans)."""
        if not isinstance(self.value, (int, float)) or isinstance(self.value, bool):
            msg = f"{type(self).__name__}.value must be a float."
            raise TypeError(msg)
        object.__setattr__(self, "value", float(self.value))

    def into_python(self) -> float:
        """Return the float."""
        return self.value


class F32(_Float):
    """A single-precision float."""

    __slots__ = ()


class F64(_Float):
    """A double-precision float."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Char(Value):
    """A single character."""

    value: str

    def __post_init__(self) -> None:
        """Require exactly one character."""
        if not isinstance(self.value, str) or len(self.value) != 1:
            msg = "Char.value must be a string of length 1."
            raise TypeError(msg)

    def into_python(self) -> str:
        """Return the character as a one-letter string."""
        return self.value


@dataclass(frozen=True, slots=True)
class String(Value):
    """A text string."""

    value: str

    def __post_init__(self) -> None:
        """Reject non-string payloads."""
        if not isinstance(self.value, str):
            msg = "String.value must be a string."
            raise TypeError(msg)

    def into_python(self) -> str:
        """Return the string."""
        return self.value


@dataclass(frozen=True, slots=True)
class Bytes(Value):
    """A byte string."""

    value: bytes

    def __post_init__(self) -> None:
        """Normalize bytes-like payloads to immutable bytes."""
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            msg = "Bytes.value must be bytes-like."
            raise TypeError(msg)
        object.__setattr__(self, "value", bytes(self.value))

    def into_python(self) -> bytes:
        """Return the bytes."""
        return self.value


@dataclass(frozen=True, slots=True)
class Unit(Value):
    """The unit value (JSON ``null``)."""

    def into_python(self) -> None:
        """Return None."""
        return None


@dataclass(frozen=True, slots=True)
class Option(Value):
    """An explicit optional: ``Option()`` is absent, ``Option(inner)`` is present."""

    value: Value | None = None

    def __post_init__(self) -> None:
        """Require the inner value, when present, to be a Value."""
        if self.value is not None and not isinstance(self.value, Value):
            msg = "Option.value must be a Value or None."
            raise TypeError(msg)

    def into_python(self) -> object:
        """Return the inner value's replay, or None when absent."""
        if self.value is None:
            return None
        return self.value.into_python()


@dataclass(frozen=True, slots=True)
class Newtype(Value):
    """A single-field wrapper around another value."""

    value: Value

    def __post_init__(self) -> None:
        """Require the wrapped value to be a Value."""
        if not isinstance(self.value, Value):
            msg = "Newtype.value must be a Value."
            raise TypeError(msg)

    def into_python(self) -> object:
        """Return the wrapped value's replay; the wrapper is transparent."""
        return self.value.into_python()


@dataclass(frozen=True, slots=True)
class Seq(Value):
    """An ordered sequence of values."""

    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        """Normalize items to a tuple of Values."""
        items = tuple(self.items)
        for index, item in enumerate(items):
            if not isinstance(item, Value):
                msg = f"Seq.items[{index}] must be a Value."
                raise TypeError(msg)
        object.__setattr__(self, "items", items)

    def into_python(self) -> list[object]:
        """Return the items as a list."""
        return [item.into_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class Map(Value):
    """An ordered collection of key/value pairs."""

    entries: tuple[tuple[Value, Value], ...] = ()

    def __post_init__(self) -> None:
        """Normalize entries to a tuple of (Value, Value) pairs."""
        entries = tuple((key, item) for key, item in self.entries)
        for index, (key, item) in enumerate(entries):
            if not isinstance(key, Value) or not isinstance(item, Value):
                msg = f"Map.entries[{index}] must be a pair of Values."
                raise TypeError(msg)
        object.__setattr__(self, "entries", entries)

    def into_python(self) -> dict[object, object]:
        """Return the entries as a dict."""
        return {_hashable(key.into_python()): item.into_python() for key, item in self.entries}


def _hashable(key: object) -> object:
    """Make a replayed map key usable as a dict key."""
    if isinstance(key, list):
        return tuple(_hashable(item) for item in key)
    return key


@dataclass(frozen=True, slots=True)
class Opaque(Value):
    """A leaf holding a Python object that has no shape of its own.

    Integers wider than 64 bits, ``datetime``, ``Decimal`` and similar objects
    land here. Replay hands the original object to the typed decoder unchanged.
    """

    value: object

    def __post_init__(self) -> None:
        """Reject Values; those already have a shape."""
        if isinstance(self.value, Value):
            msg = "Opaque.value must not be a Value."
            raise TypeError(msg)

    def into_python(self) -> object:
        """Return the original object."""
        return self.value


# =============================================================================
# Classification
# =============================================================================

_DESCRIPTIONS = {
    "Bool": "boolean",
    "Unsigned": "unsigned integer",
    "Signed": "signed integer",
    "Float": "floating point",
    "Char": "character",
    "Str": "string",
    "Bytes": "byte array",
    "Unit": "unit value",
    "Option": "Option value",
    "NewtypeStruct": "newtype struct",
    "Seq": "sequence",
    "Map": "map",
}

# Kinds whose label and description include the concrete value.
_SCALAR_KINDS = frozenset({"Bool", "Unsigned", "Signed", "Float", "Char", "Str"})


def _literal(kind: str, value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if kind == "Str":
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@dataclass(frozen=True, slots=True)
class Unexpected:
    """Description of a value that did not fit what a decoder expected.

    ``kind`` names the shape (``"Unsigned"``, ``"Seq"``, ...). ``value`` holds the
    concrete scalar for scalar kinds and is ``None`` otherwise; for ``"Other"`` it
    holds the free-form description.
    """

    kind: str
    value: object | None = None

    @property
    def label(self) -> str:
        """Compact rendering such as ``Unsigned(18)``, ``Bool(false)`` or ``Seq``."""
        if self.kind in _SCALAR_KINDS:
            return f"{self.kind}({_literal(self.kind, self.value)})"
        return self.kind

    def __str__(self) -> str:
        """Human-readable rendering such as ``unsigned integer `18```."""
        if self.kind == "Other":
            return str(self.value)
        description = _DESCRIPTIONS[self.kind]
        if self.kind == "Str":
            return f"{description} {_literal(self.kind, self.value)}"
        if self.kind in _SCALAR_KINDS:
            return f"{description} `{_literal(self.kind, self.value)}`"
        return description


def unexpected(value: Value) -> Unexpected:
    """Describe a value for use in a decode error."""
    if isinstance(value, Bool):
        return Unexpected("Bool", value.value)
    if isinstance(value, _Integer):
        return Unexpected("Signed" if value.signed else "Unsigned", value.value)
    if isinstance(value, _Float):
        return Unexpected("Float", value.value)
    if isinstance(value, Char):
        return Unexpected("Char", value.value)
    if isinstance(value, String):
        return Unexpected("Str", value.value)
    if isinstance(value, Bytes):
        return Unexpected("Bytes")
    if isinstance(value, Unit):
        return Unexpected("Unit")
    if isinstance(value, Option):
        return Unexpected("Option")
    if isinstance(value, Newtype):
        return Unexpected("NewtypeStruct")
    if isinstance(value, Seq):
        return Unexpected("Seq")
    if isinstance(value, Map):
        return Unexpected("Map")
    if isinstance(value, Opaque):
        return _describe_opaque(value.value)
    msg = f"Cannot describe {type(value).__name__}; expected a Value."
    raise TypeError(msg)


def _describe_opaque(obj: object) -> Unexpected:
    if isinstance(obj, int) and not isinstance(obj, bool):
        return Unexpected("Signed" if obj < 0 else "Unsigned", obj)
    return Unexpected("Other", f"{type(obj).__name__} `{obj}`")


def classify(value: Value) -> str:
    """Return the shape label of a value, e.g. ``"Map"`` or ``"Unsigned"``."""
    return unexpected(value).kind
