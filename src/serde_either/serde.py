"""Plain-data conversion: Python and JSON front-ends for Value trees, and the inverse."""

import dataclasses
import json
from collections.abc import Iterable, Mapping, Set
from enum import Enum

from pydantic import BaseModel

from serde_either._either import Either
from serde_either.value import F64, I64, U64, Bool, Bytes, Map, Opaque, Seq, String, Unit, Value


def from_python(value: object) -> Value:
    """Classify already-parsed Python data into a Value tree.

    Plain JSON/YAML-like data maps directly onto Value shapes. Model and
    dataclass instances are read as maps of their fields, enum members as their
    ``value``, and either-types as their payload. Anything else, including
    integers wider than 64 bits, becomes an ``Opaque`` leaf that replays the
    original object.
    """
    if isinstance(value, Value):
        return value
    if value is None:
        return Unit()
    if isinstance(value, Enum):
        return from_python(value.value)
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, int):
        if 0 <= value <= U64.maximum:
            return U64(value)
        if I64.minimum <= value < 0:
            return I64(value)
        return Opaque(value)
    if isinstance(value, float):
        return F64(value)
    if isinstance(value, str):
        return String(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Bytes(bytes(value))
    if isinstance(value, Either):
        return from_python(value.payload)
    if isinstance(value, Mapping):
        return _map_from_items(value.items())
    if isinstance(value, (list, tuple, Set)):
        return Seq(tuple(from_python(item) for item in value))
    if isinstance(value, BaseModel):
        return _map_from_items(dict(value).items())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _map_from_items((field.name, getattr(value, field.name)) for field in dataclasses.fields(value))
    return Opaque(value)


def _map_from_items(items: Iterable[tuple[object, object]]) -> Map:
    return Map(tuple((from_python(key), from_python(item)) for key, item in items))


def from_json(data: str | bytes | bytearray) -> Value:
    """Parse JSON text into a Value tree; malformed input raises ``json.JSONDecodeError``."""
    return from_python(json.loads(data))


def to_plain_data(value: object) -> object:
    """Recursively unwrap either-types and Values into plain dict/list data."""
    if isinstance(value, Either):
        return to_plain_data(value.payload)
    if isinstance(value, Value):
        return value.into_python()
    if isinstance(value, Mapping):
        return {str(key): to_plain_data(item) for key, item in value.items()}
    if isinstance(value, (tuple, list)):
        return [to_plain_data(item) for item in value]
    return value
