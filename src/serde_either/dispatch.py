"""Shape dispatch: choose a typed decoder from a Value's top-level shape.

Classification looks only at the outermost shape and happens exactly once. The
selected decoder's errors propagate as they are; no other shape is tried.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from serde_either.errors import InvalidValueError, ShapeMismatchError
from serde_either.value import Bytes, Map, Seq, String, Value, unexpected

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ShapeCases(Generic[T]):
    """Decoders for the shapes an either-type accepts.

    ``expected`` describes the accepted shapes in error messages, e.g.
    ``"String, Struct or Vec"``. A ``None`` ``vec`` means sequences are rejected.
    """

    expected: str
    string: Callable[[Value], T]
    struct: Callable[[Value], T]
    vec: Callable[[Value], T] | None = None


def dispatch(value: Value, cases: ShapeCases[T]) -> T:
    """Run the decoder matching the value's shape.

    Strings and byte strings go to ``cases.string``, sequences to ``cases.vec``
    and maps to ``cases.struct``. Any other shape raises ``ShapeMismatchError``.
    """
    if isinstance(value, (String, Bytes)):
        return cases.string(value)
    if isinstance(value, Seq) and cases.vec is not None:
        return cases.vec(value)
    if isinstance(value, Map):
        return cases.struct(value)
    raise ShapeMismatchError(unexpected(value), cases.expected)


def decode_str(value: Value) -> str:
    """Read a String or UTF-8 Bytes value as text."""
    if isinstance(value, String):
        return value.value
    if isinstance(value, Bytes):
        try:
            return value.value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidValueError(unexpected(value), "a string") from exc
    raise ShapeMismatchError(unexpected(value), "a string")
