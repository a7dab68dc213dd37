"""Either-types: StringOrStruct, StringOrStructOrVec, SingleOrVec.

Each either-type is a generic base class with one frozen dataclass per variant,
reachable as a class attribute (``StringOrStruct.String``, ``StringOrStruct.Struct``).
Decoding picks the variant from the input's shape; encoding emits the payload
with no tag, so shape is all that survives a round trip.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from serde_either._either import Either
from serde_either._pydantic import Payload, either_schema, type_arguments
from serde_either.dispatch import ShapeCases, decode_str, dispatch
from serde_either.value import Seq, Value

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler
    from pydantic_core import CoreSchema

S = TypeVar("S")
V = TypeVar("V")


def _register(owner: type, name: str, variant: type) -> None:
    """Expose a variant as ``owner.<name>`` and name it accordingly."""
    variant.__qualname__ = f"{owner.__name__}.{name}"
    setattr(owner, name, variant)


# =============================================================================
# StringOrStructOrVec
# =============================================================================


class StringOrStructOrVec(Either, Generic[S, V]):
    """A value written as a bare string, a structured object or a sequence.

    Strings (and UTF-8 byte strings) decode to ``String``, maps to ``Struct``
    holding an ``S`` and sequences to ``Vec`` holding a ``V``. Any other shape
    is rejected with ``ShapeMismatchError``.
    """

    __slots__ = ()

    String: ClassVar[type[_StringOrStructOrVecString]]
    Struct: ClassVar[type[_StringOrStructOrVecStruct[Any]]]
    Vec: ClassVar[type[_StringOrStructOrVecVec[Any]]]

    def is_string(self) -> bool:
        """Return True for the ``String`` variant."""
        return isinstance(self, _StringOrStructOrVecString)

    def is_struct(self) -> bool:
        """Return True for the ``Struct`` variant."""
        return isinstance(self, _StringOrStructOrVecStruct)

    def is_vec(self) -> bool:
        """Return True for the ``Vec`` variant."""
        return isinstance(self, _StringOrStructOrVecVec)

    @classmethod
    def from_value(
        cls,
        value: Value,
        *,
        struct: Callable[[Value], S],
        vec: Callable[[Value], V],
    ) -> StringOrStructOrVec[S, V]:
        """Decode a Value with ``struct`` for maps and ``vec`` for sequences."""
        return _decode_with_expected(value, struct=struct, vec=vec, expected="String, Struct or Vec")

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        """Validate by shape into ``S``/``V`` and serialize the bare payload."""
        struct_type, vec_type = type_arguments(source, 2)
        struct: Payload[Any] = Payload(struct_type)
        vec: Payload[Any] = Payload(vec_type)
        return either_schema(
            cls,
            lambda value: StringOrStructOrVec.from_value(value, struct=struct.decode, vec=vec.decode),
            {
                _StringOrStructOrVecString: Payload(str),
                _StringOrStructOrVecStruct: struct,
                _StringOrStructOrVecVec: vec,
            },
        )


@dataclass(frozen=True, slots=True)
class _StringOrStructOrVecString(StringOrStructOrVec[Any, Any]):
    text: str

    @property
    def payload(self) -> str:
        """The string."""
        return self.text


@dataclass(frozen=True, slots=True)
class _StringOrStructOrVecStruct(StringOrStructOrVec[S, Any]):
    value: S

    @property
    def payload(self) -> S:
        """The structured value."""
        return self.value


@dataclass(frozen=True, slots=True)
class _StringOrStructOrVecVec(StringOrStructOrVec[Any, V]):
    value: V

    @property
    def payload(self) -> V:
        """The sequence value."""
        return self.value


_register(StringOrStructOrVec, "String", _StringOrStructOrVecString)
_register(StringOrStructOrVec, "Struct", _StringOrStructOrVecStruct)
_register(StringOrStructOrVec, "Vec", _StringOrStructOrVecVec)


def _decode_with_expected(
    value: Value,
    *,
    struct: Callable[[Value], S],
    vec: Callable[[Value], V],
    expected: str,
) -> StringOrStructOrVec[S, V]:
    cases: ShapeCases[StringOrStructOrVec[S, V]] = ShapeCases(
        expected=expected,
        string=lambda item: _StringOrStructOrVecString(decode_str(item)),
        struct=lambda item: _StringOrStructOrVecStruct(struct(item)),
        vec=lambda item: _StringOrStructOrVecVec(vec(item)),
    )
    return dispatch(value, cases)


# =============================================================================
# StringOrStruct
# =============================================================================


class StringOrStruct(Either, Generic[S]):
    """A value written either as a bare string or as a structured value.

    Strings decode to ``String`` and maps to ``Struct``. Sequences also decode
    to ``Struct``, through ``S`` itself, so ``StringOrStruct[list[int]]`` accepts
    a JSON array; for an ``S`` that is not a sequence type the array fails in
    ``S``'s own decoder. Other shapes raise ``ShapeMismatchError``.
    """

    __slots__ = ()

    String: ClassVar[type[_StringOrStructString]]
    Struct: ClassVar[type[_StringOrStructStruct[Any]]]

    def is_string(self) -> bool:
        """Return True for the ``String`` variant."""
        return isinstance(self, _StringOrStructString)

    def is_struct(self) -> bool:
        """Return True for the ``Struct`` variant."""
        return isinstance(self, _StringOrStructStruct)

    @classmethod
    def from_value(cls, value: Value, *, struct: Callable[[Value], S]) -> StringOrStruct[S]:
        """Decode a Value with ``struct`` for maps and sequences.

        This is the three-way ``StringOrStructOrVec`` dispatch with ``struct``
        in both the struct and vec slots, its ``Vec`` result folded into ``Struct``.
        """
        decoded = _decode_with_expected(value, struct=struct, vec=struct, expected="String or Struct")
        if isinstance(decoded, _StringOrStructOrVecString):
            return _StringOrStructString(decoded.text)
        return _StringOrStructStruct(decoded.payload)

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        """Validate by shape into ``S`` and serialize the bare payload."""
        (struct_type,) = type_arguments(source, 1)
        struct: Payload[Any] = Payload(struct_type)
        return either_schema(
            cls,
            lambda value: StringOrStruct.from_value(value, struct=struct.decode),
            {_StringOrStructString: Payload(str), _StringOrStructStruct: struct},
        )


@dataclass(frozen=True, slots=True)
class _StringOrStructString(StringOrStruct[Any]):
    text: str

    @property
    def payload(self) -> str:
        """The string."""
        return self.text


@dataclass(frozen=True, slots=True)
class _StringOrStructStruct(StringOrStruct[S]):
    value: S

    @property
    def payload(self) -> S:
        """The structured value."""
        return self.value


_register(StringOrStruct, "String", _StringOrStructString)
_register(StringOrStruct, "Struct", _StringOrStructStruct)


# =============================================================================
# SingleOrVec
# =============================================================================


class SingleOrVec(Either, Generic[S]):
    """A value written either as one ``S`` or as a sequence of them.

    Sequences decode to ``Vec``; every other shape, maps and strings included,
    is handed to ``S``'s decoder as ``Single``. No shape is rejected up front:
    a mismatch surfaces only as whatever error ``S``'s decoder raises.
    """

    __slots__ = ()

    Single: ClassVar[type[_SingleOrVecSingle[Any]]]
    Vec: ClassVar[type[_SingleOrVecVec[Any]]]

    def is_single(self) -> bool:
        """Return True for the ``Single`` variant."""
        return isinstance(self, _SingleOrVecSingle)

    def is_vec(self) -> bool:
        """Return True for the ``Vec`` variant."""
        return isinstance(self, _SingleOrVecVec)

    @classmethod
    def from_value(
        cls,
        value: Value,
        *,
        single: Callable[[Value], S],
        vec: Callable[[Value], Sequence[S]] | None = None,
    ) -> SingleOrVec[S]:
        """Decode a Value; sequences go to ``vec`` (default: ``single`` per item)."""
        if isinstance(value, Seq):
            if vec is not None:
                return _SingleOrVecVec(tuple(vec(value)))
            return _SingleOrVecVec(tuple(single(item) for item in value.items))
        return _SingleOrVecSingle(single(value))

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        """Validate sequences as ``list[S]``, everything else as ``S``."""
        (single_type,) = type_arguments(source, 1)
        single: Payload[Any] = Payload(single_type)
        vec: Payload[Any] = Payload(list[single_type])  # type: ignore[valid-type]
        return either_schema(
            cls,
            lambda value: SingleOrVec.from_value(value, single=single.decode, vec=vec.decode),
            {_SingleOrVecSingle: single, _SingleOrVecVec: vec},
        )


@dataclass(frozen=True, slots=True)
class _SingleOrVecSingle(SingleOrVec[S]):
    value: S

    @property
    def payload(self) -> S:
        """The single value."""
        return self.value


@dataclass(frozen=True, slots=True)
class _SingleOrVecVec(SingleOrVec[S]):
    values: tuple[S, ...]

    def __post_init__(self) -> None:
        """Normalize values container to tuple for runtime safety."""
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def payload(self) -> list[S]:
        """The values as a list."""
        return list(self.values)


_register(SingleOrVec, "Single", _SingleOrVecSingle)
_register(SingleOrVec, "Vec", _SingleOrVecVec)
