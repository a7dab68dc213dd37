"""pydantic integration: core schemas that route validation through shape dispatch."""

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar, get_args

from pydantic import TypeAdapter
from pydantic_core import PydanticCustomError, core_schema

from serde_either._either import Either
from serde_either.errors import InvalidValueError, ShapeMismatchError
from serde_either.serde import from_python
from serde_either.value import Value

T = TypeVar("T")


class Payload(Generic[T]):
    """A payload type together with its (lazily built) pydantic adapter."""

    __slots__ = ("_adapter", "type")

    def __init__(self, type_: Any) -> None:
        """Initialize with the payload type; the adapter is built on first use."""
        self.type = type_
        self._adapter: TypeAdapter[T] | None = None

    @property
    def adapter(self) -> TypeAdapter[T]:
        """Return the pydantic adapter for the payload type."""
        if self._adapter is None:
            self._adapter = TypeAdapter(self.type)
        return self._adapter

    def decode(self, value: Value) -> T:
        """Validate a replayed Value as the payload type."""
        return self.adapter.validate_python(value.into_python())

    def encode(self, payload: object, info: core_schema.SerializationInfo) -> object:
        """Serialize a payload exactly as a field of the payload type would be.

        The caller's dump options (aliases, exclusions, round-trip, context) carry
        through to the payload.
        """
        return self.adapter.dump_python(
            payload,
            mode=info.mode,
            include=info.include,
            exclude=info.exclude,
            context=info.context,
            by_alias=info.by_alias,
            exclude_unset=info.exclude_unset,
            exclude_defaults=info.exclude_defaults,
            exclude_none=info.exclude_none,
            round_trip=info.round_trip,
            serialize_as_any=info.serialize_as_any,
        )


def type_arguments(source: Any, count: int) -> tuple[Any, ...]:
    """Return the payload types of a parameterized either-type, ``Any`` when bare."""
    arguments = get_args(source)
    if not arguments:
        return (Any,) * count
    if len(arguments) != count:
        msg = f"{source!r} takes {count} type argument(s), got {len(arguments)}."
        raise TypeError(msg)
    return arguments


def either_schema(
    cls: type[Either],
    decode: Callable[[Value], Either],
    payloads: Mapping[type[Either], Payload[Any]],
) -> core_schema.CoreSchema:
    """Build the core schema for an either-type.

    ``decode`` receives the input classified as a Value; ``payloads`` maps each
    variant class to the payload type used to serialize it.
    """

    def validate(data: object) -> Either:
        if isinstance(data, cls):
            return data
        try:
            return decode(from_python(data))
        except ShapeMismatchError as exc:
            raise PydanticCustomError(
                "invalid_type",
                "invalid type: {unexpected}, expected {expected}",
                {"unexpected": str(exc.unexpected), "expected": exc.expected},
            ) from exc
        except InvalidValueError as exc:
            raise PydanticCustomError(
                "invalid_value",
                "invalid value: {unexpected}, expected {expected}",
                {"unexpected": str(exc.unexpected), "expected": exc.expected},
            ) from exc

    def serialize(instance: object, info: core_schema.SerializationInfo) -> object:
        if isinstance(instance, Either):
            payload = payloads.get(type(instance))
            if payload is not None:
                return payload.encode(instance.payload, info)
        return instance

    return core_schema.no_info_plain_validator_function(
        validate,
        serialization=core_schema.plain_serializer_function_ser_schema(serialize, info_arg=True),
    )
