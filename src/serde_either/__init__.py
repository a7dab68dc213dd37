"""serde_either: fields that accept a string, a structured value or a sequence."""

import importlib.metadata as importlib_metadata

from serde_either.dispatch import ShapeCases, decode_str, dispatch
from serde_either.errors import InvalidValueError, SerdeEitherError, ShapeMismatchError
from serde_either.serde import from_json, from_python, to_plain_data
from serde_either.types import SingleOrVec, StringOrStruct, StringOrStructOrVec
from serde_either.value import Unexpected, Value, classify, unexpected


def _detect_version() -> str:
    """Return installed package version or a local fallback when metadata is unavailable."""
    try:
        return importlib_metadata.version("serde-either")
    except importlib_metadata.PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _detect_version()

__all__ = [
    "InvalidValueError",
    "SerdeEitherError",
    "ShapeCases",
    "ShapeMismatchError",
    "SingleOrVec",
    "StringOrStruct",
    "StringOrStructOrVec",
    "Unexpected",
    "Value",
    "classify",
    "decode_str",
    "dispatch",
    "from_json",
    "from_python",
    "to_plain_data",
    "unexpected",
]
