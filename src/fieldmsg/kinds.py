"""Value-kind classification.

Decides which template family a failure uses by looking at the value the
invalid field holds. Three inputs are understood:

- runtime values (``"abc"``, ``[1, 2]``, ``datetime.now()``); a polars
  Series is classified by its dtype
- Python types and typing annotations (``str``, ``list[int]``,
  ``Optional[datetime]``)
- polars data types (``pl.String``, ``pl.List(pl.Int64)``)

A nullable wrapper (``Optional[T]`` / ``T | None``) is unwrapped exactly
one level, the way the validation engine exposes nullable fields.

Example:
    classify("hello")              # ValueKind.TEXT
    classify(Optional[list[int]])  # ValueKind.COLLECTION
    classify(pl.Datetime("us"))    # ValueKind.TEMPORAL
"""

from __future__ import annotations

import types
import typing
from collections.abc import Mapping, Set, Sequence
from datetime import date, timedelta
from decimal import Decimal
from numbers import Number
from typing import Any, Union

import polars as pl

from fieldmsg.types import ValueKind


# ============================================================================
# polars dtype groups
# ============================================================================

STRING_TYPES: set[type[pl.DataType]] = {pl.String, pl.Utf8, pl.Categorical}

COLLECTION_TYPES: set[type[pl.DataType]] = {pl.List, pl.Array}

TEMPORAL_TYPES: set[type[pl.DataType]] = {pl.Date, pl.Datetime}

# Duration is a signed magnitude, not an instant
NUMBER_TYPES: set[type[pl.DataType]] = {pl.Boolean, pl.Duration}


def classify(value: Any) -> ValueKind:
    """Classify a value, annotation or polars dtype.

    Args:
        value: The field value, its declared type, or a polars dtype

    Returns:
        The value kind
    """
    if _is_polars_dtype(value):
        return classify_dtype(value)
    if isinstance(value, pl.Series):
        return classify_dtype(value.dtype)
    if _is_annotation(value):
        return classify_annotation(value)
    return classify_type(type(value)) if value is not None else ValueKind.OTHER


def classify_dtype(dtype: pl.DataType | type[pl.DataType]) -> ValueKind:
    """Classify a polars data type (class or instance)."""
    dtype_cls = dtype if isinstance(dtype, type) else type(dtype)

    if dtype_cls in STRING_TYPES:
        return ValueKind.TEXT
    if dtype_cls in COLLECTION_TYPES:
        return ValueKind.COLLECTION
    if dtype_cls in TEMPORAL_TYPES:
        return ValueKind.TEMPORAL
    if dtype_cls in NUMBER_TYPES or dtype.is_numeric():
        return ValueKind.NUMBER
    return ValueKind.OTHER


def classify_annotation(annotation: Any) -> ValueKind:
    """Classify a type or typing annotation, unwrapping Optional once."""
    return _classify_annotation(unwrap_optional(annotation))


def classify_type(tp: type) -> ValueKind:
    """Classify a concrete Python class."""
    # str and bytes are sequences too; order matters
    if issubclass(tp, str):
        return ValueKind.TEXT
    if issubclass(tp, (bytes, bytearray)):
        return ValueKind.COLLECTION
    if issubclass(tp, date):
        return ValueKind.TEMPORAL
    if issubclass(tp, (Sequence, Set, Mapping)):
        return ValueKind.COLLECTION
    if issubclass(tp, (Number, Decimal, timedelta)):
        return ValueKind.NUMBER
    return ValueKind.OTHER


def unwrap_optional(annotation: Any) -> Any:
    """Strip one nullable layer from an annotation.

    ``Optional[int]`` becomes ``int``; any other annotation is returned
    unchanged. Unions with more than one non-None member stay unions.
    """
    if not _is_union(annotation):
        return annotation
    members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
    if len(members) == 1:
        return members[0]
    return annotation


def _classify_annotation(annotation: Any) -> ValueKind:
    if _is_polars_dtype(annotation):
        return classify_dtype(annotation)
    if _is_union(annotation) or annotation is Any:
        return ValueKind.OTHER

    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _classify_annotation(typing.get_args(annotation)[0])
    if origin is not None:
        annotation = origin
    if isinstance(annotation, type):
        return classify_type(annotation)
    return ValueKind.OTHER


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    return origin is Union or origin is types.UnionType


def _is_annotation(value: Any) -> bool:
    return (
        isinstance(value, type)
        or typing.get_origin(value) is not None
        or value is Any
    )


def _is_polars_dtype(value: Any) -> bool:
    if isinstance(value, pl.DataType):
        return True
    return isinstance(value, type) and issubclass(value, pl.DataType)
