"""Tests for value-kind classification and failure records."""

from collections import OrderedDict
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Annotated, Any, Optional, Union

import polars as pl
import pytest

from fieldmsg.kinds import classify, classify_dtype, unwrap_optional
from fieldmsg.types import FailureRecord, KindFamily, ValueKind


class TestClassifyValues:
    """Tests for classifying runtime values."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("abc", ValueKind.TEXT),
            ("", ValueKind.TEXT),
            ([1, 2], ValueKind.COLLECTION),
            ((1,), ValueKind.COLLECTION),
            ({1, 2}, ValueKind.COLLECTION),
            ({"a": 1}, ValueKind.COLLECTION),
            (OrderedDict(), ValueKind.COLLECTION),
            (b"raw", ValueKind.COLLECTION),
            (5, ValueKind.NUMBER),
            (2.5, ValueKind.NUMBER),
            (True, ValueKind.NUMBER),
            (Decimal("1.5"), ValueKind.NUMBER),
            (timedelta(seconds=3), ValueKind.NUMBER),
            (date(2024, 1, 1), ValueKind.TEMPORAL),
            (datetime(2024, 1, 1, 12), ValueKind.TEMPORAL),
            (None, ValueKind.OTHER),
            (object(), ValueKind.OTHER),
        ],
    )
    def test_runtime_values(self, value, expected):
        """Test classification of runtime values."""
        assert classify(value) == expected

    def test_series_uses_dtype(self):
        """Test that a polars Series is classified by its dtype."""
        assert classify(pl.Series("a", ["x", "y"])) == ValueKind.TEXT
        assert classify(pl.Series("a", [[1], [2]])) == ValueKind.COLLECTION
        assert classify(pl.Series("a", [1, 2])) == ValueKind.NUMBER


class TestClassifyAnnotations:
    """Tests for classifying types and typing annotations."""

    @pytest.mark.parametrize(
        "annotation, expected",
        [
            (str, ValueKind.TEXT),
            (int, ValueKind.NUMBER),
            (float, ValueKind.NUMBER),
            (bool, ValueKind.NUMBER),
            (list[int], ValueKind.COLLECTION),
            (dict[str, int], ValueKind.COLLECTION),
            (frozenset, ValueKind.COLLECTION),
            (datetime, ValueKind.TEMPORAL),
            (Annotated[str, "meta"], ValueKind.TEXT),
            (Any, ValueKind.OTHER),
            (type(None), ValueKind.OTHER),
        ],
    )
    def test_annotations(self, annotation, expected):
        """Test classification of annotations."""
        assert classify(annotation) == expected

    def test_optional_unwrapped_once(self):
        """Test that one nullable layer is removed."""
        assert classify(Optional[str]) == ValueKind.TEXT
        assert classify(Optional[list[str]]) == ValueKind.COLLECTION
        assert classify(datetime | None) == ValueKind.TEMPORAL

    def test_ambiguous_union_is_other(self):
        """Test that real unions are not guessed."""
        assert classify(Union[int, str]) == ValueKind.OTHER
        assert classify(Optional[Union[int, str]]) == ValueKind.OTHER

    def test_unwrap_optional(self):
        """Test unwrap_optional directly."""
        assert unwrap_optional(Optional[int]) is int
        assert unwrap_optional(int) is int
        assert unwrap_optional(Union[int, str]) == Union[int, str]


class TestClassifyDtypes:
    """Tests for classifying polars data types."""

    @pytest.mark.parametrize(
        "dtype, expected",
        [
            (pl.String, ValueKind.TEXT),
            (pl.Utf8, ValueKind.TEXT),
            (pl.Categorical, ValueKind.TEXT),
            (pl.List(pl.Int64), ValueKind.COLLECTION),
            (pl.Int64, ValueKind.NUMBER),
            (pl.UInt8, ValueKind.NUMBER),
            (pl.Float32, ValueKind.NUMBER),
            (pl.Boolean, ValueKind.NUMBER),
            (pl.Duration("ms"), ValueKind.NUMBER),
            (pl.Date, ValueKind.TEMPORAL),
            (pl.Datetime("us"), ValueKind.TEMPORAL),
            (pl.Struct({"a": pl.Int64}), ValueKind.OTHER),
            (pl.Null, ValueKind.OTHER),
            (pl.Object, ValueKind.OTHER),
        ],
    )
    def test_dtypes(self, dtype, expected):
        """Test classification of dtype classes and instances."""
        assert classify_dtype(dtype) == expected
        assert classify(dtype) == expected


class TestValueKind:
    """Tests for ValueKind and KindFamily."""

    def test_families(self):
        """Test the kind to family mapping."""
        assert ValueKind.TEXT.family == KindFamily.STRING
        assert ValueKind.COLLECTION.family == KindFamily.ITEMS
        assert ValueKind.NUMBER.family == KindFamily.NUMBER
        assert ValueKind.TEMPORAL.family == KindFamily.DATETIME
        assert ValueKind.OTHER.family is None

    def test_counts_units(self):
        """Test which families embed a unit noun."""
        assert KindFamily.STRING.counts_units
        assert KindFamily.ITEMS.counts_units
        assert not KindFamily.NUMBER.counts_units
        assert not KindFamily.DATETIME.counts_units

    def test_parse(self):
        """Test parsing kind names."""
        assert ValueKind.parse("TEXT") == ValueKind.TEXT
        assert ValueKind.parse(" collection ") == ValueKind.COLLECTION
        assert ValueKind.parse("unknown") == ValueKind.OTHER
        assert ValueKind.parse(ValueKind.NUMBER) is ValueKind.NUMBER


class TestFailureRecord:
    """Tests for FailureRecord."""

    def test_defaults(self):
        """Test default parameter and kind."""
        record = FailureRecord("required", "Title")
        assert record.param == ""
        assert record.kind == ValueKind.OTHER
        assert record.tag == "required"

    def test_tag_with_param(self):
        """Test the rule=param tag."""
        assert FailureRecord("min", "Title", "3").tag == "min=3"

    def test_from_value(self):
        """Test building a record from the field value."""
        assert FailureRecord.from_value("min", "Title", "3", "ab").kind == ValueKind.TEXT
        assert FailureRecord.from_value("max", "Params", "2", [1, 2, 3]).kind == ValueKind.COLLECTION
        assert FailureRecord.from_value("gt", "StartAt", "", Optional[datetime]).kind == ValueKind.TEMPORAL

    def test_to_dict(self):
        """Test conversion to a flat dictionary."""
        record = FailureRecord("len", "Login", "8", ValueKind.TEXT)
        assert record.to_dict() == {"rule": "len", "field": "Login", "param": "8", "kind": "text"}

    def test_frozen(self):
        """Test that records are immutable."""
        record = FailureRecord("len", "Login")
        with pytest.raises(AttributeError):
            record.rule = "min"  # type: ignore[misc]
