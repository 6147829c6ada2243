"""Type definitions for fieldmsg."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Runtime kind of the value held by an invalid field."""

    TEXT = "text"
    COLLECTION = "collection"
    NUMBER = "number"
    TEMPORAL = "temporal"
    OTHER = "other"

    @property
    def family(self) -> "KindFamily | None":
        """Template family for this kind, or None when no template applies."""
        return _KIND_FAMILIES.get(self)

    @classmethod
    def parse(cls, value: "ValueKind | str") -> "ValueKind":
        """Convert a kind name (case-insensitive) to ValueKind."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class KindFamily(str, Enum):
    """Template variant selected by a value kind."""

    STRING = "string"
    ITEMS = "items"
    NUMBER = "number"
    DATETIME = "datetime"

    @property
    def counts_units(self) -> bool:
        """Whether messages in this family embed a pluralized unit noun."""
        return self in (KindFamily.STRING, KindFamily.ITEMS)


_KIND_FAMILIES: dict[ValueKind, KindFamily] = {
    ValueKind.TEXT: KindFamily.STRING,
    ValueKind.COLLECTION: KindFamily.ITEMS,
    ValueKind.NUMBER: KindFamily.NUMBER,
    ValueKind.TEMPORAL: KindFamily.DATETIME,
}


class RuleFamily(str, Enum):
    """How a rule's message is assembled."""

    SCALAR = "scalar"        # field name + raw parameter, no pluralization
    MAGNITUDE = "magnitude"  # varies by kind, embeds a pluralized count


@dataclass(frozen=True)
class FailureRecord:
    """One constraint violation reported by the validation engine.

    Attributes:
        rule: Identifier of the failed constraint (e.g. "min", "len")
        field: Raw field identifier, translated through the alias table
        param: Constraint bound exactly as declared on the rule
        kind: Kind of the field's value
    """

    rule: str
    field: str
    param: str = ""
    kind: ValueKind = ValueKind.OTHER

    @property
    def tag(self) -> str:
        """Rule as written in a rule declaration (``min=3``)."""
        return f"{self.rule}={self.param}" if self.param else self.rule

    @classmethod
    def from_value(
        cls,
        rule: str,
        field: str,
        param: str,
        value: Any,
    ) -> "FailureRecord":
        """Create a record, classifying the kind of ``value``.

        ``value`` may be a runtime value, a type annotation or a polars
        data type (see ``fieldmsg.kinds.classify``).
        """
        from fieldmsg.kinds import classify

        return cls(rule=rule, field=field, param=param, kind=classify(value))

    def to_dict(self) -> dict[str, str]:
        """Convert to a flat dictionary."""
        return {
            "rule": self.rule,
            "field": self.field,
            "param": self.param,
            "kind": self.kind.value,
        }
