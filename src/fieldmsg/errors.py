"""Exceptions raised while building catalogs and formatting messages.

``MessageFormatter.render`` raises these; ``MessageFormatter.format``
recovers from all of them and returns a fallback string instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from fieldmsg.types import FailureRecord


# =============================================================================
# Formatting Errors
# =============================================================================


class MessageFormatError(Exception):
    """Base exception for all message formatting errors."""

    def __init__(self, message: str, record: "FailureRecord | None" = None) -> None:
        self.record = record
        super().__init__(message)

    def with_record(self, record: "FailureRecord") -> "MessageFormatError":
        """Attach the record being formatted, keeping an existing one."""
        if self.record is None:
            self.record = record
        return self


class ParseError(MessageFormatError, ValueError):
    """Raised when a rule parameter is not a valid decimal numeral."""

    def __init__(self, raw: str, record: "FailureRecord | None" = None) -> None:
        self.raw = raw
        super().__init__(f"Parameter is not a decimal numeral: {raw!r}", record)


class UnsupportedKindError(MessageFormatError):
    """Raised when a rule is applied to a value kind it has no template for."""

    def __init__(self, rule: str, kind: Any, record: "FailureRecord | None" = None) -> None:
        self.rule = rule
        self.kind = kind
        kind_name = getattr(kind, "value", kind)
        super().__init__(
            f"Unsupported rule/kind combination: tag '{rule}' cannot be used on a {kind_name} value",
            record,
        )


class MissingTemplateError(MessageFormatError, KeyError):
    """Raised when the catalog has no template for a lookup key."""

    def __init__(self, key: tuple[Any, ...], record: "FailureRecord | None" = None) -> None:
        self.key = key
        super().__init__(f"No template registered for {format_key(key)}", record)

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class TemplateRenderError(MessageFormatError):
    """Raised when a template's placeholders cannot be filled."""

    def __init__(self, template: str, error: str, record: "FailureRecord | None" = None) -> None:
        self.template = template
        self.error = error
        super().__init__(f"Cannot render template {template!r}: {error}", record)


# =============================================================================
# Catalog Errors
# =============================================================================


class CatalogValidationError(Exception):
    """Raised when a catalog lacks templates its rule table requires."""

    def __init__(self, missing: Iterable[tuple[Any, ...]]) -> None:
        self.missing = list(missing)
        keys = ", ".join(format_key(key) for key in self.missing)
        super().__init__(f"Catalog is missing {len(self.missing)} template(s): {keys}")


def format_key(key: tuple[Any, ...]) -> str:
    """Render a catalog key as ``rule/family/category``."""
    return "/".join(str(getattr(part, "value", part)) for part in key if part is not None)
