"""Localized messages for field-validation failures.

The formatter turns one failure record into one sentence:

    formatter = MessageFormatter(get_catalog("ru"))
    formatter.format(FailureRecord("min", "Title", "5", ValueKind.TEXT))
    # "Поле Название должно содержать минимум 5 символов"

``render`` raises on any problem (unknown rule, unsupported value kind,
non-numeric parameter, broken template). ``format`` never raises: it
returns a fallback string in the validator's own wording and reports a
diagnostic instead.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable

import polars as pl

from fieldmsg.errors import MessageFormatError, TemplateRenderError, UnsupportedKindError
from fieldmsg.i18n.catalogs import TemplateCatalog
from fieldmsg.i18n.formatting import NumberSymbols, format_magnitude, get_number_symbols
from fieldmsg.i18n.numbers import parse_magnitude
from fieldmsg.i18n.plural import get_plural_rules
from fieldmsg.i18n.protocols import LocaleInfo, PluralRuleProvider
from fieldmsg.types import FailureRecord, KindFamily, RuleFamily, ValueKind

if TYPE_CHECKING:
    from fieldmsg.config import FormatterConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Diagnostics
# =============================================================================


@dataclass(frozen=True)
class FormatDiagnostic:
    """Why a record was rendered with the fallback message.

    Attributes:
        record: Record that could not be formatted
        error_type: Exception class name
        message: Exception message
        fallback: Fallback string returned to the caller
    """
    record: FailureRecord
    error_type: str
    message: str
    fallback: str

    @classmethod
    def from_error(
        cls,
        record: FailureRecord,
        error: BaseException,
        fallback: str,
    ) -> "FormatDiagnostic":
        return cls(
            record=record,
            error_type=type(error).__name__,
            message=str(error),
            fallback=fallback,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.record.to_dict(),
            "error_type": self.error_type,
            "message": self.message,
            "fallback": self.fallback,
        }


DiagnosticCallback = Callable[[FormatDiagnostic], None]


class DiagnosticRecorder:
    """Thread-safe diagnostic callback keeping the most recent entries.

    Example:
        recorder = DiagnosticRecorder(max_size=100)
        formatter = MessageFormatter(catalog, on_diagnostic=recorder)
        formatter.format(record)
        recorder.diagnostics  # [FormatDiagnostic(...)]
    """

    def __init__(self, max_size: int = 1000) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._entries: deque[FormatDiagnostic] = deque(maxlen=max_size)
        self._total = 0
        self._lock = threading.Lock()

    def __call__(self, diagnostic: FormatDiagnostic) -> None:
        with self._lock:
            self._entries.append(diagnostic)
            self._total += 1

    @property
    def diagnostics(self) -> list[FormatDiagnostic]:
        """Snapshot of the retained diagnostics, oldest first."""
        with self._lock:
            return list(self._entries)

    @property
    def total(self) -> int:
        """Number of diagnostics seen, including evicted ones."""
        return self._total

    @property
    def max_size(self) -> int:
        return self._entries.maxlen or 0

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total = 0

    def __len__(self) -> int:
        return len(self._entries)


# =============================================================================
# Formatter
# =============================================================================


def fallback_message(record: FailureRecord) -> str:
    """Build the validator's default error text for a record.

    Used whenever no localized sentence can be produced.
    """
    return (
        f"Key: '{record.field}' Error:Field validation for '{record.field}' "
        f"failed on the '{record.tag}' tag"
    )


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def _interpolate(template: str, *args: str) -> str:
    try:
        return template.format(*args)
    except (IndexError, KeyError, ValueError) as e:
        raise TemplateRenderError(template, f"{type(e).__name__}: {e}") from e


class MessageFormatter:
    """Builds localized messages from failure records.

    Formatters hold only immutable state after construction and may be
    shared across threads.

    Args:
        catalog: Templates and field labels for one locale
        plural_rules: Plural category provider (CLDR rules by default)
        symbols: Number symbols (taken from the catalog locale by default)
        use_grouping: Whether to group thousands in parameters
        on_diagnostic: Called once per record that falls back
    """

    def __init__(
        self,
        catalog: TemplateCatalog,
        *,
        plural_rules: PluralRuleProvider | None = None,
        symbols: NumberSymbols | None = None,
        use_grouping: bool = True,
        on_diagnostic: DiagnosticCallback | None = None,
    ) -> None:
        self._catalog = catalog
        self._locale = LocaleInfo.parse(catalog.locale)
        self._plural_rules: PluralRuleProvider = plural_rules or get_plural_rules()
        self._symbols = symbols or get_number_symbols(self._locale)
        self._use_grouping = use_grouping
        self._on_diagnostic = on_diagnostic

    @property
    def catalog(self) -> TemplateCatalog:
        return self._catalog

    @property
    def locale(self) -> LocaleInfo:
        return self._locale

    @property
    def on_diagnostic(self) -> DiagnosticCallback | None:
        return self._on_diagnostic

    def render(self, record: FailureRecord) -> str:
        """Build the localized message for a record.

        Raises:
            MissingTemplateError: If the rule or a template is not in the catalog
            UnsupportedKindError: If the rule has no variant for the value kind
            ParseError: If a count-bearing rule's parameter is not a numeral
            TemplateRenderError: If a template's placeholders cannot be filled
        """
        display = self._catalog.field_label(record.field)
        try:
            if self._catalog.rule_family(record.rule) is RuleFamily.SCALAR:
                return _interpolate(self._catalog.sentence(record.rule), display, record.param)
            return self._render_magnitude(record, display)
        except MessageFormatError as e:
            e.with_record(record)
            raise

    def _render_magnitude(self, record: FailureRecord, display: str) -> str:
        kind = ValueKind.parse(record.kind)
        family = self._catalog.rule_spec(record.rule).family_for(kind)
        if family is None:
            raise UnsupportedKindError(record.rule, kind, record)

        # Date comparisons are relative to "now", the parameter is not shown
        if family is KindFamily.DATETIME:
            return _interpolate(self._catalog.sentence(record.rule, family), display)

        magnitude = parse_magnitude(record.param)
        number = format_magnitude(magnitude, self._symbols, self._use_grouping)
        sentence = self._catalog.sentence(record.rule, family)

        if not family.counts_units:
            return _interpolate(sentence, display, number)

        category = self._plural_rules.get_category(
            magnitude.value, self._locale, magnitude.decimal_digits
        )
        unit = _interpolate(self._catalog.unit(record.rule, family, category), number)
        return _interpolate(sentence, display, unit)

    def format(self, record: FailureRecord) -> str:
        """Build the localized message, or the fallback message on failure.

        Never raises. Each fallback is logged at WARNING and passed to
        ``on_diagnostic``.
        """
        try:
            return self.render(record)
        except Exception as e:
            fallback = fallback_message(record)
            self._report(FormatDiagnostic.from_error(record, e, fallback))
            return fallback

    def format_many(self, records: Iterable[FailureRecord]) -> list[str]:
        """Format a batch of records, preserving order."""
        return [self.format(record) for record in records]

    def format_frame(
        self,
        frame: pl.DataFrame,
        message_column: str = "message",
    ) -> pl.DataFrame:
        """Format a frame of failures.

        Args:
            frame: One row per failure with ``rule`` and ``field`` columns,
                and optionally ``param`` and ``kind`` (missing or null
                values mean no parameter and the OTHER kind)
            message_column: Name of the column to add

        Returns:
            The frame with the messages column appended

        Raises:
            ValueError: If ``rule`` or ``field`` is missing
        """
        missing = [name for name in ("rule", "field") if name not in frame.columns]
        if missing:
            raise ValueError(f"Frame is missing required column(s): {', '.join(missing)}")

        messages = [
            self.format(
                FailureRecord(
                    rule=_cell_text(row["rule"]),
                    field=_cell_text(row["field"]),
                    param=_cell_text(row.get("param")),
                    kind=ValueKind.parse(row.get("kind") or ValueKind.OTHER),
                )
            )
            for row in frame.iter_rows(named=True)
        ]
        return frame.with_columns(pl.Series(message_column, messages, dtype=pl.String))

    def _report(self, diagnostic: FormatDiagnostic) -> None:
        logger.warning(
            "Cannot format '%s' for field '%s' (%s): %s",
            diagnostic.record.tag,
            diagnostic.record.field,
            diagnostic.error_type,
            diagnostic.message,
        )
        if self._on_diagnostic is None:
            return
        try:
            self._on_diagnostic(diagnostic)
        except Exception:
            logger.exception("Diagnostic callback failed for '%s'", diagnostic.record.tag)


# =============================================================================
# Default Formatter
# =============================================================================


_default_formatter: MessageFormatter | None = None
_default_lock = threading.Lock()


def get_default_formatter() -> MessageFormatter:
    """Get the process-wide formatter.

    Built once, on first use, from ``load_config()`` (environment
    variables with the ``FIELDMSG_`` prefix over defaults).
    """
    global _default_formatter

    if _default_formatter is None:
        with _default_lock:
            if _default_formatter is None:
                from fieldmsg.config import build_formatter, load_config

                _default_formatter = build_formatter(load_config())
    return _default_formatter


def set_default_formatter(formatter: MessageFormatter | None) -> None:
    """Replace the process-wide formatter (None rebuilds it on next use)."""
    global _default_formatter

    with _default_lock:
        _default_formatter = formatter


def reset_default_formatter() -> None:
    """Drop the process-wide formatter."""
    set_default_formatter(None)


def configure_default_formatter(config: "FormatterConfig") -> MessageFormatter:
    """Rebuild the process-wide formatter from a configuration."""
    from fieldmsg.config import build_formatter

    formatter = build_formatter(config)
    set_default_formatter(formatter)
    return formatter


def format_failure(
    rule: str,
    field: str,
    param: str = "",
    kind: ValueKind | str = ValueKind.OTHER,
) -> str:
    """Format one failure with the process-wide formatter.

    Example:
        format_failure("max", "Title", "10", "text")
        # "Поле Название должно содержать максимум 10 символов"
    """
    record = FailureRecord(rule=rule, field=field, param=param, kind=ValueKind.parse(kind))
    return get_default_formatter().format(record)


__all__ = [
    "DiagnosticCallback",
    "DiagnosticRecorder",
    "FormatDiagnostic",
    "MessageFormatter",
    "configure_default_formatter",
    "fallback_message",
    "format_failure",
    "get_default_formatter",
    "reset_default_formatter",
    "set_default_formatter",
]
