"""fieldmsg - Pluralization-Aware Messages for Field-Validation Failures."""

from fieldmsg.types import FailureRecord, ValueKind, KindFamily, RuleFamily
from fieldmsg.kinds import classify
from fieldmsg.errors import (
    MessageFormatError,
    ParseError,
    UnsupportedKindError,
    MissingTemplateError,
    TemplateRenderError,
    CatalogValidationError,
)

# Catalogs and plural rules
from fieldmsg.i18n import (
    PluralCategory,
    MagnitudeValue,
    TemplateCatalog,
    CatalogBuilder,
    get_catalog,
    parse_magnitude,
    select_plural_category,
)

# Formatting
from fieldmsg.messages import (
    MessageFormatter,
    FormatDiagnostic,
    DiagnosticRecorder,
    fallback_message,
    format_failure,
    get_default_formatter,
    set_default_formatter,
    reset_default_formatter,
    configure_default_formatter,
)

# Configuration
from fieldmsg.config import (
    FormatterConfig,
    ConfigError,
    load_config,
    build_formatter,
)

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("fieldmsg")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # Records
    "FailureRecord",
    "ValueKind",
    "KindFamily",
    "RuleFamily",
    "classify",
    # Errors
    "MessageFormatError",
    "ParseError",
    "UnsupportedKindError",
    "MissingTemplateError",
    "TemplateRenderError",
    "CatalogValidationError",
    # Catalogs and plural rules
    "PluralCategory",
    "MagnitudeValue",
    "TemplateCatalog",
    "CatalogBuilder",
    "get_catalog",
    "parse_magnitude",
    "select_plural_category",
    # Formatting
    "MessageFormatter",
    "FormatDiagnostic",
    "DiagnosticRecorder",
    "fallback_message",
    "format_failure",
    "get_default_formatter",
    "set_default_formatter",
    "reset_default_formatter",
    "configure_default_formatter",
    # Configuration
    "FormatterConfig",
    "ConfigError",
    "load_config",
    "build_formatter",
]
