"""Configuration for the message formatter.

Settings are merged from several sources, later ones overriding earlier
ones:

    defaults  <  configuration file (YAML or JSON)  <  environment variables

Usage:
    >>> from fieldmsg.config import build_formatter, load_config
    >>>
    >>> config = load_config("fieldmsg.yaml")
    >>> formatter = build_formatter(config)

Example file:

    locale: ru
    use_grouping: true
    log_level: INFO
    field_labels:
      Nickname: Псевдоним

Environment variables use the ``FIELDMSG_`` prefix:

    FIELDMSG_LOCALE=ru
    FIELDMSG_USE_GROUPING=false
    FIELDMSG_FIELD_LABELS='{"Nickname": "Псевдоним"}'
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from fieldmsg.i18n.catalogs import get_catalog, get_supported_locales
from fieldmsg.i18n.formatting import get_number_symbols
from fieldmsg.i18n.plural import get_plural_rules
from fieldmsg.i18n.protocols import LocaleInfo

if TYPE_CHECKING:
    from fieldmsg.messages import DiagnosticCallback, MessageFormatter

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(Exception):
    """Base configuration error."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration validation error."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")


class ConfigSourceError(ConfigError):
    """Configuration source error."""

    pass


# =============================================================================
# Configuration Sources
# =============================================================================


class ConfigSource(ABC):
    """Abstract base class for configuration sources.

    Sources are applied in priority order (higher overrides lower).
    """

    def __init__(self, priority: int = 0) -> None:
        self._priority = priority

    @property
    def priority(self) -> int:
        return self._priority

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Load configuration from source.

        Returns:
            Dictionary of configuration values.
        """
        pass


class EnvConfigSource(ConfigSource):
    """Environment variable configuration source.

    Keys are the variable names without the prefix, lowercased:

        FIELDMSG_USE_GROUPING=false  ->  {"use_grouping": False}
        FIELDMSG_MAX_DIAGNOSTICS=50  ->  {"max_diagnostics": 50}
    """

    def __init__(
        self,
        prefix: str = "FIELDMSG",
        priority: int = 100,
    ) -> None:
        super().__init__(priority)
        self._prefix = f"{prefix}_"

    def load(self) -> dict[str, Any]:
        """Load configuration from environment."""
        result: dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(self._prefix):
                config_key = key[len(self._prefix):].lower()
                result[config_key] = self._parse_value(value)

        if result:
            logger.debug("Loaded %d setting(s) from %s* variables", len(result), self._prefix)
        return result

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        # Boolean
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        # None
        if value.lower() in ("null", "none", ""):
            return None

        # Number
        try:
            return int(value)
        except ValueError:
            pass

        # JSON array/object
        if value.startswith(("[", "{")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value


class FileConfigSource(ConfigSource):
    """File-based configuration source.

    Supports YAML and JSON, detected from the file extension.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        required: bool = False,
        priority: int = 50,
    ) -> None:
        """Initialize file source.

        Args:
            path: Path to configuration file.
            required: Raise error if file not found.
            priority: Source priority.
        """
        super().__init__(priority)
        self._path = Path(path)
        self._required = required

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        """Load configuration from file.

        Raises:
            ConfigSourceError: If the file is required but missing, cannot
                be parsed, has an unsupported extension, or does not hold
                a mapping
        """
        if not self._path.exists():
            if self._required:
                raise ConfigSourceError(f"Configuration file not found: {self._path}")
            logger.debug("Configuration file %s not found, skipping", self._path)
            return {}

        suffix = self._path.suffix.lower()
        try:
            content = self._path.read_text(encoding="utf-8")
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif suffix == ".json":
                data = json.loads(content) if content.strip() else {}
            else:
                raise ConfigSourceError(f"Unsupported file format: {suffix}")
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigSourceError(f"Failed to load config {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigSourceError(
                f"Configuration file {self._path} must contain a mapping, "
                f"got {type(data).__name__}"
            )

        logger.debug("Loaded %d setting(s) from %s", len(data), self._path)
        return data


# =============================================================================
# Formatter Configuration
# =============================================================================


@dataclass
class FormatterConfig:
    """Settings for building a MessageFormatter.

    Attributes:
        locale: Catalog locale
        use_grouping: Group thousands in numeric parameters
        field_labels: Extra field display labels, merged over the catalog's
        log_level: Level for the ``fieldmsg`` logger (None leaves the
            logger as the host application configured it)
        max_diagnostics: Diagnostics kept by the default recorder
    """
    locale: str = "ru"
    use_grouping: bool = True
    field_labels: dict[str, str] = field(default_factory=dict)
    log_level: str | None = None
    max_diagnostics: int = 1000

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormatterConfig":
        """Create a validated configuration from merged source values.

        Unknown keys are ignored; ``None`` values keep the default.

        Raises:
            ConfigValidationError: Listing every invalid setting
        """
        known = {name: value for name, value in data.items() if name in cls.__dataclass_fields__}
        config = cls(**{name: value for name, value in known.items() if value is not None})
        config.validate()
        return config

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ConfigValidationError: Listing every invalid setting
        """
        errors = []

        if not isinstance(self.locale, str) or not self.locale:
            errors.append(f"locale must be a non-empty string, got {self.locale!r}")
        elif LocaleInfo.parse(self.locale).language not in get_supported_locales():
            errors.append(
                f"locale {self.locale!r} has no message catalog "
                f"(supported: {', '.join(get_supported_locales())})"
            )

        if not isinstance(self.use_grouping, bool):
            errors.append(f"use_grouping must be a boolean, got {self.use_grouping!r}")

        if not isinstance(self.field_labels, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in self.field_labels.items()
        ):
            errors.append("field_labels must map field names to labels")

        if self.log_level is not None and str(self.log_level).upper() not in _LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {self.log_level!r}")

        if isinstance(self.max_diagnostics, bool) or not isinstance(self.max_diagnostics, int) \
                or self.max_diagnostics < 1:
            errors.append(f"max_diagnostics must be a positive integer, got {self.max_diagnostics!r}")

        if errors:
            raise ConfigValidationError(errors)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(
    path: str | Path | None = None,
    *,
    env_prefix: str = "FIELDMSG",
    required: bool = False,
) -> FormatterConfig:
    """Load formatter configuration.

    Args:
        path: Optional YAML or JSON configuration file
        env_prefix: Prefix of the environment variables to read
        required: Raise if ``path`` does not exist

    Returns:
        Validated configuration

    Raises:
        ConfigSourceError: If the file cannot be read
        ConfigValidationError: If a setting is invalid
    """
    sources: list[ConfigSource] = [EnvConfigSource(prefix=env_prefix)]
    if path is not None:
        sources.append(FileConfigSource(path, required=required))

    merged: dict[str, Any] = {}
    for source in sorted(sources, key=lambda s: s.priority):
        merged.update(source.load())

    return FormatterConfig.from_dict(merged)


def configure_logging(config: FormatterConfig) -> None:
    """Apply the configured level, if any, to the package logger."""
    if config.log_level is None:
        return
    logging.getLogger("fieldmsg").setLevel(str(config.log_level).upper())


def build_formatter(
    config: FormatterConfig | None = None,
    *,
    on_diagnostic: "DiagnosticCallback | None" = None,
) -> "MessageFormatter":
    """Build a formatter for a configuration.

    Args:
        config: Settings (defaults when None)
        on_diagnostic: Diagnostic callback; a DiagnosticRecorder bounded
            by ``max_diagnostics`` when None

    Returns:
        Formatter over the locale's catalog with the configured labels
    """
    from fieldmsg.messages import DiagnosticRecorder, MessageFormatter

    config = config or FormatterConfig()
    config.validate()
    if on_diagnostic is None:
        on_diagnostic = DiagnosticRecorder(config.max_diagnostics)
    configure_logging(config)

    catalog = get_catalog(config.locale)
    if config.field_labels:
        catalog = catalog.with_field_labels(config.field_labels)

    return MessageFormatter(
        catalog,
        plural_rules=get_plural_rules(),
        symbols=get_number_symbols(config.locale),
        use_grouping=config.use_grouping,
        on_diagnostic=on_diagnostic,
    )
