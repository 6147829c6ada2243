"""i18n protocol definitions and base abstractions.

Protocols:
- PluralRuleProvider: CLDR plural rule handling
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol, runtime_checkable


# ==============================================================================
# Enums and Type Definitions
# ==============================================================================

class PluralCategory(str, Enum):
    """CLDR plural categories used by the message catalogs.

    Based on Unicode CLDR plural rules:
    https://cldr.unicode.org/index/cldr-spec/plural-rules
    """
    ONE = "one"        # 1, 21, 31 ... (singular)
    FEW = "few"        # 2-4, 22-24 ... in Slavic languages
    MANY = "many"      # 0, 5-20, 25-30 ... in Slavic languages
    OTHER = "other"    # fractions and the default

    @classmethod
    def parse(cls, value: "PluralCategory | str") -> "PluralCategory":
        """Convert a category name (case-insensitive) to PluralCategory."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


# ==============================================================================
# Data Classes
# ==============================================================================

@dataclass(frozen=True)
class LocaleInfo:
    """Locale information.

    Attributes:
        language: ISO 639-1 language code (e.g., "ru", "en")
        region: ISO 3166-1 region code (e.g., "RU", "UA")
        script: ISO 15924 script code (e.g., "Cyrl", "Latn")
    """
    language: str
    region: str | None = None
    script: str | None = None

    @property
    def tag(self) -> str:
        """Get BCP 47 language tag."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        return "-".join(parts)

    @classmethod
    def parse(cls, tag: "str | LocaleInfo") -> "LocaleInfo":
        """Parse a locale tag.

        Supports "ru", "ru-RU", "ru_RU", "sr-Latn" and "sr-Latn-RS".
        """
        if isinstance(tag, LocaleInfo):
            return tag

        parts = tag.replace("_", "-").split("-")

        language = parts[0].lower()
        region = None
        script = None

        for part in parts[1:]:
            if len(part) == 4 and part.isalpha():
                script = part.capitalize()
            elif len(part) == 2 and part.isalpha():
                region = part.upper()
            elif len(part) == 3 and part.isdigit():
                # UN M.49 region code
                region = part

        return cls(language=language, region=region, script=script)


# ==============================================================================
# Protocols (Interfaces)
# ==============================================================================

@runtime_checkable
class PluralRuleProvider(Protocol):
    """Protocol for plural rule handling.

    Implementations should follow CLDR plural rules:
    https://cldr.unicode.org/index/cldr-spec/plural-rules
    """

    def get_category(
        self,
        count: float | int | Decimal,
        locale: LocaleInfo,
        fraction_digits: int | None = None,
    ) -> PluralCategory:
        """Get the plural category for a number.

        Args:
            count: The number to categorize
            locale: Target locale
            fraction_digits: Visible fraction digits of the source text,
                when known (``"3.00"`` has 2)

        Returns:
            Appropriate plural category
        """
        ...


# ==============================================================================
# Abstract Base Classes
# ==============================================================================

class BasePluralRuleProvider(ABC):
    """Abstract base class for plural rule providers."""

    @abstractmethod
    def get_category(
        self,
        count: float | int | Decimal,
        locale: LocaleInfo,
        fraction_digits: int | None = None,
    ) -> PluralCategory:
        """Get the plural category for a number."""
        pass

    def get_supported_languages(self) -> list[str]:
        """Get list of language codes with registered rules."""
        return []
