"""CLDR Plural Rules Implementation.

This module provides CLDR-compliant cardinal plural rule handling for the
locales the message catalogs are written in.

Features:
- CLDR plural operands built from the number's source text, so "3.00"
  keeps its two visible fraction digits
- Slavic one/few/many/other rules (ru, uk, be, sr, hr, bs)
- Polish and one/other (Germanic, Romance) rules
- Extensible rule registration

Usage:
    from fieldmsg.i18n.plural import select_plural_category
    from fieldmsg.i18n.numbers import parse_magnitude

    select_plural_category(parse_magnitude("5"))     # -> PluralCategory.MANY
    select_plural_category(parse_magnitude("1.5"))   # -> PluralCategory.OTHER
    select_plural_category(21, "ru")                 # -> PluralCategory.ONE
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from fieldmsg.i18n.numbers import MagnitudeValue
from fieldmsg.i18n.protocols import (
    BasePluralRuleProvider,
    LocaleInfo,
    PluralCategory,
)


@dataclass(frozen=True)
class PluralOperands:
    """CLDR plural operands for a number.

    See: https://unicode.org/reports/tr35/tr35-numbers.html#Operands

    Attributes:
        n: Absolute value of the source number
        i: Integer digits of n
        v: Number of visible fraction digits with trailing zeros
        f: Visible fraction digits with trailing zeros, as an integer
    """
    n: Decimal
    i: int
    v: int
    f: int

    @classmethod
    def from_number(
        cls,
        n: float | int | Decimal,
        fraction_digits: int | None = None,
    ) -> "PluralOperands":
        """Create operands from a number.

        Args:
            n: The number
            fraction_digits: Explicit visible fraction digits (for numbers
                that came from text such as "3.00")

        Returns:
            PluralOperands instance
        """
        if isinstance(n, bool):
            n = int(n)
        abs_n = abs(Decimal(str(n)) if isinstance(n, float) else Decimal(n))
        i = int(abs_n)

        if fraction_digits is None:
            exponent = abs_n.as_tuple().exponent
            fraction_digits = -exponent if isinstance(exponent, int) and exponent < 0 else 0

        f = int((abs_n - i).scaleb(fraction_digits)) if fraction_digits else 0
        return cls(n=abs_n, i=i, v=fraction_digits, f=f)

    @classmethod
    def from_magnitude(cls, magnitude: MagnitudeValue) -> "PluralOperands":
        """Create operands from a parsed rule parameter."""
        return cls.from_number(magnitude.value, magnitude.decimal_digits)


# Type for plural rule function
PluralRuleFunc = Callable[[PluralOperands], PluralCategory]


# Russian, Ukrainian, Belarusian, Serbian, Croatian, Bosnian
# One: v = 0 and i % 10 = 1 and i % 100 != 11
# Few: v = 0 and i % 10 = 2..4 and i % 100 != 12..14
# Many: v = 0 and i % 10 = 0 or v = 0 and i % 10 = 5..9 or v = 0 and i % 100 = 11..14
def slavic_cardinal(op: PluralOperands) -> PluralCategory:
    if op.v != 0:
        return PluralCategory.OTHER

    i10 = op.i % 10
    i100 = op.i % 100

    if i10 == 1 and i100 != 11:
        return PluralCategory.ONE
    if 2 <= i10 <= 4 and not (12 <= i100 <= 14):
        return PluralCategory.FEW
    if i10 == 0 or 5 <= i10 <= 9 or 11 <= i100 <= 14:
        return PluralCategory.MANY
    return PluralCategory.OTHER


# Polish
# One: i = 1 and v = 0
# Few: v = 0 and i % 10 = 2..4 and i % 100 != 12..14
# Many: v = 0 and i != 1 and i % 10 = 0..1 or v = 0 and i % 10 = 5..9 or v = 0 and i % 100 = 12..14
def polish_cardinal(op: PluralOperands) -> PluralCategory:
    if op.v != 0:
        return PluralCategory.OTHER

    i10 = op.i % 10
    i100 = op.i % 100

    if op.i == 1:
        return PluralCategory.ONE
    if 2 <= i10 <= 4 and not (12 <= i100 <= 14):
        return PluralCategory.FEW
    return PluralCategory.MANY


# English, German, Dutch, Italian, Spanish, Portuguese, Scandinavian
# One: i = 1 and v = 0
def english_cardinal(op: PluralOperands) -> PluralCategory:
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    return PluralCategory.OTHER


class CLDRPluralRules(BasePluralRuleProvider):
    """CLDR-compliant plural rule provider.

    Example:
        rules = CLDRPluralRules()

        rules.get_category(1, LocaleInfo.parse("ru"))   # ONE
        rules.get_category(2, LocaleInfo.parse("ru"))   # FEW
        rules.get_category(5, LocaleInfo.parse("ru"))   # MANY
        rules.get_category(3, LocaleInfo.parse("ru"), fraction_digits=2)  # OTHER
        rules.get_category(1, LocaleInfo.parse("en"))   # ONE
    """

    def __init__(self) -> None:
        self._cardinal_rules: dict[str, PluralRuleFunc] = {}
        self._lock = threading.Lock()
        self._register_default_rules()

    def _register_default_rules(self) -> None:
        """Register default CLDR plural rules."""
        for lang in ["ru", "uk", "be", "sr", "hr", "bs"]:
            self._cardinal_rules[lang] = slavic_cardinal

        self._cardinal_rules["pl"] = polish_cardinal

        for lang in ["en", "de", "nl", "it", "es", "pt", "sv", "da", "no", "nb", "fi"]:
            self._cardinal_rules[lang] = english_cardinal

    def register_cardinal_rule(self, language: str, rule: PluralRuleFunc) -> None:
        """Register a custom cardinal plural rule.

        Args:
            language: ISO 639-1 language code, optionally with region ("pt_BR")
            rule: Plural rule function taking PluralOperands
        """
        with self._lock:
            self._cardinal_rules = {**self._cardinal_rules, language: rule}

    def get_rule(self, locale: LocaleInfo) -> PluralRuleFunc | None:
        """Get the rule function for a locale, or None if unsupported."""
        rules = self._cardinal_rules

        if locale.region:
            key = f"{locale.language}_{locale.region}"
            if key in rules:
                return rules[key]

        return rules.get(locale.language)

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
            fraction_digits: Visible fraction digits, when known

        Returns:
            Appropriate plural category (OTHER for unsupported locales)
        """
        rule = self.get_rule(locale)
        if rule is None:
            return PluralCategory.OTHER
        return rule(PluralOperands.from_number(count, fraction_digits))

    def get_supported_languages(self) -> list[str]:
        """Get list of supported language codes."""
        return list(self._cardinal_rules.keys())


# Global instance
_plural_rules = CLDRPluralRules()


def select_plural_category(
    value: MagnitudeValue | float | int | Decimal,
    locale: str | LocaleInfo = "ru",
) -> PluralCategory:
    """Get the plural category for a parsed parameter or a plain number.

    Args:
        value: Parsed magnitude (keeps its visible fraction digits) or number
        locale: Target locale (string or LocaleInfo)

    Returns:
        Appropriate plural category

    Example:
        select_plural_category(parse_magnitude("22"))    # FEW
        select_plural_category(parse_magnitude("3.00"))  # OTHER
        select_plural_category(1, "en")                  # ONE
    """
    locale = LocaleInfo.parse(locale)

    if isinstance(value, MagnitudeValue):
        return _plural_rules.get_category(value.value, locale, value.decimal_digits)
    return _plural_rules.get_category(value, locale)


def get_plural_rules() -> CLDRPluralRules:
    """Get the global plural rules instance."""
    return _plural_rules
