"""Locale-aware number formatting for rule parameters.

Renders a parsed parameter with exactly the fraction digits it was
written with, using the locale's decimal and grouping symbols:

    format_magnitude(parse_magnitude("1000"), "ru")   # "1 000"
    format_magnitude(parse_magnitude("3.50"), "ru")   # "3,50"
    format_magnitude(parse_magnitude("3.50"), "en")   # "3.50"
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Context, Decimal, getcontext

from fieldmsg.i18n.numbers import MagnitudeValue
from fieldmsg.i18n.protocols import LocaleInfo


@dataclass(frozen=True)
class NumberSymbols:
    """Locale-specific number symbols.

    Based on CLDR number symbols data.
    """
    decimal: str = "."
    group: str = ","
    minus: str = "-"


# Number symbols by locale
_NUMBER_SYMBOLS: dict[str, NumberSymbols] = {
    # Default (English)
    "en": NumberSymbols(),

    # East Slavic (group separator is a no-break space)
    "ru": NumberSymbols(decimal=",", group="\u00a0"),
    "uk": NumberSymbols(decimal=",", group="\u00a0"),
    "be": NumberSymbols(decimal=",", group="\u00a0"),

    # Polish, Serbian, Croatian, Bosnian
    "pl": NumberSymbols(decimal=",", group="\u00a0"),
    "sr": NumberSymbols(decimal=",", group="."),
    "hr": NumberSymbols(decimal=",", group="."),
    "bs": NumberSymbols(decimal=",", group="."),

    # German, Dutch, Italian, Spanish, Portuguese
    "de": NumberSymbols(decimal=",", group="."),
    "nl": NumberSymbols(decimal=",", group="."),
    "it": NumberSymbols(decimal=",", group="."),
    "es": NumberSymbols(decimal=",", group="."),
    "pt": NumberSymbols(decimal=",", group="."),
}


def get_number_symbols(locale: str | LocaleInfo) -> NumberSymbols:
    """Get number symbols for a locale (English symbols when unknown)."""
    locale = LocaleInfo.parse(locale)

    if locale.region:
        key = f"{locale.language}_{locale.region}"
        if key in _NUMBER_SYMBOLS:
            return _NUMBER_SYMBOLS[key]

    return _NUMBER_SYMBOLS.get(locale.language, _NUMBER_SYMBOLS["en"])


def format_magnitude(
    magnitude: MagnitudeValue,
    locale: str | LocaleInfo | NumberSymbols = "ru",
    use_grouping: bool = True,
) -> str:
    """Format a parameter with exactly ``decimal_digits`` fraction digits.

    Args:
        magnitude: Parsed parameter
        locale: Target locale, or explicit number symbols
        use_grouping: Whether to insert grouping separators

    Returns:
        Formatted number
    """
    symbols = locale if isinstance(locale, NumberSymbols) else get_number_symbols(locale)

    digits = magnitude.decimal_digits
    value = abs(magnitude.value)
    context = Context(
        prec=max(getcontext().prec, value.adjusted() + digits + 2),
        rounding=ROUND_HALF_EVEN,
    )
    rounded = value.quantize(Decimal(1).scaleb(-digits), context=context)

    int_part, _, frac_part = f"{rounded:f}".partition(".")

    if use_grouping and len(int_part) > 3:
        int_part = _apply_grouping(int_part, symbols.group)

    formatted = f"{int_part}{symbols.decimal}{frac_part}" if frac_part else int_part

    if magnitude.value < 0:
        formatted = f"{symbols.minus}{formatted}"

    return formatted


def _apply_grouping(int_part: str, group_sep: str) -> str:
    """Apply standard 3-digit grouping to an integer part."""
    groups = []
    while len(int_part) > 3:
        groups.insert(0, int_part[-3:])
        int_part = int_part[:-3]
    groups.insert(0, int_part)
    return group_sep.join(groups)
