"""Rule parameter parsing.

A rule parameter is kept as written on the rule declaration. Parsing it
yields the numeric magnitude plus the number of visible fraction digits,
counted from the text rather than from the parsed number:

    parse_magnitude("3.00")  # MagnitudeValue(value=Decimal("3.00"), decimal_digits=2)
    parse_magnitude("3")     # MagnitudeValue(value=Decimal("3"), decimal_digits=0)
    parse_magnitude("1e3")   # MagnitudeValue(value=Decimal("1E+3"), decimal_digits=0)

An exponent shifts the written fraction digits: ``"1.25e1"`` keeps one
and ``"5e-2"`` gets two.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from fieldmsg.errors import ParseError


# Decimal numerals with an optional exponent: no inf/nan, no surrounding spaces
_NUMERAL_PATTERN = re.compile(
    r"^[+-]?(?:\d+(?:\.(?P<fraction>\d*))?|\.(?P<leading>\d+))"
    r"(?:[eE](?P<exponent>[+-]?\d+))?$",
    re.ASCII,
)

# Largest decimal exponent of a finite double
_MAX_EXPONENT = 308


@dataclass(frozen=True)
class MagnitudeValue:
    """A numeric rule parameter.

    Attributes:
        value: Exact numeric value
        decimal_digits: Characters after the decimal point in the source text
    """
    value: Decimal
    decimal_digits: int = 0

    @property
    def integer_part(self) -> int:
        """Absolute integer part, the CLDR ``i`` operand."""
        return int(abs(self.value))

    @property
    def is_fractional(self) -> bool:
        """Whether the source text had visible fraction digits."""
        return self.decimal_digits > 0

    def __float__(self) -> float:
        return float(self.value)


def is_numeral(raw: str) -> bool:
    """Check whether ``raw`` is a decimal numeral, optionally with an exponent."""
    return bool(_NUMERAL_PATTERN.match(raw))


def parse_magnitude(raw: str) -> MagnitudeValue:
    """Parse a rule parameter into a magnitude.

    Args:
        raw: Parameter exactly as declared on the rule

    Returns:
        Parsed magnitude with its visible fraction digit count

    Raises:
        ParseError: If ``raw`` is not a decimal numeral (empty strings and
            field references used by cross-field rules included) or is
            outside the range of a double
    """
    match = _NUMERAL_PATTERN.match(raw) if isinstance(raw, str) else None
    if match is None:
        raise ParseError(str(raw))

    exponent_text = match.group("exponent") or "0"
    if len(exponent_text.lstrip("+-").lstrip("0")) > len(str(_MAX_EXPONENT)):
        raise ParseError(raw)

    value = Decimal(raw)
    if value and value.adjusted() > _MAX_EXPONENT:
        raise ParseError(raw)

    fraction = match.group("fraction") or match.group("leading") or ""
    return MagnitudeValue(
        value=value,
        decimal_digits=max(0, len(fraction) - int(exponent_text)),
    )
