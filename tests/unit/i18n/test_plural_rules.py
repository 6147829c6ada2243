"""Tests for CLDR plural category selection.

This test suite covers:
- Plural operands built from numbers and parsed parameters
- Slavic one/few/many/other rules
- Polish and one/other rules
- Custom rule registration
"""

from decimal import Decimal

import pytest

from fieldmsg.i18n import (
    CLDRPluralRules,
    LocaleInfo,
    PluralCategory,
    PluralOperands,
    PluralRuleProvider,
    get_plural_rules,
    parse_magnitude,
    select_plural_category,
)


class TestPluralOperands:
    """Tests for PluralOperands."""

    def test_integer(self):
        """Test operands of an integer."""
        op = PluralOperands.from_number(21)
        assert op.i == 21
        assert op.v == 0
        assert op.f == 0

    def test_negative_uses_absolute_value(self):
        """Test that the sign is dropped."""
        op = PluralOperands.from_number(-3)
        assert op.n == Decimal(3)
        assert op.i == 3

    def test_decimal_keeps_trailing_zeros(self):
        """Test that Decimal("3.00") has two visible fraction digits."""
        op = PluralOperands.from_number(Decimal("3.00"))
        assert op.i == 3
        assert op.v == 2
        assert op.f == 0

    def test_float_goes_through_text(self):
        """Test that floats use their shortest text form."""
        op = PluralOperands.from_number(1.5)
        assert op.i == 1
        assert op.v == 1
        assert op.f == 5

    def test_explicit_fraction_digits(self):
        """Test overriding the visible fraction digit count."""
        op = PluralOperands.from_number(3, fraction_digits=2)
        assert op.v == 2

    def test_from_magnitude(self):
        """Test operands built from a parsed parameter."""
        op = PluralOperands.from_magnitude(parse_magnitude("12.50"))
        assert op.i == 12
        assert op.v == 2
        assert op.f == 50


class TestRussianPluralRules:
    """Tests for the Slavic four-way distinction."""

    @pytest.mark.parametrize(
        "count, expected",
        [
            (1, PluralCategory.ONE),
            (21, PluralCategory.ONE),
            (101, PluralCategory.ONE),
            (1001, PluralCategory.ONE),
            (2, PluralCategory.FEW),
            (3, PluralCategory.FEW),
            (4, PluralCategory.FEW),
            (22, PluralCategory.FEW),
            (104, PluralCategory.FEW),
            (0, PluralCategory.MANY),
            (5, PluralCategory.MANY),
            (10, PluralCategory.MANY),
            (11, PluralCategory.MANY),
            (12, PluralCategory.MANY),
            (14, PluralCategory.MANY),
            (19, PluralCategory.MANY),
            (25, PluralCategory.MANY),
            (100, PluralCategory.MANY),
            (111, PluralCategory.MANY),
            (112, PluralCategory.MANY),
        ],
    )
    def test_integer_categories(self, count, expected):
        """Test categories of integer counts."""
        assert select_plural_category(count, "ru") == expected

    @pytest.mark.parametrize("raw", ["1.5", "1.0", "2.00", "0.1", "21.0"])
    def test_visible_fraction_is_other(self, raw):
        """Test that any visible fraction digit selects OTHER."""
        assert select_plural_category(parse_magnitude(raw)) == PluralCategory.OTHER

    def test_same_value_different_digits(self):
        """Test that "3" and "3.00" select different categories."""
        assert select_plural_category(parse_magnitude("3")) == PluralCategory.FEW
        assert select_plural_category(parse_magnitude("3.00")) == PluralCategory.OTHER

    def test_negative_parameter(self):
        """Test that negative counts use the absolute integer part."""
        assert select_plural_category(parse_magnitude("-21")) == PluralCategory.ONE

    def test_large_count(self):
        """Test counts beyond machine integers."""
        assert select_plural_category(parse_magnitude("10000000000000000000001")) == PluralCategory.ONE

    @pytest.mark.parametrize("lang", ["uk", "be", "sr", "hr", "bs"])
    def test_related_languages_share_rule(self, lang):
        """Test other languages with the same rule set."""
        assert select_plural_category(2, lang) == PluralCategory.FEW
        assert select_plural_category(5, lang) == PluralCategory.MANY

    def test_locale_with_region(self):
        """Test that a region does not change the language rule."""
        assert select_plural_category(22, "ru-RU") == PluralCategory.FEW


class TestOtherLanguages:
    """Tests for non-Slavic rule sets."""

    def test_polish(self):
        """Test Polish one/few/many."""
        assert select_plural_category(1, "pl") == PluralCategory.ONE
        assert select_plural_category(22, "pl") == PluralCategory.FEW
        assert select_plural_category(21, "pl") == PluralCategory.MANY
        assert select_plural_category(5, "pl") == PluralCategory.MANY
        assert select_plural_category(Decimal("1.5"), "pl") == PluralCategory.OTHER

    def test_english(self):
        """Test English one/other."""
        assert select_plural_category(1, "en") == PluralCategory.ONE
        assert select_plural_category(2, "en") == PluralCategory.OTHER
        assert select_plural_category(Decimal("1.0"), "en") == PluralCategory.OTHER

    def test_unknown_language_is_other(self):
        """Test that unsupported languages resolve to OTHER."""
        assert select_plural_category(1, "xx") == PluralCategory.OTHER


class TestCLDRPluralRules:
    """Tests for the rule registry."""

    def setup_method(self):
        """Set up a private registry."""
        self.rules = CLDRPluralRules()

    def test_satisfies_protocol(self):
        """Test that the registry is a PluralRuleProvider."""
        assert isinstance(self.rules, PluralRuleProvider)

    def test_supported_languages(self):
        """Test listing registered languages."""
        languages = self.rules.get_supported_languages()
        assert "ru" in languages
        assert "pl" in languages
        assert "en" in languages

    def test_register_custom_rule(self):
        """Test registering a rule for a new language."""
        self.rules.register_cardinal_rule("xx", lambda op: PluralCategory.FEW)
        assert self.rules.get_category(1, LocaleInfo.parse("xx")) == PluralCategory.FEW

    def test_region_specific_rule_wins(self):
        """Test that a lang_REGION rule overrides the language rule."""
        self.rules.register_cardinal_rule("ru_XX", lambda op: PluralCategory.OTHER)
        assert self.rules.get_category(1, LocaleInfo.parse("ru-XX")) == PluralCategory.OTHER
        assert self.rules.get_category(1, LocaleInfo.parse("ru")) == PluralCategory.ONE

    def test_registration_does_not_touch_global(self):
        """Test that private registries are independent."""
        self.rules.register_cardinal_rule("xx", lambda op: PluralCategory.FEW)
        assert "xx" not in get_plural_rules().get_supported_languages()

    def test_fraction_digits_argument(self):
        """Test the explicit fraction digit argument."""
        ru = LocaleInfo.parse("ru")
        assert self.rules.get_category(3, ru) == PluralCategory.FEW
        assert self.rules.get_category(3, ru, fraction_digits=2) == PluralCategory.OTHER
