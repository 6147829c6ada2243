"""Internationalization for field-validation messages.

Core Features:
- CLDR cardinal plural rules (Slavic one/few/many/other and one/other)
- Rule parameter parsing that keeps the written fraction digits
- Locale-aware number symbols (decimal comma, no-break space grouping)
- Immutable template catalogs with a Russian seed catalog

Example:
    from fieldmsg.i18n import get_catalog, parse_magnitude, select_plural_category

    select_plural_category(parse_magnitude("22"))  # PluralCategory.FEW
    get_catalog("ru").sentence("required")         # "{0} обязательное поле"
"""

# Protocols
from fieldmsg.i18n.protocols import (
    PluralCategory,
    LocaleInfo,
    PluralRuleProvider,
    BasePluralRuleProvider,
)

# Plural rules
from fieldmsg.i18n.plural import (
    PluralOperands,
    CLDRPluralRules,
    select_plural_category,
    get_plural_rules,
)

# Numbers
from fieldmsg.i18n.numbers import (
    MagnitudeValue,
    is_numeral,
    parse_magnitude,
)
from fieldmsg.i18n.formatting import (
    NumberSymbols,
    get_number_symbols,
    format_magnitude,
)

# Catalogs
from fieldmsg.i18n.catalogs import (
    RuleSpec,
    TemplateCatalog,
    CatalogBuilder,
    get_catalog,
    get_supported_locales,
)
from fieldmsg.i18n.ru import get_russian_catalog

__all__ = [
    # Protocols
    "PluralCategory",
    "LocaleInfo",
    "PluralRuleProvider",
    "BasePluralRuleProvider",
    # Plural rules
    "PluralOperands",
    "CLDRPluralRules",
    "select_plural_category",
    "get_plural_rules",
    # Numbers
    "MagnitudeValue",
    "is_numeral",
    "parse_magnitude",
    "NumberSymbols",
    "get_number_symbols",
    "format_magnitude",
    # Catalogs
    "RuleSpec",
    "TemplateCatalog",
    "CatalogBuilder",
    "get_catalog",
    "get_supported_locales",
    "get_russian_catalog",
]
