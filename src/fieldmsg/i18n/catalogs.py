"""Message template catalogs for field-validation failures.

A catalog maps a rule and the kind family of the invalid value to a
sentence template, and for count-bearing rules also maps the plural
category to a unit template carrying the number and the inflected noun.
Placeholders are positional: ``{0}`` is the field's display name and
``{1}`` the parameter (or the composed "<number> <noun>" fragment).

Catalogs are immutable once built and safe to share between threads.

Example:
    catalog = (
        TemplateCatalog.builder("ru")
        .add_scalar("required", "{0} обязательное поле")
        .add_magnitude(
            "min",
            sentences={
                KindFamily.STRING: "Поле {0} должно содержать минимум {1}",
                KindFamily.NUMBER: "Поле {0} должно быть больше или равно {1}",
            },
            units={KindFamily.STRING: {
                PluralCategory.ONE: "{0} символ",
                PluralCategory.FEW: "{0} символа",
                PluralCategory.MANY: "{0} символов",
                PluralCategory.OTHER: "{0} символы",
            }},
        )
        .add_field_label("Title", "Название")
        .build()
    )

    catalog.sentence("min", KindFamily.STRING)
    catalog.unit("min", KindFamily.STRING, PluralCategory.FEW)  # "{0} символа"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from fieldmsg.errors import CatalogValidationError, MissingTemplateError
from fieldmsg.i18n.protocols import LocaleInfo, PluralCategory
from fieldmsg.types import KindFamily, RuleFamily, ValueKind

logger = logging.getLogger(__name__)


SentenceKey = tuple[str, KindFamily | None]
UnitKey = tuple[str, KindFamily, PluralCategory]


@dataclass(frozen=True)
class RuleSpec:
    """How one rule's message is assembled.

    Attributes:
        rule: Rule identifier
        family: Scalar or magnitude
        kinds: Kind families a magnitude rule has templates for
        default_family: Family used for values of no specific kind
    """
    rule: str
    family: RuleFamily = RuleFamily.SCALAR
    kinds: frozenset[KindFamily] = frozenset()
    default_family: KindFamily | None = None

    def supports(self, kind: KindFamily | None) -> bool:
        """Check whether the rule has a template variant for ``kind``."""
        return kind is not None and kind in self.kinds

    def family_for(self, kind: ValueKind) -> KindFamily | None:
        """Get the template family for a value kind.

        Kinds without a family of their own (OTHER) use ``default_family``.
        Returns None when the rule has no variant for the kind.
        """
        family = kind.family if kind.family is not None else self.default_family
        return family if self.supports(family) else None


@dataclass(frozen=True)
class TemplateCatalog:
    """Immutable collection of message templates for one locale."""

    locale: str
    rules: Mapping[str, RuleSpec] = field(default_factory=dict)
    sentences: Mapping[SentenceKey, str] = field(default_factory=dict)
    units: Mapping[UnitKey, str] = field(default_factory=dict)
    field_labels: Mapping[str, str] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze copies so callers cannot mutate a shared catalog
        for name in ("rules", "sentences", "units", "field_labels", "metadata"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def rule_spec(self, rule: str) -> RuleSpec:
        """Get the rule definition.

        Raises:
            MissingTemplateError: If the rule is not registered
        """
        try:
            return self.rules[rule]
        except KeyError:
            raise MissingTemplateError((rule,)) from None

    def rule_family(self, rule: str) -> RuleFamily:
        """Get the family a rule belongs to."""
        return self.rule_spec(rule).family

    def supported_families(self, rule: str) -> frozenset[KindFamily]:
        """Get the kind families a magnitude rule has templates for."""
        return self.rule_spec(rule).kinds

    def sentence(self, rule: str, family: KindFamily | None = None) -> str:
        """Get the sentence template for a rule.

        Args:
            rule: Rule identifier
            family: Kind family (None for scalar rules)

        Raises:
            MissingTemplateError: If no template is registered
        """
        key = (rule, family)
        try:
            return self.sentences[key]
        except KeyError:
            raise MissingTemplateError(key) from None

    def unit(self, rule: str, family: KindFamily, category: PluralCategory) -> str:
        """Get the unit template for a count-bearing rule.

        Raises:
            MissingTemplateError: If no template is registered
        """
        key = (rule, family, category)
        try:
            return self.units[key]
        except KeyError:
            raise MissingTemplateError(key) from None

    def field_label(self, name: str) -> str:
        """Get the display label for a field, or the name itself."""
        return self.field_labels.get(name) or name

    def __contains__(self, rule: object) -> bool:
        return rule in self.rules

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def template_count(self) -> int:
        """Number of sentence and unit templates."""
        return len(self.sentences) + len(self.units)

    def __iter__(self) -> Iterator[str]:
        return iter(self.rules)

    # -------------------------------------------------------------------------
    # Integrity
    # -------------------------------------------------------------------------

    def required_keys(self) -> Iterator[SentenceKey | UnitKey]:
        """Yield every template key the rule table claims to support."""
        for rule, spec in self.rules.items():
            if spec.family is RuleFamily.SCALAR:
                yield (rule, None)
                continue
            for family in sorted(spec.kinds, key=lambda k: k.value):
                yield (rule, family)
                if family.counts_units:
                    for category in PluralCategory:
                        yield (rule, family, category)

    def missing_keys(self) -> list[SentenceKey | UnitKey]:
        """List required template keys without a template."""
        missing = []
        for key in self.required_keys():
            table: Mapping[Any, str] = self.units if len(key) == 3 else self.sentences
            if not table.get(key):
                missing.append(key)
        return missing

    def verify(self) -> "TemplateCatalog":
        """Check that every claimed rule/kind/category has a template.

        Returns:
            Self, for chaining

        Raises:
            CatalogValidationError: Listing every missing key
        """
        missing = self.missing_keys()
        if missing:
            raise CatalogValidationError(missing)
        return self

    # -------------------------------------------------------------------------
    # Derivation and conversion
    # -------------------------------------------------------------------------

    def with_field_labels(self, labels: Mapping[str, str]) -> "TemplateCatalog":
        """Create a new catalog with extra field labels (``labels`` wins)."""
        return TemplateCatalog(
            locale=self.locale,
            rules=self.rules,
            sentences=self.sentences,
            units=self.units,
            field_labels={**self.field_labels, **labels},
            metadata=self.metadata,
        )

    def to_rows(self) -> list[dict[str, Any]]:
        """Convert templates to ``{rule, family, category, template, default}`` rows.

        ``default`` marks the sentence used for values of no specific kind.
        """
        rows: list[dict[str, Any]] = []
        for (rule, family), template in self.sentences.items():
            spec = self.rules.get(rule)
            rows.append({
                "rule": rule,
                "family": family.value if family else None,
                "category": None,
                "template": template,
                "default": family is not None and spec is not None and spec.default_family is family,
            })
        for (rule, family, category), template in self.units.items():
            rows.append({
                "rule": rule,
                "family": family.value,
                "category": category.value,
                "template": template,
                "default": False,
            })
        return rows

    @classmethod
    def from_rows(
        cls,
        locale: str,
        rows: Iterable[Mapping[str, Any]],
        field_labels: Mapping[str, str] | None = None,
    ) -> "TemplateCatalog":
        """Create a catalog from ``{rule, family, category, template}`` rows.

        Rows without a family register scalar rules; rows with a family
        register that variant of a magnitude rule. A truthy ``default``
        makes the variant the one used for values of no specific kind.
        """
        builder = CatalogBuilder(locale)
        for row in rows:
            rule = row["rule"]
            family = KindFamily(row["family"]) if row.get("family") else None
            category = row.get("category")
            template = row["template"]

            if family is None:
                builder.add_scalar(rule, template)
            elif category:
                builder.add_unit(rule, family, PluralCategory.parse(category), template)
            else:
                builder.add_magnitude(
                    rule,
                    sentences={family: template},
                    default_family=family if row.get("default") else None,
                )

        if field_labels:
            builder.add_field_labels(field_labels)
        return builder.build()

    @classmethod
    def builder(cls, locale: str) -> "CatalogBuilder":
        """Create a catalog builder."""
        return CatalogBuilder(locale)


class CatalogBuilder:
    """Fluent builder for TemplateCatalog."""

    def __init__(self, locale: str) -> None:
        self._locale = locale
        self._rules: dict[str, RuleSpec] = {}
        self._sentences: dict[SentenceKey, str] = {}
        self._units: dict[UnitKey, str] = {}
        self._field_labels: dict[str, str] = {}
        self._metadata: dict[str, Any] = {}

    def add_scalar(self, rule: str, template: str) -> "CatalogBuilder":
        """Add a rule rendered from the field name and raw parameter.

        Args:
            rule: Rule identifier
            template: Sentence with ``{0}`` (field) and optionally ``{1}`` (param)

        Returns:
            Self for chaining
        """
        self._rules[rule] = RuleSpec(rule, RuleFamily.SCALAR)
        self._sentences[(rule, None)] = template
        return self

    def add_scalars(self, templates: Mapping[str, str]) -> "CatalogBuilder":
        """Add several scalar rules at once."""
        for rule, template in templates.items():
            self.add_scalar(rule, template)
        return self

    def add_magnitude(
        self,
        rule: str,
        sentences: Mapping[KindFamily, str],
        units: Mapping[KindFamily, Mapping[PluralCategory, str]] | None = None,
        default_family: KindFamily | None = None,
    ) -> "CatalogBuilder":
        """Add (or extend) a count-bearing rule.

        Args:
            rule: Rule identifier
            sentences: Sentence template per kind family
            units: Unit templates per kind family and plural category,
                required for the STRING and ITEMS families
            default_family: Family rendered for values of no specific kind
                (None rejects them)

        Returns:
            Self for chaining
        """
        existing = self._rules.get(rule)
        if existing is None or existing.family is not RuleFamily.MAGNITUDE:
            existing = RuleSpec(rule, RuleFamily.MAGNITUDE)
        self._rules[rule] = RuleSpec(
            rule,
            RuleFamily.MAGNITUDE,
            existing.kinds | frozenset(sentences),
            default_family or existing.default_family,
        )

        for family, template in sentences.items():
            self._sentences[(rule, family)] = template
        for family, forms in (units or {}).items():
            self.add_units(rule, family, forms)
        return self

    def add_units(
        self,
        rule: str,
        family: KindFamily,
        forms: Mapping[PluralCategory, str],
    ) -> "CatalogBuilder":
        """Add the unit templates of one kind family."""
        for category, template in forms.items():
            self.add_unit(rule, family, category, template)
        return self

    def add_unit(
        self,
        rule: str,
        family: KindFamily,
        category: PluralCategory,
        template: str,
    ) -> "CatalogBuilder":
        """Add one pluralized unit template."""
        self._units[(rule, family, category)] = template
        return self

    def add_field_label(self, name: str, label: str) -> "CatalogBuilder":
        """Add a display label for a field identifier."""
        self._field_labels[name] = label
        return self

    def add_field_labels(self, labels: Mapping[str, str]) -> "CatalogBuilder":
        """Add several field labels at once."""
        self._field_labels.update(labels)
        return self

    def with_metadata(self, **metadata: Any) -> "CatalogBuilder":
        """Add metadata."""
        self._metadata.update(metadata)
        return self

    def build(self) -> TemplateCatalog:
        """Build the catalog."""
        catalog = TemplateCatalog(
            locale=self._locale,
            rules=self._rules,
            sentences=self._sentences,
            units=self._units,
            field_labels=self._field_labels,
            metadata=self._metadata,
        )
        logger.debug(
            "Built %s catalog: %d rules, %d sentences, %d units, %d field labels",
            self._locale,
            len(self._rules),
            len(self._sentences),
            len(self._units),
            len(self._field_labels),
        )
        return catalog


# Seed catalogs by locale
def get_catalog(locale: str) -> TemplateCatalog:
    """Get the seed catalog for a locale.

    Raises:
        KeyError: If no seed catalog exists for the locale
    """
    from fieldmsg.i18n.ru import get_russian_catalog

    if LocaleInfo.parse(locale).language != "ru":
        raise KeyError(f"No message catalog for locale: {locale}")
    return get_russian_catalog()


def get_supported_locales() -> list[str]:
    """Get locales that ship a seed catalog."""
    return ["ru"]
