"""Per-country validation rules for account attributes.

Every supported country maps to a :class:`RuleSet` holding one
:class:`FieldRule` per country-dependent attribute. Rules are plain data;
:mod:`accountapi.validation.validator` evaluates them with a single
generic routine, so supporting a new country only takes a new entry in
``COUNTRY_RULES``.

Usage::

    rule_set = get_rule_set("GB")
    rule_set.bank_id.length.allows(6)   # True
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from accountapi.exceptions import (
    LeadingZeroError,
    MissingLeadingZeroError,
    ValidationError,
)
from accountapi.models.account import AccountAttributes
from accountapi.models.enums import Country, Field

# Country-independent constraints
COUNTRY_LENGTH = 2
BASE_CURRENCY_LENGTH = 3
BIC_LENGTHS = (8, 11)
FIRST_NAME_LENGTH = (2, 140)
CUSTOMER_ID_LENGTH = (5, 15)
ALTERNATIVE_NAMES_COUNT = (1, 3)
ALTERNATIVE_NAME_LENGTH = (3, 140)

BIC_PATTERN = re.compile(r"^([A-Z]{6}[A-Z0-9]{2}|[A-Z]{6}[A-Z0-9]{5})$")
NUMBER_PATTERN = re.compile(r"^[0-9]+$")
ALPHA_PATTERN = re.compile(r"^[A-Za-z]+$")


class Presence(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class LengthRule:
    """Allowed lengths: a closed range, or an explicit set of ``choices``."""

    minimum: int
    maximum: int
    choices: tuple[int, ...] = ()

    @classmethod
    def exact(cls, length: int) -> LengthRule:
        return cls(length, length)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> LengthRule:
        return cls(minimum, maximum)

    @classmethod
    def one_of(cls, *choices: int) -> LengthRule:
        return cls(min(choices), max(choices), tuple(choices))

    def allows(self, length: int) -> bool:
        if self.choices:
            return length in self.choices
        return self.minimum <= length <= self.maximum

    def resolve(self, attributes: AccountAttributes) -> LengthRule:
        return self

    def describe(self) -> dict[str, int | tuple[int, ...] | None]:
        """Keyword arguments for an :class:`InvalidLengthError`."""
        if self.choices:
            return {"choices": self.choices}
        if self.minimum == self.maximum:
            return {"must_length": self.minimum}
        return {"must_length_from": self.minimum, "must_length_to": self.maximum}


@dataclass(frozen=True)
class ConditionalLength:
    """Length that depends on whether another attribute is blank."""

    depends_on: Field
    when_blank: LengthRule
    when_present: LengthRule

    def resolve(self, attributes: AccountAttributes) -> LengthRule:
        if getattr(attributes, self.depends_on.value):
            return self.when_present
        return self.when_blank


@dataclass(frozen=True)
class FirstCharacterRule:
    """Constraint on the first character of a value.

    With ``required`` set the value must start with ``character``,
    otherwise it must not.
    """

    character: str
    required: bool

    def check(self, field: Field, value: str) -> ValidationError | None:
        starts = value.startswith(self.character)
        if self.required and not starts:
            return MissingLeadingZeroError(field.value, value)
        if not self.required and starts:
            return LeadingZeroError(field.value, value)
        return None


@dataclass(frozen=True)
class FieldRule:
    """Contract for one attribute, evaluated presence first, then length,
    format (fixed value, pattern, digits) and finally ``predicates``."""

    presence: Presence = Presence.OPTIONAL
    length: LengthRule | ConditionalLength | None = None
    value: str | None = None
    pattern: re.Pattern[str] | None = None
    numeric: bool = False
    predicates: tuple[FirstCharacterRule, ...] = ()


@dataclass(frozen=True)
class RuleSet:
    """Validation contract of a single country."""

    bank_id: FieldRule
    bank_id_code: FieldRule
    bic: FieldRule
    account_number: FieldRule
    base_currency: FieldRule

    def rule_for(self, field: Field) -> FieldRule:
        return getattr(self, field.value)

    def __iter__(self) -> Iterator[tuple[Field, FieldRule]]:
        for field in Field:
            yield field, self.rule_for(field)


# --- Rule constructors -------------------------------------------------------

MUST_START_WITH_ZERO = FirstCharacterRule("0", required=True)
MUST_NOT_START_WITH_ZERO = FirstCharacterRule("0", required=False)

BIC_REQUIRED = FieldRule(
    presence=Presence.REQUIRED,
    length=LengthRule.one_of(*BIC_LENGTHS),
    pattern=BIC_PATTERN,
)
BIC_OPTIONAL = FieldRule(
    length=LengthRule.one_of(*BIC_LENGTHS),
    pattern=BIC_PATTERN,
)
BLANK = FieldRule(presence=Presence.FORBIDDEN)


def _bank_id(
    length: LengthRule | ConditionalLength,
    presence: Presence = Presence.REQUIRED,
    predicates: tuple[FirstCharacterRule, ...] = (),
) -> FieldRule:
    return FieldRule(presence=presence, length=length, numeric=True, predicates=predicates)


def _bank_id_code(code: str, presence: Presence = Presence.REQUIRED) -> FieldRule:
    return FieldRule(presence=presence, value=code)


def _account_number(
    length: LengthRule, predicates: tuple[FirstCharacterRule, ...] = ()
) -> FieldRule:
    return FieldRule(length=length, numeric=True, predicates=predicates)


def _currency(code: str) -> FieldRule:
    return FieldRule(length=LengthRule.exact(BASE_CURRENCY_LENGTH), value=code)


_exact = LengthRule.exact
_between = LengthRule.between


COUNTRY_RULES: dict[Country, RuleSet] = {
    Country.UNITED_KINGDOM: RuleSet(
        bank_id=_bank_id(_exact(6)),
        bank_id_code=_bank_id_code("GBDSC"),
        bic=BIC_REQUIRED,
        account_number=_account_number(_exact(8)),
        base_currency=_currency("GBP"),
    ),
    Country.AUSTRALIA: RuleSet(
        bank_id=_bank_id(_exact(6), presence=Presence.OPTIONAL),
        bank_id_code=_bank_id_code("AUBSB"),
        bic=BIC_REQUIRED,
        account_number=_account_number(
            _between(6, 10), predicates=(MUST_NOT_START_WITH_ZERO,)
        ),
        base_currency=_currency("AUD"),
    ),
    Country.BELGIUM: RuleSet(
        bank_id=_bank_id(_exact(3)),
        bank_id_code=_bank_id_code("BE"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(7)),
        base_currency=_currency("EUR"),
    ),
    Country.CANADA: RuleSet(
        bank_id=_bank_id(
            _exact(9), presence=Presence.OPTIONAL, predicates=(MUST_START_WITH_ZERO,)
        ),
        bank_id_code=_bank_id_code("CACPA", presence=Presence.OPTIONAL),
        bic=BIC_REQUIRED,
        account_number=_account_number(_between(7, 12)),
        base_currency=_currency("CAD"),
    ),
    Country.FRANCE: RuleSet(
        bank_id=_bank_id(_exact(10)),
        bank_id_code=_bank_id_code("FR"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(10)),
        base_currency=_currency("EUR"),
    ),
    Country.GERMANY: RuleSet(
        bank_id=_bank_id(_exact(8)),
        bank_id_code=_bank_id_code("DEBLZ"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(7)),
        base_currency=_currency("EUR"),
    ),
    Country.GREECE: RuleSet(
        bank_id=_bank_id(_exact(7)),
        bank_id_code=_bank_id_code("GRBIC"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(16)),
        base_currency=_currency("EUR"),
    ),
    Country.HONG_KONG: RuleSet(
        bank_id=_bank_id(_exact(3), presence=Presence.OPTIONAL),
        bank_id_code=_bank_id_code("HKNCC", presence=Presence.OPTIONAL),
        bic=BIC_REQUIRED,
        account_number=_account_number(_between(9, 12)),
        base_currency=_currency("HKD"),
    ),
    Country.ITALY: RuleSet(
        bank_id=_bank_id(
            ConditionalLength(
                depends_on=Field.ACCOUNT_NUMBER,
                when_blank=_exact(10),
                when_present=_exact(11),
            )
        ),
        bank_id_code=_bank_id_code("ITNCC"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(12)),
        base_currency=_currency("EUR"),
    ),
    Country.LUXEMBOURG: RuleSet(
        bank_id=_bank_id(_exact(3)),
        bank_id_code=_bank_id_code("LULUX"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(13)),
        base_currency=_currency("EUR"),
    ),
    Country.NETHERLANDS: RuleSet(
        bank_id=BLANK,
        bank_id_code=BLANK,
        bic=BIC_REQUIRED,
        account_number=_account_number(_exact(10)),
        base_currency=_currency("EUR"),
    ),
    Country.POLAND: RuleSet(
        bank_id=_bank_id(_exact(8)),
        bank_id_code=_bank_id_code("PLKNR"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(16)),
        base_currency=_currency("PLN"),
    ),
    Country.PORTUGAL: RuleSet(
        bank_id=_bank_id(_exact(8)),
        bank_id_code=_bank_id_code("PTNCC"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(11)),
        base_currency=_currency("EUR"),
    ),
    Country.SPAIN: RuleSet(
        bank_id=_bank_id(_exact(8)),
        bank_id_code=_bank_id_code("ESNCC"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(10)),
        base_currency=_currency("EUR"),
    ),
    Country.SWITZERLAND: RuleSet(
        bank_id=_bank_id(_exact(5)),
        bank_id_code=_bank_id_code("CHBCC"),
        bic=BIC_OPTIONAL,
        account_number=_account_number(_exact(12)),
        base_currency=_currency("CHF"),
    ),
    Country.UNITED_STATES: RuleSet(
        bank_id=_bank_id(_exact(9)),
        bank_id_code=_bank_id_code("USABA"),
        bic=BIC_REQUIRED,
        account_number=_account_number(_between(6, 17)),
        base_currency=_currency("USD"),
    ),
}


def get_rule_set(country: str) -> RuleSet | None:
    """Return the rule set for an ISO country code, or None if unsupported."""
    try:
        return COUNTRY_RULES[Country(country)]
    except ValueError:
        return None
