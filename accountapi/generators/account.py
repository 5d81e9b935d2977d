"""Sample account generator driven by the country rule table."""

from __future__ import annotations

from dataclasses import asdict
from typing import Iterator, Sequence

from accountapi.builder import new_account
from accountapi.generators.base import BaseGenerator
from accountapi.models.account import Account, AccountAttributes
from accountapi.models.enums import Country, Field
from accountapi.validation.rules import (
    ALPHA_PATTERN,
    COUNTRY_RULES,
    FIRST_NAME_LENGTH,
    FieldRule,
    Presence,
)

DIGITS = "0123456789"


class AccountGenerator(BaseGenerator):
    """Generate accounts whose attributes satisfy their country's rules.

    Every optional field is populated, so a generated account exercises
    the full rule set of its country. Values are derived from
    ``COUNTRY_RULES``; a new country needs no change here.
    """

    COUNTRIES = list(Country)

    # Fields the rules of other fields may depend on come first
    FIELD_ORDER = (
        Field.ACCOUNT_NUMBER,
        Field.BANK_ID,
        Field.BANK_ID_CODE,
        Field.BIC,
        Field.BASE_CURRENCY,
    )

    def generate(
        self,
        country: Country | str | None = None,
        organisation_id: str | None = None,
    ) -> Account:
        """Generate a single validated account.

        Parameters
        ----------
        country : Country | str | None
            Country of the account; random when omitted.
        organisation_id : str | None
            Owning organisation; a fresh UUID when omitted.

        Returns
        -------
        Account
            Account without server metadata.
        """
        if country is None:
            country = self.fake.random_element(self.COUNTRIES)
        attributes = self.generate_attributes(country)
        return new_account(
            account_id=self.fake.uuid4(),
            organisation_id=organisation_id or self.fake.uuid4(),
            assignments=asdict(attributes),
        )

    def generate_batch(
        self,
        count: int,
        countries: Sequence[Country | str] | None = None,
        organisation_id: str | None = None,
    ) -> Iterator[Account]:
        """Generate ``count`` accounts spread over ``countries``."""
        choices = list(countries) if countries else self.COUNTRIES
        for _ in range(count):
            yield self.generate(self.fake.random_element(choices), organisation_id)

    def generate_attributes(
        self, country: Country | str, with_account_number: bool = True
    ) -> AccountAttributes:
        """Generate rule-conforming attributes for ``country``.

        With ``with_account_number`` unset the account number stays blank,
        leaving it to the server to assign one.
        """
        country = Country(country)
        rule_set = COUNTRY_RULES[country]

        attributes = AccountAttributes(
            country=country.value,
            customer_id=self.fake.bothify("CUST-#####"),
            first_name=self._first_name(),
            alternative_bank_account_names=tuple(
                self.fake.name() for _ in range(self.fake.random_int(0, 3))
            ),
            joint_account=self.fake.pybool(),
            account_matching_opt_out=self.fake.pybool(),
        )
        for field in self.FIELD_ORDER:
            if field is Field.ACCOUNT_NUMBER and not with_account_number:
                continue
            value = self._value_for(field, rule_set.rule_for(field), attributes)
            attributes = attributes.replace(**{field.value: value})
        return attributes

    def _value_for(self, field: Field, rule: FieldRule, attributes: AccountAttributes) -> str:
        if rule.presence is Presence.FORBIDDEN:
            return ""
        if rule.value is not None:
            return rule.value
        if rule.length is None:
            raise ValueError(f"Cannot generate {field.value}: no length rule")

        length_rule = rule.length.resolve(attributes)
        if length_rule.choices:
            length = self.fake.random_element(length_rule.choices)
        else:
            length = self.fake.random_int(length_rule.minimum, length_rule.maximum)

        if field is Field.BIC:
            return self.fake.swift(length=length).upper()
        if not rule.numeric:
            raise ValueError(f"Cannot generate {field.value}: not numeric")

        value = self.fake.numerify("#" * length)
        for predicate in rule.predicates:
            if predicate.required:
                first = predicate.character
            else:
                first = self.fake.random_element([d for d in DIGITS if d != predicate.character])
            value = first + value[1:]
        return value

    def _first_name(self) -> str:
        name_from, name_to = FIRST_NAME_LENGTH
        while True:
            name = self.fake.first_name()
            if ALPHA_PATTERN.fullmatch(name) and name_from <= len(name) <= name_to:
                return name
