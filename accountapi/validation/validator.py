"""Attribute validation.

Country-independent fields are checked first, then the country code is
resolved to its :class:`~accountapi.validation.rules.RuleSet` and every
country-dependent field is run through :func:`check_field`. All fields
are evaluated so one pass reports every violation.
"""

import logging
import re

from accountapi.exceptions import (
    AttributesValidationError,
    BlankFieldError,
    InvalidAccountNumberLengthError,
    InvalidAlternativeNameLengthError,
    InvalidAlternativeNamesLengthError,
    InvalidBankIDCodeError,
    InvalidBankIDLengthError,
    InvalidBaseCurrencyError,
    InvalidBaseCurrencyLengthError,
    InvalidBICError,
    InvalidBICLengthError,
    InvalidCountryError,
    InvalidCountryLengthError,
    InvalidCustomerIDLengthError,
    InvalidFirstNameError,
    InvalidFirstNameLengthError,
    InvalidFormatError,
    InvalidLengthError,
    InvalidNumberError,
    InvalidValueError,
    NotBlankFieldError,
    ValidationError,
)
from accountapi.models.account import AccountAttributes
from accountapi.models.enums import Field
from accountapi.validation.rules import (
    ALPHA_PATTERN,
    ALTERNATIVE_NAME_LENGTH,
    ALTERNATIVE_NAMES_COUNT,
    COUNTRY_LENGTH,
    CUSTOMER_ID_LENGTH,
    FIRST_NAME_LENGTH,
    NUMBER_PATTERN,
    FieldRule,
    Presence,
    get_rule_set,
)

logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

_LENGTH_ERRORS: dict[Field, type[InvalidLengthError]] = {
    Field.BANK_ID: InvalidBankIDLengthError,
    Field.BIC: InvalidBICLengthError,
    Field.ACCOUNT_NUMBER: InvalidAccountNumberLengthError,
    Field.BASE_CURRENCY: InvalidBaseCurrencyLengthError,
}

_VALUE_ERRORS: dict[Field, type[InvalidValueError]] = {
    Field.BANK_ID_CODE: InvalidBankIDCodeError,
    Field.BASE_CURRENCY: InvalidBaseCurrencyError,
}


def is_uuid(value: str) -> bool:
    """Return True if ``value`` is a canonical 8-4-4-4-12 hex UUID."""
    return bool(value) and UUID_PATTERN.fullmatch(value) is not None


def check_field(rule: FieldRule, field: Field, attributes: AccountAttributes) -> ValidationError | None:
    """Evaluate ``rule`` against one attribute.

    Order is presence, length, format (fixed value, pattern, digits), then
    predicates. The first violation is returned; None means the field is
    valid.
    """
    value: str = getattr(attributes, field.value)

    if not value:
        if rule.presence is Presence.REQUIRED:
            return BlankFieldError(field.value)
        return None
    if rule.presence is Presence.FORBIDDEN:
        return NotBlankFieldError(field.value)

    if rule.length is not None:
        length_rule = rule.length.resolve(attributes)
        if not length_rule.allows(len(value)):
            error_cls = _LENGTH_ERRORS.get(field, InvalidLengthError)
            return error_cls(len(value), field=field.value, **length_rule.describe())

    if rule.value is not None and value != rule.value:
        error_cls = _VALUE_ERRORS.get(field, InvalidValueError)
        return error_cls(rule.value, value, field=field.value)

    if rule.pattern is not None and not rule.pattern.fullmatch(value):
        if field is Field.BIC:
            return InvalidBICError(value)
        return InvalidFormatError(
            field.value, value, f"must match '{rule.pattern.pattern}' but '{value}' does not"
        )

    if rule.numeric and not NUMBER_PATTERN.fullmatch(value):
        return InvalidNumberError(field.value, value)

    for predicate in rule.predicates:
        error = predicate.check(field, value)
        if error is not None:
            return error

    return None


def _validate_common(attributes: AccountAttributes) -> list[ValidationError]:
    """Checks that apply whatever the country."""
    errors: list[ValidationError] = []

    country = attributes.country
    if not country:
        errors.append(BlankFieldError("country"))
    elif len(country) != COUNTRY_LENGTH:
        errors.append(InvalidCountryLengthError(len(country), must_length=COUNTRY_LENGTH))

    names = attributes.alternative_bank_account_names
    count_from, count_to = ALTERNATIVE_NAMES_COUNT
    if len(names) > count_to:
        errors.append(
            InvalidAlternativeNamesLengthError(
                len(names), must_length_from=count_from, must_length_to=count_to
            )
        )
    else:
        name_from, name_to = ALTERNATIVE_NAME_LENGTH
        for index, name in enumerate(names):
            if not name_from <= len(name) <= name_to:
                errors.append(
                    InvalidAlternativeNameLengthError(index, len(name), name_from, name_to)
                )

    first_name = attributes.first_name
    if first_name:
        name_from, name_to = FIRST_NAME_LENGTH
        if not name_from <= len(first_name) <= name_to:
            errors.append(
                InvalidFirstNameLengthError(
                    len(first_name), must_length_from=name_from, must_length_to=name_to
                )
            )
        elif not ALPHA_PATTERN.fullmatch(first_name):
            errors.append(InvalidFirstNameError(first_name))

    customer_id = attributes.customer_id
    if customer_id:
        id_from, id_to = CUSTOMER_ID_LENGTH
        if not id_from <= len(customer_id) <= id_to:
            errors.append(
                InvalidCustomerIDLengthError(
                    len(customer_id), must_length_from=id_from, must_length_to=id_to
                )
            )

    return errors


def validate_attributes(attributes: AccountAttributes) -> list[ValidationError]:
    """Validate attributes against the rules of their country.

    Parameters
    ----------
    attributes : AccountAttributes
        Attributes to check.

    Returns
    -------
    list[ValidationError]
        One error per violated rule; empty when the attributes are valid.
    """
    errors = _validate_common(attributes)

    country = attributes.country
    if country and len(country) == COUNTRY_LENGTH:
        rule_set = get_rule_set(country)
        if rule_set is None:
            errors.append(InvalidCountryError(country))
        else:
            for field, rule in rule_set:
                error = check_field(rule, field, attributes)
                if error is not None:
                    errors.append(error)

    if errors:
        logger.debug("Attributes for country %r failed %d rule(s)", country, len(errors))
    return errors


def ensure_valid(attributes: AccountAttributes) -> AccountAttributes:
    """Return ``attributes`` unchanged, or raise with every violation found."""
    errors = validate_attributes(attributes)
    if errors:
        raise AttributesValidationError(errors)
    return attributes
