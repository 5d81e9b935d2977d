"""Account attribute validation."""

from accountapi.validation.rules import (
    COUNTRY_RULES,
    ConditionalLength,
    FieldRule,
    FirstCharacterRule,
    LengthRule,
    Presence,
    RuleSet,
    get_rule_set,
)
from accountapi.validation.validator import (
    check_field,
    ensure_valid,
    is_uuid,
    validate_attributes,
)

__all__ = [
    "COUNTRY_RULES",
    "ConditionalLength",
    "FieldRule",
    "FirstCharacterRule",
    "LengthRule",
    "Presence",
    "RuleSet",
    "check_field",
    "ensure_valid",
    "get_rule_set",
    "is_uuid",
    "validate_attributes",
]
