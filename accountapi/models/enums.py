"""Enumeration types for account entities."""

from enum import Enum

ACCOUNT_TYPE = "accounts"


class Country(str, Enum):
    """ISO 3166-1 alpha-2 codes with a rule set."""

    UNITED_KINGDOM = "GB"
    AUSTRALIA = "AU"
    BELGIUM = "BE"
    CANADA = "CA"
    FRANCE = "FR"
    GERMANY = "DE"
    GREECE = "GR"
    HONG_KONG = "HK"
    ITALY = "IT"
    LUXEMBOURG = "LU"
    NETHERLANDS = "NL"
    POLAND = "PL"
    PORTUGAL = "PT"
    SPAIN = "ES"
    SWITZERLAND = "CH"
    UNITED_STATES = "US"


class Field(str, Enum):
    """Country-dependent attribute fields, named as on the wire."""

    BANK_ID = "bank_id"
    BANK_ID_CODE = "bank_id_code"
    BIC = "bic"
    ACCOUNT_NUMBER = "account_number"
    BASE_CURRENCY = "base_currency"
