"""Client library for the accounts REST API with per-country attribute validation."""

from accountapi.builder import AccountBuilder, new_account, validate_envelope
from accountapi.client import AccountClient
from accountapi.config import ClientConfig
from accountapi.models import (
    ACCOUNT_TYPE,
    Account,
    AccountAttributes,
    AccountEnvelope,
    AccountMetadata,
    AccountPage,
    Country,
    Links,
)
from accountapi.validation import ensure_valid, validate_attributes

__version__ = "0.1.0"

__all__ = [
    "ACCOUNT_TYPE",
    "Account",
    "AccountAttributes",
    "AccountBuilder",
    "AccountClient",
    "AccountEnvelope",
    "AccountMetadata",
    "AccountPage",
    "ClientConfig",
    "Country",
    "Links",
    "ensure_valid",
    "new_account",
    "validate_attributes",
    "validate_envelope",
]
