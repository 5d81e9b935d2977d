"""Account domain models."""

from accountapi.models.account import Account, AccountAttributes, AccountPage
from accountapi.models.base import AccountEnvelope, AccountMetadata, Links
from accountapi.models.enums import ACCOUNT_TYPE, Country, Field

__all__ = [
    "ACCOUNT_TYPE",
    "Account",
    "AccountAttributes",
    "AccountEnvelope",
    "AccountMetadata",
    "AccountPage",
    "Country",
    "Field",
    "Links",
]
