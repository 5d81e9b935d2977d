"""Envelope and metadata models shared by account resources."""

from dataclasses import dataclass
from datetime import datetime

from accountapi.models.enums import ACCOUNT_TYPE


@dataclass(frozen=True)
class AccountEnvelope:
    """Identifying wrapper around account attributes.

    ``type`` must be the literal ``"accounts"``; ``id`` and
    ``organisation_id`` must be UUIDs.
    """

    id: str
    organisation_id: str
    type: str = ACCOUNT_TYPE


@dataclass(frozen=True)
class AccountMetadata:
    """Server-assigned fields, present only after a round trip."""

    created_on: datetime | None = None
    modified_on: datetime | None = None
    version: int = 0


@dataclass(frozen=True)
class Links:
    """Pagination and self links returned by the API."""

    self: str = ""
    first: str = ""
    last: str = ""
    next: str = ""
    prev: str = ""
