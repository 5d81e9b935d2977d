"""Conversion between account models and JSON:API wire payloads."""

import logging
from dataclasses import fields
from datetime import datetime
from typing import Any

from accountapi.models.account import Account, AccountAttributes, AccountPage
from accountapi.models.base import AccountEnvelope, AccountMetadata, Links
from accountapi.models.enums import ACCOUNT_TYPE

logger = logging.getLogger(__name__)

_ATTRIBUTE_FIELDS = {f.name for f in fields(AccountAttributes)}
_LINK_FIELDS = {f.name for f in fields(Links)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, tuple):
        return [serialize_value(v) for v in value]
    elif isinstance(value, datetime):
        return value.isoformat()
    return value


def attributes_to_dict(attributes: AccountAttributes) -> dict[str, Any]:
    """Convert attributes to a wire dict, dropping blank and false values."""
    result = {}
    for f in fields(attributes):
        value = getattr(attributes, f.name)
        if value in ("", False, (), None):
            continue
        result[f.name] = serialize_value(value)
    return result


def account_to_payload(account: Account) -> dict[str, Any]:
    """Build the request body used to create ``account``."""
    return {
        "data": {
            "type": account.type,
            "id": account.id,
            "organisation_id": account.organisation_id,
            "attributes": attributes_to_dict(account.attributes),
        }
    }


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def attributes_from_dict(data: dict[str, Any] | None) -> AccountAttributes:
    """Build attributes from a wire dict, ignoring unknown keys."""
    data = data or {}
    unknown = set(data) - _ATTRIBUTE_FIELDS
    if unknown:
        logger.debug("Ignoring unknown attributes: %s", ", ".join(sorted(unknown)))
    known = {k: v for k, v in data.items() if k in _ATTRIBUTE_FIELDS and v is not None}
    if "alternative_bank_account_names" in known:
        known["alternative_bank_account_names"] = tuple(known["alternative_bank_account_names"])
    return AccountAttributes(**known)


def links_from_dict(data: dict[str, Any] | None) -> Links:
    data = data or {}
    return Links(**{k: v for k, v in data.items() if k in _LINK_FIELDS and v})


def account_from_data(data: dict[str, Any], links: Links | None = None) -> Account:
    """Build an account from the ``data`` member of a response."""
    envelope = AccountEnvelope(
        id=data.get("id", ""),
        organisation_id=data.get("organisation_id", ""),
        type=data.get("type", ACCOUNT_TYPE),
    )
    metadata = AccountMetadata(
        created_on=parse_timestamp(data.get("created_on")),
        modified_on=parse_timestamp(data.get("modified_on")),
        version=int(data.get("version") or 0),
    )
    return Account(
        envelope=envelope,
        attributes=attributes_from_dict(data.get("attributes")),
        metadata=metadata,
        links=links,
    )


def account_from_payload(payload: dict[str, Any]) -> Account:
    """Build an account from a create or fetch response body."""
    links = links_from_dict(payload.get("links")) if payload.get("links") else None
    return account_from_data(payload.get("data") or {}, links=links)


def page_from_payload(payload: dict[str, Any]) -> AccountPage:
    """Build a page of accounts from a list response body."""
    return AccountPage(
        accounts=[account_from_data(item) for item in payload.get("data") or []],
        links=links_from_dict(payload.get("links")),
    )
