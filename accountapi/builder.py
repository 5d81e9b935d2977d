"""Account construction from envelope fields and attribute assignments."""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Iterable, Mapping

from accountapi.exceptions import (
    BlankFieldError,
    InvalidAccountTypeError,
    InvalidUUIDError,
    ValidationError,
)
from accountapi.models.account import Account, AccountAttributes
from accountapi.models.base import AccountEnvelope
from accountapi.models.enums import ACCOUNT_TYPE
from accountapi.validation.validator import is_uuid, validate_attributes

logger = logging.getLogger(__name__)

ATTRIBUTE_NAMES = frozenset(f.name for f in fields(AccountAttributes))

Assignments = Iterable[tuple[str, Any]] | Mapping[str, Any]


def validate_envelope(envelope: AccountEnvelope) -> list[ValidationError]:
    """Check the type literal and both ids of an envelope."""
    errors: list[ValidationError] = []

    if not envelope.type:
        errors.append(BlankFieldError("type"))
    elif envelope.type != ACCOUNT_TYPE:
        errors.append(InvalidAccountTypeError(ACCOUNT_TYPE, envelope.type))

    for name in ("id", "organisation_id"):
        value = getattr(envelope, name)
        if not value:
            errors.append(BlankFieldError(name))
        elif not is_uuid(value):
            errors.append(InvalidUUIDError(name, value))

    return errors


def apply_assignments(
    assignments: Assignments, attributes: AccountAttributes | None = None
) -> AccountAttributes:
    """Apply ``(field, value)`` assignments in order; later ones win.

    Raises
    ------
    TypeError
        If an assignment names an unknown attribute.
    """
    items = assignments.items() if isinstance(assignments, Mapping) else assignments
    values: dict[str, Any] = {}
    for name, value in items:
        if name not in ATTRIBUTE_NAMES:
            raise TypeError(f"Unknown account attribute: {name!r}")
        values[name] = value
    return (attributes or AccountAttributes()).replace(**values)


def new_account(
    account_id: str,
    organisation_id: str,
    assignments: Assignments = (),
    account_type: str = ACCOUNT_TYPE,
) -> Account:
    """Build a validated account ready to be created remotely.

    Parameters
    ----------
    account_id : str
        UUID of the new account.
    organisation_id : str
        UUID of the owning organisation.
    assignments : Iterable[tuple[str, Any]] | Mapping[str, Any]
        Attribute values, applied in order.
    account_type : str
        Resource type; anything but ``"accounts"`` is rejected.

    Returns
    -------
    Account
        Account without server metadata.

    Raises
    ------
    ValidationError
        The first envelope error, else the first attribute error.
    """
    envelope = AccountEnvelope(
        id=account_id, organisation_id=organisation_id, type=account_type
    )
    attributes = apply_assignments(assignments)

    errors = validate_envelope(envelope) or validate_attributes(attributes)
    if errors:
        logger.debug("Rejected account %r: %s", account_id, errors[0])
        raise errors[0]

    return Account(envelope=envelope, attributes=attributes)


class AccountBuilder:
    """Fluent wrapper around :func:`new_account`.

    Usage::

        account = (
            AccountBuilder(account_id, organisation_id)
            .set(country="GB", bank_id="400300", bank_id_code="GBDSC")
            .set(bic="NWBKGB22")
            .build()
        )
    """

    def __init__(
        self,
        account_id: str,
        organisation_id: str,
        account_type: str = ACCOUNT_TYPE,
    ) -> None:
        self.account_id = account_id
        self.organisation_id = organisation_id
        self.account_type = account_type
        self._assignments: list[tuple[str, Any]] = []

    def set(self, **values: Any) -> AccountBuilder:
        """Queue attribute assignments."""
        return self.apply(values)

    def apply(self, assignments: Assignments) -> AccountBuilder:
        """Queue assignments given as pairs or a mapping."""
        items = assignments.items() if isinstance(assignments, Mapping) else assignments
        self._assignments.extend(items)
        return self

    def build(self) -> Account:
        return new_account(
            self.account_id,
            self.organisation_id,
            self._assignments,
            account_type=self.account_type,
        )
