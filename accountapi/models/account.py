"""Account models."""

from dataclasses import dataclass, field, replace
from typing import Any

from accountapi.models.base import AccountEnvelope, AccountMetadata, Links


@dataclass(frozen=True)
class AccountAttributes:
    """Account attributes as sent to and returned by the API.

    Country-dependent fields (bank id, bank id code, BIC, account number,
    base currency) are checked against the rule set of ``country``.
    Blank strings mean "not provided"; the server assigns an account
    number when it is blank.

    Confirmation of Payee fields:
    - alternative_bank_account_names: up to 3 alternative names
    - joint_account: set for joint accounts
    - account_matching_opt_out: set when the holder opted out of matching
    """

    country: str = ""
    base_currency: str = ""
    bank_id: str = ""
    bank_id_code: str = ""
    account_number: str = ""
    bic: str = ""
    customer_id: str = ""
    first_name: str = ""
    alternative_bank_account_names: tuple[str, ...] = ()
    joint_account: bool = False
    account_matching_opt_out: bool = False

    def __post_init__(self) -> None:
        # Accept a single name or any iterable of names; store a tuple
        names = self.alternative_bank_account_names
        if names is None:
            object.__setattr__(self, "alternative_bank_account_names", ())
        elif isinstance(names, str):
            object.__setattr__(self, "alternative_bank_account_names", (names,))
        elif not isinstance(names, tuple):
            object.__setattr__(self, "alternative_bank_account_names", tuple(names))

    def replace(self, **changes: Any) -> "AccountAttributes":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Account:
    """Bank account resource.

    Built client-side from an envelope and validated attributes; becomes
    complete once a create or fetch populates ``metadata``. The metadata
    version is the optimistic-concurrency token required by delete.
    """

    envelope: AccountEnvelope
    attributes: AccountAttributes
    metadata: AccountMetadata | None = None
    links: Links | None = None

    @property
    def id(self) -> str:
        return self.envelope.id

    @property
    def organisation_id(self) -> str:
        return self.envelope.organisation_id

    @property
    def type(self) -> str:
        return self.envelope.type

    @property
    def version(self) -> int | None:
        return self.metadata.version if self.metadata is not None else None

    @property
    def is_complete(self) -> bool:
        """True once server metadata has been populated."""
        return self.metadata is not None


@dataclass(frozen=True)
class AccountPage:
    """One page of a list response."""

    accounts: list[Account] = field(default_factory=list)
    links: Links = field(default_factory=Links)

    def __len__(self) -> int:
        return len(self.accounts)

    def __iter__(self):
        return iter(self.accounts)
