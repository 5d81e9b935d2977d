"""Custom exception hierarchy for accountapi."""

from __future__ import annotations


class AccountAPIError(Exception):
    """Base exception for all accountapi errors."""


class ConfigurationError(AccountAPIError):
    """Raised when configuration is invalid or missing."""


# --- Local validation -------------------------------------------------------


class ValidationError(AccountAPIError):
    """Base class for every validation failure detected before any I/O.

    Parameters
    ----------
    field : str
        Name of the attribute or envelope field that failed.
    message : str
        Description of the violated constraint.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class BlankFieldError(ValidationError):
    """Raised when a required field is blank."""

    def __init__(self, field: str) -> None:
        super().__init__(field, "cannot be blank")


class NotBlankFieldError(ValidationError):
    """Raised when a field the country does not support is populated."""

    def __init__(self, field: str) -> None:
        super().__init__(field, "must be blank")


class InvalidLengthError(ValidationError):
    """Raised when a value's length violates its constraint.

    Exactly one of ``must_length``, ``must_length_from``/``must_length_to``
    or ``choices`` describes the expected length.
    """

    field_name = ""

    def __init__(
        self,
        length: int,
        must_length: int | None = None,
        must_length_from: int | None = None,
        must_length_to: int | None = None,
        choices: tuple[int, ...] = (),
        field: str | None = None,
    ) -> None:
        self.length = length
        self.must_length = must_length
        self.must_length_from = must_length_from
        self.must_length_to = must_length_to
        self.choices = tuple(choices)
        super().__init__(field or self.field_name, self._describe())

    def _describe(self) -> str:
        if self.must_length is not None:
            expected = f"must be {self.must_length} characters long"
        elif self.choices:
            options = " or ".join(str(c) for c in self.choices)
            expected = f"must be either {options} characters long"
        else:
            expected = (
                f"must be between {self.must_length_from} and "
                f"{self.must_length_to} characters long"
            )
        return f"{expected} but its length is {self.length}"


class InvalidCountryLengthError(InvalidLengthError):
    field_name = "country"


class InvalidBankIDLengthError(InvalidLengthError):
    field_name = "bank_id"


class InvalidBICLengthError(InvalidLengthError):
    field_name = "bic"


class InvalidAccountNumberLengthError(InvalidLengthError):
    field_name = "account_number"


class InvalidBaseCurrencyLengthError(InvalidLengthError):
    """Base currency is not an ISO 4217 three-letter code."""

    field_name = "base_currency"


class InvalidFirstNameLengthError(InvalidLengthError):
    field_name = "first_name"


class InvalidCustomerIDLengthError(InvalidLengthError):
    field_name = "customer_id"


class InvalidAlternativeNamesLengthError(InvalidLengthError):
    """Too many alternative bank account names."""

    field_name = "alternative_bank_account_names"

    def _describe(self) -> str:
        return (
            f"must be between {self.must_length_from} and {self.must_length_to} "
            f"in length but its length is {self.length}"
        )


class InvalidAlternativeNameLengthError(InvalidLengthError):
    """A single alternative bank account name has the wrong length."""

    def __init__(
        self,
        index: int,
        length: int,
        must_length_from: int,
        must_length_to: int,
    ) -> None:
        self.index = index
        super().__init__(
            length,
            must_length_from=must_length_from,
            must_length_to=must_length_to,
            field=f"alternative_bank_account_names[{index}]",
        )


class InvalidValueError(ValidationError):
    """Raised when a value differs from the single value the field accepts."""

    field_name = ""

    def __init__(self, must_value: str, value: str, field: str | None = None) -> None:
        self.must_value = must_value
        self.value = value
        super().__init__(
            field or self.field_name, f"must be '{must_value}' but it's '{value}'"
        )


class InvalidBankIDCodeError(InvalidValueError):
    field_name = "bank_id_code"


class InvalidBaseCurrencyError(InvalidValueError):
    field_name = "base_currency"


class InvalidAccountTypeError(InvalidValueError):
    field_name = "type"


class InvalidCountryError(ValidationError):
    """Raised when the country code has no rule set."""

    def __init__(self, country: str) -> None:
        self.country = country
        super().__init__("country", f"invalid country '{country}'")


class InvalidFormatError(ValidationError):
    """Raised when a value does not have the format its field requires."""

    def __init__(self, field: str, value: str, message: str) -> None:
        self.value = value
        super().__init__(field, message)


class InvalidNumberError(InvalidFormatError):
    """Raised when a numeric field holds anything but decimal digits."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(field, value, f"must be a number but '{value}' is not")


class InvalidBICError(InvalidFormatError):
    def __init__(self, bic: str) -> None:
        super().__init__("bic", bic, f"must be in a valid format but '{bic}' is not")


class InvalidFirstNameError(InvalidFormatError):
    def __init__(self, name: str) -> None:
        super().__init__(
            "first_name", name, f"must contain letters only but '{name}' does not"
        )


class LeadingZeroError(ValidationError):
    def __init__(self, field: str, value: str) -> None:
        self.value = value
        super().__init__(field, "first character cannot be '0'")


class MissingLeadingZeroError(ValidationError):
    def __init__(self, field: str, value: str) -> None:
        self.value = value
        super().__init__(field, "first character must be '0'")


class InvalidUUIDError(ValidationError):
    """Raised when an account or organisation id is not a UUID."""

    def __init__(self, field: str, value: str) -> None:
        self.value = value
        super().__init__(field, f"must be a valid UUID but '{value}' is not")


class AttributesValidationError(ValidationError):
    """Aggregate of every violation found in one validation pass."""

    def __init__(self, errors: list[ValidationError]) -> None:
        self.errors = list(errors)
        details = "; ".join(str(e) for e in self.errors)
        super().__init__("attributes", f"{len(self.errors)} invalid field(s): {details}")


# --- Remote errors ----------------------------------------------------------


class RemoteError(AccountAPIError):
    """Base class for failures derived from a response status code."""

    status_code: int | None = None


class ResourceNotExistsError(RemoteError):
    """Raised when the collection URL points to nothing on the server."""

    status_code = 404

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"resource '{resource}' does not exist")


class RecordNotExistsError(RemoteError):
    """Raised when no account exists with the requested id."""

    status_code = 404

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"record '{account_id}' does not exist")


class DuplicateAccountError(RemoteError):
    """Raised when an account with the same id already exists."""

    status_code = 409

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"duplicate account '{account_id}'")


class InvalidVersionError(RemoteError):
    """Raised when a delete names a version (or id) the server does not hold.

    The API answers a stale version and a missing record the same way, so
    both surface as this error.
    """

    status_code = 404

    def __init__(self, version: int, status_code: int = 404) -> None:
        self.version = version
        self.status_code = status_code
        super().__init__(f"invalid version '{version}'")


class UnexpectedStatusError(RemoteError):
    """Raised for any non-success status without a dedicated error."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"unexpected status {status_code} from '{url}'")
