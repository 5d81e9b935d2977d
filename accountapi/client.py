"""
Account API client.

Implements create, fetch, list and delete against the accounts collection
of the remote REST API. Every call is a single round trip: there are no
retries, and transport failures (``requests.RequestException``) reach the
caller unchanged. Status codes are translated into the errors of
:mod:`accountapi.exceptions`:

  create  404 -> ResourceNotExistsError   409 -> DuplicateAccountError
  fetch   404 -> RecordNotExistsError
  list    404 -> ResourceNotExistsError
  delete  404/409 -> InvalidVersionError

Configuration:
  ACCOUNTAPI_BASE_URL  - overrides the collection URL (see ClientConfig.from_env)
  ACCOUNTAPI_TIMEOUT   - default per-request timeout in seconds
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from accountapi.config import ClientConfig
from accountapi.exceptions import (
    DuplicateAccountError,
    InvalidUUIDError,
    InvalidVersionError,
    RecordNotExistsError,
    ResourceNotExistsError,
    UnexpectedStatusError,
)
from accountapi.models.account import Account, AccountPage
from accountapi.serialization import (
    account_from_payload,
    account_to_payload,
    page_from_payload,
)
from accountapi.validation.validator import is_uuid

logger = logging.getLogger(__name__)

ACCEPT = "vnd.api+json"
CONTENT_TYPE = "application/vnd.api+json"

DEFAULT_PAGE_SIZE = 100


class AccountClient:
    """Client for the accounts resource.

    Parameters
    ----------
    config : ClientConfig | None
        Base URL and default timeout; ``ClientConfig.from_env()`` when omitted.
    session : requests.Session | None
        HTTP session to send requests through. A private session is created
        (and closed by :meth:`close`) when omitted.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ClientConfig.from_env()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def __enter__(self) -> AccountClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self._session.close()

    # ------------------------------------------------------------------

    def _headers(self, write: bool = False) -> dict:
        headers = {"Accept": ACCEPT}
        if write:
            headers["Content-Type"] = CONTENT_TYPE
        return headers

    def _account_url(self, account_id: str) -> str:
        if not is_uuid(account_id):
            raise InvalidUUIDError("id", account_id)
        return f"{self.base_url}/{account_id.lower()}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        logger.debug("%s %s params=%s", method, url, params)
        resp = self._session.request(
            method,
            url,
            params=params,
            json=json,
            headers=self._headers(write=json is not None),
            timeout=timeout if timeout is not None else self.config.timeout,
        )
        logger.debug("%s %s -> HTTP %d", method, url, resp.status_code)
        return resp

    @staticmethod
    def _check_success(resp: requests.Response, url: str) -> None:
        if not 200 <= resp.status_code < 300:
            logger.warning("Unexpected HTTP %d from %s", resp.status_code, url)
            raise UnexpectedStatusError(resp.status_code, url)

    # ------------------------------------------------------------------

    def create_account(self, account: Account, timeout: Optional[float] = None) -> Account:
        """POST ``account`` to the collection and return the stored account."""
        url = self.base_url
        resp = self._request("POST", url, json=account_to_payload(account), timeout=timeout)

        if resp.status_code == 404:
            logger.warning("Create failed, resource %s does not exist", url)
            raise ResourceNotExistsError(url)
        if resp.status_code == 409:
            logger.warning("Create failed, account %s already exists", account.id)
            raise DuplicateAccountError(account.id)
        self._check_success(resp, url)

        created = account_from_payload(resp.json())
        logger.info("Created account %s (version %s)", created.id, created.version)
        return created

    def fetch_account(self, account_id: str, timeout: Optional[float] = None) -> Account:
        """GET a single account by id."""
        url = self._account_url(account_id)
        resp = self._request("GET", url, timeout=timeout)

        if resp.status_code == 404:
            raise RecordNotExistsError(account_id)
        self._check_success(resp, url)

        return account_from_payload(resp.json())

    def list_accounts(
        self,
        page_number: int = 0,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: Optional[float] = None,
    ) -> AccountPage:
        """GET one page of the collection."""
        url = self.base_url
        params = {"page[number]": page_number, "page[size]": page_size}
        resp = self._request("GET", url, params=params, timeout=timeout)

        if resp.status_code == 404:
            logger.warning("List failed, resource %s does not exist", url)
            raise ResourceNotExistsError(url)
        self._check_success(resp, url)

        return page_from_payload(resp.json())

    def delete_account(
        self, account_id: str, version: int, timeout: Optional[float] = None
    ) -> None:
        """DELETE an account at the given version."""
        url = self._account_url(account_id)
        resp = self._request("DELETE", url, params={"version": version}, timeout=timeout)

        # The API does not distinguish a stale version from a missing record
        if resp.status_code in (404, 409):
            logger.warning(
                "Delete of %s at version %d rejected with HTTP %d",
                account_id,
                version,
                resp.status_code,
            )
            raise InvalidVersionError(version, status_code=resp.status_code)
        self._check_success(resp, url)

        logger.info("Deleted account %s (version %d)", account_id, version)
