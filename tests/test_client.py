"""Tests for the account API client."""

from typing import Any, Callable
from unittest.mock import MagicMock, patch

import pytest
import requests

from accountapi.builder import new_account
from accountapi.client import ACCEPT, CONTENT_TYPE, AccountClient
from accountapi.config import ClientConfig
from accountapi.exceptions import (
    DuplicateAccountError,
    InvalidUUIDError,
    InvalidVersionError,
    RecordNotExistsError,
    ResourceNotExistsError,
    UnexpectedStatusError,
)
from accountapi.models import Account
from accountapi.serialization import account_to_payload

Assignments = list[tuple[str, Any]]
Respond = Callable[..., requests.Response]


@pytest.fixture
def session() -> MagicMock:
    return MagicMock(spec=requests.Session)


@pytest.fixture
def mock_client(session: MagicMock, base_url: str) -> AccountClient:
    return AccountClient(ClientConfig(base_url=base_url, timeout=2.5), session=session)


@pytest.fixture
def account(account_id: str, organisation_id: str, gb_assignments: Assignments) -> Account:
    return new_account(account_id, organisation_id, gb_assignments)


def _stored(account: Account, version: int = 0) -> dict:
    data = account_to_payload(account)["data"]
    timestamp = "2026-10-19T10:00:00.000Z"
    data.update(version=version, created_on=timestamp, modified_on=timestamp)
    return {"data": data}


class TestCreateAccount:
    """Tests for create_account against a mocked session."""

    def test_request(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account: Account
    ) -> None:
        session.request.return_value = respond(201, _stored(account))

        created = mock_client.create_account(account)

        session.request.assert_called_once_with(
            "POST",
            mock_client.base_url,
            params=None,
            json=account_to_payload(account),
            headers={"Accept": ACCEPT, "Content-Type": CONTENT_TYPE},
            timeout=2.5,
        )
        assert created.is_complete
        assert created.version == 0
        assert created.attributes == account.attributes

    def test_not_found(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account: Account
    ) -> None:
        session.request.return_value = respond(404, {"error_message": "nope"})
        with pytest.raises(ResourceNotExistsError) as exc_info:
            mock_client.create_account(account)
        assert exc_info.value.resource == mock_client.base_url

    def test_duplicate(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account: Account
    ) -> None:
        session.request.return_value = respond(409, {"error_message": "duplicate"})
        with pytest.raises(DuplicateAccountError) as exc_info:
            mock_client.create_account(account)
        assert exc_info.value.account_id == account.id

    def test_server_error(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account: Account
    ) -> None:
        session.request.return_value = respond(500, {"error_message": "boom"})
        with pytest.raises(UnexpectedStatusError) as exc_info:
            mock_client.create_account(account)
        assert exc_info.value.status_code == 500

    def test_per_call_timeout(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account: Account
    ) -> None:
        session.request.return_value = respond(201, _stored(account))
        mock_client.create_account(account, timeout=0.5)
        assert session.request.call_args.kwargs["timeout"] == 0.5

    def test_transport_error_propagates(
        self, mock_client: AccountClient, session: MagicMock, account: Account
    ) -> None:
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(requests.ConnectionError):
            mock_client.create_account(account)
        assert session.request.call_count == 1


class TestFetchAccount:
    """Tests for fetch_account against a mocked session."""

    def test_request(
        self,
        mock_client: AccountClient,
        session: MagicMock,
        respond: Respond,
        account: Account,
        account_id: str,
    ) -> None:
        session.request.return_value = respond(200, _stored(account, version=2))

        fetched = mock_client.fetch_account(account_id.upper())

        session.request.assert_called_once_with(
            "GET",
            f"{mock_client.base_url}/{account_id}",
            params=None,
            json=None,
            headers={"Accept": ACCEPT},
            timeout=2.5,
        )
        assert fetched.version == 2
        assert fetched.id == account_id

    def test_not_found(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account_id: str
    ) -> None:
        session.request.return_value = respond(404, {"error_message": "missing"})
        with pytest.raises(RecordNotExistsError) as exc_info:
            mock_client.fetch_account(account_id)
        assert exc_info.value.account_id == account_id

    def test_invalid_id_sends_nothing(self, mock_client: AccountClient, session: MagicMock) -> None:
        with pytest.raises(InvalidUUIDError):
            mock_client.fetch_account("not-a-uuid")
        session.request.assert_not_called()

    def test_trailing_newline_id_sends_nothing(
        self, mock_client: AccountClient, session: MagicMock, account_id: str
    ) -> None:
        with pytest.raises(InvalidUUIDError):
            mock_client.fetch_account(account_id + "\n")
        session.request.assert_not_called()

    def test_timeout_propagates(self, mock_client: AccountClient, session: MagicMock, account_id: str) -> None:
        session.request.side_effect = requests.Timeout("slow")
        with pytest.raises(requests.Timeout):
            mock_client.fetch_account(account_id)


class TestListAccounts:
    """Tests for list_accounts against a mocked session."""

    def test_request(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account: Account
    ) -> None:
        session.request.return_value = respond(
            200, {"data": [_stored(account)["data"]], "links": {"self": "/self"}}
        )

        page = mock_client.list_accounts(page_number=2, page_size=10)

        session.request.assert_called_once_with(
            "GET",
            mock_client.base_url,
            params={"page[number]": 2, "page[size]": 10},
            json=None,
            headers={"Accept": ACCEPT},
            timeout=2.5,
        )
        assert len(page) == 1
        assert page.links.self == "/self"

    def test_not_found(self, mock_client: AccountClient, session: MagicMock, respond: Respond) -> None:
        session.request.return_value = respond(404, None)
        with pytest.raises(ResourceNotExistsError):
            mock_client.list_accounts()


class TestDeleteAccount:
    """Tests for delete_account against a mocked session."""

    def test_request(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account_id: str
    ) -> None:
        session.request.return_value = respond(204, None)

        assert mock_client.delete_account(account_id, 0) is None

        session.request.assert_called_once_with(
            "DELETE",
            f"{mock_client.base_url}/{account_id}",
            params={"version": 0},
            json=None,
            headers={"Accept": ACCEPT},
            timeout=2.5,
        )

    @pytest.mark.parametrize("status", [404, 409])
    def test_invalid_version(
        self,
        mock_client: AccountClient,
        session: MagicMock,
        respond: Respond,
        account_id: str,
        status: int,
    ) -> None:
        session.request.return_value = respond(status, None)
        with pytest.raises(InvalidVersionError) as exc_info:
            mock_client.delete_account(account_id, 7)
        assert exc_info.value.version == 7
        assert exc_info.value.status_code == status

    def test_server_error(
        self, mock_client: AccountClient, session: MagicMock, respond: Respond, account_id: str
    ) -> None:
        session.request.return_value = respond(503, None)
        with pytest.raises(UnexpectedStatusError):
            mock_client.delete_account(account_id, 0)

    def test_invalid_id_sends_nothing(self, mock_client: AccountClient, session: MagicMock) -> None:
        with pytest.raises(InvalidUUIDError):
            mock_client.delete_account("123", 0)
        session.request.assert_not_called()


class TestClientLifecycle:
    """Tests for configuration and session ownership."""

    def test_config_from_env(self) -> None:
        env = {"ACCOUNTAPI_BASE_URL": "http://api:8080/v1/organisation/accounts/"}
        with patch.dict("os.environ", env):
            client = AccountClient(session=MagicMock(spec=requests.Session))
        assert client.base_url == "http://api:8080/v1/organisation/accounts"

    def test_closes_own_session(self, base_url: str) -> None:
        with patch("accountapi.client.requests.Session") as session_cls:
            with AccountClient(ClientConfig(base_url=base_url)):
                pass
        session_cls.return_value.close.assert_called_once()

    def test_keeps_injected_session_open(self, session: MagicMock, base_url: str) -> None:
        with AccountClient(ClientConfig(base_url=base_url), session=session):
            pass
        session.close.assert_not_called()


class TestAccountLifecycle:
    """End-to-end scenarios against the in-memory service."""

    def test_create_then_fetch(self, client: AccountClient, account: Account) -> None:
        created = client.create_account(account)
        fetched = client.fetch_account(account.id)

        assert created.is_complete
        assert fetched.attributes == account.attributes
        assert fetched.version == created.version == 0
        assert fetched.metadata.created_on is not None

    def test_duplicate_create(self, client: AccountClient, account: Account) -> None:
        client.create_account(account)
        with pytest.raises(DuplicateAccountError):
            client.create_account(account)

    def test_delete_then_delete_again(self, client: AccountClient, account: Account) -> None:
        created = client.create_account(account)

        client.delete_account(created.id, created.version)
        with pytest.raises(RecordNotExistsError):
            client.fetch_account(created.id)
        with pytest.raises(InvalidVersionError):
            client.delete_account(created.id, created.version)

    def test_delete_stale_version(self, client: AccountClient, account: Account) -> None:
        created = client.create_account(account)
        with pytest.raises(InvalidVersionError):
            client.delete_account(created.id, created.version + 1)
        assert client.fetch_account(created.id).id == created.id

    def test_fetch_missing(self, client: AccountClient, account_id: str) -> None:
        with pytest.raises(RecordNotExistsError):
            client.fetch_account(account_id)

    def test_list_pages(
        self, client: AccountClient, organisation_id: str, gb_assignments: Assignments
    ) -> None:
        ids = [
            "a0000000-0000-4000-8000-000000000001",
            "a0000000-0000-4000-8000-000000000002",
            "a0000000-0000-4000-8000-000000000003",
        ]
        for account_id in ids:
            client.create_account(new_account(account_id, organisation_id, gb_assignments))

        first = client.list_accounts(page_number=0, page_size=2)
        second = client.list_accounts(page_number=1, page_size=2)

        assert [a.id for a in first] == ids[:2]
        assert [a.id for a in second] == ids[2:]
        assert first.links.next
        assert not first.links.prev
        assert second.links.prev
        assert not second.links.next

    def test_unknown_resource(self, fake_service: Any, account: Account) -> None:
        client = AccountClient(
            ClientConfig(base_url="http://accountapi.test/v1/organisation/acounts"),
            session=fake_service,
        )
        with pytest.raises(ResourceNotExistsError):
            client.create_account(account)
        with pytest.raises(ResourceNotExistsError):
            client.list_accounts()
        assert fake_service.records == {}
