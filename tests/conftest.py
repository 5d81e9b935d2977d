"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable

import pytest
import requests

from accountapi.config import ClientConfig
from accountapi.client import AccountClient
from accountapi.models import AccountAttributes

BASE_URL = "http://accountapi.test/v1/organisation/accounts"
TIMESTAMP = "2026-10-19T10:00:00.000Z"

# Maximally-populated, rule-conforming country-dependent fields
VALID_FIELDS: dict[str, dict[str, str]] = {
    "GB": dict(bank_id="400300", bank_id_code="GBDSC", bic="NWBKGB22",
               account_number="41426819", base_currency="GBP"),
    "AU": dict(bank_id="123456", bank_id_code="AUBSB", bic="WPACAU2S",
               account_number="123456789", base_currency="AUD"),
    "BE": dict(bank_id="123", bank_id_code="BE", bic="GEBABEBB",
               account_number="1234567", base_currency="EUR"),
    "CA": dict(bank_id="012345678", bank_id_code="CACPA", bic="ROYCCAT2",
               account_number="1234567", base_currency="CAD"),
    "FR": dict(bank_id="2004101005", bank_id_code="FR", bic="BNPAFRPP",
               account_number="0500013102", base_currency="EUR"),
    "DE": dict(bank_id="37040044", bank_id_code="DEBLZ", bic="COBADEFF",
               account_number="0532013", base_currency="EUR"),
    "GR": dict(bank_id="0110125", bank_id_code="GRBIC", bic="ETHNGRAA",
               account_number="0000000012300695", base_currency="EUR"),
    "HK": dict(bank_id="004", bank_id_code="HKNCC", bic="HSBCHKHHHKH",
               account_number="123456789", base_currency="HKD"),
    "IT": dict(bank_id="05428110101", bank_id_code="ITNCC", bic="BCITITMM",
               account_number="000000123456", base_currency="EUR"),
    "LU": dict(bank_id="001", bank_id_code="LULUX", bic="BCEELULL",
               account_number="9400644750000", base_currency="EUR"),
    "NL": dict(bank_id="", bank_id_code="", bic="ABNANL2A",
               account_number="0417164300", base_currency="EUR"),
    "PL": dict(bank_id="10901014", bank_id_code="PLKNR", bic="WBKPPLPP",
               account_number="0000000012345678", base_currency="PLN"),
    "PT": dict(bank_id="00020123", bank_id_code="PTNCC", bic="BESCPTPL",
               account_number="12345678901", base_currency="EUR"),
    "ES": dict(bank_id="21000418", bank_id_code="ESNCC", bic="CAIXESBB",
               account_number="0200051332", base_currency="EUR"),
    "CH": dict(bank_id="00762", bank_id_code="CHBCC", bic="UBSWCHZH",
               account_number="011623852957", base_currency="CHF"),
    "US": dict(bank_id="021000021", bank_id_code="USABA", bic="CHASUS33",
               account_number="123456789", base_currency="USD"),
}


def make_response(
    status_code: int, payload: Any = None, url: str = BASE_URL
) -> requests.Response:
    """Build a real ``requests.Response`` carrying a JSON body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(payload).encode() if payload is not None else b""
    resp.headers["Content-Type"] = "application/vnd.api+json"
    resp.encoding = "utf-8"
    resp.url = url
    return resp


class FakeAccountService:
    """In-memory accounts API, usable wherever a ``requests.Session`` is.

    Mirrors the remote service: 409 on duplicate ids, 404 on unknown
    paths and missing records, and 404 when deleting with a version
    that does not match the stored one.
    """

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url
        self.records: dict[str, dict] = {}
        self.calls: list[tuple[str, str]] = []

    def request(
        self,
        method: str,
        url: str,
        params: dict | None = None,
        json: dict | None = None,
        headers: dict | None = None,
        timeout: float | None = None,
    ) -> requests.Response:
        self.calls.append((method, url))
        params = params or {}
        if url == self.base_url:
            if method == "POST":
                return self._create(json or {})
            if method == "GET":
                return self._list(int(params.get("page[number]", 0)), int(params.get("page[size]", 100)))
        elif url.startswith(self.base_url + "/"):
            account_id = url[len(self.base_url) + 1:]
            if method == "GET":
                return self._fetch(account_id, url)
            if method == "DELETE":
                return self._delete(account_id, int(params.get("version", -1)), url)
        return make_response(404, {"error_message": "not found"}, url)

    def close(self) -> None:
        pass

    def _self_link(self, account_id: str) -> dict:
        return {"self": f"/v1/organisation/accounts/{account_id}"}

    def _create(self, body: dict) -> requests.Response:
        data = dict(body["data"])
        if data["id"] in self.records:
            return make_response(409, {"error_message": "Account cannot be created as it violates a duplicate constraint"})
        data.update(created_on=TIMESTAMP, modified_on=TIMESTAMP, version=0)
        self.records[data["id"]] = data
        return make_response(201, {"data": data, "links": self._self_link(data["id"])})

    def _fetch(self, account_id: str, url: str) -> requests.Response:
        if account_id not in self.records:
            return make_response(404, {"error_message": f"record {account_id} does not exist"}, url)
        return make_response(200, {"data": self.records[account_id], "links": self._self_link(account_id)}, url)

    def _list(self, number: int, size: int) -> requests.Response:
        items = list(self.records.values())
        last = max((len(items) - 1) // size, 0)

        def page(n: int) -> str:
            return f"/v1/organisation/accounts?page%5Bnumber%5D={n}&page%5Bsize%5D={size}"

        links = {"self": page(number), "first": page(0), "last": page(last)}
        if number < last:
            links["next"] = page(number + 1)
        if number > 0:
            links["prev"] = page(number - 1)
        return make_response(200, {"data": items[number * size:(number + 1) * size], "links": links})

    def _delete(self, account_id: str, version: int, url: str) -> requests.Response:
        record = self.records.get(account_id)
        if record is None or record["version"] != version:
            return make_response(404, None, url)
        del self.records[account_id]
        return make_response(204, None, url)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def account_id() -> str:
    return "ad27e265-9605-4b4b-a0e5-3003ea9cc4dc"


@pytest.fixture
def organisation_id() -> str:
    return "eb0bd6f5-c3f5-44b2-b677-acd23cdde73c"


@pytest.fixture
def make_attributes() -> Callable[..., AccountAttributes]:
    """Factory for valid attributes of a country, with overrides."""

    def factory(template: str = "GB", **overrides: Any) -> AccountAttributes:
        values: dict[str, Any] = dict(
            country=template,
            customer_id="CUST-12345",
            first_name="Samantha",
            alternative_bank_account_names=("Sam Holder", "Samantha Holder"),
            joint_account=True,
            account_matching_opt_out=True,
        )
        values.update(VALID_FIELDS.get(template, {}))
        values.update(overrides)
        return AccountAttributes(**values)

    return factory


@pytest.fixture
def gb_assignments() -> list[tuple[str, Any]]:
    """Attribute assignments for a valid UK account."""
    return [("country", "GB"), *VALID_FIELDS["GB"].items(), ("first_name", "Samantha")]


@pytest.fixture
def fake_service() -> FakeAccountService:
    return FakeAccountService()


@pytest.fixture
def client(fake_service: FakeAccountService) -> AccountClient:
    """Client wired to the in-memory service."""
    return AccountClient(ClientConfig(base_url=BASE_URL), session=fake_service)


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def respond() -> Callable[..., requests.Response]:
    """Factory for canned JSON responses."""
    return make_response
