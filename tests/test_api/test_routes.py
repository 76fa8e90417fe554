"""Tests for the lightning address HTTP routes."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient

from lnaddrd.api.app import create_app
from lnaddrd.config.settings import AppConfig, LnurlConfig, MetricsConfig
from lnaddrd.repository.memory import MemoryPaymentAddressRepository
from lnaddrd.service.lnaddr_service import LnaddrService
from tests.helpers import (
    DOMAINS,
    PAY_LNURL,
    PAY_RESPONSE,
    PAY_URL,
    WITHDRAW_RESPONSE,
    json_handler,
    make_lnurl_client,
)


def _client(handler=None) -> TestClient:
    """App with an in-memory service attached; the lifespan is not run."""
    config = AppConfig(lnurl=LnurlConfig(domains=DOMAINS), metrics=MetricsConfig(enabled=False))
    app = create_app(config=config)
    service = LnaddrService(MemoryPaymentAddressRepository(), make_lnurl_client(handler), DOMAINS)
    app.state.engine = SimpleNamespace(service=service)
    return TestClient(app)


@pytest.fixture
def client() -> TestClient:
    return _client()


def _register(client: TestClient, username: str = "alice", lnurl: str = "bob@otherdomain.com"):
    return client.post(
        "/lnaddress/register",
        json={"domain": "example.com", "username": username, "lnurl": lnurl},
    )


# ---------------------------------------------------------------------------
# /domains
# ---------------------------------------------------------------------------


class TestDomains:
    def test_list(self, client) -> None:
        resp = client.get("/domains")
        assert resp.status_code == 200
        assert resp.json() == DOMAINS


# ---------------------------------------------------------------------------
# /lnaddress/register
# ---------------------------------------------------------------------------


class TestRegister:
    def test_created(self, client) -> None:
        resp = _register(client)
        assert resp.status_code == 201
        data = resp.json()
        assert data["lnaddr"] == "alice@example.com"
        assert len(data["authentication_token"]) == 20

    def test_duplicate_conflict(self, client) -> None:
        _register(client)
        resp = _register(client, lnurl=PAY_LNURL)
        assert resp.status_code == 409
        assert resp.json()["code"] == "already-registered"

    def test_unsupported_domain(self, client) -> None:
        resp = client.post(
            "/lnaddress/register",
            json={"domain": "unknown.com", "username": "alice", "lnurl": "garbage"},
        )
        assert resp.status_code == 400
        assert resp.json()["code"] == "unsupported-domain"

    def test_invalid_destination(self, client) -> None:
        resp = _register(client, lnurl="not a destination")
        assert resp.status_code == 400
        assert resp.json()["code"] == "invalid-destination"

    def test_missing_field(self, client) -> None:
        resp = client.post("/lnaddress/register", json={"domain": "example.com"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# /lnaddress/{domain}/{username}
# ---------------------------------------------------------------------------


class TestGetAddress:
    def test_alias(self, client) -> None:
        _register(client)
        resp = client.get("/lnaddress/example.com/alice")
        assert resp.status_code == 200
        assert resp.json() == {
            "destination": "bob@otherdomain.com",
            "url": "https://otherdomain.com/.well-known/lnurlp/bob",
        }

    def test_lnurl(self, client) -> None:
        _register(client, username="carol", lnurl=PAY_LNURL)
        resp = client.get("/lnaddress/example.com/carol")
        assert resp.json() == {"destination": PAY_LNURL, "url": PAY_URL}

    def test_not_found(self, client) -> None:
        resp = client.get("/lnaddress/example.com/nobody")
        assert resp.status_code == 404
        assert resp.json()["code"] == "not-found"


# ---------------------------------------------------------------------------
# /lnaddress/remove
# ---------------------------------------------------------------------------


class TestRemove:
    def test_remove(self, client) -> None:
        token = _register(client).json()["authentication_token"]
        resp = client.request(
            "DELETE",
            "/lnaddress/remove",
            json={"domain": "example.com", "username": "alice", "authentication_token": token},
        )
        assert resp.status_code == 204
        assert client.get("/lnaddress/example.com/alice").status_code == 404

    def test_unknown_address(self, client) -> None:
        resp = client.request(
            "DELETE",
            "/lnaddress/remove",
            json={"domain": "example.com", "username": "ghost", "authentication_token": "x"},
        )
        assert resp.status_code == 204

    def test_wrong_token(self, client) -> None:
        token = _register(client).json()["authentication_token"]
        resp = client.request(
            "DELETE",
            "/lnaddress/remove",
            json={"domain": "example.com", "username": "alice", "authentication_token": "wrong"},
        )
        assert resp.status_code == 401
        assert resp.json()["code"] == "unauthorized"
        assert token not in resp.text
        assert client.get("/lnaddress/example.com/alice").status_code == 200


# ---------------------------------------------------------------------------
# /.well-known/lnurlp/{username}
# ---------------------------------------------------------------------------


class TestWellKnown:
    def test_pay_manifest(self, client) -> None:
        _register(client)
        resp = client.get("/.well-known/lnurlp/alice", headers={"Host": "example.com"})
        assert resp.status_code == 200
        body = resp.json()
        for key in ("tag", "callback", "minSendable", "maxSendable", "metadata", "commentAllowed"):
            assert body[key] == PAY_RESPONSE[key]

    def test_host_port_ignored(self, client) -> None:
        _register(client)
        resp = client.get("/.well-known/lnurlp/alice", headers={"Host": "example.com:8080"})
        assert resp.status_code == 200

    def test_other_domain_not_found(self, client) -> None:
        _register(client)
        resp = client.get("/.well-known/lnurlp/alice", headers={"Host": "example.org"})
        assert resp.status_code == 404

    def test_wrong_kind(self) -> None:
        client = _client(json_handler(WITHDRAW_RESPONSE))
        _register(client)
        resp = client.get("/.well-known/lnurlp/alice", headers={"Host": "example.com"})
        assert resp.status_code == 502
        assert resp.json()["code"] == "lnurl-wrong-kind"

    def test_remote_failure(self) -> None:
        def _handler(_request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        client = _client(_handler)
        _register(client)
        resp = client.get("/.well-known/lnurlp/alice", headers={"Host": "example.com"})
        assert resp.status_code == 502
        assert resp.json()["code"] == "lnurl-transport"
