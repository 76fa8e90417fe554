"""Tests for the application factory, lifespan and base routes."""

from __future__ import annotations

from fastapi.testclient import TestClient

from lnaddrd import __version__
from lnaddrd.api.app import create_app
from lnaddrd.config.settings import AppConfig, MetricsConfig
from lnaddrd.engine import LnaddrdEngine


class TestCreateApp:
    def test_metadata(self, app_config) -> None:
        app = create_app(config=app_config)
        assert app.title == "lnaddrd"
        assert app.version == __version__
        assert app.state.config is app_config

    def test_health(self, app_config) -> None:
        client = TestClient(create_app(config=app_config))
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_debug_flag(self, app_config) -> None:
        assert create_app(config=app_config).debug is True
        config = app_config.model_copy(update={"debug": False})
        assert create_app(config=config).debug is False

    def test_routes_registered(self, app_config) -> None:
        paths = set(create_app(config=app_config).openapi()["paths"])
        assert {
            "/health",
            "/domains",
            "/lnaddress/{domain}/{username}",
            "/lnaddress/register",
            "/lnaddress/remove",
            "/.well-known/lnurlp/{username}",
        } <= paths

    def test_metrics_enabled(self, app_config) -> None:
        resp = TestClient(create_app(config=app_config)).get("/metrics")
        assert resp.status_code == 200
        assert "http_request_duration_seconds" in resp.text

    def test_metrics_disabled(self, app_config) -> None:
        config = app_config.model_copy(update={"metrics": MetricsConfig(enabled=False)})
        app = create_app(config=config)
        assert TestClient(app).get("/metrics").status_code == 404
        assert not hasattr(app.state, "metrics_registry")

    def test_default_config(self) -> None:
        app = create_app()
        assert isinstance(app.state.config, AppConfig)


class TestLifespan:
    def test_engine_lifecycle(self, app_config) -> None:
        app = create_app(config=app_config)
        with TestClient(app) as client:
            engine = app.state.engine
            assert isinstance(engine, LnaddrdEngine)
            assert engine.is_initialized
            assert client.get("/domains").json() == ["example.com", "example.org"]
        assert not engine.is_initialized

    def test_register_and_remove_over_sqlite(self, app_config) -> None:
        app = create_app(config=app_config)
        with TestClient(app) as client:
            resp = client.post(
                "/lnaddress/register",
                json={"domain": "example.org", "username": "dave", "lnurl": "bob@otherdomain.com"},
            )
            assert resp.status_code == 201
            token = resp.json()["authentication_token"]

            resp = client.get("/lnaddress/example.org/dave")
            assert resp.json()["destination"] == "bob@otherdomain.com"

            resp = client.request(
                "DELETE",
                "/lnaddress/remove",
                json={"domain": "example.org", "username": "dave", "authentication_token": token},
            )
            assert resp.status_code == 204
            assert client.get("/lnaddress/example.org/dave").status_code == 404
