"""Tests for the server entry point."""

from __future__ import annotations

from unittest.mock import patch

from lnaddrd import main as main_module


class TestMain:
    def test_runs_uvicorn_factory(self, monkeypatch) -> None:
        monkeypatch.setenv("LNADDRD_SERVER__PORT", "8181")
        with patch.object(main_module.uvicorn, "run") as run:
            main_module.main()
        run.assert_called_once()
        args, kwargs = run.call_args
        assert args == ("lnaddrd.api.app:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8181
        assert kwargs["log_level"] == "info"

    def test_configure_logging(self) -> None:
        with patch.object(main_module.logging, "basicConfig") as basic_config:
            main_module.configure_logging("warning")
        assert basic_config.call_args.kwargs["level"] == "WARNING"
