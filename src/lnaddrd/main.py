"""Application entry point for the lnaddrd server."""

from __future__ import annotations

import logging

import uvicorn

from lnaddrd.config.settings import AppConfig

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)


def main() -> None:
    """Start the lnaddrd server.

    Settings come from ``LNADDRD_*`` environment variables and the optional
    YAML file named by ``LNADDRD_CONFIG_PATH``.
    """
    config = AppConfig()
    configure_logging(config.log_level)
    uvicorn.run(
        "lnaddrd.api.app:create_app",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        log_level=config.log_level.value,
    )


if __name__ == "__main__":
    main()
